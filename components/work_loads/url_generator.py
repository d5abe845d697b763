import random
import string
from urllib.parse import quote

from faker import Faker

from components.work_loads.word_generator import load_vocabulary


### ================= URL Generation Probability Config ================= ###

file_exts = ["js", "css", "html", "png", "jpg", "svg", "woff2", "pdf", "json", "mp4"]
file_ext_weights = [0.30, 0.10, 0.04, 0.12, 0.12, 0.03, 0.09, 0.08, 0.08, 0.04]

path_depths = [0, 1, 2, 3, 4, 5]
path_depth_weights = [0.20, 0.30, 0.25, 0.13, 0.10, 0.02]

param_keys = ["q", "id", "page", "ref", "utm_source", "utm_medium", "lang", "session"]
param_weights = [0.20, 0.15, 0.15, 0.10, 0.10, 0.08, 0.10, 0.12]

num_params = [0, 1, 2, 3, 4]
num_param_weights = [0.45, 0.35, 0.11, 0.06, 0.03]


### ================= URL Generation Functions ================= ###

def load_domains(n=1_000, seed=0, s=1.1):
  """Return n distinct Faker domain names with Zipf weights by rank."""
  if n <= 0 or n > 100_000:
    raise ValueError("n must be between 1 and 100,000")
  fake = Faker()
  fake.seed_instance(seed)
  rng = random.Random(seed)
  domains = []
  seen = set()
  # Faker's domain space is finite; cap the attempts
  for _ in range(n * 20):
    d = fake.domain_name(levels=rng.choice([1, 1, 1, 2]))
    if d not in seen:
      seen.add(d)
      domains.append(d)
      if len(domains) == n:
        break
  weights_zipf = [1 / ((r + 1) ** s) for r in range(len(domains))]
  return domains, weights_zipf


def slug(rng, min_len=2, max_len=12, digit_p=0.15):
  pool = string.ascii_lowercase + (string.digits if rng.random() < digit_p else "")
  return "".join(rng.choices(pool, k=rng.randint(min_len, max_len)))


def gen_path(rng, words, slug_p=0.3):
  """Generate a random path up to 5 segments deep.
    slug_p: probability of a segment being a slug (vs. a vocabulary word)."""
  if slug_p < 0 or slug_p > 1:
    raise ValueError("slug_p must be between 0 and 1")
  depth = rng.choices(path_depths, weights=path_depth_weights, k=1)[0]
  if depth == 0:
    return "/"
  segs = [slug(rng) if rng.random() < slug_p else rng.choice(words) for _ in range(depth)]
  path = "/" + "/".join(quote(s, safe="-_.~") for s in segs)
  if rng.random() < 0.3:
    return path + "." + rng.choices(file_exts, weights=file_ext_weights, k=1)[0]
  return path + "/"


def query_string(rng, words):
  """Random query string (or none); parameters sorted by key."""
  n = rng.choices(num_params, weights=num_param_weights, k=1)[0]
  if n == 0:
    return ""
  keys = set()
  while len(keys) < n:
    keys.add(rng.choices(param_keys, weights=param_weights, k=1)[0])
  pairs = []
  for key in sorted(keys):
    if key in ("id", "page"):
      val = str(rng.randint(1, 10**4 if key == "id" else 50))
    elif key == "session":
      val = "%032x" % rng.getrandbits(128)
    else:
      val = "+".join(rng.choices(words, k=rng.randint(1, 3)))
    pairs.append(f"{key}={val}")
  return "?" + "&".join(pairs)


### ================= Final URL Generation Logic ================= ###

def generate_urls(num_urls, seed=None):
  """Generate a list of random URLs."""
  if num_urls < 1:
    raise ValueError("num_urls must be positive")
  rng = random.Random(seed)
  words, _ = load_vocabulary()
  domains, weights = load_domains()
  urls = []
  for _ in range(num_urls):
    scheme = rng.choices(["http", "https"], weights=[0.12, 0.88], k=1)[0]
    host = rng.choices(domains, weights=weights, k=1)[0]
    urls.append(f"{scheme}://{host}{gen_path(rng, words)}{query_string(rng, words)}")
  return urls
