import random
import math
import logging
from collections import defaultdict
from functools import lru_cache

from faker import Faker

logger = logging.getLogger(__name__)

VOCAB_SEED = 0
VOCAB_DRAWS = 20_000


@lru_cache(maxsize=1)
def load_vocabulary():
  """Return the sorted word list and its two-letter prefix buckets.

  The vocabulary is drawn from Faker's lorem provider with a fixed seed, so
  every process sees the same list regardless of the workload seed.
  """
  fake = Faker()
  fake.seed_instance(VOCAB_SEED)
  words = sorted({w.lower() for w in fake.words(nb=VOCAB_DRAWS) if w.isalpha()})

  ## Bucket words by their first two letters to generate shared prefixes
  bucket = defaultdict(list)
  for word in words:
    bucket[word[:2]].append(word)
  logger.debug("vocabulary: %d words in %d prefix buckets", len(words), len(bucket))
  return words, dict(bucket)


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random words from the vocabulary.
  - unique=False: sample with replacement (fast, allows duplicates)
  - unique=True: sample without replacement (requires n <= vocabulary size)
  """
  word_list, _ = load_vocabulary()
  if num_words < 1 or (unique is True and num_words > len(word_list)):
    raise ValueError(f"num_words must be between 1 and {len(word_list)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(word_list, num_words)
  return rng.choices(word_list, k=num_words)


def _p_eff_log(x, max_mean=100) -> float:
  # Logarithmic mapping of prefix frequency to effective prefix frequency
  if x < 0 or x > 1:
    raise ValueError("Prefix frequency must be between 0 and 1")
  x = max(0.0, min(0.999999, x))
  k = math.log(max_mean)
  p = 1.0 - math.exp(-k * x)
  return min(p, 0.999999)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generates a list of words with a given prefix frequency.
  A higher prefix_freq means consecutive words more often share their first
  two letters. Prefix frequency is applied logarithmically.
  prefix_freq: 0 -> 1
  """
  p_eff = _p_eff_log(prefix_freq)
  word_list, bucket = load_vocabulary()
  if num_words < 1 or (unique is True and num_words > len(word_list)):
    raise ValueError(f"num_words must be between 1 and {len(word_list)}")

  prefixes = sorted(bucket)
  weights = [len(bucket[p]) for p in prefixes]
  rng = random.Random(seed)

  out = []
  seen = set()
  exhausted = set()

  while len(out) < num_words:
    prefix = rng.choices(prefixes, weights=weights)[0]
    if prefix in exhausted:
      continue
    options = bucket[prefix]
    word = rng.choice(options)
    if unique and word in seen:
      remaining = [w for w in options if w not in seen]
      if not remaining:
        exhausted.add(prefix)
        continue
      word = rng.choice(remaining)
    out.append(word)
    seen.add(word)

    # Keep drawing from the same bucket while the trigger fires
    while len(out) < num_words and rng.random() < p_eff:
      new_word = rng.choice(options)
      if unique and new_word in seen:
        remaining = [w for w in options if w not in seen]
        if not remaining:
          exhausted.add(prefix)
          break
        new_word = rng.choice(remaining)
      out.append(new_word)
      seen.add(new_word)
  return out
