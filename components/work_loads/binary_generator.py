from faker import Faker


def generate_binary_keys(num_keys, seed=None, min_len=1, max_len=16):
  """Return `num_keys` arbitrary byte strings of length min_len..max_len.

  Lengths and contents come from a seeded Faker instance, so the keys cover
  the full 0..255 byte range, including NUL and non-UTF-8 sequences.
  """
  if num_keys < 1:
    raise ValueError("num_keys must be positive")
  if min_len < 0 or max_len < min_len:
    raise ValueError("lengths must satisfy 0 <= min_len <= max_len")
  fake = Faker()
  if seed is not None:
    fake.seed_instance(seed)
  return [
    fake.binary(length=fake.random_int(min=min_len, max=max_len))
    for _ in range(num_keys)
  ]
