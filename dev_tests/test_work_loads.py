import os
import sys
import unittest
import ipaddress
from collections import Counter
from urllib.parse import urlparse

# ---------------- Import shim (works from dev_tests/) ----------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from components.work_loads import (
    WorkLoad,
    IPConfig,
    IPGenerator,
    ip_key,
    parse_ip_key,
    generate_binary_keys,
    generate_random_words,
    gen_words_with_prefix_freq,
    generate_urls,
)
from components.work_loads.word_generator import load_vocabulary
from tries import ByteTrie


# ---------- Helpers for prefix clustering metrics ----------
def two_prefix(w: str) -> str:
    return w[:2] if len(w) >= 2 else w

def neighbor_same_prefix_ratio(words):
    """Fraction of positions i>0 where prefix[i] == prefix[i-1]."""
    if len(words) < 2:
        return 0.0
    num_same = 0
    prev = two_prefix(words[0])
    for w in words[1:]:
        p = two_prefix(w)
        if p == prev:
            num_same += 1
        prev = p
    return num_same / (len(words) - 1)

def prefix_hhi(words):
    """Herfindahl-Hirschman index over 2-char prefixes; higher => more concentrated."""
    n = len(words)
    if n == 0:
        return 0.0
    counts = Counter(two_prefix(w) for w in words)
    return sum((c / n) ** 2 for c in counts.values())


# ---------------------------------- Tests ----------------------------------
class TestVocabulary(unittest.TestCase):
    def test_sorted_lowercase_and_bucketed(self):
        words, bucket = load_vocabulary()
        self.assertGreater(len(words), 200)
        self.assertEqual(words, sorted(set(words)))
        self.assertTrue(all(w.isalpha() and w == w.lower() for w in words))
        self.assertEqual(sum(len(v) for v in bucket.values()), len(words))


class TestGenerateRandomWords(unittest.TestCase):
    def test_length_and_types_nonunique(self):
        words = generate_random_words(2_000, seed=123, unique=False)
        self.assertEqual(len(words), 2_000)
        self.assertTrue(all(isinstance(w, str) and len(w) > 0 for w in words))

    def test_reproducibility(self):
        a = generate_random_words(1_000, seed=999)
        b = generate_random_words(1_000, seed=999)
        c = generate_random_words(1_000, seed=1000)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)

    def test_uniqueness(self):
        words = generate_random_words(150, seed=42, unique=True)
        self.assertEqual(len(set(words)), 150)

    def test_invalid_sizes_raise(self):
        with self.assertRaises(ValueError):
            generate_random_words(0)
        with self.assertRaises(ValueError):
            generate_random_words(1_000_000_000, seed=1, unique=True)


class TestPrefixFrequencyGenerator(unittest.TestCase):
    def test_prefix_clustering_effectiveness(self):
        low = gen_words_with_prefix_freq(3_000, prefix_freq=0.0, seed=123)
        high = gen_words_with_prefix_freq(3_000, prefix_freq=0.8, seed=123)
        self.assertEqual(len(low), 3_000)
        self.assertEqual(len(high), 3_000)
        self.assertGreater(neighbor_same_prefix_ratio(high), neighbor_same_prefix_ratio(low) + 0.3)
        self.assertGreaterEqual(prefix_hhi(high), 0.0)

    def test_unique_mode_no_duplicates(self):
        words = gen_words_with_prefix_freq(150, prefix_freq=0.5, seed=9, unique=True)
        self.assertEqual(len(words), 150)
        self.assertEqual(len(set(words)), 150)

    def test_same_seed_reproducibility(self):
        a = gen_words_with_prefix_freq(1_000, prefix_freq=0.5, seed=2024)
        b = gen_words_with_prefix_freq(1_000, prefix_freq=0.5, seed=2024)
        self.assertEqual(a, b)

    def test_invalid_arguments_raise(self):
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(0, prefix_freq=0.3, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=1.5, seed=1)


class TestIPGenerator(unittest.TestCase):
    def test_config_defaults_and_validation(self):
        cfg = IPConfig()
        self.assertEqual(set(cfg.private_weights), {'a', 'b', 'c'})
        with self.assertRaises(ValueError):
            IPConfig(private_weights={'a': 1.0, 'b': 1.0})
        with self.assertRaises(ValueError):
            IPConfig(private_weights={'a': -1.0, 'b': 1.0, 'c': 1.0})
        with self.assertRaises(ValueError):
            IPConfig(private_weights={'a': 0, 'b': 0, 'c': 0})
        with self.assertRaises(ValueError):
            IPConfig(public_share=1.5)

    def test_valid_ipv4(self):
        ips = IPGenerator(IPConfig(seed=5)).batch(500)
        self.assertEqual(len(ips), 500)
        for ip in ips:
            ipaddress.IPv4Address(ip)

    def test_private_only(self):
        ips = IPGenerator(IPConfig(public_share=0.0, seed=5)).batch(200)
        self.assertTrue(all(ipaddress.IPv4Address(ip).is_private for ip in ips))

    def test_reproducible(self):
        a = IPGenerator(IPConfig(seed=11)).batch(100)
        b = IPGenerator(IPConfig(seed=11)).batch(100)
        self.assertEqual(a, b)

    def test_batch_size_must_be_positive(self):
        with self.assertRaises(ValueError):
            IPGenerator().batch(0)


class TestIPKeys(unittest.TestCase):
    def test_shapes(self):
        self.assertEqual(ip_key("10.0.0.9", "dotted"), "10.0.0.9")
        self.assertEqual(ip_key("10.0.0.9", "zero_pad"), "010.000.000.009")
        self.assertEqual(ip_key("10.0.0.9", "packed"), b"\x0a\x00\x00\x09")
        with self.assertRaises(ValueError):
            ip_key("10.0.0.9", "hex")
        with self.assertRaises(ValueError):
            IPConfig(key_format="hex")

    def test_parse_inverts_every_shape(self):
        for fmt in ("dotted", "zero_pad", "packed"):
            self.assertEqual(parse_ip_key(ip_key("192.168.1.20", fmt)), "192.168.1.20")
        self.assertEqual(parse_ip_key(b"010.000.000.009"), "10.0.0.9")

    def test_trie_order_matches_numeric_order(self):
        ips = IPGenerator(IPConfig(seed=21)).batch(400)
        numeric = sorted(set(ips), key=ipaddress.IPv4Address)
        for fmt in ("zero_pad", "packed"):
            t = ByteTrie()
            t.batch_insert(ip_key(ip, fmt) for ip in ips)
            got = [parse_ip_key(k) for k in t.keys()]
            self.assertEqual(got, numeric, fmt)

    def test_generator_emits_shaped_keys(self):
        keys = IPGenerator(IPConfig(key_format="zero_pad", seed=3)).batch(50)
        self.assertTrue(all(len(k) == 15 for k in keys))
        packed = IPGenerator(IPConfig(key_format="packed", seed=3)).batch(50)
        self.assertTrue(all(isinstance(k, bytes) and len(k) == 4 for k in packed))
        self.assertEqual([parse_ip_key(k) for k in keys], [parse_ip_key(k) for k in packed])

    def test_workload_ips_are_zero_padded(self):
        keys = WorkLoad(seed=2).keys("ips", 30)
        self.assertTrue(all(len(k) == 15 for k in keys))


class TestURLGenerator(unittest.TestCase):
    def test_urls_parse(self):
        urls = generate_urls(300, seed=3)
        self.assertEqual(len(urls), 300)
        for u in urls:
            pu = urlparse(u)
            self.assertIn(pu.scheme, {"http", "https"})
            self.assertTrue(pu.hostname)
            self.assertTrue(pu.path.startswith("/"))
            self.assertEqual(pu.fragment, "")

    def test_reproducible(self):
        self.assertEqual(generate_urls(50, seed=8), generate_urls(50, seed=8))

    def test_invalid_count_raises(self):
        with self.assertRaises(ValueError):
            generate_urls(0)


class TestBinaryGenerator(unittest.TestCase):
    def test_lengths_and_types(self):
        keys = generate_binary_keys(500, seed=4, min_len=2, max_len=6)
        self.assertEqual(len(keys), 500)
        self.assertTrue(all(isinstance(k, bytes) and 2 <= len(k) <= 6 for k in keys))

    def test_reproducible(self):
        self.assertEqual(generate_binary_keys(50, seed=4), generate_binary_keys(50, seed=4))

    def test_invalid_arguments_raise(self):
        with self.assertRaises(ValueError):
            generate_binary_keys(0)
        with self.assertRaises(ValueError):
            generate_binary_keys(10, min_len=5, max_len=2)


class TestWorkLoad(unittest.TestCase):
    def test_keys_are_bytes(self):
        wl = WorkLoad(seed=1)
        for kind in ("words", "urls", "ips", "binary"):
            keys = wl.keys(kind, 20)
            self.assertEqual(len(keys), 20)
            self.assertTrue(all(isinstance(k, bytes) for k in keys), kind)

    def test_words_prefix_freq_passthrough(self):
        wl = WorkLoad(seed=1)
        self.assertEqual(wl.words(100, p_freq=0.5), gen_words_with_prefix_freq(100, 0.5, 1))

    def test_unknown_kind_raises(self):
        with self.assertRaises(ValueError):
            WorkLoad().keys("phone_numbers", 10)


if __name__ == "__main__":
    unittest.main(verbosity=2)
