from components.work_loads.word_generator import generate_random_words, gen_words_with_prefix_freq
from components.work_loads.url_generator import generate_urls
from components.work_loads.ip_generator import IPConfig, IPGenerator, ip_key, parse_ip_key
from components.work_loads.binary_generator import generate_binary_keys

KINDS = ("words", "urls", "ips", "binary")


class WorkLoad:
    def __init__(self, seed=None, encoding="utf-8"):
        self.seed = seed
        self.encoding = encoding

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        return generate_random_words(num_words, self.seed, unique)

    def urls(self, num_urls):
        return generate_urls(num_urls, self.seed)

    def ips(self, num_ips, public_share=0.9, key_format="zero_pad"):
        config = IPConfig(public_share=public_share, key_format=key_format, seed=self.seed)
        return IPGenerator(config).batch(num_ips)

    def binary(self, num_keys, min_len=1, max_len=16):
        return generate_binary_keys(num_keys, self.seed, min_len, max_len)

    def keys(self, kind, n, **kw):
        """Return `n` keys of the given kind, encoded to bytes."""
        if kind not in KINDS:
            raise ValueError(f"kind must be one of {KINDS}, got {kind!r}")
        out = getattr(self, kind)(n, **kw)
        return [k if isinstance(k, bytes) else k.encode(self.encoding) for k in out]


__all__ = [
    "KINDS",
    "WorkLoad",
    "IPConfig",
    "IPGenerator",
    "ip_key",
    "parse_ip_key",
    "generate_binary_keys",
    "generate_random_words",
    "gen_words_with_prefix_freq",
    "generate_urls",
]
