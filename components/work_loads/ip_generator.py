import ipaddress
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from faker import Faker

PRIVATE_CLASSES = ('a', 'b', 'c')

## Key shapes: as generated, fixed-width octets, or the 4 address bytes
KEY_FORMATS = ('dotted', 'zero_pad', 'packed')


def ip_key(ip: str, key_format: str = 'zero_pad') -> Union[str, bytes]:
    """Shape a dotted IPv4 address into a trie key.

    'dotted' keeps the address as-is, so "10.0.0.9" sorts after "10.0.0.10".
    'zero_pad' widens every octet to three digits ("010.000.000.009") and
    'packed' returns the 4 raw bytes; both make byte order equal numeric
    order, and every address the same length.
    """
    if key_format not in KEY_FORMATS:
        raise ValueError(f"key_format must be one of {KEY_FORMATS}, got {key_format!r}")
    addr = ipaddress.IPv4Address(ip)
    if key_format == 'packed':
        return addr.packed
    if key_format == 'zero_pad':
        return ".".join("%03d" % b for b in addr.packed)
    return str(addr)


def parse_ip_key(key: Union[str, bytes]) -> str:
    """Invert `ip_key`: return the plain dotted address for any key shape."""
    if isinstance(key, bytes):
        if len(key) == 4:
            return str(ipaddress.IPv4Address(key))
        key = key.decode("ascii")
    return ".".join(str(int(octet)) for octet in key.split("."))


## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public IPs
        private_weights: dict, weights for private IPs {a: x, b: x, c: x}
        key_format: str, one of KEY_FORMATS
        seed: int, seed for random number generator
    """
    public_share: float = 0.9
    private_weights: Optional[Dict[str, float]] = None
    key_format: str = 'dotted'
    seed: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.public_share <= 1.0:
            raise ValueError("public_share must be between 0 and 1")
        if self.key_format not in KEY_FORMATS:
            raise ValueError(f"key_format must be one of {KEY_FORMATS}, got {self.key_format!r}")
        if self.private_weights is None:
            self.private_weights = {'a': 0.35, 'b': 0.10, 'c': 0.55}
            return
        missing = [k for k in PRIVATE_CLASSES if k not in self.private_weights]
        if missing:
            raise ValueError(f"private_weights missing keys: {missing}")
        if any(self.private_weights[k] < 0 for k in PRIVATE_CLASSES):
            raise ValueError("private_weights must be non-negative")
        if sum(self.private_weights[k] for k in PRIVATE_CLASSES) == 0:
            raise ValueError("Sum of private_weights must be > 0")
        self.private_weights = {k: self.private_weights[k] for k in PRIVATE_CLASSES}


class IPGenerator:
    """IPv4 trie keys drawn from a public/private address mix."""

    def __init__(self, config: Optional[IPConfig] = None):
        self.config = config or IPConfig()
        self.rng = random.Random(self.config.seed)
        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.priv_classes = list(self.config.private_weights)
        self.weights = [self.config.private_weights[k] for k in self.priv_classes]

    def address(self) -> str:
        if self.rng.random() >= self.config.public_share:
            cls = self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]
            return self.fake.ipv4_private(address_class=cls)
        return self.fake.ipv4_public()

    def single(self) -> Union[str, bytes]:
        return ip_key(self.address(), self.config.key_format)

    def batch(self, n) -> List[Union[str, bytes]]:
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]
