"""
Timing harness for `ByteTrie`.

`run_benchmark` builds a fresh trie per repeat, times the four core
operations over one workload and checks the trie's behaviour as it goes:
every inserted key must be found, a full scan must yield the distinct keys
in sorted order, and deleting every key must leave only the root node.
Results come back as a long-format `pandas.DataFrame`.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from components.work_loads import KINDS, WorkLoad
from tries import ByteTrie

logger = logging.getLogger(__name__)

OPERATIONS = ("insert", "find", "scan", "delete")
COLUMNS = ["repeat", "operation", "keys", "seconds", "ops_per_sec", "nodes"]


class BenchmarkError(RuntimeError):
    """The trie produced a wrong answer during a benchmark run."""


@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        workload: str, one of components.work_loads.KINDS
        num_keys: int, keys generated per run
        seed: int, seed for the workload generator
        prefix_freq: float, prefix clustering for the words workload (0..1)
        repeats: int, number of fresh-trie runs
    """
    workload: str = "words"
    num_keys: int = 10_000
    seed: Optional[int] = 42
    prefix_freq: float = 0.0
    repeats: int = 3

    def __post_init__(self):
        if self.workload not in KINDS:
            raise ValueError(f"workload must be one of {KINDS}, got {self.workload!r}")
        if self.num_keys < 1:
            raise ValueError("num_keys must be positive")
        if not 0.0 <= self.prefix_freq <= 1.0:
            raise ValueError("prefix_freq must be between 0 and 1")
        if self.repeats < 1:
            raise ValueError("repeats must be positive")


def make_keys(config: BenchConfig) -> List[bytes]:
    wl = WorkLoad(seed=config.seed)
    if config.workload == "words":
        return wl.keys("words", config.num_keys, p_freq=config.prefix_freq)
    return wl.keys(config.workload, config.num_keys)


def _row(repeat, operation, n, seconds, nodes):
    return {
        "repeat": repeat,
        "operation": operation,
        "keys": n,
        "seconds": seconds,
        "ops_per_sec": (n / seconds) if seconds > 0 else float("inf"),
        "nodes": nodes,
    }


def _run_once(repeat, keys, expected):
    trie = ByteTrie()
    rows = []

    t0 = time.perf_counter()
    for i, key in enumerate(keys):
        trie.insert(key, i)
    rows.append(_row(repeat, "insert", len(keys), time.perf_counter() - t0, trie.count_nodes()))

    t0 = time.perf_counter()
    hits = 0
    for key in keys:
        if trie.find(key)[1]:
            hits += 1
    rows.append(_row(repeat, "find", len(keys), time.perf_counter() - t0, trie.count_nodes()))
    if hits != len(keys):
        raise BenchmarkError(f"find missed {len(keys) - hits} of {len(keys)} inserted keys")

    t0 = time.perf_counter()
    scanned = []
    while trie.scan():
        scanned.append(trie.current_key())
    rows.append(_row(repeat, "scan", len(scanned), time.perf_counter() - t0, trie.count_nodes()))
    if scanned != expected:
        raise BenchmarkError("scan did not yield the distinct keys in byte order")

    t0 = time.perf_counter()
    deleted, _ = trie.batch_delete(expected)
    rows.append(_row(repeat, "delete", len(expected), time.perf_counter() - t0, trie.count_nodes()))
    if deleted != len(expected) or trie.count_nodes() != 1:
        raise BenchmarkError(
            f"delete left {len(trie)} keys and {trie.count_nodes()} nodes behind")
    return rows


def run_benchmark(config: BenchConfig, keys: Optional[List[bytes]] = None) -> pd.DataFrame:
    """Time insert/find/scan/delete over `keys` (generated from `config` if None)."""
    if keys is None:
        keys = make_keys(config)
    expected = sorted(set(keys))
    logger.info("benchmark: workload=%s keys=%d distinct=%d repeats=%d",
                config.workload, len(keys), len(expected), config.repeats)

    rows = []
    for repeat in range(config.repeats):
        rows.extend(_run_once(repeat, keys, expected))
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per-operation median and p95 seconds, mean throughput, peak node count."""
    out = []
    for op in OPERATIONS:
        sub = df[df["operation"] == op]
        if sub.empty:
            continue
        secs = sub["seconds"].to_numpy()
        out.append({
            "operation": op,
            "median_s": float(np.median(secs)),
            "p95_s": float(np.percentile(secs, 95)),
            "mean_ops_per_sec": float(np.mean(sub["ops_per_sec"].to_numpy())),
            "max_nodes": int(sub["nodes"].max()),
        })
    cols = ["operation", "median_s", "p95_s", "mean_ops_per_sec", "max_nodes"]
    return pd.DataFrame(out, columns=cols).set_index("operation")
