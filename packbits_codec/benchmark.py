"""Throughput benchmark for the PackBits codec."""

import time
from typing import Dict
import numpy as np
from packbits_codec.config import (
    BENCH_PATTERN,
    BENCH_REPEAT,
    BENCH_RANDOM_SIZE,
    BENCH_SEED,
)
from packbits_codec.decoder import decompress
from packbits_codec.encoder import compress


def pattern_dataset(repeat: int = BENCH_REPEAT) -> bytes:
    """Repeating, single and alternating segments, `repeat` times over."""
    return BENCH_PATTERN * repeat


def random_dataset(size: int = BENCH_RANDOM_SIZE, seed: int = BENCH_SEED) -> bytes:
    """Mix of short runs and noise, like scanned image rows.

    Args:
        size: Number of bytes to generate
        seed: Seed for numpy's random generator

    Returns:
        Generated data of exactly `size` bytes
    """
    rng = np.random.default_rng(seed)
    chunks = []
    total = 0
    while total < size:
        if rng.random() < 0.6:
            value = rng.integers(0, 256, dtype=np.uint8)
            chunk = np.full(int(rng.integers(3, 41)), value, dtype=np.uint8)
        else:
            chunk = rng.integers(0, 256, size=int(rng.integers(1, 9)), dtype=np.uint8)
        chunks.append(chunk)
        total += len(chunk)

    if not chunks:
        return b""
    return np.concatenate(chunks)[:size].tobytes()


def run_benchmark(data: bytes, rounds: int) -> Dict[str, float]:
    """Time compression and decompression of `data`.

    Args:
        data: Input to compress
        rounds: Number of timed repetitions of each operation

    Returns:
        Dict with compress/decompress throughput in MB/s and the size ratio

    Raises:
        ValueError: If rounds is not positive
        RuntimeError: If the round trip doesn't reproduce `data`
    """
    if rounds < 1:
        raise ValueError(f"rounds must be positive, got {rounds}")

    packed = compress(data)
    if decompress(packed) != bytes(data):
        raise RuntimeError("Round-trip mismatch")

    t0 = time.perf_counter()
    for _ in range(rounds):
        compress(data)
    compress_time = max(time.perf_counter() - t0, 1e-9)

    t0 = time.perf_counter()
    for _ in range(rounds):
        decompress(packed)
    decompress_time = max(time.perf_counter() - t0, 1e-9)

    megabytes = len(data) * rounds / (1024 * 1024)

    return {
        "input_bytes": len(data),
        "packed_bytes": len(packed),
        "ratio": len(packed) / len(data) if data else 1.0,
        "compress_mb_per_sec": megabytes / compress_time,
        "decompress_mb_per_sec": megabytes / decompress_time,
    }
