"""Configuration for the PackBits codec."""

# Run header layout
MAX_RUN_LENGTH = 128
LITERAL_HEADER_MAX = 0x7F
NOOP_HEADER = 0x80
REPLICATE_BASE = 257  # replicate header = 257 - length

# Scratch buffer sizing: ceil(1.5 * n)
SCRATCH_NUMERATOR = 3
SCRATCH_DENOMINATOR = 2

# Benchmark settings
BENCH_PATTERN = bytes([
    0xAA, 0xAA, 0xAA, 0xAA, 0xAA,  # repeating
    0x80, 0x00,                    # single
    0xAA, 0x55, 0xAA, 0x55,        # alternating
])
BENCH_REPEAT = 1000
BENCH_ROUNDS = 20
BENCH_SEED = 777
BENCH_RANDOM_SIZE = 64 * 1024

# CLI settings
PACKED_SUFFIX = ".pb"


def scratch_size(length: int) -> int:
    """Minimum scratch buffer size for compressing `length` bytes."""
    return -(-length * SCRATCH_NUMERATOR // SCRATCH_DENOMINATOR)
