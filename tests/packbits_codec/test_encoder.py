"""Tests for the PackBits encoder."""

import numpy as np
import pytest
from packbits_codec.config import scratch_size
from packbits_codec.decoder import decompress, iter_runs
from packbits_codec.encoder import compress, repeat_length
from packbits_codec.errors import BufferTooSmallError, InvalidInputError


EXAMPLE_DATA = bytes([
    0xAA, 0xAA, 0xAA, 0x80, 0x00, 0x2A, 0xAA, 0xAA, 0xAA, 0xAA,
    0x80, 0x00, 0x2A, 0x22, 0xAA, 0xAA, 0xAA, 0xAA, 0xAA, 0xAA,
    0xAA, 0xAA, 0xAA, 0xAA
])

EXAMPLE_PACKED = bytes([
    0xFE, 0xAA, 0x02, 0x80, 0x00, 0x2A, 0xFD, 0xAA, 0x03, 0x80,
    0x00, 0x2A, 0x22, 0xF7, 0xAA
])


def test_compress_example_data():
    """Test the classic TIFF specification example."""
    assert compress(EXAMPLE_DATA) == EXAMPLE_PACKED


def test_compress_empty():
    """Test empty input produces empty output."""
    assert compress(b"") == b""


def test_compress_single_byte():
    """Test a single byte becomes a one-byte literal run."""
    assert compress(b"\xaa") == b"\x00\xaa"


def test_compress_replicate_then_literal():
    """Test a 3-byte repeat closes into a replicate run before literals."""
    assert compress(bytes([0xAA, 0xAA, 0xAA, 0x80, 0x00])) == bytes([0xFE, 0xAA, 0x01, 0x80, 0x00])


def test_compress_max_run_length():
    """Test 128 identical bytes fit a single replicate run."""
    assert compress(b"\xff" * 128) == b"\x81\xff"


def test_compress_long_repeat_splits_at_128():
    """Test runs longer than 128 are split into several replicate runs."""
    assert compress(b"\xaa" * 200) == b"\x81\xaa\xb9\xaa"


def test_compress_129_identical_bytes():
    """Test the byte after a full replicate run becomes a literal run."""
    assert compress(b"\xaa" * 129) == b"\x81\xaa\x00\xaa"


def test_compress_long_alternating():
    """Test literal runs are capped at exactly 128 bytes."""
    data = b"\xaa\x55" * 100
    expected = b"\x7f" + b"\xaa\x55" * 64 + b"\x47" + b"\xaa\x55" * 36
    assert compress(data) == expected


def test_compress_pair_absorbed_into_open_literal():
    """Test a 2-byte repeat after literal content extends that literal."""
    data = bytes([0x54, 0xAA, 0xAA, 0x80, 0x00])
    assert compress(data) == bytes([0x04, 0x54, 0xAA, 0xAA, 0x80, 0x00])


def test_compress_several_pairs_absorbed():
    """Test consecutive pairs all merge into one literal run."""
    data = bytes([0x10, 0x20, 0x30, 0x30, 0x40, 0x40, 0x50, 0x50, 0x60, 0x70])
    assert compress(data) == bytes([0x09]) + data


def test_compress_pair_without_open_literal():
    """Test a pair at the start of input becomes a replicate run."""
    assert compress(b"\xaa\xaa\x01\x02") == b"\xff\xaa\x01\x01\x02"


def test_compress_pair_after_full_literal():
    """Test a pair following a flushed 128-byte literal is a replicate run."""
    data = bytes(range(128)) + b"\x80\x80" + bytes(range(128))
    expected = b"\x7f" + bytes(range(128)) + b"\xff\x80" + b"\x7f" + bytes(range(128))
    assert compress(data) == expected


def test_compress_pair_that_overflows_literal():
    """Test a pair that would push a literal past 128 bytes stands alone."""
    data = bytes(range(127)) + b"\xff\xff"
    assert compress(data) == b"\x7e" + bytes(range(127)) + b"\xff\xff"


def test_compress_pair_that_fills_literal():
    """Test a pair that brings a literal to exactly 128 bytes is absorbed."""
    data = bytes(range(126)) + b"\xff\xff" + b"\x01"
    assert compress(data) == b"\x7f" + data[:128] + b"\x00\x01"


def test_compress_never_emits_noop_header():
    """Test header 0x80 never appears as a run header."""
    rng = np.random.default_rng(3)
    samples = [
        rng.integers(0, 256, size=2000, dtype=np.uint8).tobytes(),
        rng.integers(0, 3, size=2000, dtype=np.uint8).tobytes(),
        b"\x80" * 300 + bytes(range(256)) * 2,
    ]
    for data in samples:
        kinds = {run.kind for run in iter_runs(compress(data))}
        assert "noop" not in kinds


def test_compress_output_fits_scratch_size():
    """Test output never exceeds ceil(1.5 * n) for adversarial inputs."""
    rng = np.random.default_rng(11)
    samples = [
        b"\xaa\xaa\x01" * 100,
        b"\x00\x00\x00\x01" * 100,
        b"\x00\x00\x01\x02\x02\x02\x03" * 50,
        b"\x01\x02",
        bytes(range(256)) * 3,
    ] + [rng.integers(0, 4, size=n, dtype=np.uint8).tobytes() for n in range(1, 60)]

    for data in samples:
        assert len(compress(data)) <= scratch_size(len(data))


def test_compress_accepts_byte_containers():
    """Test bytearray, memoryview and uint8 arrays give identical output."""
    data = bytes([0xAA, 0xAA, 0xAA, 0x80, 0x00])
    expected = compress(data)

    assert compress(bytearray(data)) == expected
    assert compress(memoryview(data)) == expected
    assert compress(np.frombuffer(data, dtype=np.uint8)) == expected


def test_compress_non_contiguous_array():
    """Test strided numpy arrays are compressed by value."""
    array = np.array([0xAA, 0, 0xAA, 0, 0xAA, 0, 0x01, 0], dtype=np.uint8)[::2]
    assert compress(array) == b"\xfe\xaa\x00\x01"


def test_compress_into_scratch_buffer():
    """Test compressing into a caller buffer returns a view into it."""
    buffer = bytearray(scratch_size(len(EXAMPLE_DATA)))
    result = compress(EXAMPLE_DATA, buffer)

    assert isinstance(result, memoryview)
    assert bytes(result) == EXAMPLE_PACKED
    assert bytes(buffer[:len(result)]) == EXAMPLE_PACKED


def test_compress_scratch_buffer_too_small():
    """Test an undersized buffer is rejected."""
    data = b"\x01\x02\x03\x04\x05"
    with pytest.raises(BufferTooSmallError, match="expected minimum of 8, got 7 bytes"):
        compress(data, bytearray(7))


def test_compress_scratch_buffer_read_only():
    """Test a read-only buffer is rejected."""
    with pytest.raises(InvalidInputError, match="must be writable"):
        compress(b"\x01\x02", bytes(3))


def test_compress_empty_with_empty_buffer():
    """Test empty input needs no scratch space."""
    assert bytes(compress(b"", bytearray())) == b""


@pytest.mark.parametrize("bad_input", [
    "text",
    [1, 2, 3],
    42,
    None,
    np.zeros((2, 2), dtype=np.uint8),
    np.zeros(4, dtype=np.int16),
])
def test_compress_invalid_input(bad_input):
    """Test non-byte inputs raise InvalidInputError."""
    with pytest.raises(InvalidInputError):
        compress(bad_input)


def test_invalid_input_is_type_error():
    """Test InvalidInputError can be caught as TypeError."""
    with pytest.raises(TypeError):
        compress("text")


def test_repeat_length():
    """Test repeat measurement stops at a different byte or at 128."""
    assert repeat_length(memoryview(b"aaab"), 0) == 3
    assert repeat_length(memoryview(b"aaab"), 3) == 1
    assert repeat_length(memoryview(b"a" * 200), 0) == 128
    assert repeat_length(memoryview(b"a" * 200), 100) == 100


def test_compress_roundtrip_random_lengths():
    """Test compressed data of assorted lengths decompresses unchanged."""
    rng = np.random.default_rng(42)
    for length in (0, 1, 2, 3, 127, 128, 129, 255, 256, 1000):
        for high in (2, 256):
            data = rng.integers(0, high, size=length, dtype=np.uint8).tobytes()
            assert decompress(compress(data)) == data
