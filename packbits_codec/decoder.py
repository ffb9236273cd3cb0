"""PackBits decoder.

Decoding runs in two phases. The stream is first scanned header by header,
checking that every run's payload is present and summing the output size.
Only then is the output allocated and expanded, so a truncated stream fails
before any output exists.
"""

from dataclasses import dataclass
from typing import Iterator, List
from packbits_codec.buffers import as_byte_view
from packbits_codec.config import NOOP_HEADER, REPLICATE_BASE
from packbits_codec.errors import TruncatedError

LITERAL = "literal"
REPLICATE = "replicate"
NOOP = "noop"


@dataclass(frozen=True)
class Run:
    """One run of a packed stream.

    Attributes:
        offset: Position of the header byte
        kind: "literal", "replicate" or "noop"
        length: Number of bytes the run expands to
        payload: Position of the first payload byte
    """
    offset: int
    kind: str
    length: int
    payload: int

    @property
    def encoded_size(self) -> int:
        if self.kind == LITERAL:
            return 1 + self.length
        if self.kind == REPLICATE:
            return 2
        return 1


def iter_runs(data) -> Iterator[Run]:
    """Yield the runs of a packed stream in order.

    Raises:
        InvalidInputError: If `data` is not a byte sequence
        TruncatedError: When a header declares payload past the end of data
    """
    view = as_byte_view(data)
    size = len(view)
    pos = 0

    while pos < size:
        header = view[pos]

        if header < NOOP_HEADER:
            length = header + 1
            available = size - pos - 1
            if length > available:
                raise TruncatedError(pos, LITERAL, length - available)
            yield Run(pos, LITERAL, length, pos + 1)
            pos += 1 + length
        elif header > NOOP_HEADER:
            if pos + 1 >= size:
                raise TruncatedError(pos, REPLICATE, 1)
            yield Run(pos, REPLICATE, REPLICATE_BASE - header, pos + 1)
            pos += 2
        else:
            # Written by some encoders as padding
            yield Run(pos, NOOP, 0, pos + 1)
            pos += 1


def decompressed_size(data) -> int:
    """Return the exact size `data` expands to.

    Raises:
        InvalidInputError: If `data` is not a byte sequence
        TruncatedError: If `data` ends inside a run
    """
    return sum(run.length for run in iter_runs(data))


def decompress(data) -> bytes:
    """Expand a PackBits stream.

    Args:
        data: Packed bytes, bytearray, memoryview or 1D uint8 numpy array

    Returns:
        Decompressed bytes

    Raises:
        InvalidInputError: If `data` is not a byte sequence
        TruncatedError: If a run's payload is missing
    """
    view = as_byte_view(data)

    # Phase 1: validate every header and size the output
    runs: List[Run] = list(iter_runs(view))
    result = bytearray(sum(run.length for run in runs))

    # Phase 2: expand
    write = 0
    for run in runs:
        if run.kind == LITERAL:
            result[write:write + run.length] = view[run.payload:run.payload + run.length]
        elif run.kind == REPLICATE:
            result[write:write + run.length] = bytes((view[run.payload],)) * run.length
        write += run.length

    return bytes(result)
