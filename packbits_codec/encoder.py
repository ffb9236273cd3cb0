"""PackBits encoder.

Segments the input into literal and replicate runs with a single greedy
left-to-right scan. At each position the length of the repeat starting there
decides the run kind:

    * 3 or more equal bytes always become a replicate run (2 bytes out).
    * A pair becomes a replicate run only when no literal run is open;
      otherwise it is absorbed into the open literal, whose header is
      already paid for.
    * A single byte joins the open literal run, opening one if needed.

Literal runs are flushed when they reach 128 bytes, when a replicate run
interrupts them, or at the end of the input.
"""

from typing import Union
from packbits_codec.buffers import as_byte_view, as_writable_view
from packbits_codec.config import MAX_RUN_LENGTH, REPLICATE_BASE, scratch_size
from packbits_codec.errors import BufferTooSmallError


def repeat_length(view: memoryview, start: int) -> int:
    """Count equal bytes starting at `start`, capped at 128."""
    value = view[start]
    end = min(start + MAX_RUN_LENGTH, len(view))
    pos = start + 1
    while pos < end and view[pos] == value:
        pos += 1
    return pos - start


def _write_literal(out, write: int, view: memoryview, start: int, count: int) -> int:
    out[write] = count - 1
    write += 1
    out[write:write + count] = view[start:start + count]
    return write + count


def compress(data, buffer=None) -> Union[bytes, memoryview]:
    """Compress a byte sequence with PackBits.

    Args:
        data: bytes, bytearray, memoryview or 1D uint8 numpy array
        buffer: Optional writable scratch buffer of at least
            ceil(1.5 * len(data)) bytes. When given, the packed runs are
            written into it and a view over the written prefix is returned.

    Returns:
        Packed bytes, or a memoryview into `buffer` if one was supplied

    Raises:
        InvalidInputError: If `data` or `buffer` is not a byte sequence
        BufferTooSmallError: If `buffer` is shorter than the worst case

    Example:
        compress(b"\\xaa\\xaa\\xaa\\x80\\x00") -> b"\\xfe\\xaa\\x01\\x80\\x00"
    """
    view = as_byte_view(data)
    length = len(view)
    required = scratch_size(length)

    out: Union[bytearray, memoryview]
    if buffer is None:
        out = bytearray(required)
    else:
        out = as_writable_view(buffer)
        if len(out) < required:
            raise BufferTooSmallError(required, len(out))

    write = 0
    literal_start = 0
    literal_count = 0
    pos = 0

    while pos < length:
        run = repeat_length(view, pos)

        # A pair that no longer fits the open literal is emitted on its own
        if run >= 3 or (
            run == 2 and (literal_count == 0 or literal_count + 2 > MAX_RUN_LENGTH)
        ):
            if literal_count:
                write = _write_literal(out, write, view, literal_start, literal_count)
                literal_count = 0
            out[write] = REPLICATE_BASE - run
            out[write + 1] = view[pos]
            write += 2
            pos += run
            continue

        if literal_count == 0:
            literal_start = pos
        literal_count += run
        pos += run

        if literal_count == MAX_RUN_LENGTH:
            write = _write_literal(out, write, view, literal_start, literal_count)
            literal_count = 0

    if literal_count:
        write = _write_literal(out, write, view, literal_start, literal_count)

    if buffer is None:
        return bytes(memoryview(out)[:write])
    return out[:write]
