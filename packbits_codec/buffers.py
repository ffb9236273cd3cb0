"""Normalization of the byte containers accepted by the codec."""

import numpy as np
from packbits_codec.errors import InvalidInputError


def as_byte_view(data, argument: str = "data") -> memoryview:
    """Return a flat unsigned-byte view over `data`.

    Accepts bytes, bytearray, memoryview and 1D uint8 numpy arrays. No copy is
    made unless a numpy array is not C-contiguous.

    Raises:
        InvalidInputError: If `data` is not a byte sequence
    """
    if isinstance(data, np.ndarray):
        if data.dtype != np.uint8:
            raise InvalidInputError(
                f"{argument} array must have dtype uint8, got {data.dtype}"
            )
        if data.ndim != 1:
            raise InvalidInputError(
                f"{argument} array must be 1D, got shape {data.shape}"
            )
        return memoryview(np.ascontiguousarray(data)).cast("B")

    if isinstance(data, (bytes, bytearray)):
        return memoryview(data)

    if isinstance(data, memoryview):
        if data.format not in ("B", "b", "c") or data.itemsize != 1:
            raise InvalidInputError(
                f"{argument} memoryview must have byte format, got {data.format!r}"
            )
        if not data.c_contiguous:
            raise InvalidInputError(f"{argument} memoryview must be contiguous")
        return data.cast("B") if data.format != "B" or data.ndim != 1 else data

    raise InvalidInputError(
        f"{argument} must be a byte sequence, got {type(data).__name__}"
    )


def as_writable_view(buffer, argument: str = "buffer") -> memoryview:
    """Like `as_byte_view`, but the result must be writable."""
    if isinstance(buffer, np.ndarray) and not buffer.flags.c_contiguous:
        raise InvalidInputError(f"{argument} array must be contiguous")
    view = as_byte_view(buffer, argument)
    if view.readonly:
        raise InvalidInputError(f"{argument} must be writable")
    return view
