"""Exceptions raised by the PackBits codec."""


class PackBitsError(ValueError):
    """Base class for all PackBits failures."""


class InvalidInputError(PackBitsError, TypeError):
    """Argument is not a byte sequence."""


class TruncatedError(PackBitsError):
    """A run header declares more payload than the stream holds.

    Attributes:
        offset: Position of the offending header byte
        run_kind: "literal" or "replicate"
        missing: Number of payload bytes absent from the stream
    """

    def __init__(self, offset: int, run_kind: str, missing: int):
        self.offset = offset
        self.run_kind = run_kind
        self.missing = missing
        if missing == 1:
            expected = "expected 1 more byte"
        else:
            expected = f"expected {missing} more byte(s)"
        super().__init__(
            f"Unexpected end of PackBits data in {run_kind} run: {expected}"
        )


class BufferTooSmallError(PackBitsError):
    """Caller-supplied scratch buffer cannot hold the worst-case output."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(
            f"Provided buffer is too small: expected minimum of {required}, "
            f"got {actual} bytes"
        )
