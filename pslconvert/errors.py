"""
Exceptions raised while reading a level.

All of them abort the conversion; a partially built level must be discarded.
"""


class PSLReadError(ValueError):
    """Base class for fatal level read failures."""


class TruncatedStreamError(PSLReadError):
    """The stream ended before a record was complete."""

    def __init__(self, offset: int, wanted: int, available: int):
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"Unexpected end of data at offset {offset}: "
            f"needed {wanted} bytes, {available} available"
        )


class IndexOutOfRangeError(PSLReadError, IndexError):
    """A structural reference points past the end of its table."""

    def __init__(self, what: str, index: int, count: int):
        self.what = what
        self.index = index
        self.count = count
        super().__init__(f"{what} index {index} out of range [0, {count})")


class LinkError(PSLReadError):
    """Cross references between level entities are inconsistent."""
