"""
Exceptions raised by osctree.

Every error derives from OscTreeError. Decode errors also derive from
ValueError, so code that treats any parse failure as a ValueError keeps
working.
"""


class OscTreeError(Exception):
    """Base class for all osctree errors."""


class SizeLimitExceeded(OscTreeError, ValueError):
    """A blob is too large for the signed 32-bit length field."""

    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__(f"blob of {size} bytes exceeds the maximum of {limit - 1} bytes")


class TypeMismatch(OscTreeError, TypeError):
    """A typed read requested a different type than the one stored."""


class StructureError(OscTreeError):
    """A tree was assembled in a way that cannot be encoded."""


class DecodeError(OscTreeError, ValueError):
    """
    Raised when a byte buffer is not a valid OSC packet.

    Attributes:
        offset: Byte offset in the buffer where decoding failed (or None)
    """

    def __init__(self, message, offset=None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class MalformedAddress(DecodeError):
    """Address missing its '/', terminator or zero padding."""


class MalformedTypeTagString(DecodeError):
    """Type-tag string missing its ',', terminator or zero padding."""


class MalformedArgument(DecodeError):
    """Argument data is truncated, badly padded or has a negative length."""


class MalformedBundle(DecodeError):
    """Bundle marker, time tag or element framing is invalid."""


class UnknownTypeTag(DecodeError):
    """Type-tag string names a type this codec cannot size."""

    def __init__(self, tag, offset=None):
        self.tag = tag
        super().__init__(f"unknown OSC type tag {tag!r}", offset)
