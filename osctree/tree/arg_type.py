"""
Argument variants and their wire type tags.
"""

import enum


class ArgType(enum.Enum):
    """How an argument's stored bytes are interpreted."""

    INT32 = "int32"
    FLOAT32 = "float32"
    STRING = "string"
    BLOB = "blob"
    INT64 = "int64"
    FLOAT64 = "float64"
    BOOL = "bool"
    TIME_TAG = "time_tag"
    EMPTY = "empty"      # N, I and custom no-payload tags


DEFAULT_TYPE_TAGS = {
    ArgType.INT32: "i",
    ArgType.FLOAT32: "f",
    ArgType.STRING: "s",
    ArgType.BLOB: "b",
    ArgType.INT64: "h",
    ArgType.FLOAT64: "d",
    ArgType.TIME_TAG: "t",
}

# Tags the decoder knows how to size
TAG_TO_ARG_TYPE = {
    "i": ArgType.INT32,
    "f": ArgType.FLOAT32,
    "s": ArgType.STRING,
    "b": ArgType.BLOB,
    "h": ArgType.INT64,
    "d": ArgType.FLOAT64,
    "t": ArgType.TIME_TAG,
    "T": ArgType.BOOL,
    "F": ArgType.BOOL,
    "N": ArgType.EMPTY,
    "I": ArgType.EMPTY,
}

# struct formats of the fixed-size numeric variants (big-endian on the wire)
STRUCT_FORMATS = {
    ArgType.INT32: ">i",
    ArgType.FLOAT32: ">f",
    ArgType.INT64: ">q",
    ArgType.FLOAT64: ">d",
}
