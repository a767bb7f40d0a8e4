"""
osctree - OSC (Open Sound Control) packets as trees.

This package represents OSC arguments, messages and bundles as a tree of
OscTree nodes and converts between that tree and the OSC 1.0 wire format.

Main classes:
    - OscTree: Node type for arguments, messages and bundles
    - OscReader / OscWriter: The decoder and encoder behind OscTree
    - TimeTag: 64-bit NTP time tag
    - OscSender / OscReceiver: UDP transport for encoded packets

Example usage:
    from osctree import OscTree

    message = OscTree.make_message("/foo/bar/baz")
    message.push_back(OscTree.int32(4096))
    message.push_back(OscTree.string("Hello, OSC"))
    data = message.to_bytes()

    decoded = OscTree(data)
    for arg in decoded.children:
        print(arg.type_tag, arg.get_value())
"""

from .errors import (
    OscTreeError,
    SizeLimitExceeded,
    TypeMismatch,
    StructureError,
    DecodeError,
    MalformedAddress,
    MalformedTypeTagString,
    MalformedArgument,
    MalformedBundle,
    UnknownTypeTag,
)
from .tree import ArgType, OscTree, MAX_BLOB_SIZE
from .codec import OscReader, OscWriter, MAX_BUNDLE_DEPTH
from .utils import TimeTag, compress_packet, decompress_packet, format_packet
from .transport import OscReceiver, OscSender

__version__ = "0.1.0"
__all__ = [
    "OscTree",
    "ArgType",
    "TimeTag",
    "OscReader",
    "OscWriter",
    "OscReceiver",
    "OscSender",
    "compress_packet",
    "decompress_packet",
    "format_packet",
    "MAX_BLOB_SIZE",
    "MAX_BUNDLE_DEPTH",
    "OscTreeError",
    "SizeLimitExceeded",
    "TypeMismatch",
    "StructureError",
    "DecodeError",
    "MalformedAddress",
    "MalformedTypeTagString",
    "MalformedArgument",
    "MalformedBundle",
    "UnknownTypeTag",
]
