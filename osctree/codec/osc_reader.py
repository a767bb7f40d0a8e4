"""
OscReader - decodes one OSC packet into an OscTree.

The reader walks the buffer once with a cursor:

    start -> marker -> (bundle | message) -> address -> type tags -> arguments -> done

Any deviation from the OSC 1.0 layout raises a DecodeError subclass that
records the byte offset of the problem.
"""

import struct

from ..errors import (
    DecodeError,
    MalformedAddress,
    MalformedArgument,
    MalformedBundle,
    MalformedTypeTagString,
    UnknownTypeTag,
)
from ..tree.arg_type import ArgType, TAG_TO_ARG_TYPE
from ..tree.osc_tree import OscTree
from ..utils.padding import ceil4
from ..utils.timetag import TimeTag
from .framing import BUNDLE_MARKER, FIXED_SIZES, MAX_BUNDLE_DEPTH


class OscReader:
    """
    Cursor-based decoder for a single OSC packet (message or bundle).

    Supports the argument types i, f, s, b, h, d, t, T, F, N and I.
    Numbers are big-endian, as required by the OSC specification.

    Example usage:
        data = sock.recvfrom(65535)[0]
        tree = OscReader(data).read_packet()
        # tree.address = "/foo/bar"
        # [child.get_value() for child in tree.children] = [1, 2.0, "three"]
    """

    def __init__(self, data, depth=0):
        """
        Initialize the reader with raw packet data.

        Args:
            data: bytes-like OSC packet
            depth: Bundle nesting level of this packet (0 for a top-level packet)
        """
        self.data = bytes(data)
        self.i = 0
        self.n = len(self.data)
        self.depth = depth

    def read_packet(self, node=None):
        """
        Decode the whole packet.

        Args:
            node: Empty OscTree to fill in; a new one is created if omitted

        Returns:
            The decoded OscTree

        Raises:
            DecodeError: If the packet is malformed
        """
        if node is None:
            node = OscTree()
        if self.n == 0:
            raise DecodeError("empty OSC packet", 0)
        if self.data[0:1] == b"#":
            self._read_bundle(node)
        else:
            self._read_message(node)
        return node

    def _read_padded_string(self, error, what):
        """Read a NUL-terminated, zero-padded string and return its raw bytes."""
        start = self.i
        end = self.data.find(b"\x00", start)
        if end < 0:
            raise error(f"{what} is not null-terminated", start)
        stop = ceil4(end + 1)
        if stop > self.n:
            raise error(f"{what} padding runs past the end of the packet", end)
        if any(self.data[end + 1:stop]):
            raise error(f"{what} has non-zero padding", end + 1)
        self.i = stop
        return self.data[start:end]

    def _take(self, size, tag):
        if self.i + size > self.n:
            raise MalformedArgument(f"'{tag}' argument truncated", self.i)
        raw = self.data[self.i:self.i + size]
        self.i += size
        return raw

    def _read_message(self, node):
        if self.data[0:1] != b"/":
            raise MalformedAddress("address must start with '/'", 0)
        address = self._read_padded_string(MalformedAddress, "address")
        node.set_address(address.decode("utf-8", errors="replace"))
        if self.i >= self.n:
            # Packets from old senders may omit the type-tag string
            return
        if self.data[self.i:self.i + 1] != b",":
            raise MalformedTypeTagString("type-tag string must start with ','", self.i)
        tags = self._read_padded_string(MalformedTypeTagString, "type-tag string")
        for tag in tags[1:].decode("latin-1"):
            node._append(self._read_argument(tag))

    def _read_argument(self, tag):
        arg_type = TAG_TO_ARG_TYPE.get(tag)
        if arg_type is None:
            raise UnknownTypeTag(tag, self.i)
        if tag in FIXED_SIZES:
            raw = self._take(FIXED_SIZES[tag], tag)
        elif arg_type is ArgType.STRING:
            raw = self._read_padded_string(MalformedArgument, "string argument") + b"\x00"
        elif arg_type is ArgType.BLOB:
            raw = self._read_blob()
        else:
            raw = b""
        return OscTree.argument(arg_type, raw, tag)

    def _read_blob(self):
        start = self.i
        size = struct.unpack(">i", self._take(4, "b"))[0]
        if size < 0:
            raise MalformedArgument(f"negative blob size {size}", start)
        end = self.i + size
        stop = ceil4(end)
        if stop > self.n:
            raise MalformedArgument("blob runs past the end of the packet", start)
        if any(self.data[end:stop]):
            raise MalformedArgument("blob has non-zero padding", end)
        raw = self.data[self.i:end]
        self.i = stop
        return raw

    def _read_bundle(self, node):
        if self.depth >= MAX_BUNDLE_DEPTH:
            raise MalformedBundle(f"bundles nested deeper than {MAX_BUNDLE_DEPTH} levels", 0)
        if self.data[:8] != BUNDLE_MARKER:
            raise MalformedBundle("expected '#bundle' marker", 0)
        if self.n < 16:
            raise MalformedBundle("bundle time tag truncated", 8)
        node.set_time_tag(TimeTag.from_bytes(self.data[8:16]))
        self.i = 16
        while self.i < self.n:
            start = self.i
            if self.i + 4 > self.n:
                raise MalformedBundle("bundle element size truncated", start)
            size = struct.unpack(">i", self.data[self.i:self.i + 4])[0]
            self.i += 4
            if size <= 0 or size % 4:
                raise MalformedBundle(f"invalid bundle element size {size}", start)
            if self.i + size > self.n:
                raise MalformedBundle("bundle element runs past the end of the packet", start)
            element = OscReader(self.data[self.i:self.i + size], self.depth + 1)
            node._append(element.read_packet())
            self.i += size
