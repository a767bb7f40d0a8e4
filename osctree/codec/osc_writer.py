"""
OscWriter - serializes an OscTree into an OSC packet.
"""

import struct

from ..errors import StructureError
from ..tree.arg_type import ArgType
from ..utils.padding import pad4
from ..utils.timetag import TimeTag
from .framing import BUNDLE_MARKER, MAX_BUNDLE_DEPTH


class OscWriter:
    """
    Encoder for a complete OscTree.

    Arguments are written as their payload zero-padded to 4 bytes (blobs
    first get a big-endian signed length). Messages are the padded address,
    the padded type-tag string, then every argument in order. Bundles are
    '#bundle\\0', the 8-byte time tag, and each element prefixed by its
    big-endian 32-bit length.

    Example usage:
        data = OscWriter().write(tree)
    """

    def write(self, node):
        """
        Encode node and everything below it.

        Returns:
            bytes; len() is always a multiple of 4
        """
        return self._write_node(node, 0)

    def _write_node(self, node, depth):
        if node.is_argument:
            return self._write_argument(node)
        if node.is_bundle:
            return self._write_bundle(node, node.time_tag, depth)
        if node.is_message:
            return self._write_message(node)
        if not node.has_children():
            return b""
        # Root without a role: nested children mean bundle, otherwise message
        if any(child.has_children() or child.is_message or child.is_bundle
               for child in node.children):
            return self._write_bundle(node, TimeTag.immediately(), depth)
        raise StructureError("cannot encode arguments without a message address")

    def _write_argument(self, node):
        if node.arg_type is ArgType.BLOB:
            return pad4(struct.pack(">i", node.blob_size) + node.value)
        return pad4(node.value)

    def _write_message(self, node):
        parts = [
            pad4(node.address.encode("utf-8") + b"\x00"),
            pad4(("," + "".join(child.type_tag for child in node.children)).encode("ascii") + b"\x00"),
        ]
        for child in node.children:
            parts.append(self._write_argument(child))
        return b"".join(parts)

    def _write_bundle(self, node, time_tag, depth):
        if depth >= MAX_BUNDLE_DEPTH:
            raise StructureError(f"bundles nested deeper than {MAX_BUNDLE_DEPTH} levels")
        parts = [BUNDLE_MARKER, time_tag.to_bytes()]
        for child in node.children:
            if child.is_argument:
                raise StructureError("a bundle can only contain messages and bundles")
            element = self._write_node(child, depth + 1)
            if not element:
                raise StructureError("bundle element is empty")
            parts.append(struct.pack(">i", len(element)))
            parts.append(element)
        return b"".join(parts)
