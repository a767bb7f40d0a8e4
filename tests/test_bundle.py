"""
Tests for bundle framing, including nested bundles.
"""

import struct

import pytest

from osctree import (
    MAX_BUNDLE_DEPTH,
    MalformedBundle,
    OscTree,
    StructureError,
    TimeTag,
)
from osctree.codec import BUNDLE_MARKER


def message(address, *values):
    node = OscTree.make_message(address)
    for value in values:
        node.push_back(OscTree.int32(value))
    return node


def nested_bundles(levels):
    packet = message("/deep", 1)
    for _ in range(levels):
        packet = OscTree.make_bundle(TimeTag.immediately()).push_back(packet)
    return packet


def raw_nested_bundles(levels):
    data = message("/deep", 1).to_bytes()
    for _ in range(levels):
        data = BUNDLE_MARKER + struct.pack(">Q", 1) + struct.pack(">i", len(data)) + data
    return data


class TestBundleEncode:
    """#bundle marker, time tag and length-prefixed elements."""

    def test_layout(self):
        inner = message("/a", 1)
        bundle = OscTree.make_bundle(TimeTag(100, 5)).push_back(inner)
        data = bundle.to_bytes()
        element = inner.to_bytes()

        assert data[:8] == b"#bundle\x00"
        assert data[8:16] == struct.pack(">Q", (100 << 32) | 5)
        assert struct.unpack(">i", data[16:20])[0] == len(element)
        assert data[20:] == element

    def test_empty_bundle(self):
        data = OscTree.make_bundle(TimeTag.immediately()).to_bytes()
        assert data == b"#bundle\x00" + b"\x00" * 7 + b"\x01"

    def test_root_with_messages_encodes_as_bundle(self):
        root = OscTree().push_back(message("/a"))
        data = root.to_bytes()
        assert data.startswith(BUNDLE_MARKER)
        assert data[8:16] == struct.pack(">Q", 1)

    def test_empty_element_rejected(self):
        bundle = OscTree.make_bundle().push_back(OscTree())
        with pytest.raises(StructureError, match="empty"):
            bundle.to_bytes()

    def test_depth_limit(self):
        nested_bundles(MAX_BUNDLE_DEPTH).to_bytes()
        with pytest.raises(StructureError, match="nested"):
            nested_bundles(MAX_BUNDLE_DEPTH + 1).to_bytes()


class TestBundleDecode:
    """Bundles decode recursively into the same tree."""

    def test_round_trip(self):
        bundle = OscTree.make_bundle(TimeTag(3900000000, 2 ** 31))
        bundle.push_back(message("/a", 1, 2))
        bundle.push_back(message("/b"))
        decoded = OscTree(bundle.to_bytes())

        assert decoded.is_bundle
        assert decoded.time_tag == TimeTag(3900000000, 2 ** 31)
        assert [child.address for child in decoded] == ["/a", "/b"]
        assert decoded == bundle

    def test_nested_round_trip(self):
        inner = OscTree.make_bundle(TimeTag(5, 0)).push_back(message("/inner", 3))
        outer = OscTree.make_bundle(TimeTag(4, 0))
        outer.push_back(message("/first", 1))
        outer.push_back(inner)
        outer.push_back(message("/last", 2))

        decoded = OscTree(outer.to_bytes())
        assert decoded == outer
        assert decoded.children[1].is_bundle
        assert decoded.children[1].children[0].children[0].get_value() == 3
        assert decoded.children[1].parent is decoded

    def test_decode_does_not_copy_elements(self, monkeypatch):
        data = nested_bundles(4).to_bytes()

        def fail(self):
            raise AssertionError("decoded node was copied")

        monkeypatch.setattr(OscTree, "_clone", fail)
        decoded = OscTree(data)
        leaf = decoded.children[0].children[0].children[0].children[0]
        assert leaf.address == "/deep"
        assert leaf.children[0].parent is leaf
        assert leaf.parent.parent.parent.parent is decoded

    def test_matches_raw_framing(self):
        assert OscTree(raw_nested_bundles(3)) == nested_bundles(3)

    def test_empty_bundle(self):
        decoded = OscTree(b"#bundle\x00" + struct.pack(">Q", 1))
        assert decoded.is_bundle
        assert decoded.time_tag.is_immediately()
        assert not decoded.has_children()

    def test_bad_marker(self):
        with pytest.raises(MalformedBundle, match="marker"):
            OscTree(b"#bundlX\x00" + b"\x00" * 8)

    def test_truncated_time_tag(self):
        with pytest.raises(MalformedBundle, match="time tag"):
            OscTree(b"#bundle\x00\x00\x00\x00\x00")

    def test_truncated_element_size(self):
        with pytest.raises(MalformedBundle, match="size truncated"):
            OscTree(b"#bundle\x00" + b"\x00" * 8 + b"\x00\x00")

    @pytest.mark.parametrize("size", [0, -4, 6])
    def test_invalid_element_size(self, size):
        data = b"#bundle\x00" + b"\x00" * 8 + struct.pack(">i", size) + b"/a\x00\x00"
        with pytest.raises(MalformedBundle, match="invalid"):
            OscTree(data)

    def test_element_past_end(self):
        data = b"#bundle\x00" + b"\x00" * 8 + struct.pack(">i", 16) + b"/a\x00\x00"
        with pytest.raises(MalformedBundle, match="past the end"):
            OscTree(data)

    def test_depth_limit(self):
        assert OscTree(raw_nested_bundles(MAX_BUNDLE_DEPTH)).is_bundle
        with pytest.raises(MalformedBundle, match="nested"):
            OscTree(raw_nested_bundles(MAX_BUNDLE_DEPTH + 1))

    def test_malformed_element_propagates(self):
        data = b"#bundle\x00" + b"\x00" * 8 + struct.pack(">i", 4) + b"bad\x00"
        with pytest.raises(ValueError):
            OscTree(data)
