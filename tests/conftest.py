"""
Pytest configuration and fixtures for osctree tests.
"""

import os
import sys

import numpy as np
import pytest

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from osctree import OscTree, TimeTag


@pytest.fixture
def sample_message():
    """/foo/bar/baz with an int32 and a string argument."""
    message = OscTree.make_message("/foo/bar/baz")
    message.push_back(OscTree.int32(4096))
    message.push_back(OscTree.string("Hello, OSC"))
    return message


@pytest.fixture
def mixed_message():
    """A message carrying one argument of every supported type."""
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[:, :2] = (0, 255, 0, 255)
    pixels[:, 2:] = (0, 0, 255, 255)

    message = OscTree.make_message("/foo/bar/baz")
    message.push_back(OscTree.int32(512))
    message.push_back(OscTree.float32(3.14159))
    message.push_back(OscTree.string("Hello"))
    message.push_back(OscTree.from_array(pixels))
    message.push_back(OscTree.int64(2 ** 63 - 1))
    message.push_back(OscTree.float64(1.61803398875))
    message.push_back(OscTree.boolean(True))
    message.push_back(OscTree.boolean(False))
    message.push_back(OscTree.tag("N"))
    message.push_back(OscTree.tag("I"))
    message.push_back(OscTree.timetag(TimeTag(3900000000, 12345)))
    return message
