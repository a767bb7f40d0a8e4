"""
Codec between OscTree and the OSC 1.0 wire format.

This package provides:
    - OscReader: bytes -> OscTree
    - OscWriter: OscTree -> bytes
"""

from .framing import BUNDLE_MARKER, MAX_BUNDLE_DEPTH
from .osc_reader import OscReader
from .osc_writer import OscWriter

__all__ = ["OscReader", "OscWriter", "BUNDLE_MARKER", "MAX_BUNDLE_DEPTH"]
