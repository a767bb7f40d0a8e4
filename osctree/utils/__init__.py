"""
Utility helpers shared by the codec and transport.

This module provides:
    - padding: 4-byte alignment helpers
    - timetag: OSC/NTP time tag value type
    - compression: zlib packet compression
    - hexdump: debug formatting of encoded packets
"""

from .padding import ceil4, pad4
from .timetag import TimeTag, coerce_time_tag
from .compression import compress_packet, decompress_packet
from .hexdump import format_packet

__all__ = [
    "ceil4",
    "pad4",
    "TimeTag",
    "coerce_time_tag",
    "compress_packet",
    "decompress_packet",
    "format_packet",
]
