"""
Whole-packet zlib compression.

Large blob payloads (image buffers, sample arrays) compress well, so a
sender and receiver that agree on it can squeeze an encoded packet before
it goes on the wire. The OSC packet itself is unchanged.
"""

import zlib

from ..errors import DecodeError


def compress_packet(data, level=6):
    """
    Compress an encoded OSC packet.

    Args:
        data: Encoded packet bytes
        level: zlib compression level (0-9)

    Returns:
        Compressed bytes
    """
    return zlib.compress(bytes(data), level)


def decompress_packet(data):
    """
    Reverse compress_packet().

    Raises:
        DecodeError: If data is not a valid zlib stream
    """
    try:
        return zlib.decompress(bytes(data))
    except zlib.error as e:
        raise DecodeError(f"cannot decompress packet: {e}") from e
