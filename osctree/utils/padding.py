"""
4-byte alignment helpers.

Every field of an OSC packet starts on a 4-byte boundary; shorter fields
are followed by zero bytes.
"""


def ceil4(n):
    """Round n up to the next multiple of 4."""
    return (n + 3) & ~0x03


def pad4(data):
    """
    Zero-pad data to a multiple of 4 bytes.

    Args:
        data: bytes-like payload

    Returns:
        bytes whose length is ceil4(len(data))
    """
    data = bytes(data)
    return data + b"\x00" * (ceil4(len(data)) - len(data))
