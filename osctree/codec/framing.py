"""
Constants of the OSC packet framing.
"""

BUNDLE_MARKER = b"#bundle\x00"

# Deepest bundle nesting accepted when encoding or decoding
MAX_BUNDLE_DEPTH = 32

# Payload sizes of fixed-width argument types
FIXED_SIZES = {
    "i": 4,
    "f": 4,
    "h": 8,
    "d": 8,
    "t": 8,
}
