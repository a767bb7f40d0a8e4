"""Human-readable dump of encoded packets for debugging."""


def format_packet(data, width=16):
    """
    Format bytes as offset, hex and ASCII columns, grouped by 4-byte words.

    Args:
        data: bytes-like packet
        width: Bytes per line (multiple of 4)

    Returns:
        Multi-line string starting with a "size N" header line
    """
    data = bytes(data)
    lines = [f"size {len(data)}"]
    hex_width = width * 3 + width // 4 - 2
    for offset in range(0, len(data), width):
        chunk = data[offset:offset + width]
        words = []
        for i in range(0, len(chunk), 4):
            words.append(" ".join(f"{b:02x}" for b in chunk[i:i + 4]))
        text = "".join(chr(b) if 31 < b < 127 else "." for b in chunk)
        lines.append(f"{offset:>4}   {'  '.join(words):<{hex_width}}|{text}|")
    return "\n".join(lines)
