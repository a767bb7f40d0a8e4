#!/usr/bin/env python3
"""
Example: Receive OSC packets and print them as trees.

This script demonstrates how to use the OscReceiver class to decode
incoming OSC messages and bundles and walk the resulting OscTree.

Usage:
    python receive_osc.py --port 8000
    python receive_osc.py --port 8000 --dump --compressed
"""

import argparse
import logging
import os
import sys
import time

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from osctree import OscReceiver, format_packet


def print_tree(node, indent=0):
    pad = "  " * indent
    if node.is_bundle:
        print(f"{pad}#bundle @ {node.time_tag.to_datetime().isoformat()}")
    elif node.is_message:
        print(f"{pad}{node.address}")
    else:
        value = node.get_value()
        if isinstance(value, bytes):
            value = f"<blob {node.blob_size} bytes>"
        print(f"{pad}[{node.type_tag}] {value}")
    for child in node.children:
        print_tree(child, indent + 1)


def main():
    parser = argparse.ArgumentParser(description="Receive and print OSC packets")

    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="UDP port to listen on (default: 8000)",
    )

    parser.add_argument(
        "--compressed",
        action="store_true",
        default=False,
        help="Expect zlib-compressed packets",
    )

    parser.add_argument(
        "--dump",
        action="store_true",
        default=False,
        help="Print a hex dump of every packet",
    )

    parser.add_argument(
        "--print_rate",
        action="store_true",
        default=False,
        help="Print receive rate statistics",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="[%(name)s] %(message)s")

    print(f"[Main] Initializing OscReceiver on port {args.port}...")
    receiver = OscReceiver(port=args.port, compressed=args.compressed)
    receiver.start()

    last_rate_time = time.time()
    print("[Main] Press Ctrl+C to stop")

    try:
        while True:
            packets = receiver.get_packets()
            if not packets:
                time.sleep(0.001)
                continue

            for packet in packets:
                print()
                print_tree(packet)
                if args.dump:
                    print(format_packet(packet.to_bytes()))

            if args.print_rate:
                now = time.time()
                if now - last_rate_time >= 2.0:
                    print(f"[Main] Receive rate: {receiver.get_receive_rate():.1f} Hz, "
                          f"rejected packets: {receiver.error_count}")
                    last_rate_time = now

    except KeyboardInterrupt:
        print("\n[Main] Stopping...")
    finally:
        receiver.stop()
        print("[Main] Done")


if __name__ == "__main__":
    main()
