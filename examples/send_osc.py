#!/usr/bin/env python3
"""
Example: Build an OSC message and send it over UDP.

Arguments are typed from their spelling: integers become int32, numbers
with a decimal point become float32, true/false become T/F, and anything
else is sent as a string.

Usage:
    python send_osc.py /foo/bar/baz 4096 "Hello, OSC"
    python send_osc.py /synth/freq 440.0 --bundle --dump
    python send_osc.py /image --blob-file frame.raw --compressed
"""

import argparse
import os
import sys

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from osctree import OscSender, OscTree, format_packet


def parse_argument(text):
    if text in ("true", "false"):
        return OscTree.boolean(text == "true")
    try:
        return OscTree.int32(int(text))
    except ValueError:
        pass
    try:
        return OscTree.float32(float(text))
    except ValueError:
        return OscTree.string(text)


def main():
    parser = argparse.ArgumentParser(description="Send an OSC message")

    parser.add_argument("address", help="OSC address, e.g. /foo/bar")
    parser.add_argument("values", nargs="*", help="Argument values")

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Destination host (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Destination UDP port (default: 8000)",
    )

    parser.add_argument(
        "--blob-file",
        default=None,
        help="Append the contents of this file as a blob argument",
    )

    parser.add_argument(
        "--bundle",
        action="store_true",
        default=False,
        help="Wrap the message in a bundle time-tagged with the current time",
    )

    parser.add_argument(
        "--compressed",
        action="store_true",
        default=False,
        help="zlib-compress the packet",
    )

    parser.add_argument(
        "--dump",
        action="store_true",
        default=False,
        help="Print a hex dump of the encoded packet",
    )

    args = parser.parse_args()

    message = OscTree.make_message(args.address)
    for value in args.values:
        message.push_back(parse_argument(value))
    if args.blob_file:
        with open(args.blob_file, "rb") as f:
            message.push_back(OscTree.blob(f.read()))

    packet = message
    if args.bundle:
        packet = OscTree.make_bundle().push_back(message)

    if args.dump:
        print(format_packet(packet.to_bytes()))

    with OscSender(args.host, args.port, compressed=args.compressed) as sender:
        sent = sender.send(packet)
    print(f"[Main] Sent {sent} bytes to {args.host}:{args.port}")


if __name__ == "__main__":
    main()
