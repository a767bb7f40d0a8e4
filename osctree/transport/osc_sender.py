"""
OscSender - sends encoded OscTree packets over UDP.
"""

import logging
import socket

from ..tree.osc_tree import OscTree
from ..utils.compression import compress_packet
from .osc_receiver import DEFAULT_PORT

logger = logging.getLogger(__name__)


class OscSender:
    """
    Encodes OscTree packets and sends each one as a single UDP datagram.

    Nothing is fragmented: a packet that does not fit into one datagram
    fails with the OSError raised by the socket.

    Example usage:
        with OscSender("127.0.0.1", 8000) as sender:
            message = OscTree.make_message("/synth/freq")
            message.push_back(OscTree.float32(440.0))
            sender.send(message)
    """

    def __init__(self, host: str = "127.0.0.1", port: int = DEFAULT_PORT, compressed: bool = False):
        """
        Initialize the sender.

        Args:
            host: Destination host name or IP address
            port: Destination UDP port (default: 8000)
            compressed: zlib-compress every packet (the receiver must agree)
        """
        self.host = host
        self.port = port
        self.compressed = compressed
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def send(self, packet):
        """
        Send one packet.

        Args:
            packet: OscTree to encode, or already encoded bytes

        Returns:
            Number of bytes written to the socket
        """
        data = packet.to_bytes() if isinstance(packet, OscTree) else bytes(packet)
        if self.compressed:
            data = compress_packet(data)
        sent = self.sock.sendto(data, (self.host, self.port))
        logger.debug("Sent %d bytes to %s:%d", sent, self.host, self.port)
        return sent

    def close(self):
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
