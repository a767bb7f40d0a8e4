"""
OscReceiver - receives OSC packets over UDP in a background thread.

Every datagram is decoded into an OscTree as it arrives. Decoded packets
are kept in a bounded queue; datagrams that fail to decode are logged and
counted, never raised in the receive thread.
"""

import logging
import socket
import threading
import time
from collections import deque

from ..errors import DecodeError
from ..tree.osc_tree import OscTree
from ..utils.compression import decompress_packet

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8000


class OscReceiver:
    """
    Manages UDP reception and decoding in a background thread.

    Example usage:
        receiver = OscReceiver(port=8000)
        receiver.start()

        while running:
            packet = receiver.get_latest_packet()
            if packet is not None:
                print(packet.address, [arg.get_value() for arg in packet.children])

        receiver.stop()
    """

    def __init__(self, port: int = DEFAULT_PORT, host: str = "0.0.0.0",
                 compressed: bool = False, max_packets: int = 64):
        """
        Initialize the OscReceiver.

        Args:
            port: UDP port to listen on; 0 picks a free port on start()
            host: Interface to bind (default: all interfaces)
            compressed: Expect zlib-compressed datagrams
            max_packets: Number of decoded packets kept before the oldest are dropped
        """
        self.port = port
        self.host = host
        self.compressed = compressed
        self.thread = None
        self.sock = None
        self.running = False
        self.lock = threading.Lock()
        self.packets = deque(maxlen=max_packets)
        self.last_sender = None
        self.error_count = 0
        self.recv_count = 0
        self.last_rate_time = time.time()
        self.recv_rate_hz = 0.0

    def reset(self):
        """Reset all internal state and buffers."""
        with self.lock:
            self.packets.clear()
            self.last_sender = None
            self.error_count = 0
            self.recv_count = 0
            self.recv_rate_hz = 0.0

    def start(self):
        """Bind the socket and start the receive thread."""
        if self.running:
            raise RuntimeError("receiver is already running")
        self.reset()
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, 8 * 1024 * 1024)
        except OSError:
            pass
        sock.bind((self.host, self.port))
        sock.settimeout(0.5)
        self.sock = sock
        self.port = sock.getsockname()[1]
        self.running = True
        self.thread = threading.Thread(target=self._udp_server_loop, daemon=True)
        self.thread.start()
        logger.info("Listening on UDP %s:%d", self.host, self.port)

    def stop(self):
        """Stop the receive thread and close the socket."""
        self.running = False
        if self.sock:
            self.sock.close()
        if self.thread is not None:
            self.thread.join(timeout=1.0)
        self.thread = None
        self.sock = None
        self.reset()
        logger.info("Stopped")

    def get_latest_packet(self):
        """
        Get the most recent packet, discarding older ones.

        Returns:
            OscTree if a packet is available, None otherwise
        """
        with self.lock:
            if not self.packets:
                return None
            packet = self.packets.pop()
            self.packets.clear()
            return packet

    def get_packets(self):
        """
        Take every queued packet.

        Returns:
            List of OscTree, oldest first
        """
        with self.lock:
            packets = list(self.packets)
            self.packets.clear()
            return packets

    def get_receive_rate(self):
        """
        Get the current packet receive rate.

        Returns:
            Receive rate in Hz (packets per second)
        """
        return self.recv_rate_hz

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def _udp_server_loop(self):
        """Background thread that receives and decodes datagrams."""
        sock = self.sock
        try:
            while self.running:
                try:
                    data, addr = sock.recvfrom(65535)
                except socket.timeout:
                    continue
                except OSError:
                    break

                try:
                    if self.compressed:
                        data = decompress_packet(data)
                    packet = OscTree(data)
                except DecodeError as e:
                    logger.warning("Dropping packet from %s:%d: %s", addr[0], addr[1], e)
                    with self.lock:
                        self.error_count += 1
                    continue

                now = time.time()
                with self.lock:
                    self.packets.append(packet)
                    self.last_sender = addr

                    # Update receive rate
                    self.recv_count += 1
                    dt = now - self.last_rate_time
                    if dt >= 1.0:
                        self.recv_rate_hz = self.recv_count / dt
                        self.recv_count = 0
                        self.last_rate_time = now
        finally:
            sock.close()
