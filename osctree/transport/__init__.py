"""
UDP transport for OscTree packets.

The codec itself never touches sockets; these classes move encoded
packets between processes, one packet per datagram.
"""

from .osc_receiver import OscReceiver, DEFAULT_PORT
from .osc_sender import OscSender

__all__ = ["OscReceiver", "OscSender", "DEFAULT_PORT"]
