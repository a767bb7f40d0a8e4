"""
Loopback tests for OscSender and OscReceiver.
"""

import time

import pytest

from osctree import OscReceiver, OscSender, OscTree, TimeTag


def wait_for(condition, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        result = condition()
        if result:
            return result
        time.sleep(0.005)
    pytest.fail("timed out waiting for UDP packet")


class TestLoopback:

    def test_send_and_receive(self, sample_message):
        with OscReceiver(port=0, host="127.0.0.1") as receiver:
            assert receiver.port != 0
            with OscSender("127.0.0.1", receiver.port) as sender:
                sent = sender.send(sample_message)
            assert sent == len(sample_message.to_bytes())
            packet = wait_for(receiver.get_latest_packet)

        assert packet == sample_message
        assert packet.children[1].get_value() == "Hello, OSC"

    def test_bundle_with_compression(self, mixed_message):
        bundle = OscTree.make_bundle(TimeTag(3900000000, 0)).push_back(mixed_message)
        with OscReceiver(port=0, host="127.0.0.1", compressed=True) as receiver:
            with OscSender("127.0.0.1", receiver.port, compressed=True) as sender:
                sender.send(bundle)
            packet = wait_for(receiver.get_latest_packet)

        assert packet == bundle

    def test_packets_in_order(self):
        with OscReceiver(port=0, host="127.0.0.1") as receiver:
            with OscSender("127.0.0.1", receiver.port) as sender:
                for i in range(3):
                    sender.send(OscTree.make_message("/seq").push_back(OscTree.int32(i)))
            wait_for(lambda: len(receiver.packets) == 3)
            packets = receiver.get_packets()

        assert [p.children[0].get_value() for p in packets] == [0, 1, 2]

    def test_malformed_datagram_is_counted(self, sample_message):
        with OscReceiver(port=0, host="127.0.0.1") as receiver:
            with OscSender("127.0.0.1", receiver.port) as sender:
                sender.send(b"garbage!")
                sender.send(sample_message.to_bytes())
            packet = wait_for(receiver.get_latest_packet)
            assert receiver.error_count == 1

        assert packet == sample_message

    def test_stop_resets(self):
        receiver = OscReceiver(port=0, host="127.0.0.1")
        receiver.start()
        receiver.stop()
        assert receiver.thread is None
        assert receiver.get_latest_packet() is None

    def test_start_twice(self):
        with OscReceiver(port=0, host="127.0.0.1") as receiver:
            thread, port = receiver.thread, receiver.port
            with pytest.raises(RuntimeError, match="already running"):
                receiver.start()
            assert receiver.thread is thread
            assert receiver.port == port
