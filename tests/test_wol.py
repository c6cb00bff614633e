"""Tests for WOL helpers — MAC parsing, formatting, packet building, sending."""

import socket

import pytest

from sleeponlan.utils.wol import build_magic_packet, format_mac, parse_mac, send_wol

MAC = bytes([0xAA, 0xBB, 0xCC, 0xDD, 0xEE, 0xFF])


class TestParseMac:
    @pytest.mark.parametrize(
        "text",
        ["AA:BB:CC:DD:EE:FF", "aa-bb-cc-dd-ee-ff", "aabbccddeeff"],
    )
    def test_formats(self, text):
        assert parse_mac(text) == MAC

    @pytest.mark.parametrize("text", ["", "AA:BB:CC", "AA:BB:CC:DD:EE:FF:00", "GG:BB:CC:DD:EE:FF"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="Invalid MAC address"):
            parse_mac(text)

    def test_format_mac(self):
        assert format_mac(MAC) == "aa:bb:cc:dd:ee:ff"
        assert parse_mac(format_mac(MAC)) == MAC


class TestBuildPacket:
    def test_layout(self):
        packet = build_magic_packet("12:34:56:78:9A:BC")
        assert len(packet) == 102
        assert packet[:6] == b"\xff" * 6
        for i in range(16):
            assert packet[6 + i * 6:12 + i * 6] == bytes.fromhex("123456789abc")

    def test_wrong_mac_length(self):
        with pytest.raises(ValueError):
            build_magic_packet(b"\x01\x02")


class TestSendWol:
    def test_sends_to_unicast_address(self):
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as receiver:
            receiver.bind(("127.0.0.1", 0))
            receiver.settimeout(5)
            port = receiver.getsockname()[1]

            send_wol("AA:BB:CC:DD:EE:FF", broadcast="127.0.0.1", port=port)
            data, _ = receiver.recvfrom(1024)

        assert data == build_magic_packet(MAC)

    def test_invalid_mac_raises_before_sending(self):
        with pytest.raises(ValueError):
            send_wol("not-a-mac")
