"""Wake-on-LAN (WOL) magic packet helpers."""

import socket

SYNC_BYTES = b"\xff" * 6
MAC_LENGTH = 6
MAC_REPETITIONS = 16


def parse_mac(mac_address: str) -> bytes:
    """
    Convert a textual MAC address to its 6 raw bytes.

    Args:
        mac_address: MAC address in format "AA:BB:CC:DD:EE:FF", "AA-BB-CC-DD-EE-FF"
            or "AABBCCDDEEFF"

    Raises:
        ValueError: if the address is not 12 hex digits once separators are removed
    """
    mac = mac_address.replace(":", "").replace("-", "")
    if len(mac) != MAC_LENGTH * 2:
        raise ValueError(f"Invalid MAC address: {mac_address}")
    try:
        return bytes.fromhex(mac)
    except ValueError:
        raise ValueError(f"Invalid MAC address: {mac_address}") from None


def format_mac(mac_bytes: bytes) -> str:
    """Render raw MAC bytes as lowercase colon-separated hex."""
    return ":".join(f"{b:02x}" for b in mac_bytes)


def build_magic_packet(mac: bytes | str) -> bytes:
    """Magic packet: 6x 0xFF + 16x MAC address."""
    mac_bytes = parse_mac(mac) if isinstance(mac, str) else bytes(mac)
    if len(mac_bytes) != MAC_LENGTH:
        raise ValueError(f"MAC address must be {MAC_LENGTH} bytes, got {len(mac_bytes)}")
    return SYNC_BYTES + mac_bytes * MAC_REPETITIONS


def send_wol(mac_address: str, broadcast: str = "255.255.255.255", port: int = 10) -> None:
    """
    Send a magic packet, e.g. to put a SleepOnLAN host to sleep.

    Args:
        mac_address: MAC address in format "AA:BB:CC:DD:EE:FF" or "AA-BB-CC-DD-EE-FF"
        broadcast: Broadcast (or unicast) address (default: 255.255.255.255)
        port: UDP port (default: 10)
    """
    packet = build_magic_packet(mac_address)

    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        sock.sendto(packet, (broadcast, port))
