"""Magic packet validation — pure, stateless parsing of a raw UDP payload."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sleeponlan.utils.wol import MAC_LENGTH, MAC_REPETITIONS, SYNC_BYTES, format_mac

PACKET_SIZE = len(SYNC_BYTES) + MAC_LENGTH * MAC_REPETITIONS  # 102


class ValidationReason(str, Enum):
    WRONG_LENGTH = "wrong_length"
    BAD_HEADER = "bad_header"
    INCONSISTENT_MAC = "inconsistent_mac"


class PacketValidationError(ValueError):
    """A datagram is not a well-formed magic packet."""

    reason: ValidationReason


class WrongLengthError(PacketValidationError):
    reason = ValidationReason.WRONG_LENGTH

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Invalid size: {length} (expected {PACKET_SIZE})")


class BadHeaderError(PacketValidationError):
    reason = ValidationReason.BAD_HEADER

    def __init__(self, header: bytes):
        self.header = header
        super().__init__(f"Invalid header: {header.hex()}")


class InconsistentMacError(PacketValidationError):
    reason = ValidationReason.INCONSISTENT_MAC

    def __init__(self, group: int):
        self.group = group
        super().__init__(f"Invalid MAC repetition at group {group}")


@dataclass(frozen=True)
class MagicPacket:
    """A parsed magic packet. Only `validate` builds these."""

    target_mac: bytes

    @property
    def mac(self) -> str:
        return format_mac(self.target_mac)


def validate(buffer: bytes) -> MagicPacket:
    """Parse `buffer` as a magic packet.

    Checks run in order: exact length, synchronization header, then the
    16 MAC repetitions. The MAC value itself is not checked.

    Raises:
        WrongLengthError: buffer is not exactly 102 bytes
        BadHeaderError: one of the first 6 bytes is not 0xFF
        InconsistentMacError: a MAC group differs from the first one
    """
    if len(buffer) != PACKET_SIZE:
        raise WrongLengthError(len(buffer))

    header_end = len(SYNC_BYTES)
    if buffer[:header_end] != SYNC_BYTES:
        raise BadHeaderError(bytes(buffer[:header_end]))

    mac = bytes(buffer[header_end:header_end + MAC_LENGTH])
    for group in range(1, MAC_REPETITIONS):
        start = header_end + group * MAC_LENGTH
        if buffer[start:start + MAC_LENGTH] != mac:
            raise InconsistentMacError(group)

    return MagicPacket(target_mac=mac)


def is_magic_packet(buffer: bytes) -> bool:
    try:
        validate(buffer)
    except PacketValidationError:
        return False
    return True
