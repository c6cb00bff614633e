"""UDP receive loop — validates datagrams and dispatches suspend requests."""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable
from enum import Enum
from typing import NoReturn

from sleeponlan.services.packet_validator import (
    PACKET_SIZE,
    MagicPacket,
    PacketValidationError,
    validate,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_BUFFER_SIZE = 1024

# Interrupted calls, ICMP errors surfaced on UDP sockets and timeouts
TRANSIENT_ERRORS: tuple[type[OSError], ...] = (
    InterruptedError,
    BlockingIOError,
    ConnectionError,
    TimeoutError,
)


class ListenError(Exception):
    """The listening socket is unusable; the daemon must exit."""

    def __init__(self, message: str, os_error: OSError):
        super().__init__(f"{message}: {os_error}")
        self.os_error = os_error

    @property
    def errno(self) -> int | None:
        return self.os_error.errno


class BindFailedError(ListenError):
    pass


class ReceiveFailedError(ListenError):
    pass


class LoopState(str, Enum):
    LISTENING = "listening"
    PROCESSING = "processing"
    TERMINATED = "terminated"


class Listener:
    """One UDP socket bound to ``host:port`` plus the suspend callback it drives."""

    def __init__(
        self,
        port: int,
        on_suspend_request: Callable[[], None],
        *,
        host: str = DEFAULT_HOST,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        accept: Callable[[MagicPacket], bool] | None = None,
        sock: socket.socket | None = None,
    ):
        if buffer_size <= PACKET_SIZE:
            raise ValueError(
                f"buffer_size must exceed the {PACKET_SIZE}-byte magic packet, got {buffer_size}"
            )
        self._host = host
        self._port = port
        self._on_suspend_request = on_suspend_request
        self._buffer_size = buffer_size
        self._accept = accept
        self._sock = sock
        self._state = LoopState.LISTENING

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def address(self) -> tuple[str, int]:
        """Bound (host, port); reflects the real port when bound to port 0."""
        if self._sock is None:
            return self._host, self._port
        host, port = self._sock.getsockname()[:2]
        return host, port

    def bind(self) -> socket.socket:
        """Open the UDP socket and return it. Raises BindFailedError, never retries."""
        if self._sock is not None:
            return self._sock
        sock = None
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            sock.bind((self._host, self._port))
        except OSError as e:
            if sock is not None:
                sock.close()
            self._state = LoopState.TERMINATED
            raise BindFailedError(
                f"Cannot bind UDP {self._host}:{self._port}", e,
            ) from e
        self._sock = sock
        logger.info("SleepOnLAN daemon listening on %s:%s", *self.address)
        return sock

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> Listener:
        self.bind()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def handle_datagram(self, data: bytes, sender: tuple) -> bool:
        """Validate one datagram and dispatch it. Returns True if suspend was requested."""
        peer = _format_peer(sender)
        try:
            packet = validate(data)
        except PacketValidationError as e:
            logger.debug("Received invalid packet from %s: %s (%s)", peer, e, e.reason.value)
            return False

        if self._accept is not None and not self._accept(packet):
            logger.info(
                "Ignoring WoL packet from %s for MAC %s: rejected by accept filter",
                peer, packet.mac,
            )
            return False

        logger.info("Valid WoL packet received from %s for MAC %s", peer, packet.mac)
        try:
            self._on_suspend_request()
        except Exception:
            logger.exception("Suspend action raised")
        logger.info("Suspend triggered by %s (MAC %s)", peer, packet.mac)
        return True

    def serve_forever(self) -> NoReturn:
        """Receive and dispatch datagrams one at a time until the socket fails."""
        sock = self.bind()

        while True:
            self._state = LoopState.LISTENING
            try:
                data, sender = sock.recvfrom(self._buffer_size)
            except TRANSIENT_ERRORS as e:
                logger.warning("Transient receive error, continuing: %s", e)
                continue
            except OSError as e:
                self._state = LoopState.TERMINATED
                self.close()
                raise ReceiveFailedError("UDP receive failed", e) from e

            self._state = LoopState.PROCESSING
            self.handle_datagram(data, sender)


def run(
    port: int,
    on_suspend_request: Callable[[], None],
    *,
    host: str = DEFAULT_HOST,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    accept: Callable[[MagicPacket], bool] | None = None,
) -> NoReturn:
    """Bind ``host:port`` and serve forever.

    Raises:
        BindFailedError: the socket could not be bound (port in use, no privilege)
        ReceiveFailedError: the socket failed after binding
    """
    listener = Listener(
        port,
        on_suspend_request,
        host=host,
        buffer_size=buffer_size,
        accept=accept,
    )
    with listener:
        listener.serve_forever()


def _format_peer(sender: tuple) -> str:
    try:
        host, port = sender[:2]
    except (TypeError, ValueError):
        return str(sender)
    return f"{host}:{port}"
