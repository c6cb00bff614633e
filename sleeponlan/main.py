"""SleepOnLAN command-line entry point.

Usage:
    sleeponlan                  # listen on 0.0.0.0:10, run `systemctl suspend`
    sleeponlan -p 9 --dry-run   # listen on port 9, only log the suspend

Exits 0 on Ctrl+C and 1 when the socket cannot be bound or fails at runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from sleeponlan import __version__
from sleeponlan.config import Settings, get_settings
from sleeponlan.services.interfaces import local_mac_addresses, log_monitored_macs
from sleeponlan.services.packet_validator import MagicPacket
from sleeponlan.services.receive_loop import BindFailedError, ReceiveFailedError, run
from sleeponlan.services.suspend_service import SuspendService

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from None
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 0 and 65535, got {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sleeponlan",
        description="Sleep-on-LAN daemon: suspend this host when a Wake-on-LAN magic packet arrives",
    )
    parser.add_argument(
        "--port", "-p",
        type=parse_port,
        default=None,
        help="UDP port to listen on (default: 10, env SLEEPONLAN_PORT)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Address to bind (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--suspend-command",
        metavar="CMD",
        default=None,
        help='Command run on a valid packet (default: "systemctl suspend")',
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the suspend instead of running it",
    )
    parser.add_argument(
        "--local-only",
        action="store_true",
        help="Only suspend for packets addressed to one of this host's MAC addresses",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="Logging level (default: INFO); DEBUG shows rejected packets",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment/.env settings with CLI flags taking precedence."""
    overrides: dict = {}
    if args.port is not None:
        overrides["port"] = args.port
    if args.host is not None:
        overrides["host"] = args.host
    if args.suspend_command is not None:
        overrides["suspend_command"] = args.suspend_command
    if args.dry_run:
        overrides["mode"] = "dev"
    if args.local_only:
        overrides["local_only"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        parser.error(str(e))

    _setup_logging(settings.log_level)
    logger.info("%s v%s starting", settings.app_name, __version__)

    local_macs = local_mac_addresses()
    log_monitored_macs(local_macs)

    accept = None
    if settings.local_only:
        allowed = set(local_macs.values())

        def accept(packet: MagicPacket) -> bool:
            if packet.target_mac in allowed:
                return True
            logger.info("MAC %s does not match any local interface", packet.mac)
            return False

    suspend = SuspendService(
        command=settings.suspend_command,
        timeout=settings.suspend_timeout_seconds,
        dry_run=settings.is_dry_run,
    )

    try:
        run(
            settings.port,
            suspend,
            host=settings.host,
            buffer_size=settings.buffer_size,
            accept=accept,
        )
    except BindFailedError as e:
        logger.error(
            "%s — is the port already in use, or does it need root privileges?", e,
        )
        return 1
    except ReceiveFailedError as e:
        logger.error("%s — shutting down", e)
        return 1
    except KeyboardInterrupt:
        logger.info("%s shutting down", settings.app_name)
        return 0


if __name__ == "__main__":
    sys.exit(main())
