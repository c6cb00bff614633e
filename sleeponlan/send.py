"""Send a magic packet to a SleepOnLAN host.

Usage:
    sleeponlan-send AA:BB:CC:DD:EE:FF                 # broadcast to port 10
    sleeponlan-send AA:BB:CC:DD:EE:FF --to 192.168.1.20 -p 9
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from sleeponlan import __version__
from sleeponlan.main import parse_port
from sleeponlan.utils.wol import send_wol


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sleeponlan-send",
        description="Send a Wake-on-LAN magic packet (puts a SleepOnLAN host to sleep)",
    )
    parser.add_argument("mac", help='Target MAC address, e.g. "AA:BB:CC:DD:EE:FF"')
    parser.add_argument(
        "--to",
        default="255.255.255.255",
        help="Broadcast or unicast address (default: 255.255.255.255)",
    )
    parser.add_argument(
        "--port", "-p",
        type=parse_port,
        default=10,
        help="UDP port (default: 10)",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        send_wol(args.mac, broadcast=args.to, port=args.port)
    except ValueError as e:
        parser.error(str(e))
    except OSError as e:
        print(f"Failed to send magic packet: {e}", file=sys.stderr)
        return 1

    print(f"Magic packet for {args.mac} sent to {args.to}:{args.port}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
