"""Local network interface discovery."""

from __future__ import annotations

import logging

import psutil

from sleeponlan.utils.wol import MAC_LENGTH, format_mac, parse_mac

logger = logging.getLogger(__name__)

_NULL_MAC = bytes(MAC_LENGTH)


def local_mac_addresses() -> dict[str, bytes]:
    """Hardware addresses of this host's interfaces, keyed by interface name.

    Interfaces without a usable link-layer address (loopback reports
    00:00:00:00:00:00) are skipped.
    """
    macs: dict[str, bytes] = {}
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family != psutil.AF_LINK or not addr.address:
                continue
            try:
                mac = parse_mac(addr.address)
            except ValueError:
                continue  # e.g. tunnel devices with longer link addresses
            if mac != _NULL_MAC:
                macs[name] = mac
                break
    return macs


def log_monitored_macs(macs: dict[str, bytes]) -> None:
    if not macs:
        logger.warning("No network interfaces with MAC addresses found")
        return
    logger.info("Monitoring for WoL packets targeting:")
    for name, mac in sorted(macs.items()):
        logger.info("  %s (%s)", format_mac(mac), name)
