"""SleepOnLAN: suspend the host when a Wake-on-LAN magic packet arrives."""

__version__ = "0.1.0"
