"""Report details of the wireless LAN interfaces on a Linux host."""

__version__ = "1.2"
