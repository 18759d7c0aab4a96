"""IPv4 address and IPv6 presence from ``ip`` (or ``ifconfig`` as fallback).

A public IPv4 address is redacted in privacy mode; private addresses
(10/8, 172.16/12, 192.168/16) reveal nothing and are always shown.
"""

from __future__ import annotations

import logging
import re
import shutil
from typing import Callable

from wlaninfo.wifi_common import (
    REDACTED,
    CommandRunner,
    WlanInfo,
    is_private_ipv4,
    run_text,
)

logger = logging.getLogger(__name__)

# "inet 192.168.1.23/24 brd ..."   (ip)
# "inet 192.168.1.23  netmask ..." (net-tools ifconfig)
# "inet addr:192.168.1.23  Bcast:..." (BusyBox ifconfig)
_INET_RE = re.compile(r"^\s*inet\s+(?:addr:)?(\d{1,3}(?:\.\d{1,3}){3})", re.MULTILINE)
_INET6_RE = re.compile(r"^\s*inet6\s", re.MULTILINE)


def parse_addresses(output: str) -> tuple[str | None, bool]:
    """Return ``(first IPv4 address or None, has_ipv6)`` from ``ip``/``ifconfig`` output."""
    match = _INET_RE.search(output)
    ipv4 = match.group(1) if match else None
    has_ipv6 = bool(_INET6_RE.search(output))
    return ipv4, has_ipv6


def collect_ip(
    info: WlanInfo,
    iface: str,
    *,
    privacy: bool = False,
    runner: CommandRunner | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> None:
    """Fill IPv4 address and IPv6 presence of *iface* into *info*."""
    if which("ip"):
        output = run_text(["ip", "addr", "show", iface], runner=runner)
    elif which("ifconfig"):
        output = run_text(["ifconfig", iface], runner=runner)
    else:
        logger.debug("neither ip nor ifconfig available")
        return

    ipv4, has_ipv6 = parse_addresses(output)

    info.ipv6 = "yes" if has_ipv6 else "no"

    if not ipv4:
        info.ipv4 = "none"
    elif privacy and not is_private_ipv4(ipv4):
        info.ipv4 = REDACTED
    else:
        info.ipv4 = ipv4
