"""Host checks and wireless interface discovery for wlaninfo.

Verifies that we are on Linux and that the external tools are installed,
then enumerates 802.11 interfaces from sysfs.

All external I/O is injectable for testability:
- ``check_linux`` accepts a ``system`` string
- ``missing_commands`` accepts a ``which`` callable
- ``list_wlan_interfaces`` accepts a ``sysfs_ieee80211`` path
"""

from __future__ import annotations

import glob
import logging
import os
import platform
import shutil
from typing import Callable, Iterable

from wlaninfo.wifi_common import WlanInfoError, is_valid_ifname

logger = logging.getLogger(__name__)

SYSFS_IEEE80211 = "/sys/class/ieee80211"

# "a|b" means either tool will do; "a" is reported when both are missing.
REQUIRED_COMMANDS = ("ip|ifconfig", "iw", "iwconfig", "lsusb", "lspci")


# ---------------------------------------------------------------------------
# Prerequisites
# ---------------------------------------------------------------------------

def check_linux(*, system: str | None = None) -> None:
    """Raise :class:`WlanInfoError` unless running on Linux.

    Args:
        system: Override for ``platform.system()`` (for testing).
    """
    system = system or platform.system()
    if system != "Linux":
        raise WlanInfoError(
            "Incompatible Operating System.",
            "This program requires Linux and won't function on any other OS.",
        )


def missing_commands(
    commands: Iterable[str] = REQUIRED_COMMANDS,
    *,
    which: Callable[[str], str | None] = shutil.which,
) -> list[str]:
    """Return the required commands that are not installed.

    Args:
        commands: Command names; ``"a|b"`` accepts either alternative.
        which: Override for ``shutil.which`` (for testing).
    """
    missing: list[str] = []
    for entry in commands:
        alternatives = entry.split("|")
        if not any(which(cmd) for cmd in alternatives):
            missing.append(alternatives[0])
    if missing:
        logger.debug("missing commands: %s", missing)
    return missing


def check_commands(*, which: Callable[[str], str | None] = shutil.which) -> None:
    """Raise :class:`WlanInfoError` listing every missing required command."""
    missing = missing_commands(which=which)
    if missing:
        raise WlanInfoError(
            "Unavailable commands.",
            f"Please install: {' '.join(missing)}",
        )


# ---------------------------------------------------------------------------
# Interface enumeration
# ---------------------------------------------------------------------------

def list_wlan_interfaces(*, sysfs_ieee80211: str = SYSFS_IEEE80211) -> list[str]:
    """List wireless interfaces found under ``<phy>/device/net`` in sysfs.

    Args:
        sysfs_ieee80211: Override for ``/sys/class/ieee80211`` (for testing).

    Returns:
        Interface names, sorted in C-locale order without duplicates.
    """
    pattern = os.path.join(sysfs_ieee80211, "*", "device", "net", "*")
    names = {os.path.basename(path) for path in glob.glob(pattern)}
    interfaces = sorted(names)
    logger.debug("wireless interfaces: %s", interfaces)
    return interfaces


def resolve_interfaces(requested: list[str], available: list[str]) -> list[str]:
    """Decide which interfaces to report.

    With nothing requested every available interface is reported.  Each
    requested name must be a detected wireless interface; repeats are
    reported once, in the order given.

    Raises:
        WlanInfoError: no wireless interfaces exist, or a requested name is
            not one of them.
    """
    if not requested:
        if not available:
            raise WlanInfoError("No wireless device(s) detected.")
        return list(available)

    selected: list[str] = []
    for name in requested:
        if not is_valid_ifname(name) or name not in available:
            raise WlanInfoError(
                "Invalid device.",
                f"Invalid 802.11 WLAN interface: {name}",
                "Try `wlaninfo --help' for more information.",
            )
        if name not in selected:
            selected.append(name)
    return selected
