"""Power management state and link quality from ``iwconfig``."""

from __future__ import annotations

import re

from wlaninfo.wifi_common import CommandRunner, WlanInfo, run_text

_POWER_RE = re.compile(r"Power Management\s*:\s*(\S+)")
_QUALITY_RE = re.compile(r"Link Quality\s*=\s*(\S+)")


def parse_iwconfig(output: str) -> dict[str, str]:
    """Extract ``power_management`` and ``link_quality`` from ``iwconfig`` output.

    Relevant lines look like::

        Power Management:on
        Link Quality=65/70  Signal level=-45 dBm
    """
    values: dict[str, str] = {}

    match = _POWER_RE.search(output)
    if match:
        values["power_management"] = match.group(1)

    match = _QUALITY_RE.search(output)
    if match:
        values["link_quality"] = match.group(1)

    return values


def collect_iwconfig(
    info: WlanInfo,
    iface: str,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Fill power management and link quality of *iface* into *info*."""
    values = parse_iwconfig(run_text(["iwconfig", iface], runner=runner))
    info.update("power_management", values.get("power_management"))
    info.update("link_quality", values.get("link_quality"))
