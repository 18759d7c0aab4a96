"""Per-interface data collectors (sysfs, iw, iwconfig, ip/ifconfig)."""

from __future__ import annotations

import shutil
from typing import Callable

from wlaninfo.collectors.ipaddr import collect_ip
from wlaninfo.collectors.iw import collect_iw_info, collect_iw_link
from wlaninfo.collectors.iwconfig import collect_iwconfig
from wlaninfo.collectors.sysfs import SYSFS_NET, collect_sysfs
from wlaninfo.wifi_common import CommandRunner, WlanInfo


def collect_all(
    iface: str,
    *,
    privacy: bool = False,
    runner: CommandRunner | None = None,
    sysfs_net: str = SYSFS_NET,
    which: Callable[[str], str | None] = shutil.which,
) -> WlanInfo:
    """Run every collector against *iface* and return the filled record."""
    info = WlanInfo()
    collect_sysfs(info, iface, privacy=privacy, runner=runner, sysfs_net=sysfs_net)
    collect_iw_link(info, iface, privacy=privacy, runner=runner)
    collect_iw_info(info, iface, runner=runner)
    collect_ip(info, iface, privacy=privacy, runner=runner, which=which)
    collect_iwconfig(info, iface, runner=runner)
    return info


__all__ = [
    "collect_all",
    "collect_ip",
    "collect_iw_info",
    "collect_iw_link",
    "collect_iwconfig",
    "collect_sysfs",
]
