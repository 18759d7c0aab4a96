"""Bus type, vendor, driver and MAC address from sysfs, lsusb and lspci.

There is no direct way to look up a vendor by interface name.  The
device's ``uevent`` tells us which bus it sits on and its product id;
that id is then matched against the ``lsusb`` or ``lspci -nn`` listing.
"""

from __future__ import annotations

import logging
import os
import re

from wlaninfo.wifi_common import (
    REDACTED,
    CommandRunner,
    WlanInfo,
    read_text,
    run_text,
)

logger = logging.getLogger(__name__)

SYSFS_NET = "/sys/class/net"


# ---------------------------------------------------------------------------
# uevent parsing
# ---------------------------------------------------------------------------

def parse_uevent(content: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines of a sysfs ``uevent`` file into a dict."""
    entries: dict[str, str] = {}
    for line in content.splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip():
            entries[key.strip()] = value.strip()
    return entries


def usb_product_id(product: str) -> str | None:
    """Turn a uevent ``PRODUCT=bda/8179/0`` value into ``"0bda:8179"``."""
    parts = product.split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    try:
        vid = int(parts[0], 16)
        pid = int(parts[1], 16)
    except ValueError:
        return None
    return f"{vid:04x}:{pid:04x}"


# ---------------------------------------------------------------------------
# lsusb / lspci parsing
# ---------------------------------------------------------------------------

def parse_lsusb_vendor(output: str, product_id: str) -> str | None:
    """Return the product description following *product_id* in ``lsusb`` output.

    ``lsusb`` lines look like::

        Bus 001 Device 004: ID 0bda:8179 Realtek Semiconductor Corp. RTL8188EUS
    """
    pattern = re.compile(rf"\bID\s+{re.escape(product_id)}\s+(.+)$", re.IGNORECASE)
    for line in output.splitlines():
        match = pattern.search(line.strip())
        if match:
            return match.group(1).strip()
    return None


# "02:00.0 Network controller [0280]: " up to and including the class id
_LSPCI_PREFIX_RE = re.compile(r"^.*?\[[0-9a-fA-F]{4}\]:\s*")
# " [8086:2723]" vendor:device tag and " (rev 1a)"
_LSPCI_ID_RE = re.compile(r"\s*\[[0-9a-fA-F]{4}:[0-9a-fA-F]{4}\]")
_LSPCI_REV_RE = re.compile(r"\s*\(rev [0-9a-fA-F]+\)\s*$")


def parse_lspci_vendor(output: str, pci_id: str) -> str | None:
    """Return the device description for *pci_id* from ``lspci -nn`` output.

    ``lspci -nn`` lines look like::

        02:00.0 Network controller [0280]: Intel Corporation Wi-Fi 6 AX200 [8086:2723] (rev 1a)
    """
    needle = f"[{pci_id.lower()}]"
    for line in output.splitlines():
        if needle not in line.lower():
            continue
        vendor = _LSPCI_PREFIX_RE.sub("", line.strip(), count=1)
        vendor = _LSPCI_ID_RE.sub("", vendor)
        vendor = _LSPCI_REV_RE.sub("", vendor)
        return vendor.strip() or None
    return None


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------

def collect_sysfs(
    info: WlanInfo,
    iface: str,
    *,
    privacy: bool = False,
    runner: CommandRunner | None = None,
    sysfs_net: str = SYSFS_NET,
) -> None:
    """Fill bus, vendor, driver and MAC address of *iface* into *info*."""
    uevent = parse_uevent(
        read_text(os.path.join(sysfs_net, iface, "device", "uevent"))
    )

    if uevent.get("DEVTYPE") == "usb_interface":
        info.bus = "USB"
        product_id = usb_product_id(uevent.get("PRODUCT", ""))
        if product_id:
            vendor = parse_lsusb_vendor(run_text(["lsusb"], runner=runner), product_id)
            info.update("vendor", vendor)
        else:
            logger.debug("%s: no usable PRODUCT in uevent", iface)
    elif "PCI_CLASS" in uevent:
        info.bus = "PCI"
        pci_id = uevent.get("PCI_ID", "")
        if pci_id:
            vendor = parse_lspci_vendor(run_text(["lspci", "-nn"], runner=runner), pci_id)
            info.update("vendor", vendor)
    else:
        logger.debug("%s: unknown bus type", iface)

    info.update("driver", uevent.get("DRIVER"))

    mac_address = read_text(os.path.join(sysfs_net, iface, "address")).strip()
    info.update("mac_address", mac_address, REDACTED if privacy else mac_address)
