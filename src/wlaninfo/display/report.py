"""Rich report builders for wlaninfo.

Three output styles are supported:

- full: a header line per interface followed by an indented label/value grid
- compact: one semicolon-separated line per interface
- JSON: a list of objects, one per interface

Can be used standalone to preview the layout::

    python -m wlaninfo.display.report          # render a demo report
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Group
from rich.text import Text

from wlaninfo.wifi_common import IFNAMSIZ, NOT_CONNECTED, WlanInfo

LABEL_WIDTH = 19


# ---------------------------------------------------------------------------
# Full report
# ---------------------------------------------------------------------------

def _line(text: str) -> Text:
    return Text(text, no_wrap=True, overflow="ignore")


def build_report(iface: str, info: WlanInfo) -> Group:
    """Build the full report for one interface.

    The interface name is padded to ``IFNAMSIZ`` so the vendor and all
    labels line up for every possible interface name.  Lines never wrap:
    print the group with ``soft_wrap=True`` so long vendor names and SSIDs
    stay on one line at any terminal width.
    """
    indent = " " * (IFNAMSIZ + 2)
    lines = [_line(f"{iface:<{IFNAMSIZ}}  {info.vendor}")]
    for label, value in info.rows():
        lines.append(_line(f"{indent}{label:<{LABEL_WIDTH}}  {value}"))
    if not info.is_connected:
        lines.append(_line(f"{indent}{NOT_CONNECTED}"))
    return Group(*lines)


# ---------------------------------------------------------------------------
# Compact report
# ---------------------------------------------------------------------------

def format_compact(iface: str, info: WlanInfo) -> str:
    """Format one interface as a single semicolon-separated line.

    ``wlan0;Vendor Name;Interface: USB;...;Connection Time: 12 Seconds``
    """
    items = [iface, info.vendor]
    items.extend(f"{label} {value}" for label, value in info.rows())
    if not info.is_connected:
        items.append(NOT_CONNECTED)
    return ";".join(items)


# ---------------------------------------------------------------------------
# JSON report
# ---------------------------------------------------------------------------

def to_json(reports: list[tuple[str, WlanInfo]]) -> str:
    """Serialise ``(iface, info)`` pairs as an indented JSON array."""
    data: list[dict[str, Any]] = []
    for iface, info in reports:
        entry: dict[str, Any] = {"interface": iface}
        entry.update(info.to_dict())
        entry["connected"] = info.is_connected
        data.append(entry)
    return json.dumps(data, indent=2)


# ---------------------------------------------------------------------------
# Standalone CLI (demo)
# ---------------------------------------------------------------------------

def main() -> None:
    """Render a demo report with sample data for visual testing."""
    from rich.console import Console

    sample = WlanInfo(
        vendor="Realtek Semiconductor Corp. RTL8188EUS 802.11n Wireless Network Adapter",
        bus="USB",
        driver="r8188eu",
        power_management="off",
        mac_address="aa:bb:cc:dd:ee:01",
        ipv4="192.168.1.23",
        ipv6="yes",
        ssid="HomeNet",
        link_quality="65/70",
        signal="-45 dBm (Excellent)",
        tx_power="158 mW",
        frequency="2.4 GHz (2437)",
        channel="6",
        channel_width="20 MHz",
        tx_bitrate="72.2 MBit/s",
        rx_bitrate="65.0 MBit/s",
        standard="802.11n (Wi-Fi 4)",
        throughput="49 MBit/s",
        connected_time="3600 Seconds",
    )
    console = Console(emoji=False)
    console.print()
    console.print(build_report("wlan0", sample), soft_wrap=True)
    console.print()
    console.print(format_compact("wlan0", sample), markup=False, soft_wrap=True)


if __name__ == "__main__":
    main()
