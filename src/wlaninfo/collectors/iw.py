"""Link, station and interface details from ``iw``.

Three ``iw dev <iface>`` subcommands are used:

- ``link``: SSID, signal, frequency and tx bitrate of the current association
- ``station dump``: rx bitrate, expected throughput and connected time
- ``info``: transmit power, channel number and channel width
"""

from __future__ import annotations

import logging
import re

from wlaninfo.wifi_common import (
    REDACTED,
    CommandRunner,
    WlanInfo,
    dbm_to_mw,
    frequency_band,
    run_text,
    signal_quality,
    wifi_standard,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def _field(output: str, key: str) -> str | None:
    """Return the text after ``key:`` on the first line starting with *key*."""
    prefix = key + ":"
    for line in output.splitlines():
        stripped = line.strip()
        if stripped.startswith(prefix):
            return stripped[len(prefix):].strip()
    return None


_LEADING_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?")


def _leading_number(value: str | None) -> str | None:
    """Return the number at the start of *value* (``"540.5Mbps"`` -> ``"540.5"``)."""
    if not value:
        return None
    match = _LEADING_NUMBER_RE.match(value.strip())
    return match.group(0) if match else None


# ---------------------------------------------------------------------------
# iw dev <iface> link
# ---------------------------------------------------------------------------

def parse_iw_link(output: str) -> dict[str, str]:
    """Extract the raw link values from ``iw dev <iface> link`` output.

    Returns a dict with any of the keys ``ssid``, ``signal``, ``freq`` and
    ``tx_bitrate`` (the full tx bitrate line, including MCS flags).  An
    interface that is not associated yields an empty dict.
    """
    values: dict[str, str] = {}

    ssid = _field(output, "SSID")
    if ssid:
        values["ssid"] = ssid

    signal = _leading_number(_field(output, "signal"))
    if signal:
        values["signal"] = signal

    freq = _leading_number(_field(output, "freq"))
    if freq:
        values["freq"] = freq

    tx_bitrate = _field(output, "tx bitrate")
    if tx_bitrate:
        values["tx_bitrate"] = tx_bitrate

    return values


def parse_iw_station(output: str) -> dict[str, str]:
    """Extract rx bitrate, expected throughput and connected time.

    Values come back as bare numbers; throughput keeps only its integer
    part.
    """
    values: dict[str, str] = {}

    rx = _leading_number(_field(output, "rx bitrate"))
    if rx:
        values["rx_bitrate"] = rx

    throughput = _leading_number(_field(output, "expected throughput"))
    if throughput:
        values["throughput"] = throughput.split(".")[0]

    connected = _leading_number(_field(output, "connected time"))
    if connected:
        values["connected_time"] = connected

    return values


def collect_iw_link(
    info: WlanInfo,
    iface: str,
    *,
    privacy: bool = False,
    runner: CommandRunner | None = None,
) -> None:
    """Fill SSID, signal, frequency, bitrates, standard and timing into *info*."""
    link = parse_iw_link(run_text(["iw", "dev", iface, "link"], runner=runner))
    station = parse_iw_station(
        run_text(["iw", "dev", iface, "station", "dump"], runner=runner)
    )
    if not link:
        logger.debug("%s: not associated", iface)

    signal = link.get("signal")
    if signal:
        dbm = int(float(signal))
        info.update("signal", signal, f"{signal} dBm ({signal_quality(dbm)})")

    ssid = link.get("ssid")
    info.update("ssid", ssid, REDACTED if privacy else ssid)

    band = None
    freq = link.get("freq")
    if freq:
        band = frequency_band(int(float(freq)))
        info.update("frequency", freq, f"{band or 'TBD'} GHz ({freq})")

    tx_line = link.get("tx_bitrate", "")
    tx_rate = _leading_number(tx_line)
    info.update("tx_bitrate", tx_rate, f"{tx_rate} MBit/s")
    info.update("standard", wifi_standard(tx_line, band))

    rx_rate = station.get("rx_bitrate")
    info.update("rx_bitrate", rx_rate, f"{rx_rate} MBit/s")

    throughput = station.get("throughput")
    info.update("throughput", throughput, f"{throughput} MBit/s")

    connected = station.get("connected_time")
    info.update("connected_time", connected, f"{connected} Seconds")


# ---------------------------------------------------------------------------
# iw dev <iface> info
# ---------------------------------------------------------------------------

_CHANNEL_RE = re.compile(r"^\s*channel\s+(\d+)", re.MULTILINE)
_WIDTH_RE = re.compile(r"width:\s*(\d+(?:\.\d+)?)")
_TXPOWER_RE = re.compile(r"^\s*txpower\s+(-?\d+(?:\.\d+)?)", re.MULTILINE)


def parse_iw_info(output: str) -> dict[str, str]:
    """Extract ``txpower`` (dBm), ``channel`` and ``width`` from ``iw dev <iface> info``.

    Example lines::

        channel 36 (5180 MHz), width: 80 MHz, center1: 5210 MHz
        txpower 22.00 dBm
    """
    values: dict[str, str] = {}

    match = _TXPOWER_RE.search(output)
    if match:
        values["txpower"] = match.group(1)

    match = _CHANNEL_RE.search(output)
    if match:
        values["channel"] = match.group(1)

    match = _WIDTH_RE.search(output)
    if match:
        values["width"] = match.group(1)

    return values


def collect_iw_info(
    info: WlanInfo,
    iface: str,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Fill transmit power, channel number and channel width into *info*."""
    values = parse_iw_info(run_text(["iw", "dev", iface, "info"], runner=runner))

    txpower = values.get("txpower")
    if txpower:
        mw = dbm_to_mw(float(txpower))
        info.update("tx_power", txpower, f"{mw} mW")

    info.update("channel", values.get("channel"))

    width = values.get("width")
    info.update("channel_width", width, f"{width} MHz")
