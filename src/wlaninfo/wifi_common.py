"""Shared data structures and helpers for wlaninfo."""

from __future__ import annotations

import ipaddress
import logging
import os
import re
import subprocess
from dataclasses import asdict, dataclass, fields
from typing import Any, Iterator, Protocol

logger = logging.getLogger(__name__)

# Kernel limit on network device names (including the trailing NUL).
# Also the left indentation of the full report.
IFNAMSIZ = 16

COMMAND_TIMEOUT = 10  # seconds per external command

NOT_AVAILABLE = "n/a"
REDACTED = "<privacy>"
NOT_CONNECTED = "<not connected>"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class WlanInfoError(Exception):
    """A fatal error reported to the user before exiting with status 1.

    ``message`` is the one-line headline; ``details`` are optional extra
    lines printed underneath it.
    """

    def __init__(self, message: str, *details: str) -> None:
        super().__init__(message)
        self.message = message
        self.details = [d for d in details if d]


class UsageError(WlanInfoError):
    """Invalid command-line arguments."""


class IntegrityError(WlanInfoError):
    """The installed program failed its self-integrity check."""


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class WlanInfo:
    """Everything reported about one wireless interface.

    Every field is display-ready text and starts out as ``"n/a"``.
    Collectors go through :meth:`update`, so a field keeps its default
    unless the tool actually produced a value for it.
    """

    vendor: str = NOT_AVAILABLE
    bus: str = NOT_AVAILABLE
    driver: str = NOT_AVAILABLE
    power_management: str = NOT_AVAILABLE
    mac_address: str = NOT_AVAILABLE
    ipv4: str = NOT_AVAILABLE
    ssid: str = NOT_AVAILABLE
    link_quality: str = NOT_AVAILABLE
    signal: str = NOT_AVAILABLE
    tx_power: str = NOT_AVAILABLE
    frequency: str = NOT_AVAILABLE
    channel: str = NOT_AVAILABLE
    channel_width: str = NOT_AVAILABLE
    tx_bitrate: str = NOT_AVAILABLE
    rx_bitrate: str = NOT_AVAILABLE
    standard: str = NOT_AVAILABLE
    throughput: str = NOT_AVAILABLE
    connected_time: str = NOT_AVAILABLE
    ipv6: str = NOT_AVAILABLE

    def update(self, name: str, raw: str | None, value: str | None = None) -> None:
        """Set field *name* to *value* (default: *raw*) only if *raw* is non-empty."""
        if name not in _FIELD_NAMES:
            raise AttributeError(f"WlanInfo has no field {name!r}")
        if raw:
            setattr(self, name, raw if value is None else value)

    @property
    def is_connected(self) -> bool:
        """False when neither an IPv4 nor an IPv6 address is assigned."""
        return not (self.ipv4 == "none" and self.ipv6 == "no")

    def rows(self) -> Iterator[tuple[str, str]]:
        """Yield ``(label, value)`` pairs in report order.

        Interfaces without any address only get the hardware rows.
        """
        labels = REPORT_ROWS if self.is_connected else REPORT_ROWS[:_HARDWARE_ROWS]
        for name, label in labels:
            yield label, getattr(self, name)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_FIELD_NAMES = frozenset(f.name for f in fields(WlanInfo))

# (field, label) in the order the report prints them.  The vendor goes
# into the header line and is not listed here.
REPORT_ROWS: tuple[tuple[str, str], ...] = (
    ("bus", "Interface:"),
    ("driver", "Kernel Driver:"),
    ("power_management", "Power Management:"),
    ("mac_address", "MAC Address:"),
    ("ipv4", "TCP/IP Address:"),
    ("ipv6", "TCP/IP v6:"),
    ("ssid", "SSID:"),
    ("link_quality", "Link Quality:"),
    ("signal", "Signal Strength:"),
    ("tx_power", "Transmit Power:"),
    ("frequency", "Frequency:"),
    ("channel", "Channel Number:"),
    ("channel_width", "Channel Width:"),
    ("tx_bitrate", "TX Speed:"),
    ("rx_bitrate", "RX Speed:"),
    ("standard", "Wi-Fi Standard:"),
    ("throughput", "Est. Throughput:"),
    ("connected_time", "Connection Time:"),
)
_HARDWARE_ROWS = 4


# ---------------------------------------------------------------------------
# Command runner protocol (subprocess injection seam)
# ---------------------------------------------------------------------------

class CommandRunner(Protocol):
    """Protocol for running external commands.

    Provides an injection seam so callers can substitute a fake runner in
    tests instead of patching ``subprocess`` globally.
    """

    def run(
        self,
        cmd: list[str],
        *,
        capture_output: bool = True,
        text: bool = True,
        timeout: int | None = None,
        env: dict[str, str] | None = None,
    ) -> subprocess.CompletedProcess[Any]:
        """Run *cmd* and return a CompletedProcess."""
        ...  # pragma: no cover


class SubprocessRunner:
    """Default CommandRunner that delegates to the real ``subprocess`` module."""

    def run(
        self,
        cmd: list[str],
        *,
        capture_output: bool = True,
        text: bool = True,
        timeout: int | None = None,
        env: dict[str, str] | None = None,
    ) -> subprocess.CompletedProcess[Any]:
        """Run *cmd* via ``subprocess.run``."""
        return subprocess.run(
            cmd,
            capture_output=capture_output,
            text=text,
            timeout=timeout,
            env=env,
        )


DEFAULT_RUNNER = SubprocessRunner()


def _minimal_env() -> dict[str, str]:
    """Build a minimal environment for subprocess calls.

    Only passes PATH, LC_ALL, and HOME.  ``LC_ALL=C`` keeps tool output in
    the untranslated format the parsers expect.
    """
    return {
        "PATH": os.environ.get("PATH", "/usr/bin:/bin"),
        "LC_ALL": "C",
        "HOME": os.environ.get("HOME", ""),
    }


def run_text(
    cmd: list[str],
    *,
    runner: CommandRunner | None = None,
    timeout: int = COMMAND_TIMEOUT,
) -> str:
    """Run *cmd* and return its stdout.

    Returns an empty string if the tool is missing, times out, or exits
    non-zero; the caller then simply leaves its fields at ``n/a``.
    """
    runner = runner or DEFAULT_RUNNER
    try:
        result = runner.run(
            cmd, capture_output=True, text=True, timeout=timeout, env=_minimal_env(),
        )
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as exc:
        logger.debug("%s failed: %s", " ".join(cmd), exc)
        return ""

    if result.returncode != 0:
        logger.debug("%s returned non-zero: %d", " ".join(cmd), result.returncode)
        return ""
    return result.stdout or ""


def read_text(path: str) -> str:
    """Return the contents of *path*, or ``""`` if it cannot be read."""
    try:
        with open(path) as f:
            return f.read()
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return ""


# ---------------------------------------------------------------------------
# Signal / radio helpers
# ---------------------------------------------------------------------------

def signal_quality(signal_dbm: int) -> str:
    """Describe signal strength in dBm as a word."""
    if signal_dbm >= -50:
        return "Excellent"
    if signal_dbm >= -60:
        return "Good"
    if signal_dbm >= -70:
        return "Fair"
    if signal_dbm >= -80:
        return "Weak"
    return "Poor"


def frequency_band(freq_mhz: int) -> str | None:
    """Map a centre frequency in MHz to its band in GHz, or None if unknown."""
    if 2400 <= freq_mhz <= 2483:
        return "2.4"
    if 5150 <= freq_mhz <= 5825:
        return "5"
    if 5925 <= freq_mhz <= 7125:
        return "6"
    return None


def dbm_to_mw(dbm: float) -> int:
    """Convert transmit power in dBm to milliwatts, rounded half up.

    A power whose integer part is 0 is reported as 0 mW.
    """
    if int(dbm) == 0:
        return 0
    return int(10 ** (dbm / 10) + 0.5)


def wifi_standard(tx_bitrate: str, band: str | None = None) -> str | None:
    """Derive the 802.11 generation from an ``iw`` tx bitrate line.

    The newest generation marker wins: a Wi-Fi 7 line also carries ``MCS``.
    """
    if "EHT" in tx_bitrate:
        return "802.11be (Wi-Fi 7)"
    if "HE" in tx_bitrate:
        if band == "6":
            return "802.11ax (Wi-Fi 6E)"
        return "802.11ax (Wi-Fi 6)"
    if "VHT" in tx_bitrate:
        return "802.11ac (Wi-Fi 5)"
    if "OFDM" in tx_bitrate:
        return "802.11g"
    if "DSSS" in tx_bitrate or "CCK" in tx_bitrate:
        return "802.11b"
    if "MCS" in tx_bitrate:
        return "802.11n (Wi-Fi 4)"
    return None


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

_IFNAME_BAD_RE = re.compile(r"[/\s:]")


def is_valid_ifname(name: str) -> bool:
    """Return True if *name* could be a Linux network interface name."""
    if not name or len(name) >= IFNAMSIZ:
        return False
    if name in (".", ".."):
        return False
    return not _IFNAME_BAD_RE.search(name)


def is_private_ipv4(address: str) -> bool:
    """Return True if *address* is in 10/8, 172.16/12 or 192.168/16."""
    try:
        ip = ipaddress.IPv4Address(address)
    except ValueError:
        return False
    return any(ip in net for net in _PRIVATE_NETS)


_PRIVATE_NETS = (
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
)
