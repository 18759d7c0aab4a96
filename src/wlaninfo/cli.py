"""wlaninfo: Show details of the wireless LAN interfaces in this system.

Reports bus type, vendor name, kernel driver, power management, MAC and
TCP/IP addresses, SSID, link quality, signal strength, transmit power in
milliwatts, frequency, channel, bitrates, Wi-Fi standard, estimated
throughput and connection time.  There is no direct way to query most of
this by interface name, so it is pieced together from sysfs and several
external commands.

Usage:
    wlaninfo                    # all wireless interfaces
    wlaninfo wlan0              # a specific interface
    wlaninfo -cp wlan0 wlan1    # compact output, redacted
    wlaninfo --json             # JSON output
"""

from __future__ import annotations

import sys

MIN_PYTHON = (3, 9)
if sys.version_info < MIN_PYTHON:
    sys.exit(f"Python {MIN_PYTHON[0]}.{MIN_PYTHON[1]}+ is required (found {sys.version}).")

import argparse
import logging
import os

from rich.console import Console
from rich.markup import escape

from wlaninfo import __version__, integrity
from wlaninfo.collectors import collect_all
from wlaninfo.display.report import build_report, format_compact, to_json
from wlaninfo.platform_detect import (
    check_commands,
    check_linux,
    list_wlan_interfaces,
    resolve_interfaces,
)
from wlaninfo.wifi_common import UsageError, WlanInfo, WlanInfoError

PROG = "wlaninfo"
_LOGGER = logging.getLogger(__name__)
_SELF = os.path.abspath(__file__)

TRY_HELP = f"Try `{PROG} --help' for more information."

HELP_TEXT = f"""\
Usage: {PROG} [OPTIONS] [INTERFACE...]

Options:
  -c, --compact     Show semicolon-separated output.
  -h, --help        Help
  -j, --json        Show JSON output.
  -p, --privacy     Redact sensitive data.
  -v, --version     Show version and licensing info.
      --debug       Log diagnostics to stderr.

Interface:
  Optional. The command will show all wireless interfaces by default.

Examples:
  {PROG}          Show all wireless devices, e.g., wlan0, wlan1.
  {PROG} -p       Redact public TCP/IP address, SSID and MAC address.
  {PROG} wlan0    Show the wlan0 interface.

Description:
  This command retrieves the following wireless information:
  Product name, interface, kernel driver, power management, MAC address,
  TCP/IP address, TCP/IP v6, SSID, link quality, signal strength,
  transmit power, frequency, channel number, channel width, tx speed,
  rx-speed, Wi-Fi standard, estimated throughput, connection time."""

VERSION_TEXT = f"""\
Version {__version__}

  Free to use. Reports are read-only; no interface settings are changed."""


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises :class:`UsageError` instead of exiting with 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError("Invalid option.", message, TRY_HELP)


_SHORT_FLAGS = frozenset("chjpv")
_LONG_FLAGS = frozenset(
    ("--compact", "--help", "--json", "--privacy", "--version", "--debug", "--stamp")
)


def _check_options(argv: list[str]) -> None:
    """Reject any ``-`` token that is not a known option or short-flag bundle.

    A bad bundle such as ``-cx`` or a bare ``-`` is reported by name.
    """
    for item in argv:
        if not item.startswith("-"):
            continue
        if item.startswith("--"):
            known = item in _LONG_FLAGS
        else:
            known = len(item) > 1 and set(item[1:]) <= _SHORT_FLAGS
        if not known:
            raise UsageError("Invalid option.", f"Unknown parameter: {item}", TRY_HELP)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Options may be bundled (``-cp``), repeated, and placed before, after
    or between interface names.
    """
    if argv is None:
        argv = sys.argv[1:]
    _check_options(argv)

    parser = _ArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)
    parser.add_argument("-c", "--compact", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-j", "--json", action="store_true", dest="json_output")
    parser.add_argument("-p", "--privacy", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--stamp", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("interfaces", nargs="*", metavar="INTERFACE")

    args = parser.parse_intermixed_args(argv)

    exclusive = sum((args.help, args.version, args.stamp))
    if exclusive:
        others = (
            args.compact or args.privacy or args.json_output or args.interfaces
        )
        if exclusive > 1 or others:
            raise UsageError("Invalid combination of command line arguments.", TRY_HELP)
    if args.compact and args.json_output:
        raise UsageError("Invalid combination of command line arguments.", TRY_HELP)

    return args


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _abort(exc: WlanInfoError) -> None:
    """Print the abort banner for *exc* to stderr and exit with status 1."""
    console = Console(stderr=True, highlight=False, emoji=False)
    console.print()
    console.print(f"{PROG} Aborted.")
    console.print(f"{PROG}: [bold red]{escape(exc.message)}[/bold red]")
    for line in exc.details:
        console.print(escape(line))
    sys.exit(1)


def _print_info(console: Console, iface: str, info: WlanInfo, *, compact: bool) -> None:
    console.print()
    if compact:
        console.print(format_compact(iface, info), markup=False, soft_wrap=True)
    else:
        console.print(build_report(iface, info), soft_wrap=True)


def run(args: argparse.Namespace, console: Console) -> None:
    """Carry out the parsed command line, writing the report to *console*."""
    if args.help:
        console.print(HELP_TEXT, markup=False)
        return
    if args.version:
        console.print(VERSION_TEXT, markup=False)
        return

    check_linux()
    check_commands()

    if args.stamp:
        digest = integrity.stamp(_SELF)
        console.print(f"{_SELF}: {digest}", markup=False)
        return
    integrity.verify(_SELF)

    interfaces = resolve_interfaces(args.interfaces, list_wlan_interfaces())
    _LOGGER.debug(
        "interfaces=%s compact=%s privacy=%s json=%s",
        interfaces, args.compact, args.privacy, args.json_output,
    )

    if args.json_output:
        reports = [(iface, collect_all(iface, privacy=args.privacy)) for iface in interfaces]
        console.print(to_json(reports), markup=False, soft_wrap=True)
        return

    for iface in interfaces:
        info = collect_all(iface, privacy=args.privacy)
        _print_info(console, iface, info, compact=args.compact)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``wlaninfo`` command.

    Exits with status 1 on any reported error.  Handles KeyboardInterrupt
    (Ctrl+C) without a traceback.
    """
    try:
        args = _parse_args(argv)
        if args.debug:
            _configure_logging()
        run(args, Console(highlight=False, emoji=False))
    except WlanInfoError as exc:
        _abort(exc)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()

## END 930fb0243491
