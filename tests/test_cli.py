"""Tests for wlaninfo.cli: argument parsing, error banner and report flow.

Host access (OS check, tool check, sysfs, collectors) is patched out so
the tests run anywhere.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from unittest.mock import patch

import pytest

from wlaninfo.cli import HELP_TEXT, MIN_PYTHON, _parse_args, main
from wlaninfo.wifi_common import UsageError, WlanInfo, WlanInfoError


def _info(**overrides) -> WlanInfo:
    values = dict(
        vendor="Intel Corporation Wi-Fi 6 AX200",
        bus="PCI",
        driver="iwlwifi",
        mac_address="aa:bb:cc:dd:ee:ff",
        ipv4="192.168.1.23",
        ipv6="yes",
        ssid="HomeNet",
    )
    values.update(overrides)
    return WlanInfo(**values)


@contextmanager
def _host(interfaces=("wlan0", "wlan1"), infos=None):
    """Patch every host-facing call made by ``wlaninfo.cli.run``."""
    infos = infos or {}
    calls: list[tuple[str, bool]] = []

    def fake_collect(iface, *, privacy=False):
        calls.append((iface, privacy))
        return infos.get(iface, _info())

    with patch("wlaninfo.cli.check_linux"), \
            patch("wlaninfo.cli.check_commands"), \
            patch("wlaninfo.cli.integrity.verify", return_value=True), \
            patch("wlaninfo.cli.list_wlan_interfaces", return_value=list(interfaces)), \
            patch("wlaninfo.cli.collect_all", side_effect=fake_collect):
        yield calls


# ---------------------------------------------------------------------------
# _parse_args
# ---------------------------------------------------------------------------

class TestParseArgs:
    def test_parse_no_arguments_returns_defaults(self):
        args = _parse_args([])
        assert args.compact is False
        assert args.privacy is False
        assert args.json_output is False
        assert args.interfaces == []

    def test_parse_long_options_sets_flags(self):
        args = _parse_args(["--compact", "--privacy"])
        assert args.compact is True
        assert args.privacy is True

    def test_parse_bundled_short_options_sets_each_flag(self):
        args = _parse_args(["-cp"])
        assert args.compact is True
        assert args.privacy is True

    def test_parse_option_after_interface_is_accepted(self):
        args = _parse_args(["wlan0", "-p"])
        assert args.privacy is True
        assert args.interfaces == ["wlan0"]

    def test_parse_option_between_interfaces_keeps_both_names(self):
        args = _parse_args(["wlan0", "-c", "wlan1"])
        assert args.compact is True
        assert args.interfaces == ["wlan0", "wlan1"]

    def test_parse_repeated_option_is_accepted(self):
        assert _parse_args(["-p", "-p", "wlan0"]).privacy is True

    @pytest.mark.parametrize("argv", [["-x"], ["--bogus"], ["wlan0", "-z"]])
    def test_parse_unknown_option_raises_invalid_option(self, argv):
        with pytest.raises(UsageError) as excinfo:
            _parse_args(argv)
        assert excinfo.value.message == "Invalid option."

    def test_parse_unknown_long_option_named_in_details(self):
        with pytest.raises(UsageError) as excinfo:
            _parse_args(["--bogus"])
        assert "Unknown parameter: --bogus" in excinfo.value.details

    def test_parse_unknown_letter_in_bundle_names_whole_bundle(self):
        with pytest.raises(UsageError) as excinfo:
            _parse_args(["-cx"])
        assert excinfo.value.message == "Invalid option."
        assert "Unknown parameter: -cx" in excinfo.value.details

    @pytest.mark.parametrize("token", ["-", "--", "--json=yes"])
    def test_parse_bare_or_malformed_dash_token_raises_invalid_option(self, token):
        with pytest.raises(UsageError) as excinfo:
            _parse_args(["wlan0", token])
        assert excinfo.value.message == "Invalid option."
        assert f"Unknown parameter: {token}" in excinfo.value.details

    @pytest.mark.parametrize("argv", [
        ["-h", "-v"],
        ["-h", "-c"],
        ["-v", "-p"],
        ["-h", "wlan0"],
        ["--version", "wlan0"],
        ["-hc"],
        ["-c", "--json"],
        ["--stamp", "wlan0"],
    ])
    def test_parse_exclusive_option_combined_raises(self, argv):
        with pytest.raises(UsageError) as excinfo:
            _parse_args(argv)
        assert excinfo.value.message == "Invalid combination of command line arguments."

    def test_parse_help_with_debug_is_accepted(self):
        args = _parse_args(["-h", "--debug"])
        assert args.help is True
        assert args.debug is True


# ---------------------------------------------------------------------------
# main: help, version, errors
# ---------------------------------------------------------------------------

class TestMainHelpVersion:
    def test_main_help_option_prints_usage(self, capsys):
        main(["--help"])
        captured = capsys.readouterr()
        assert "Usage: wlaninfo [OPTIONS] [INTERFACE...]" in captured.out
        assert "-p, --privacy" in captured.out

    def test_help_text_all_options_listed(self):
        for option in ("--compact", "--help", "--privacy", "--version"):
            assert option in HELP_TEXT

    def test_main_version_option_prints_version(self, capsys):
        main(["-v"])
        assert "Version 1.2" in capsys.readouterr().out

    def test_min_python_set_to_three_nine(self):
        assert MIN_PYTHON == (3, 9)


class TestMainErrors:
    def test_main_unknown_option_exits_one_with_banner(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--bogus"])
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert "wlaninfo Aborted." in err
        assert "Invalid option." in err
        assert "Unknown parameter: --bogus" in err

    def test_main_non_linux_host_exits_one(self, capsys):
        with patch("wlaninfo.cli.check_linux", side_effect=WlanInfoError(
            "Incompatible Operating System.",
        )):
            with pytest.raises(SystemExit) as excinfo:
                main([])
        assert excinfo.value.code == 1
        assert "Incompatible Operating System." in capsys.readouterr().err

    def test_main_no_devices_exits_one(self, capsys):
        with _host(interfaces=()):
            with pytest.raises(SystemExit) as excinfo:
                main([])
        assert excinfo.value.code == 1
        assert "No wireless device(s) detected." in capsys.readouterr().err

    def test_main_unknown_device_exits_one_before_collecting(self, capsys):
        with _host(interfaces=("wlan0",)) as calls:
            with pytest.raises(SystemExit) as excinfo:
                main(["eth0"])
        assert excinfo.value.code == 1
        assert "Invalid 802.11 WLAN interface: eth0" in capsys.readouterr().err
        assert calls == []

    def test_main_keyboard_interrupt_exits_130(self):
        with _host() as _:
            with patch("wlaninfo.cli.collect_all", side_effect=KeyboardInterrupt):
                with pytest.raises(SystemExit) as excinfo:
                    main([])
        assert excinfo.value.code == 130


# ---------------------------------------------------------------------------
# main: reports
# ---------------------------------------------------------------------------

class TestMainReports:
    def test_main_no_interface_given_reports_all(self, capsys):
        with _host() as calls:
            main([])
        out = capsys.readouterr().out
        assert calls == [("wlan0", False), ("wlan1", False)]
        assert out.count("Intel Corporation Wi-Fi 6 AX200") == 2
        assert "Kernel Driver:" in out

    def test_main_interface_given_reports_only_it(self, capsys):
        with _host() as calls:
            main(["wlan1"])
        assert calls == [("wlan1", False)]

    def test_main_privacy_option_passed_to_collectors(self):
        with _host() as calls:
            main(["-p", "wlan0"])
        assert calls == [("wlan0", True)]

    def test_main_compact_option_prints_one_line_per_interface(self, capsys):
        with _host(interfaces=("wlan0",)):
            main(["-c"])
        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        assert len(lines) == 1
        assert lines[0].startswith("wlan0;Intel Corporation Wi-Fi 6 AX200;Interface: PCI;")

    def test_main_disconnected_interface_shows_marker(self, capsys):
        infos = {"wlan0": _info(ipv4="none", ipv6="no")}
        with _host(interfaces=("wlan0",), infos=infos):
            main([])
        out = capsys.readouterr().out
        assert "<not connected>" in out
        assert "SSID:" not in out

    def test_main_json_option_prints_array(self, capsys):
        with _host():
            main(["--json"])
        data = json.loads(capsys.readouterr().out)
        assert [entry["interface"] for entry in data] == ["wlan0", "wlan1"]
        assert data[0]["driver"] == "iwlwifi"

    def test_main_integrity_mismatch_exits_one(self, capsys):
        from wlaninfo.wifi_common import IntegrityError
        with _host():
            with patch("wlaninfo.cli.integrity.verify", side_effect=IntegrityError(
                "Self-integrity check failed.", "Please download and install a new copy.",
            )):
                with pytest.raises(SystemExit) as excinfo:
                    main([])
        assert excinfo.value.code == 1
        assert "Self-integrity check failed." in capsys.readouterr().err

    def test_main_long_vendor_not_wrapped_when_piped(self, capsys):
        vendor = "Realtek Semiconductor Corp. RTL8188EUS 802.11n Wireless Network Adapter"
        ssid = "A very long network name that would not fit on one narrow line"
        infos = {"wlan0": _info(vendor=vendor, ssid=ssid)}
        with _host(interfaces=("wlan0",), infos=infos):
            main([])
        lines = capsys.readouterr().out.splitlines()
        assert "wlan0" + " " * 11 + "  " + vendor in [line.rstrip() for line in lines]
        assert any(line.rstrip().endswith("SSID:" + " " * 16 + ssid) for line in lines)
        assert not any(line.strip() == "Adapter" for line in lines)

    def test_main_stamp_option_prints_digest(self, capsys):
        with _host():
            with patch("wlaninfo.cli.integrity.stamp", return_value="0123456789ab") as stamp:
                main(["--stamp"])
        assert stamp.called
        assert "0123456789ab" in capsys.readouterr().out
