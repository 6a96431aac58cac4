"""
Contract tests for the lwm CLI
"""

import json
from pathlib import Path

from typer.testing import CliRunner

from lwm.collectors.meminfo import MEMINFO_PATH_ENV
from lwm.main import app, select_unit
from lwm.render.base import END_COLOR, WHITE_COLOR
from lwm.units import UNITS

runner = CliRunner()


def _events(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_default_is_all_fields_report(sample_meminfo_path: Path) -> None:
    """
    No unit flag -> all fields in bytes
    """
    result = runner.invoke(app, ["--no-color", "--meminfo-path", str(sample_meminfo_path)])

    assert result.exit_code == 0
    assert "* Total Memory: 16777216000" in result.stdout
    assert "* Shared Memory: 307200000" in result.stdout


def test_env_var_selects_meminfo_path(sample_meminfo_path: Path) -> None:
    result = runner.invoke(
        app,
        ["-n", "-f", "-b"],
        env={MEMINFO_PATH_ENV: str(sample_meminfo_path)},
    )

    assert result.exit_code == 0
    assert "* Total Memory: 15.6GiB" in result.stdout


def test_color_is_default_when_piped(sample_meminfo_path: Path) -> None:
    """
    Escapes survive a non-TTY stdout; only --no-color removes them
    """
    colored = runner.invoke(app, ["--meminfo-path", str(sample_meminfo_path)], color=False)
    plain = runner.invoke(app, ["-n", "--meminfo-path", str(sample_meminfo_path)], color=False)

    assert colored.exit_code == 0
    assert f"* {WHITE_COLOR}Total Memory{END_COLOR}: 16777216000" in colored.stdout
    assert WHITE_COLOR not in plain.stdout
    assert colored.stdout.replace(WHITE_COLOR, "").replace(END_COLOR, "") == plain.stdout


def test_single_unit_flag(sample_meminfo_path: Path) -> None:
    result = runner.invoke(
        app, ["-n", "--gibi", "--meminfo-path", str(sample_meminfo_path)]
    )

    assert result.exit_code == 0
    assert "* Total Swap: 4" in result.stdout.splitlines()
    assert "* Total Memory: 15" in result.stdout.splitlines()


def test_all_flag_wins_over_unit_flags(sample_meminfo_path: Path) -> None:
    result = runner.invoke(
        app, ["-n", "--all", "--mebi", "--meminfo-path", str(sample_meminfo_path)]
    )

    assert result.exit_code == 0
    assert "* Total Memory: 16777216000" in result.stdout


def test_select_unit_precedence() -> None:
    assert select_unit(False, {"mebi": True, "kilo": True}) is UNITS["kilo"]
    assert select_unit(False, {"pebi": True}) is UNITS["pebi"]
    assert select_unit(True, {"kilo": True}) is None
    assert select_unit(False, {}) is None


def test_missing_field_exits_before_report(tmp_path: Path, sample_meminfo: str) -> None:
    """
    A missing key fails the run with no report on stdout
    """
    path = tmp_path / "meminfo"
    path.write_text(
        "\n".join(
            line for line in sample_meminfo.splitlines() if not line.startswith("SwapTotal:")
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["-n", "--meminfo-path", str(path)])

    assert result.exit_code == 1
    assert "Memory Information" not in result.output

    events = _events(result.output)
    assert events[-1]["event_type"] == "collector_failed"
    assert events[-1]["error_type"] == "MissingFieldError"


def test_unreadable_source_exits_non_zero(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--meminfo-path", str(tmp_path / "nope")])

    assert result.exit_code == 1
    assert "Memory Information" not in result.output
    assert _events(result.output)[-1]["error_type"] == "SourceUnavailableError"


def test_out_of_range_friendly_value_fails(tmp_path: Path, sample_meminfo: str) -> None:
    path = tmp_path / "meminfo"
    path.write_text(
        sample_meminfo.replace("MemTotal:       16384000 kB", f"MemTotal: {10**18} kB"),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["-n", "-f", "--meminfo-path", str(path)])

    assert result.exit_code == 1
    assert "Memory Information" not in result.output
    assert _events(result.output)[-1]["event_type"] == "render_failed"


def test_underflow_is_clamped_and_logged(tmp_path: Path, sample_meminfo: str) -> None:
    path = tmp_path / "meminfo"
    path.write_text(
        sample_meminfo.replace("SwapFree:        4000000 kB", "SwapFree: 5000000 kB"),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["-n", "--kibi", "--meminfo-path", str(path)])

    assert result.exit_code == 0
    assert "* Used Swap: 0" in result.output
    clamp = [e for e in _events(result.output) if e["event_type"] == "derived_field_clamped"]
    assert clamp[0]["field"] == "swap_used"


def test_verbose_emits_lifecycle_events(sample_meminfo_path: Path) -> None:
    result = runner.invoke(app, ["-v", "-n", "--meminfo-path", str(sample_meminfo_path)])

    assert result.exit_code == 0
    types = [e["event_type"] for e in _events(result.output)]
    assert types == ["lwm_start", "meminfo_read", "lwm_shutdown"]


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("lwm v")


def test_undecodable_source_exits_via_collector_failure(
    tmp_path: Path, sample_meminfo: str
) -> None:
    """
    Invalid UTF-8 is reported as a collector failure, not a traceback
    """
    path = tmp_path / "meminfo"
    path.write_bytes(sample_meminfo.encode("utf-8") + b"Bad:\xff\xfe 1 kB\n")

    result = runner.invoke(app, ["-n", "--meminfo-path", str(path)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert "Memory Information" not in result.output

    event = _events(result.output)[-1]
    assert event["event_type"] == "collector_failed"
    assert event["error_type"] == "SourceUnavailableError"


def test_verbose_start_event_names_unit(sample_meminfo_path: Path) -> None:
    result = runner.invoke(
        app, ["-v", "-n", "--mebi", "--meminfo-path", str(sample_meminfo_path)]
    )

    assert result.exit_code == 0
    start = _events(result.output)[0]
    assert start["report"] == "unit"
    assert start["unit"] == "MiB"
    assert start["unit_system"] == "binary"
