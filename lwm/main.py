"""
lwm.main
------------
AUTHOR: carter-vin

CLI entrypoint: read /proc/meminfo once, print one report, exit.

Key contract:
- `lwm` with no unit flag prints the all-fields report.
- a unit flag prints every field as a whole number of that unit.
- any read/parse failure emits a collector_failed event on stderr and exits 1
  before anything is printed to stdout.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from lwm import __version__
from lwm.collectors.base import run_collector
from lwm.collectors.meminfo import (
    MEMINFO_PATH_ENV,
    collect_memory,
    resolve_meminfo_path,
)
from lwm.logging import emit_clamp, emit_event, emit_failure
from lwm.render import Style, get_renderer
from lwm.units import UNITS, FormatError, Unit

app = typer.Typer(
    add_completion=False,
    help="lwm: display memory usage from /proc/meminfo",
)

# -----------------------------
# DATA CLASSES
# -----------------------------
@dataclass(frozen=True)
class EnvironmentInfo:
    """
    Snapshot of the runtime environment
    """

    python_version: str
    os: str
    machine: str
    utc_now: str


def collect_environment_info() -> EnvironmentInfo:
    return EnvironmentInfo(
        python_version=sys.version.split()[0],
        os=f"{platform.system()} {platform.release()}",
        machine=platform.machine(),
        utc_now=datetime.now(timezone.utc).isoformat(),
    )


def select_unit(all_fields: bool, flags: dict[str, bool]) -> Optional[Unit]:
    """
    Pick the single unit to report in, or None for the all-fields report

    --all wins over unit flags; among unit flags the UNITS order wins.
    """
    if all_fields:
        return None
    for name, unit in UNITS.items():
        if flags.get(name):
            return unit
    return None


def _on_clamp(field: str, total: int, part: int) -> None:
    emit_clamp(field, total, part, version=__version__)


# -----------------------------
# ROOT COMMAND BEHAVIOR
# -----------------------------
@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    all_fields: bool = typer.Option(
        False, "--all", "-a", help="Print the default information (default)."
    ),
    no_color: bool = typer.Option(False, "--no-color", "-n", help="Disable output colors."),
    binary: bool = typer.Option(False, "--binary", "-b", help="Calculate in binary."),
    friendly: bool = typer.Option(
        False, "--friendly", "-f", help="Friendly (human-readable) output."
    ),
    bytes_: bool = typer.Option(False, "--bytes", help="Print memory information in bytes."),
    kilo: bool = typer.Option(False, "--kilo", help="Print memory information in kilobytes."),
    kibi: bool = typer.Option(False, "--kibi", help="Print memory information in kibibytes."),
    mega: bool = typer.Option(False, "--mega", help="Print memory information in megabytes."),
    mebi: bool = typer.Option(False, "--mebi", help="Print memory information in mebibytes."),
    giga: bool = typer.Option(False, "--giga", help="Print memory information in gigabytes."),
    gibi: bool = typer.Option(False, "--gibi", help="Print memory information in gibibytes."),
    tera: bool = typer.Option(False, "--tera", help="Print memory information in terabytes."),
    tebi: bool = typer.Option(False, "--tebi", help="Print memory information in tebibytes."),
    peta: bool = typer.Option(False, "--peta", help="Print memory information in petabytes."),
    pebi: bool = typer.Option(False, "--pebi", help="Print memory information in pebibytes."),
    meminfo_path: Optional[Path] = typer.Option(
        None,
        "--meminfo-path",
        envvar=MEMINFO_PATH_ENV,
        help="Read this file instead of /proc/meminfo.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Emit start/read/shutdown events to stderr."
    ),
) -> None:
    """
    Print memory usage. Without a unit flag, all fields are printed in bytes
    (or human-readable with --friendly).
    """
    if ctx.invoked_subcommand is not None:
        return

    path = resolve_meminfo_path(meminfo_path)
    unit = select_unit(
        all_fields,
        {
            "bytes": bytes_,
            "kilo": kilo,
            "kibi": kibi,
            "mega": mega,
            "mebi": mebi,
            "giga": giga,
            "gibi": gibi,
            "tera": tera,
            "tebi": tebi,
            "peta": peta,
            "pebi": pebi,
        },
    )

    if verbose:
        if unit is None:
            report_fields = {
                "report": "all",
                "unit_system": "binary" if binary else "decimal",
            }
        else:
            report_fields = {
                "report": "unit",
                "unit": unit.symbol,
                "unit_system": unit.system.value,
            }
        emit_event(
            "lwm_start",
            version=__version__,
            meminfo_path=str(path),
            **report_fields,
        )

    try:
        outcome = run_collector("meminfo", collect_memory, path, on_clamp=_on_clamp)
        if not outcome.ok:
            emit_failure(
                "collector_failed",
                version=__version__,
                error_type=outcome.error_type,
                message=outcome.error_message,
                collector=outcome.name,
                meminfo_path=str(path),
            )
            raise typer.Exit(code=1)

        if verbose:
            emit_event("meminfo_read", version=__version__, meminfo_path=str(path))

        style = Style(color=not no_color)
        try:
            if unit is None:
                report = get_renderer("all").render(
                    outcome.value, style=style, binary=binary, friendly=friendly
                )
            else:
                report = get_renderer("unit").render(outcome.value, style=style, unit=unit)
        except FormatError as e:
            emit_failure(
                "render_failed",
                version=__version__,
                error_type=type(e).__name__,
                message=str(e),
            )
            raise typer.Exit(code=1)

        # Style already decided on escapes; keep click from stripping them off-TTY
        typer.echo(report, color=True)

    finally:
        if verbose:
            emit_event("lwm_shutdown", version=__version__)


# -----------------------------
# CLI COMMANDS
# -----------------------------
@app.command()
def version() -> None:
    """
    Print lwm version & runtime env
    """
    env = collect_environment_info()

    typer.echo(f"lwm v{__version__}")
    typer.echo(f"python={env.python_version}")
    typer.echo(f"os={env.os}")
    typer.echo(f"machine={env.machine}")
    typer.echo(f"utc_now={env.utc_now}")


if __name__ == "__main__":
    app()
