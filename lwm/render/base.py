"""
lwm.render.base
AUTHOR: carter-vin

Renderer interface + shared report layout
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from lwm.model import MemorySnapshot

WHITE_COLOR = "\x1b[1;37m"
END_COLOR = "\x1b[0m"

BANNER = (
    "======================",
    "| Memory Information |",
    "======================",
)

# Fixed report order: (snapshot field, label)
REPORT_FIELDS = (
    ("mem_total", "Total Memory"),
    ("mem_free", "Free Memory"),
    ("mem_available", "Avail Memory"),
    ("mem_used", "Used Memory"),
    ("buffers", "Buffered"),
    ("swap_total", "Total Swap"),
    ("swap_free", "Free Swap"),
    ("swap_cached", "Cached Swap"),
    ("swap_used", "Used Swap"),
    ("zswap", "Total ZSwap"),
    ("zswapped", "Commit ZSwap"),
    ("shmem", "Shared Memory"),
)


@dataclass(frozen=True)
class Style:
    """
    Output styling capability
    - color: bold-white field labels via ANSI escapes
    """

    color: bool = True

    def label(self, text: str) -> str:
        if not self.color:
            return text
        return f"{WHITE_COLOR}{text}{END_COLOR}"


PLAIN = Style(color=False)


def render_report(
    snapshot: MemorySnapshot, style: Style, format_value: Callable[[int], str]
) -> str:
    lines = list(BANNER)
    for field, label in REPORT_FIELDS:
        value = format_value(getattr(snapshot, field))
        lines.append(f"* {style.label(label)}: {value}")
    return "\n".join(lines)


class Renderer:
    name: str = "base"

    def render(self, snapshot: MemorySnapshot, *, style: Style, **options) -> str:
        raise NotImplementedError
