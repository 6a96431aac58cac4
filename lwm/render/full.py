"""
lwm.render.full
AUTHOR: carter-vin

Every field in bytes, or human-readable when friendly
"""

from __future__ import annotations

from lwm.model import MemorySnapshot
from lwm.render.base import Renderer, Style, render_report
from lwm.units import format_human, to_bytes


class AllFieldsRenderer(Renderer):
    name = "all"

    def render(
        self,
        snapshot: MemorySnapshot,
        *,
        style: Style,
        binary: bool = False,
        friendly: bool = False,
    ) -> str:
        if friendly:
            return render_report(
                snapshot, style, lambda kib: format_human(to_bytes(kib), binary)
            )
        return render_report(snapshot, style, lambda kib: str(to_bytes(kib)))
