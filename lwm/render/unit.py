"""
lwm.render.unit
AUTHOR: carter-vin

Every field as a whole number of one fixed unit
"""

from __future__ import annotations

from lwm.model import MemorySnapshot
from lwm.render.base import Renderer, Style, render_report
from lwm.units import Unit, convert


class SingleUnitRenderer(Renderer):
    name = "unit"

    def render(self, snapshot: MemorySnapshot, *, style: Style, unit: Unit) -> str:
        return render_report(snapshot, style, lambda kib: str(convert(kib, unit)))
