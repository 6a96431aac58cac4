"""lwm.render registry."""

from __future__ import annotations

from lwm.render.full import AllFieldsRenderer
from lwm.render.base import PLAIN, Style
from lwm.render.unit import SingleUnitRenderer

_RENDERERS = {
    "all": AllFieldsRenderer(),
    "unit": SingleUnitRenderer(),
}


def get_renderer(name: str):
    if name not in _RENDERERS:
        raise ValueError(f"unknown renderer: {name}")
    return _RENDERERS[name]


__all__ = ["PLAIN", "Style", "get_renderer"]
