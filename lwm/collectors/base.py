"""
lwm.collectors.base
AUTHOR: carter-vin

Light result wrapper -> collector errors become data the CLI can report
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from lwm.collectors.meminfo import MeminfoError


@dataclass(frozen=True)
class CollectorOutcome:
    """
    Normalized collector result
    - ok: false=failure, error details in error fields
    - value: collector result object if ok=true
    """

    name: str
    ok: bool
    value: Optional[Any] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None


def run_collector(name: str, fn, *args, **kwargs) -> CollectorOutcome:
    """
    Run collector & capture known collector failures as data

    Only MeminfoError is captured; anything else is a bug and propagates.
    """
    try:
        v = fn(*args, **kwargs)
        return CollectorOutcome(name=name, ok=True, value=v)
    except MeminfoError as e:
        return CollectorOutcome(
            name=name,
            ok=False,
            value=None,
            error_type=type(e).__name__,
            error_message=str(e),
        )
