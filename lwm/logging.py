"""
lwm.logging
AUTHOR: carter-vin

Structured JSON event logging

Contract:
- One JSON object per line to stderr (stdout carries the report)
- Stable event vocabulary (allowlist)
- UTC timestamps only
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any

# Event types
VALID_EVENT_TYPES = {
    "lwm_start",
    "meminfo_read",
    "collector_failed",
    "derived_field_clamped",
    "render_failed",
    "lwm_shutdown",
}


def _truncate_message(value: str, *, limit: int = 200) -> str:
    """
    Cap message length to keep events compact
    """
    if len(value) <= limit:
        return value
    return value[:limit] + f"...[truncated {len(value) - limit} chars]"


# Time: current in UTC ISO 8601
def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def emit_event(event_type: str, *, version: str, **fields: Any) -> None:
    """
    Emit structured event line to stderr

    Rules:
    - event_type in VALID_EVENT_TYPES
    - event_type, version, timestamp always present
    - sort_keys + compact separators for format
    """
    if event_type not in VALID_EVENT_TYPES:
        raise ValueError(f"invalid event_type: {event_type}")

    if "message" in fields and isinstance(fields["message"], str):
        fields["message"] = _truncate_message(fields["message"])

    payload: dict[str, Any] = {
        "event_type": event_type,
        "utc_now": utc_now_iso(),
        "version": version,
        **fields,
    }

    print(
        json.dumps(
            payload,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        ),
        file=sys.stderr,
    )


def emit_clamp(field: str, total_kib: int, part_kib: int, *, version: str) -> None:
    """
    Warn that a derived field (total - part) was floored at zero
    """
    emit_event(
        "derived_field_clamped",
        version=version,
        field=field,
        minuend_kib=total_kib,
        subtrahend_kib=part_kib,
        shortfall_kib=part_kib - total_kib,
    )


def emit_failure(
    event_type: str,
    *,
    version: str,
    error_type: str | None,
    message: str | None,
    **fields: Any,
) -> None:
    """
    Fatal diagnostic: only failure events, always with error_type + message
    """
    if event_type not in {"collector_failed", "render_failed"}:
        raise ValueError(f"not a failure event_type: {event_type}")

    emit_event(
        event_type,
        version=version,
        error_type=error_type or "UnknownError",
        message=message or "",
        **fields,
    )
