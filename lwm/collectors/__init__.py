"""lwm.collectors package exports."""

from lwm.collectors.base import CollectorOutcome, run_collector
from lwm.collectors.meminfo import (
    MalformedFieldError,
    MeminfoError,
    MissingFieldError,
    SourceUnavailableError,
    build_snapshot,
    collect_memory,
    extract_field,
)

__all__ = [
    "CollectorOutcome",
    "MalformedFieldError",
    "MeminfoError",
    "MissingFieldError",
    "SourceUnavailableError",
    "build_snapshot",
    "collect_memory",
    "extract_field",
    "run_collector",
]
