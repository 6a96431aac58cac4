"""
lwm.collectors.meminfo
AUTHOR: carter-vin

Field extractor for /proc/meminfo
- one full read, then a single parse pass into key -> raw value
- missing or malformed fields are hard failures (no zero defaults)
- stdlib only
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from lwm.model import ClampHandler, MemorySnapshot, build_snapshot_from_fields

MEMINFO_PATH = Path("/proc/meminfo")

# Env var override for fixtures and non-Linux dev machines
MEMINFO_PATH_ENV = "LWM_MEMINFO_PATH"

# Only the literal kernel suffix is recognized
UNIT_SUFFIX = "kB"

U64_MAX = 2**64 - 1

# meminfo key -> snapshot field, in read order
REQUIRED_FIELDS = {
    "MemTotal": "mem_total",
    "MemFree": "mem_free",
    "MemAvailable": "mem_available",
    "Buffers": "buffers",
    "Cached": "cached",
    "SwapCached": "swap_cached",
    "SwapFree": "swap_free",
    "SwapTotal": "swap_total",
    "Zswap": "zswap",
    "Zswapped": "zswapped",
    "Shmem": "shmem",
    "SReclaimable": "s_reclaimable",
}


class MeminfoError(RuntimeError):
    """Base failure for reading or parsing the status file."""


class SourceUnavailableError(MeminfoError):
    pass


class MissingFieldError(MeminfoError):
    def __init__(self, key: str) -> None:
        super().__init__(f"{key}: missing in meminfo")
        self.key = key


class MalformedFieldError(MeminfoError):
    def __init__(self, key: str, raw: str) -> None:
        super().__init__(f"{key}: not an unsigned integer: {raw.strip()!r}")
        self.key = key
        self.raw = raw


def _normalize_key(key: str) -> str:
    # Accept both "MemTotal:" and "MemTotal"
    return key.strip().removesuffix(":")


def parse_meminfo(contents: str) -> dict[str, str]:
    """
    Parse meminfo text into a dict of key -> raw value text

    Lines without a colon are ignored. Duplicate keys: last one wins.
    """
    values: dict[str, str] = {}
    for line in contents.splitlines():
        key, sep, raw = line.partition(":")
        if not sep:
            continue
        values[key] = raw
    return values


def parse_value(key: str, raw: str) -> int:
    """
    Convert a raw value ("   16384000 kB") into an integer in kibibytes
    """
    value = raw.strip().removesuffix(UNIT_SUFFIX).strip()
    if not (value.isascii() and value.isdigit()):
        raise MalformedFieldError(key, raw)

    number = int(value)
    if number > U64_MAX:
        raise MalformedFieldError(key, raw)
    return number


def lookup_field(fields: dict[str, str], key: str) -> int:
    name = _normalize_key(key)
    if name not in fields:
        raise MissingFieldError(name)
    return parse_value(name, fields[name])


def extract_field(contents: str, key: str) -> int:
    """
    Return the value of a single key (e.g. "MemTotal:") in kibibytes
    """
    return lookup_field(parse_meminfo(contents), key)


def build_snapshot(
    contents: str, *, on_clamp: Optional[ClampHandler] = None
) -> MemorySnapshot:
    """
    Extract every required field, then derive used memory and used swap

    Every field is extracted before the snapshot exists, so a failure
    leaves nothing half-built.
    """
    fields = parse_meminfo(contents)
    values = {
        attr: lookup_field(fields, key) for key, attr in REQUIRED_FIELDS.items()
    }
    return build_snapshot_from_fields(on_clamp=on_clamp, **values)


def resolve_meminfo_path(path: Optional[Path] = None) -> Path:
    """
    Precedence:
    1) explicit path
    2) LWM_MEMINFO_PATH env var
    3) /proc/meminfo
    """
    if path is not None:
        return Path(path)
    override = os.getenv(MEMINFO_PATH_ENV)
    if override:
        return Path(override)
    return MEMINFO_PATH


def read_meminfo(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise SourceUnavailableError(f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise SourceUnavailableError(f"cannot decode {path}: {e.reason}") from e


def collect_memory(
    path: Optional[Path] = None, *, on_clamp: Optional[ClampHandler] = None
) -> MemorySnapshot:
    """
    Read the status file once and build a snapshot from it
    """
    contents = read_meminfo(resolve_meminfo_path(path))
    return build_snapshot(contents, on_clamp=on_clamp)
