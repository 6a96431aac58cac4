"""
lwm.units
AUTHOR: carter-vin

Unit table and conversions for KiB values
- fixed-unit: exact integer division
- human-readable: log-based magnitude selection, one decimal place
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class UnitSystem(Enum):
    BYTE = "byte"
    DECIMAL = "decimal"
    BINARY = "binary"


@dataclass(frozen=True)
class Unit:
    name: str
    symbol: str
    system: UnitSystem
    divisor: int


KIB = 1024

DECIMAL_STEP = 1000
BINARY_STEP = 1024

DECIMAL_SUFFIXES = ("B", "KB", "MB", "GB", "TB", "PB")
BINARY_SUFFIXES = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")

# Flag order doubles as CLI precedence
UNITS: dict[str, Unit] = {
    "bytes": Unit("bytes", "B", UnitSystem.BYTE, 1),
    "kilo": Unit("kilo", "KB", UnitSystem.DECIMAL, DECIMAL_STEP),
    "kibi": Unit("kibi", "KiB", UnitSystem.BINARY, BINARY_STEP),
    "mega": Unit("mega", "MB", UnitSystem.DECIMAL, DECIMAL_STEP**2),
    "mebi": Unit("mebi", "MiB", UnitSystem.BINARY, BINARY_STEP**2),
    "giga": Unit("giga", "GB", UnitSystem.DECIMAL, DECIMAL_STEP**3),
    "gibi": Unit("gibi", "GiB", UnitSystem.BINARY, BINARY_STEP**3),
    "tera": Unit("tera", "TB", UnitSystem.DECIMAL, DECIMAL_STEP**4),
    "tebi": Unit("tebi", "TiB", UnitSystem.BINARY, BINARY_STEP**4),
    "peta": Unit("peta", "PB", UnitSystem.DECIMAL, DECIMAL_STEP**5),
    "pebi": Unit("pebi", "PiB", UnitSystem.BINARY, BINARY_STEP**5),
}


class FormatError(ValueError):
    """Value has no entry in the B..PB / B..PiB ladder."""


def get_unit(name: str) -> Unit:
    if name not in UNITS:
        raise ValueError(f"unknown unit: {name}")
    return UNITS[name]


def to_bytes(value_kib: int) -> int:
    return value_kib * KIB


def convert(value_kib: int, unit: Unit) -> int:
    """
    Convert a KiB value to a whole number of `unit` (truncated)
    """
    return to_bytes(value_kib) // unit.divisor


def _round_half_up(value: float) -> float:
    return math.floor(value * 10.0 + 0.5) / 10.0


def format_human(size_bytes: float, binary: bool) -> str:
    """
    Format bytes as the largest unit that keeps the magnitude >= 1

    1024 (binary) -> "1.0KiB", 999 (decimal) -> "999.0B", 0 -> "0B"
    """
    if size_bytes <= 0:
        return "0B"

    step = BINARY_STEP if binary else DECIMAL_STEP
    suffixes = BINARY_SUFFIXES if binary else DECIMAL_SUFFIXES

    base = math.log10(size_bytes) / math.log10(step)
    index = math.floor(base)
    if index < 0 or index >= len(suffixes):
        raise FormatError(
            f"{size_bytes} bytes is outside the {suffixes[0]}..{suffixes[-1]} range"
        )

    magnitude = _round_half_up(step ** (base - index))
    return f"{magnitude:.1f}{suffixes[index]}"
