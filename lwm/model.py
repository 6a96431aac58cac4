"""
lwm.model
AUTHOR: carter-vin

Memory snapshot record + derived fields.

Design goals:
- Immutable, one snapshot per invocation
- All values in kibibytes (the native /proc/meminfo unit)
- Derived fields never go negative (saturate at zero)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

# Called with (derived field name, minuend, subtrahend) when a subtraction
# would go below zero
ClampHandler = Callable[[str, int, int], None]


@dataclass(frozen=True)
class MemorySnapshot:
    """
    Point-in-time memory figures (KiB)
    - mem_used: mem_total - mem_available
    - swap_used: swap_total - swap_free
    """

    # Total installed memory (RAM)
    mem_total: int
    # Memory that isn't allocated at all
    mem_free: int
    mem_available: int
    mem_used: int
    # Temporary kernel buffers
    buffers: int
    # Page cache and slabs
    cached: int
    swap_cached: int
    swap_total: int
    swap_free: int
    swap_used: int
    # Compressed size of zswap pool
    zswap: int
    # Pre-compression size of zswapped pages
    zswapped: int
    shmem: int
    # Reclaimable slab
    s_reclaimable: int


def saturating_sub(
    name: str, total: int, part: int, on_clamp: Optional[ClampHandler] = None
) -> int:
    """
    total - part, floored at zero
    """
    if part > total:
        if on_clamp is not None:
            on_clamp(name, total, part)
        return 0
    return total - part


def build_snapshot_from_fields(
    *,
    mem_total: int,
    mem_free: int,
    mem_available: int,
    buffers: int,
    cached: int,
    swap_cached: int,
    swap_total: int,
    swap_free: int,
    zswap: int,
    zswapped: int,
    shmem: int,
    s_reclaimable: int,
    on_clamp: Optional[ClampHandler] = None,
) -> MemorySnapshot:
    """
    Assemble a snapshot from extracted values and compute derived fields
    """
    return MemorySnapshot(
        mem_total=mem_total,
        mem_free=mem_free,
        mem_available=mem_available,
        mem_used=saturating_sub("mem_used", mem_total, mem_available, on_clamp),
        buffers=buffers,
        cached=cached,
        swap_cached=swap_cached,
        swap_total=swap_total,
        swap_free=swap_free,
        swap_used=saturating_sub("swap_used", swap_total, swap_free, on_clamp),
        zswap=zswap,
        zswapped=zswapped,
        shmem=shmem,
        s_reclaimable=s_reclaimable,
    )
