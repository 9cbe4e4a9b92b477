# src/samplemap/velocity/split.py
from __future__ import annotations
import math
from typing import List

from ..errors import InvalidArgument
from ..layers import VELOCITY_SPAN, VelocityRange

SPLIT_MODES = ("separate", "crossfade")

def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))

def _core_zones(count: int) -> List[tuple]:
    """
    Equal-width, gap-free zones over 0..127. Zone i starts right after zone i-1;
    the last zone is stretched to 127 to absorb rounding.
    """
    width = VELOCITY_SPAN / count
    zones = []
    cur = 0.0
    for i in range(count):
        lo = _clamp(int(math.floor(cur)), 0, 127)
        hi = int(math.floor(cur + width - 1.0))
        if i == count - 1:
            hi = 127
        hi = min(127, max(lo, hi))
        zones.append((lo, hi))
        cur = hi + 1.0
    return zones

def split_velocity_ranges(count: int, mode: str = "separate") -> List[VelocityRange]:
    """
    Velocity ranges for `count` samples dropped on one key, lowest first.

    separate:  adjacent hard ranges, no crossfade.
    crossfade: each inner edge reaches half a zone into the neighbour; the
               crossfade sub-range is the un-widened core zone.
    """
    if mode not in SPLIT_MODES:
        raise InvalidArgument(f"unknown velocity split mode: {mode!r}")
    if count <= 0 or count > VELOCITY_SPAN:
        raise InvalidArgument(f"cannot split velocity into {count} zones")
    if count == 1:
        return [VelocityRange.full()]

    zones = _core_zones(count)
    if mode == "separate":
        return [VelocityRange.hard(lo, hi) for lo, hi in zones]

    overlap = (VELOCITY_SPAN / count) / 2.0
    out: List[VelocityRange] = []
    for i, (lo, hi) in enumerate(zones):
        # outer edges (0 and 127) stay put
        hard_lo = lo if i == 0 else _clamp(int(math.floor(lo - overlap)), 0, lo)
        hard_hi = hi if i == count - 1 else _clamp(int(math.floor(hi + overlap)), hi, 127)
        out.append(VelocityRange(hard_lo, hard_hi, lo, hi))
    return out
