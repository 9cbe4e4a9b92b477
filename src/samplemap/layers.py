# src/samplemap/layers.py
"""
Velocity layers for a single key.

A VelocitySlotSet is one velocity band of a key with a fixed number of
round-robin slots. A slot is either a SampleReference or None (empty).
Slot sequences change length only through resize(); assign() and clear()
never move other slots.
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import IndexOutOfRange, InvalidArgument

VELOCITY_SPAN = 128


@dataclass(frozen=True)
class VelocityRange:
    min: int
    max: int
    crossfade_min: int
    crossfade_max: int

    @classmethod
    def full(cls) -> "VelocityRange":
        return cls(0, 127, 0, 127)

    @classmethod
    def hard(cls, lo: int, hi: int) -> "VelocityRange":
        """Range without crossfade: fade bounds equal the hard bounds."""
        return cls(lo, hi, lo, hi)

    @property
    def span(self) -> int:
        return max(0, self.max - self.min + 1)

    def is_consistent(self) -> bool:
        """0 <= min <= crossfade_min <= crossfade_max <= max <= 127"""
        return 0 <= self.min <= self.crossfade_min <= self.crossfade_max <= self.max <= 127

    def contains(self, velocity: int) -> bool:
        return self.min <= velocity <= self.max

    def overlaps(self, other: "VelocityRange") -> bool:
        return self.min <= other.max and other.min <= self.max


@dataclass(frozen=True)
class SampleReference:
    """Points at sample data owned by the asset store; never a copy of it."""
    name: str
    file_name: Optional[str] = None


class VelocitySlotSet:
    """One velocity layer: a hard/crossfade range plus its round-robin slots."""

    __slots__ = ("_id", "velocity_range", "_samples")

    def __init__(self, velocity_range: VelocityRange,
                 samples: Optional[Iterable[Optional[SampleReference]]] = None):
        self._id = uuid.uuid4()
        self.velocity_range = velocity_range
        self._samples: List[Optional[SampleReference]] = list(samples or [])

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def samples(self) -> Tuple[Optional[SampleReference], ...]:
        return tuple(self._samples)

    @property
    def round_robin_count(self) -> int:
        return len(self._samples)

    @property
    def active_sample_count(self) -> int:
        return sum(1 for s in self._samples if s is not None)

    @property
    def is_empty(self) -> bool:
        return self.active_sample_count == 0

    # --- slot access ---

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._samples):
            raise IndexOutOfRange(
                f"slot {index} outside 0..{len(self._samples) - 1} (layer {self._id})"
            )

    def slot(self, index: int) -> Optional[SampleReference]:
        self._check_index(index)
        return self._samples[index]

    def assign(self, index: int, sample: SampleReference) -> None:
        self._check_index(index)
        self._samples[index] = sample

    def clear(self, index: int) -> None:
        self._check_index(index)
        self._samples[index] = None

    def resize(self, new_count: int) -> None:
        if new_count < 0:
            raise InvalidArgument(f"round robin count must be >= 0, got {new_count}")
        cur = len(self._samples)
        if new_count > cur:
            self._samples.extend([None] * (new_count - cur))
        else:
            del self._samples[new_count:]

    def first_empty_slot(self) -> Optional[int]:
        for i, s in enumerate(self._samples):
            if s is None:
                return i
        return None

    # --- identity ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VelocitySlotSet):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        r = self.velocity_range
        return (f"VelocitySlotSet(id={str(self._id)[:8]}, vel={r.min}-{r.max}, "
                f"slots={self.active_sample_count}/{self.round_robin_count})")


VelocityLayer = VelocitySlotSet


@dataclass(frozen=True)
class SelectedSlot:
    """Transient selection in the mapping grid; compared by value."""
    layer_id: uuid.UUID
    round_robin_index: int

    def is_valid(self, layers: Sequence[VelocitySlotSet]) -> bool:
        for layer in layers:
            if layer.id == self.layer_id:
                return 0 <= self.round_robin_index < layer.round_robin_count
        return False


# ---------- operations (function form) ----------

def create(velocity_range: VelocityRange, slot_count: int) -> VelocitySlotSet:
    if slot_count < 0:
        raise InvalidArgument(f"slot count must be >= 0, got {slot_count}")
    return VelocitySlotSet(velocity_range, [None] * slot_count)

def assign(layer: VelocitySlotSet, index: int, sample: SampleReference) -> None:
    layer.assign(index, sample)

def clear(layer: VelocitySlotSet, index: int) -> None:
    layer.clear(index)

def resize(layer: VelocitySlotSet, new_count: int) -> None:
    layer.resize(new_count)
