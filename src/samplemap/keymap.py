# src/samplemap/keymap.py
from __future__ import annotations
import logging
import uuid
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidArgument, LayerNotFound
from .filenames import FULL_VELOCITY, ParsedSampleInfo
from .layers import SampleReference, SelectedSlot, VelocityRange, VelocitySlotSet, create
from .velocity.split import split_velocity_ranges

log = logging.getLogger(__name__)


def _check_note(midi_note: int) -> int:
    if not 0 <= midi_note <= 127:
        raise InvalidArgument(f"MIDI note out of range: {midi_note}")
    return midi_note


class KeyMapping:
    """All velocity layers of one key, kept in ascending velocity_range.min order."""

    def __init__(self, midi_note: int):
        self.midi_note = _check_note(midi_note)
        self._layers: List[VelocitySlotSet] = []

    @property
    def layers(self) -> Tuple[VelocitySlotSet, ...]:
        return tuple(self._layers)

    @property
    def is_empty(self) -> bool:
        return all(layer.is_empty for layer in self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self):
        return iter(self._layers)

    # --- mutation ---

    def add_layer(self, layer: VelocitySlotSet) -> VelocitySlotSet:
        if any(other.id == layer.id for other in self._layers):
            raise InvalidArgument(f"layer {layer.id} is already on note {self.midi_note}")
        # insert after any layer with the same min (stable)
        pos = len(self._layers)
        for i, other in enumerate(self._layers):
            if other.velocity_range.min > layer.velocity_range.min:
                pos = i
                break
        self._layers.insert(pos, layer)
        return layer

    def new_layer(self, velocity_range: VelocityRange, slot_count: int) -> VelocitySlotSet:
        return self.add_layer(create(velocity_range, slot_count))

    def remove_layer(self, layer_id: uuid.UUID) -> VelocitySlotSet:
        layer = self.get_layer(layer_id)
        self._layers.remove(layer)
        return layer

    def clear(self) -> None:
        self._layers.clear()

    def resort(self) -> None:
        """Call after editing a layer's velocity_range in place."""
        self._layers.sort(key=lambda l: l.velocity_range.min)

    # --- lookup ---

    def get_layer(self, layer_id: uuid.UUID) -> VelocitySlotSet:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        raise LayerNotFound(layer_id)

    def find_layer(self, lo: int, hi: int) -> Optional[VelocitySlotSet]:
        for layer in self._layers:
            if (layer.velocity_range.min, layer.velocity_range.max) == (lo, hi):
                return layer
        return None

    def layer_for_velocity(self, velocity: int) -> Optional[VelocitySlotSet]:
        for layer in self._layers:
            if layer.velocity_range.contains(velocity):
                return layer
        return None

    def overlaps(self) -> List[Tuple[VelocitySlotSet, VelocitySlotSet]]:
        """Pairs of layers whose hard ranges intersect. Reported, never prevented."""
        pairs = []
        for i, a in enumerate(self._layers):
            for b in self._layers[i + 1:]:
                if a.velocity_range.overlaps(b.velocity_range):
                    pairs.append((a, b))
        return pairs

    def resolve(self, selected: SelectedSlot) -> Optional[SampleReference]:
        """Sample under a grid selection; None for empty or stale selections."""
        for layer in self._layers:
            if layer.id == selected.layer_id:
                if 0 <= selected.round_robin_index < layer.round_robin_count:
                    return layer.slot(selected.round_robin_index)
                return None
        return None


class SampleMap:
    """KeyMappings for notes 0..127, created on first access."""

    def __init__(self):
        self._keys: Dict[int, KeyMapping] = {}

    def key(self, midi_note: int) -> KeyMapping:
        _check_note(midi_note)
        km = self._keys.get(midi_note)
        if km is None:
            km = self._keys[midi_note] = KeyMapping(midi_note)
        return km

    def get(self, midi_note: int) -> Optional[KeyMapping]:
        return self._keys.get(midi_note)

    def clear_key(self, midi_note: int) -> None:
        _check_note(midi_note)
        km = self._keys.get(midi_note)
        if km is not None:
            km.clear()

    def mapped_notes(self) -> List[int]:
        return sorted(n for n, km in self._keys.items() if not km.is_empty)


# ---------- batch import ----------

def _reference(info: ParsedSampleInfo) -> SampleReference:
    return SampleReference(name=info.sample_name, file_name=info.original_file_name)

def _place(layer: VelocitySlotSet, index: Optional[int], ref: SampleReference) -> int:
    """Requested slot if free, else first empty slot, else a new trailing slot."""
    if index is not None and layer.slot(index) is None:
        layer.assign(index, ref)
        return index
    free = layer.first_empty_slot()
    if free is None:
        free = layer.round_robin_count
        layer.resize(free + 1)
    layer.assign(free, ref)
    return free

def build_layers(entries: Sequence[ParsedSampleInfo],
                 default_round_robins: int = 1) -> List[VelocitySlotSet]:
    """
    Layers for the entries of one key: one layer per distinct velocity range
    (missing range = full range), ordered by range min.
    """
    if default_round_robins < 1:
        raise InvalidArgument(f"default_round_robins must be >= 1, got {default_round_robins}")

    by_range: Dict[Tuple[int, int], List[ParsedSampleInfo]] = {}
    for info in entries:
        by_range.setdefault(info.velocity_range or FULL_VELOCITY, []).append(info)

    layers: List[VelocitySlotSet] = []
    for (lo, hi), group in sorted(by_range.items()):
        highest_rr = max((i.round_robin_index or 0) for i in group)
        layer = create(VelocityRange.hard(lo, hi), max(default_round_robins, highest_rr))
        # explicit rr indices claim their slots before unnumbered entries fill gaps
        numbered = [i for i in group if i.round_robin_index is not None]
        unnumbered = [i for i in group if i.round_robin_index is None]
        for info in numbered:
            _place(layer, info.round_robin_index - 1, _reference(info))
        for info in unnumbered:
            _place(layer, None, _reference(info))
        layers.append(layer)
    return layers

def import_grouped(sample_map: SampleMap,
                   grouped: Mapping[int, Sequence[ParsedSampleInfo]],
                   default_round_robins: int = 1) -> List[int]:
    """
    Replace the layers of every key in `grouped` (output of group_by_note).
    Returns the imported notes, ascending.
    """
    notes = sorted(grouped)
    for note in notes:
        km = sample_map.key(note)
        km.clear()
        for layer in build_layers(grouped[note], default_round_robins):
            km.add_layer(layer)
        log.debug("note %d: %d layer(s) from %d file(s)", note, len(km), len(grouped[note]))
    return notes

def import_split(sample_map: SampleMap, midi_note: int,
                 entries: Sequence[ParsedSampleInfo], mode: str = "separate") -> KeyMapping:
    """
    Several files dropped on one key as velocity layers: one single-slot
    layer per file, lowest range first, in the given order.
    """
    ranges = split_velocity_ranges(len(entries), mode)
    km = sample_map.key(midi_note)
    km.clear()
    for info, vr in zip(entries, ranges):
        layer = km.new_layer(vr, 1)
        layer.assign(0, _reference(info))
    log.debug("note %d: split %d file(s) (%s)", midi_note, len(entries), mode)
    return km
