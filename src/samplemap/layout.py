# src/samplemap/layout.py
"""
Grid geometry for a key's velocity layers, independent of any toolkit.

Rows are layers (top to bottom in the given order, no sorting here), row
height is proportional to the layer's velocity span out of 128. Columns are
the layer's round-robin slots, spread evenly over the full width. Heights
are not renormalised: spans summing to less than 128 leave free space at
the bottom, spans summing to more overflow the given height.
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .layers import VELOCITY_SPAN, SelectedSlot, VelocitySlotSet

DEFAULT_SPACING = 1.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.right and self.y <= py < self.bottom


@dataclass(frozen=True)
class LayerLayout:
    layer_id: uuid.UUID
    layer_rect: Rect
    slot_rects: Tuple[Rect, ...]
    placeholder: bool = False   # zero-slot layer, slot_rects holds one full-width rect


def layer_height(layer: VelocitySlotSet, height: float, spacing: float) -> float:
    proportion = layer.velocity_range.span / VELOCITY_SPAN
    return max(spacing * 2, proportion * height)


def slot_width(round_robin_count: int, width: float, spacing: float) -> float:
    if round_robin_count <= 0:
        return width
    total_spacing = spacing * max(0, round_robin_count - 1)
    available = width - total_spacing
    return max(spacing * 2, available / round_robin_count)


def compute_layout(layers: Sequence[VelocitySlotSet], width: float, height: float,
                   spacing: float = DEFAULT_SPACING) -> List[LayerLayout]:
    """Pure; same input gives the same rectangles. Never raises on odd sizes."""
    out: List[LayerLayout] = []
    y = 0.0
    for layer in layers:
        h = layer_height(layer, height, spacing)
        row = Rect(0.0, y, width, h)
        n = layer.round_robin_count
        if n == 0:
            out.append(LayerLayout(layer.id, row, (row,), placeholder=True))
        else:
            w = slot_width(n, width, spacing)
            slots = tuple(Rect(j * (w + spacing), y, w, h) for j in range(n))
            out.append(LayerLayout(layer.id, row, slots))
        y += h + spacing
    return out


# ---------- hit testing / selection ----------

def hit_test(layout: Sequence[LayerLayout], x: float, y: float) -> Optional[SelectedSlot]:
    for row in layout:
        if row.placeholder or not row.layer_rect.contains(x, y):
            continue
        for j, rect in enumerate(row.slot_rects):
            if rect.contains(x, y):
                return SelectedSlot(row.layer_id, j)
        return None
    return None


def toggle_selection(current: Optional[SelectedSlot],
                     tapped: SelectedSlot) -> Optional[SelectedSlot]:
    """Tapping the selected slot deselects it."""
    return None if current == tapped else tapped
