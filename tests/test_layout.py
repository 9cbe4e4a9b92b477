import pytest

from samplemap.layers import SampleReference, SelectedSlot, VelocityRange, create
from samplemap.layout import Rect, compute_layout, hit_test, slot_width, toggle_selection


def test_full_range_layer_takes_full_height():
    layer = create(VelocityRange.full(), 1)
    (row,) = compute_layout([layer], 300, 200, 1)
    assert row.layer_id == layer.id
    assert row.layer_rect == Rect(0, 0, 300, 200)


def test_minimum_height_floor():
    layer = create(VelocityRange.full(), 1)
    (row,) = compute_layout([layer], 300, 1, 1)
    assert row.layer_rect.height == 2
    empty_span = create(VelocityRange(10, 5, 10, 5), 1)
    (row,) = compute_layout([empty_span], 300, 500, 3)
    assert row.layer_rect.height == 6


def test_rows_are_proportional_and_stacked():
    soft = create(VelocityRange.hard(0, 63), 1)
    loud = create(VelocityRange.hard(64, 127), 1)
    a, b = compute_layout([soft, loud], 100, 256, 1)
    assert a.layer_rect == Rect(0, 0, 100, 128)
    assert b.layer_rect == Rect(0, 129, 100, 128)


def test_input_order_is_kept():
    loud = create(VelocityRange.hard(64, 127), 1)
    soft = create(VelocityRange.hard(0, 63), 1)
    rows = compute_layout([loud, soft], 100, 256, 1)
    assert [r.layer_id for r in rows] == [loud.id, soft.id]


def test_heights_not_renormalised():
    layer = create(VelocityRange.hard(0, 31), 1)
    (row,) = compute_layout([layer], 100, 128, 1)
    assert row.layer_rect.height == 32


def test_slots_fill_width():
    layer = create(VelocityRange.full(), 3)
    (row,) = compute_layout([layer], 302, 100, 1)
    assert [s.x for s in row.slot_rects] == [0, 101, 202]
    assert all(s.width == 100 for s in row.slot_rects)
    assert all(s.height == 100 and s.y == 0 for s in row.slot_rects)
    total = sum(s.width for s in row.slot_rects) + 1 * (3 - 1)
    assert total == pytest.approx(302)


@pytest.mark.parametrize("k, width, spacing", [(1, 100, 1), (5, 400, 2), (7, 333.3, 1.5)])
def test_slot_widths_sum_to_width(k, width, spacing):
    layer = create(VelocityRange.full(), k)
    (row,) = compute_layout([layer], width, 100, spacing)
    total = sum(s.width for s in row.slot_rects) + spacing * (k - 1)
    assert total == pytest.approx(width)


def test_slot_width_floor():
    assert slot_width(10, 10, 1) == 2
    layer = create(VelocityRange.full(), 10)
    (row,) = compute_layout([layer], 10, 100, 1)
    assert all(s.width == 2 for s in row.slot_rects)


def test_zero_slot_layer_gets_placeholder():
    layer = create(VelocityRange.hard(0, 63), 0)
    (row,) = compute_layout([layer], 300, 128, 1)
    assert row.placeholder
    assert row.slot_rects == (row.layer_rect,)
    assert row.layer_rect.width == 300


def test_degenerate_sizes_do_not_raise():
    layer = create(VelocityRange.full(), 3)
    (row,) = compute_layout([layer], 0, -10, 1)
    assert row.layer_rect.height == 2
    assert all(s.width == 2 for s in row.slot_rects)
    assert compute_layout([], 100, 100) == []


def test_layout_is_repeatable():
    layers = [create(VelocityRange.hard(0, 40), 2), create(VelocityRange.hard(41, 127), 3)]
    layers[0].assign(0, SampleReference("Kick"))
    assert compute_layout(layers, 350, 300, 1) == compute_layout(layers, 350, 300, 1)


def test_hit_test():
    soft = create(VelocityRange.hard(0, 63), 3)
    loud = create(VelocityRange.hard(64, 127), 0)
    layout = compute_layout([soft, loud], 302, 256, 1)
    assert hit_test(layout, 150, 10) == SelectedSlot(soft.id, 1)
    assert hit_test(layout, 0, 0) == SelectedSlot(soft.id, 0)
    assert hit_test(layout, 100.5, 10) is None     # gap between slots
    assert hit_test(layout, 150, 128.5) is None    # gap between rows
    assert hit_test(layout, 150, 200) is None      # placeholder row
    assert hit_test(layout, 500, 10) is None


def test_toggle_selection():
    layer = create(VelocityRange.full(), 2)
    a = SelectedSlot(layer.id, 0)
    b = SelectedSlot(layer.id, 1)
    assert toggle_selection(None, a) == a
    assert toggle_selection(a, SelectedSlot(layer.id, 0)) is None
    assert toggle_selection(a, b) == b
