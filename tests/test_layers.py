import pytest

from samplemap import layers
from samplemap.errors import IndexOutOfRange, InvalidArgument
from samplemap.layers import SampleReference, SelectedSlot, VelocityRange, create

KICK = SampleReference("Kick", "Kick_C1_rr1.wav")
SNARE = SampleReference("Snare", "Snare_D1_rr1.wav")


def test_create_starts_empty():
    layer = create(VelocityRange.full(), 3)
    assert layer.round_robin_count == 3
    assert layer.active_sample_count == 0
    assert layer.is_empty
    assert layer.samples == (None, None, None)


def test_create_negative_slot_count():
    with pytest.raises(InvalidArgument):
        create(VelocityRange.full(), -1)


def test_assign_and_clear():
    layer = create(VelocityRange.full(), 2)
    layer.assign(1, KICK)
    assert layer.samples == (None, KICK)
    assert layer.active_sample_count == 1
    assert not layer.is_empty

    layer.assign(1, SNARE)
    assert layer.slot(1) is SNARE

    layer.clear(1)
    assert layer.is_empty


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_slot_index_out_of_range(index):
    layer = create(VelocityRange.full(), 2)
    with pytest.raises(IndexOutOfRange):
        layer.assign(index, KICK)
    with pytest.raises(IndexError):
        layer.clear(index)


def test_resize_grow_and_shrink():
    layer = create(VelocityRange.full(), 1)
    layer.assign(0, KICK)
    layer.resize(3)
    assert layer.samples == (KICK, None, None)
    layer.assign(2, SNARE)
    layer.resize(2)
    assert layer.samples == (KICK, None)
    layer.resize(0)
    assert layer.round_robin_count == 0
    assert layer.is_empty


@pytest.mark.parametrize("n, m", [(4, 4), (4, 2), (4, 0), (6, 1)])
def test_resize_keeps_leading_slots(n, m):
    layer = create(VelocityRange.full(), 2)
    layer.assign(0, KICK)
    layer.assign(1, SNARE)
    layer.resize(n)
    before = layer.samples
    layer.resize(m)
    assert layer.round_robin_count == m
    assert layer.samples == before[:m]


def test_resize_negative():
    layer = create(VelocityRange.full(), 2)
    with pytest.raises(InvalidArgument):
        layer.resize(-1)
    with pytest.raises(ValueError):
        layers.resize(layer, -3)


def test_function_form():
    layer = layers.create(VelocityRange.hard(0, 63), 1)
    layers.assign(layer, 0, KICK)
    assert layer.slot(0) == KICK
    layers.clear(layer, 0)
    assert layer.is_empty
    layers.resize(layer, 4)
    assert layer.round_robin_count == 4


def test_id_is_stable_and_unique():
    a = create(VelocityRange.full(), 1)
    b = create(VelocityRange.full(), 1)
    first = a.id
    a.assign(0, KICK)
    a.resize(5)
    a.velocity_range = VelocityRange.hard(10, 20)
    assert a.id == first
    assert a.id != b.id
    assert a != b
    with pytest.raises(AttributeError):
        a.id = b.id


def test_velocity_range_helpers():
    full = VelocityRange.full()
    assert full.span == 128
    assert full.is_consistent()
    assert VelocityRange.hard(41, 80).span == 40
    assert VelocityRange(10, 5, 10, 5).span == 0
    assert not VelocityRange(10, 20, 5, 20).is_consistent()
    assert not VelocityRange(0, 127, 0, 128).is_consistent()
    assert VelocityRange(0, 95, 0, 63).is_consistent()
    assert VelocityRange.hard(0, 63).overlaps(VelocityRange.hard(63, 127))
    assert not VelocityRange.hard(0, 63).overlaps(VelocityRange.hard(64, 127))
    assert full.contains(0) and full.contains(127) and not full.contains(128)


def test_selected_slot():
    layer = create(VelocityRange.full(), 2)
    sel = SelectedSlot(layer.id, 1)
    assert sel == SelectedSlot(layer.id, 1)
    assert sel != SelectedSlot(layer.id, 0)
    assert sel.is_valid([layer])
    layer.resize(1)
    assert not sel.is_valid([layer])
    assert not SelectedSlot(layer.id, 0).is_valid([])
