# src/samplemap/errors.py
from __future__ import annotations


class SampleMapError(Exception):
    """Base class for all recoverable key-map errors."""


class IndexOutOfRange(SampleMapError, IndexError):
    """Slot index outside [0, round_robin_count)."""


class InvalidArgument(SampleMapError, ValueError):
    """Negative slot count, MIDI note outside 0..127, unknown mode, ..."""


class LayerNotFound(SampleMapError, KeyError):
    """Layer id not held by the key mapping."""
