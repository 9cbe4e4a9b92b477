# src/samplemap/pitch.py
from __future__ import annotations
import re
from typing import Optional

from .errors import InvalidArgument

STEP_TO_SEMITONE = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Ableton convention: C3 = 60, so octave -2 starts at MIDI 0
OCTAVE_OFFSET = 2

# Input is upper-cased first, so a flat "b" shows up as "B" in group 2.
# "BB2" is therefore B-flat 2: the accidental is taken by position only.
_NOTE_RE = re.compile(r"([A-G])([#B]?)(-?\d+)")


def note_to_midi(note_text: str) -> Optional[int]:
    """
    "C3" -> 60, "F#4" -> 78, "Bb2" -> 58, "C-2" -> 0.
    Returns None for anything that is not a note name or lands outside 0..127.
    """
    cleaned = note_text.strip().upper()
    m = _NOTE_RE.fullmatch(cleaned)
    if not m:
        return None

    letter, accidental, octave_str = m.groups()
    octave = int(octave_str)
    adjust = 1 if accidental == "#" else (-1 if accidental == "B" else 0)
    midi = (octave + OCTAVE_OFFSET) * 12 + STEP_TO_SEMITONE[letter] + adjust
    return midi if 0 <= midi <= 127 else None


def midi_to_note_name(midi: int) -> str:
    """60 -> "C3" (same octave convention as note_to_midi, sharps only)."""
    if not 0 <= midi <= 127:
        raise InvalidArgument(f"MIDI note out of range: {midi}")
    return f"{NOTE_NAMES[midi % 12]}{midi // 12 - OCTAVE_OFFSET}"
