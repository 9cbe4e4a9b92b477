# src/samplemap/filenames.py
"""
Sample filename conventions.

Recognised stems, tried in this order (first structural match wins):

    <name>_<note>_v<min>-<max>_rr<index>    Kick_C1_v0-40_rr1
    <name>_<note>_v<min>-<max>              Snare_D1_v0-127
    <name>_<note>_rr<index>                 HiHat_F#1_rr2
    <name>_<note>                           Crash_49

<note> is either a bare MIDI number (1-3 digits) or a note name such as
C3, F#1, Bb2 (see pitch.note_to_midi). The velocity separator may be "-"
or "_". Anything else yields a name-only result.
"""
from __future__ import annotations
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .pitch import note_to_midi

log = logging.getLogger(__name__)

FULL_VELOCITY: Tuple[int, int] = (0, 127)
# sample_name for an empty file name
UNTITLED = "Untitled"

_NAME = r"(?P<name>.+?)"
_NOTE = r"(?P<note>[A-G][#B]?-?\d+|\d{1,3})"
_VEL = r"v(?P<vmin>\d+)[-_](?P<vmax>\d+)"
_RR = r"rr(?P<rr>\d+)"


@dataclass(frozen=True)
class ParsedSampleInfo:
    original_file_name: str
    sample_name: str
    midi_note: Optional[int] = None
    velocity_range: Optional[Tuple[int, int]] = None
    round_robin_index: Optional[int] = None

    @property
    def description(self) -> str:
        parts = [self.sample_name]
        if self.midi_note is not None:
            parts.append(f"Note: {self.midi_note}")
        if self.velocity_range is not None:
            parts.append(f"Vel: {self.velocity_range[0]}-{self.velocity_range[1]}")
        if self.round_robin_index is not None:
            parts.append(f"RR: {self.round_robin_index}")
        return ", ".join(parts)


@dataclass(frozen=True)
class FilenamePattern:
    name: str
    regex: re.Pattern[str]
    has_velocity: bool
    has_round_robin: bool


def _compile(*tokens: str) -> re.Pattern[str]:
    return re.compile("_".join(tokens), re.IGNORECASE)


# Order is precedence. Do not reorder.
PATTERNS: List[FilenamePattern] = [
    FilenamePattern("full", _compile(_NAME, _NOTE, _VEL, _RR), True, True),
    FilenamePattern("note_velocity", _compile(_NAME, _NOTE, _VEL), True, False),
    FilenamePattern("note_round_robin", _compile(_NAME, _NOTE, _RR), False, True),
    FilenamePattern("note_only", _compile(_NAME, _NOTE), False, False),
]


# ---------- token helpers ----------

def strip_extension(file_name: str) -> str:
    return os.path.splitext(file_name)[0]

def _resolve_note(token: str) -> Optional[int]:
    if token.isdigit():
        n = int(token)
        return n if 0 <= n <= 127 else None
    return note_to_midi(token)

def _velocity(vmin: str, vmax: str) -> Optional[Tuple[int, int]]:
    lo, hi = int(vmin), int(vmax)
    if 0 <= lo <= hi <= 127:
        return (lo, hi)
    return None

def _round_robin(token: str) -> Optional[int]:
    rr = int(token)
    return rr if rr >= 1 else None


# ---------- public API ----------

def match_stem(stem: str) -> Optional[Tuple[FilenamePattern, re.Match[str]]]:
    """First pattern that structurally matches the stem, with its match."""
    for pattern in PATTERNS:
        m = pattern.regex.fullmatch(stem)
        if m:
            return pattern, m
    return None


def parse(file_name: str) -> ParsedSampleInfo:
    """Never raises. Unrecognised names only get sample_name (the stem)."""
    stem = strip_extension(file_name)
    found = match_stem(stem)
    if found is None:
        log.debug("no naming pattern for %r", file_name)
        return ParsedSampleInfo(original_file_name=file_name, sample_name=stem or UNTITLED)

    pattern, m = found
    velocity = _velocity(m["vmin"], m["vmax"]) if pattern.has_velocity else FULL_VELOCITY
    rr = _round_robin(m["rr"]) if pattern.has_round_robin else None
    info = ParsedSampleInfo(
        original_file_name=file_name,
        sample_name=m["name"],
        midi_note=_resolve_note(m["note"]),
        velocity_range=velocity,
        round_robin_index=rr,
    )
    log.debug("%r matched %s -> %s", file_name, pattern.name, info.description)
    return info
