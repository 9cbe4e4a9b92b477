# src/samplemap/batch.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Union

from .filenames import ParsedSampleInfo, parse

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def parse_batch(file_names: Iterable[PathLike]) -> List[ParsedSampleInfo]:
    """
    One ParsedSampleInfo per input, same order.
    Strings are parsed verbatim; path objects contribute their file name only.
    """
    out = [parse(f if isinstance(f, str) else Path(f).name) for f in file_names]
    log.debug("parsed %d file names", len(out))
    return out


def group_by_note(parsed: Iterable[ParsedSampleInfo]) -> Dict[int, List[ParsedSampleInfo]]:
    """Entries without a midi_note are dropped; see unassigned()."""
    grouped: Dict[int, List[ParsedSampleInfo]] = {}
    for info in parsed:
        if info.midi_note is None:
            continue
        grouped.setdefault(info.midi_note, []).append(info)
    return grouped


def unassigned(parsed: Iterable[ParsedSampleInfo]) -> List[ParsedSampleInfo]:
    return [info for info in parsed if info.midi_note is None]


def scan_directory(samples_dir: PathLike, extensions: Iterable[str]) -> List[Path]:
    """Audio files directly inside samples_dir (not recursive), sorted by name."""
    exts = {e.lower() if e.startswith(".") else "." + e.lower() for e in extensions}
    root = Path(samples_dir)
    files = [p for p in root.iterdir() if p.is_file() and p.suffix.lower() in exts]
    files.sort(key=lambda p: p.name)
    log.debug("found %d audio files in %s", len(files), root)
    return files
