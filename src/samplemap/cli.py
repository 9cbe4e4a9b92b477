# src/samplemap/cli.py
from __future__ import annotations
import argparse, pathlib, sys
from typing import List, Optional, Sequence, Tuple

from .batch import group_by_note, parse_batch, scan_directory, unassigned
from .config import (
    get_audio_extensions, get_default_round_robins, get_layout_size,
    get_layout_spacing, get_velocity_split, load_config,
)
from .errors import SampleMapError
from .filenames import FULL_VELOCITY, ParsedSampleInfo
from .keymap import KeyMapping, SampleMap, import_grouped, import_split
from .layout import compute_layout
from .logging_setup import configure_logging
from .pitch import midi_to_note_name
from .velocity.split import SPLIT_MODES

def _parse_size(text: str) -> Tuple[float, float]:
    w, h = text.lower().split("x", 1)
    return float(w), float(h)

def _split_candidate(entries: Sequence[ParsedSampleInfo]) -> bool:
    return len(entries) > 1 and all(
        e.velocity_range == FULL_VELOCITY and e.round_robin_index is None for e in entries
    )

def _print_key(km: KeyMapping) -> None:
    print(f"[samplemap] {midi_to_note_name(km.midi_note):>4} ({km.midi_note:3d})  layers={len(km)}")
    for layer in km:
        vr = layer.velocity_range
        fade = "" if (vr.crossfade_min, vr.crossfade_max) == (vr.min, vr.max) \
            else f" xfade {vr.crossfade_min}-{vr.crossfade_max}"
        names = ", ".join((s.file_name or s.name) if s else "-" for s in layer.samples)
        print(f"    vel {vr.min:3d}-{vr.max:3d}{fade}  rr {layer.active_sample_count}/{layer.round_robin_count}  [{names}]")
    for pair in km.overlaps():
        a, b = (p.velocity_range for p in pair)
        print(f"    WARNING: overlapping layers {a.min}-{a.max} / {b.min}-{b.max}")

def _print_layout(km: KeyMapping, width: float, height: float, spacing: float) -> None:
    for row in compute_layout(km.layers, width, height, spacing):
        r = row.layer_rect
        print(f"    row y={r.y:.1f} h={r.height:.1f}" + ("  (no slots)" if row.placeholder else ""))
        if not row.placeholder:
            cells = " ".join(f"{s.x:.1f}+{s.width:.1f}" for s in row.slot_rects)
            print(f"      slots {cells}")

def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Map a folder of samples onto keys / velocity layers / round robins")
    p.add_argument("--in", dest="indir", required=True, help="Folder containing the sample files")
    p.add_argument("--config", dest="config", default=None, help="YAML config (defaults applied if omitted)")
    p.add_argument("--split", action="store_true",
                   help="Spread plain <name>_<note> files on the same key over velocity layers")
    p.add_argument("--split-mode", choices=SPLIT_MODES, default=None, help="Velocity split mode (default from config)")
    p.add_argument("--layout", nargs="?", const="", default=None, metavar="WxH",
                   help="Also print grid rectangles (size from config if WxH omitted)")
    p.add_argument("--note", type=int, default=None, help="Only show this MIDI note")

    args = p.parse_args(argv)
    configure_logging()

    in_dir = pathlib.Path(args.indir).expanduser().resolve()
    if not in_dir.is_dir():
        print(f"[samplemap] ERROR: Not a directory: {in_dir}", file=sys.stderr)
        return 1

    cfg = load_config(args.config)
    mode = args.split_mode or get_velocity_split(cfg)
    spacing = get_layout_spacing(cfg)
    size = None
    if args.layout is not None:
        try:
            size = _parse_size(args.layout) if args.layout else get_layout_size(cfg)
        except ValueError:
            p.error(f"--layout expects WIDTHxHEIGHT, got {args.layout!r}")
    print(f"[samplemap] scanning {in_dir}")

    try:
        files = scan_directory(in_dir, get_audio_extensions(cfg))
        parsed = parse_batch(files)
        grouped = group_by_note(parsed)

        sample_map = SampleMap()
        import_grouped(sample_map, grouped, get_default_round_robins(cfg))
        if args.split:
            for note, entries in grouped.items():
                if _split_candidate(entries):
                    import_split(sample_map, note, entries, mode)
    except (SampleMapError, OSError) as e:
        print(f"[samplemap] ERROR: {e}", file=sys.stderr)
        return 2

    notes = sample_map.mapped_notes()
    if args.note is not None:
        notes = [n for n in notes if n == args.note]
    for note in notes:
        km = sample_map.key(note)
        _print_key(km)
        if size:
            _print_layout(km, size[0], size[1], spacing)

    missing = unassigned(parsed)
    if missing:
        print(f"[samplemap] unassigned ({len(missing)}):")
        for info in missing:
            print(f"    {info.original_file_name}")

    print(f"[samplemap] Done. files={len(files)} keys={len(sample_map.mapped_notes())} unassigned={len(missing)}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
