# src/samplemap/config.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import copy
import logging
import yaml

log = logging.getLogger(__name__)

# package root: .../src/samplemap
PKG_ROOT = Path(__file__).resolve().parent
DEFAULT_CFG_PATH = PKG_ROOT / "config.default.yaml"
USER_CFG_PATH = Path.home() / ".config" / "samplemap" / "config.yaml"

FALLBACK_EXTENSIONS = [".wav", ".aif", ".aiff", ".flac"]
FALLBACK_SPACING = 1.0

def _safe_load(path: Path) -> Dict[str, Any]:
    try:
        if path.exists():
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError) as e:
        # a broken user file must not take the core down
        log.warning("ignoring config %s: %s", path, e)
    return {}

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out

def load_config(
    user_path: Optional[Path] = None,
    default_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Packaged defaults merged with user overrides.
    Sections: audio_extensions, layout {spacing,width,height},
    import {velocity_split, default_round_robins}.
    """
    dpath = Path(default_path) if default_path else DEFAULT_CFG_PATH
    upath = Path(user_path) if user_path else USER_CFG_PATH

    cfg = _deep_merge(_safe_load(dpath), _safe_load(upath))

    cfg.setdefault("audio_extensions", list(FALLBACK_EXTENSIONS))
    cfg.setdefault("layout", {})
    cfg.setdefault("import", {})
    return cfg

def get_audio_extensions(cfg: Dict[str, Any]) -> List[str]:
    exts = cfg.get("audio_extensions")
    if not isinstance(exts, list) or not exts:
        return list(FALLBACK_EXTENSIONS)
    return [str(e).lower() if str(e).startswith(".") else "." + str(e).lower() for e in exts]

def get_layout_spacing(cfg: Dict[str, Any]) -> float:
    try:
        spacing = float((cfg.get("layout") or {}).get("spacing", FALLBACK_SPACING))
    except (TypeError, ValueError):
        return FALLBACK_SPACING
    return spacing if spacing >= 0 else FALLBACK_SPACING

def get_layout_size(cfg: Dict[str, Any]) -> tuple:
    layout = cfg.get("layout") or {}
    try:
        return float(layout.get("width", 300.0)), float(layout.get("height", 250.0))
    except (TypeError, ValueError):
        return 300.0, 250.0

def get_velocity_split(cfg: Dict[str, Any]) -> str:
    return str((cfg.get("import") or {}).get("velocity_split", "separate"))

def get_default_round_robins(cfg: Dict[str, Any]) -> int:
    try:
        return max(1, int((cfg.get("import") or {}).get("default_round_robins", 1)))
    except (TypeError, ValueError):
        return 1
