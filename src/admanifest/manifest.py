"""Manifest loader for the ad rendering runtime.

Parses `manifest.js` documents (`window.manifest = {...};`) into plain
dicts, serializes them back, and provides tolerant accessors for the
blocks the transformation steps touch.

Manifest shape (runtime key names, kept as-is):
  - layers: [{name, guid, fileType, className?, fontFamily?,
              shots: [{pos: {x, y}, size: {w, h, initW?, initH?},
                       timelines: [{id, trigger, steps: [{settings}]}]}]}]
  - animationGroups: [{id, name, delay, duration}]
  - shots: [{index, duration}]            # scenes
  - settings: {dynamicValues: [...], webFonts: [...], defaults: {...}}
Unknown keys pass through untouched.
"""

import copy
import json
import re
from pathlib import Path

from .jsliteral import ParseError, parse_object_literal


MANIFEST_GLOBAL = "window.manifest"

DEFAULT_AD_DURATION = 5.0

_WRAPPER_RE = re.compile(
    r"^\s*window\.manifest\s*=\s*(\{[\s\S]*\})\s*;?\s*$"
)


# ── Parse / serialize ─────────────────────────────────────────────


def parse_manifest(text: str) -> dict:
    """Parse manifest.js text into a manifest dict.

    Processing pipeline:
      1. Match the `window.manifest = {...};` wrapper.
      2. Decode the object literal with the restricted parser.

    Raises:
        ParseError: Wrong wrapper shape or malformed literal.
    """
    text = text.lstrip("\ufeff")
    match = _WRAPPER_RE.match(text)
    if not match:
        raise ParseError(
            f"Invalid manifest.js format: could not find {MANIFEST_GLOBAL} assignment"
        )

    value = parse_object_literal(match.group(1))
    if not isinstance(value, dict):
        raise ParseError("Invalid manifest.js format: manifest is not an object")
    return value


def serialize_manifest(manifest: dict) -> str:
    """Serialize a manifest dict back to manifest.js text."""
    body = json.dumps(manifest, indent=2, ensure_ascii=False)
    return f"{MANIFEST_GLOBAL} = {body};"


def load_manifest(manifest_path: str | Path) -> dict:
    """Read and parse a manifest.js file.

    Raises:
        ParseError: Malformed manifest text.
        FileNotFoundError: Missing manifest file.
    """
    with open(manifest_path, encoding="utf-8") as f:
        return parse_manifest(f.read())


def clone_manifest(manifest: dict) -> dict:
    """Deep copy a manifest so a transformation never shares mutable state."""
    return copy.deepcopy(manifest)


# ── Accessors ─────────────────────────────────────────────────────


def get_settings(manifest: dict) -> dict | None:
    """Return the settings block, or None when the manifest has none."""
    settings = manifest.get("settings")
    return settings if isinstance(settings, dict) else None


def get_layers(manifest: dict) -> list[dict]:
    layers = manifest.get("layers")
    return layers if isinstance(layers, list) else []


def find_layer(manifest: dict, name: str) -> dict | None:
    """Find a layer by case-insensitive exact name."""
    wanted = name.lower()
    for layer in get_layers(manifest):
        if str(layer.get("name", "")).lower() == wanted:
            return layer
    return None


def iter_placements(layer: dict):
    """Yield the layer's per-scene placements that carry pos and size."""
    for shot in layer.get("shots") or []:
        if isinstance(shot, dict) and "pos" in shot and "size" in shot:
            yield shot


def to_number(value, default: float = 0.0) -> float:
    """Parse a manifest number that may be stored as a string."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return number


def manifest_duration(manifest: dict) -> float:
    """Total ad length: sum of scene durations, 5s when none are declared."""
    scenes = manifest.get("shots")
    if not isinstance(scenes, list):
        scenes = []
    total = sum(to_number(scene.get("duration")) for scene in scenes if isinstance(scene, dict))
    return total or DEFAULT_AD_DURATION


def available_sizes(manifest: dict) -> list[str]:
    """Output sizes declared by a manifest as 'WxH' strings."""
    sizes = manifest.get("sizes")
    if sizes:
        return [f"{s['width']}x{s['height']}" for s in sizes]

    settings = get_settings(manifest) or {}
    if settings.get("width") and settings.get("height"):
        return [f"{settings['width']}x{settings['height']}"]
    return []
