"""Geometric layer edits — move and scale named layers in every scene.

An edit is a dict:
  layerName: str                      # case-insensitive exact match
  positionDelta: {x?: float, y?: float}
  scaleFactor: float                  # 1.2 = 20% bigger, about the center
  sizes: [str]                        # output sizes, or ["all"]; caller filters

Per placement the order is fixed: translate first, then scale about the
center of the translated box. `size.w/h` and the runtime's declared size
`size.initW/initH` are scaled by the same factor so the runtime's
animation scale ratios stay unchanged.
"""

import logging

from .common import record_warning
from .manifest import find_layer, get_layers, iter_placements

logger = logging.getLogger(__name__)


ALL_SIZES = "all"


# ── Single placement ──────────────────────────────────────────────


def translate_placement(placement: dict, delta: dict) -> None:
    """Add a position delta to a placement in place."""
    pos = placement["pos"]
    if delta.get("x") is not None:
        pos["x"] += delta["x"]
    if delta.get("y") is not None:
        pos["y"] += delta["y"]


def scale_placement(placement: dict, factor: float) -> None:
    """Scale a placement about its visual center in place."""
    pos = placement["pos"]
    size = placement["size"]

    center_x = pos["x"] + size["w"] / 2
    center_y = pos["y"] + size["h"] / 2

    size["w"] *= factor
    size["h"] *= factor
    if size.get("initW") is not None:
        size["initW"] *= factor
    if size.get("initH") is not None:
        size["initH"] *= factor

    pos["x"] = center_x - size["w"] / 2
    pos["y"] = center_y - size["h"] / 2


# ── Edits ─────────────────────────────────────────────────────────


def apply_layer_edit(
    manifest: dict, edit: dict, warnings: list[str] | None = None,
) -> bool:
    """Apply one edit to every placement of the named layer.

    Mutates *manifest*; callers pass a clone.

    Returns:
        True if a layer was edited, False if it was skipped.
    """
    name = edit["layerName"]
    layer = find_layer(manifest, name)
    if layer is None:
        record_warning(logger, warnings, f"Layer '{name}' not found; edit skipped")
        return False

    delta = edit.get("positionDelta")
    factor = edit.get("scaleFactor")

    for placement in iter_placements(layer):
        if delta:
            translate_placement(placement, delta)
        if factor and factor != 1:
            scale_placement(placement, factor)
    return True


def apply_layer_edits(
    manifest: dict, edits: list[dict], warnings: list[str] | None = None,
) -> dict:
    """Apply a list of edits in order. Returns the same manifest."""
    for edit in edits:
        apply_layer_edit(manifest, edit, warnings)
    return manifest


def edit_applies_to_size(edit: dict, size: str) -> bool:
    """True when an edit targets *size* (no sizes listed means all)."""
    sizes = edit.get("sizes")
    if not sizes:
        return True
    return ALL_SIZES in sizes or size in sizes


def edits_for_size(edits: list[dict], size: str) -> list[dict]:
    return [edit for edit in edits if edit_applies_to_size(edit, size)]


# ── Summaries ─────────────────────────────────────────────────────


def layer_type(layer: dict) -> str:
    if layer.get("isGroup"):
        return "group"
    if layer.get("fileType") == "text":
        return "text"
    if layer.get("fileType") == "svg":
        return "shape"
    return "image"


def layer_summary(manifest: dict) -> list[dict]:
    """Describe each top-level layer by its first placement.

    Child layers of the CTA group (names containing '_cta') are skipped.
    """
    summary = []
    for layer in get_layers(manifest):
        name = str(layer.get("name", ""))
        if "_cta" in name:
            continue
        shots = layer.get("shots") or []
        first = shots[0] if shots else {}
        summary.append({
            "name": name,
            "guid": layer.get("guid"),
            "type": layer_type(layer),
            "pos": first.get("pos") or {"x": 0, "y": 0},
            "size": first.get("size") or {"w": 0, "h": 0},
            "isDynamic": bool(layer.get("isDynamic", False)),
        })
    return summary


def layer_summary_text(manifest: dict) -> str:
    """One line per layer: type, name, rounded position and size."""
    layers = layer_summary(manifest)
    if not layers:
        return "No layers available."

    lines = []
    for layer in layers:
        pos, size = layer["pos"], layer["size"]
        lines.append(
            f"- [{layer['type']}] {layer['name']}: "
            f"pos({round(pos.get('x', 0))}, {round(pos.get('y', 0))}) "
            f"size({round(size.get('w', 0))}x{round(size.get('h', 0))})"
        )
    return "\n".join(lines)
