"""Dynamic value binding — campaign inputs onto manifest input slots.

The runtime reads campaign copy and asset URLs from named slots in
`settings.dynamicValues`. Caller input uses a small, fixed vocabulary of
field names which this module maps onto those slots. Inputs outside the
vocabulary are never mapped onto a slot: the brand palette goes to
`settings.defaults`, and every other string field goes to the
`extraData` side channel, the documented runtime fields first.
"""

import logging

from .common import record_warning
from .manifest import get_settings

logger = logging.getLogger(__name__)


# ── Vocabulary ────────────────────────────────────────────────────

FIELD_TO_SLOT = {
    "headline": "s0_headline",
    "bodyCopy": "s0_bodycopy",
    "ctaText": "s0_ctaText",
    "imageUrl": "s0_imageUrl",
    "logoUrl": "s0_logoUrl",
    "price": "s0_price",
    "label": "s0_label",
    "bgImageUrl": "s0_bgImageUrl",
}

# Fields read directly by the rendering runtime from manifest.extraData.
EXTRA_DATA_KEYS = ("labelColor", "ctaColor", "cta", "bgColor")

COLORS_FIELD = "colors"
COLORS_DEFAULTS_KEY = "colors"
MAX_BRAND_COLORS = 3

# Accepted in the same input mapping, consumed by other steps.
PASSTHROUGH_FIELDS = {"layerModifications", "typography"}


def _has_value(value) -> bool:
    return isinstance(value, str) and value.strip() != ""


def join_colors(colors: list[str]) -> str:
    """Pipe-join the first three brand colors, as the runtime expects."""
    return "|".join(colors[:MAX_BRAND_COLORS])


def bind_dynamic_values(
    manifest: dict, values: dict, warnings: list[str] | None = None,
) -> dict:
    """Apply caller values to a manifest's dynamic value slots.

    Mutates and returns *manifest*; callers pass a clone. Absent or empty
    inputs leave existing slot values untouched, so partial updates work.

    Args:
        manifest: Parsed manifest (already cloned by the caller).
        values: External fields, e.g. {"headline": "Summer Sale",
            "colors": ["#4F46E5"], "ctaColor": "4F46E5"}.
        warnings: Optional list that receives one message per skipped input.

    Returns:
        The same manifest object.
    """
    settings = get_settings(manifest)
    if settings is None:
        record_warning(logger, warnings, "Manifest has no settings block; dynamic values not applied")
        return manifest

    slots = settings.get("dynamicValues") or []
    by_name = {slot.get("name"): slot for slot in slots if isinstance(slot, dict)}

    for field, slot_name in FIELD_TO_SLOT.items():
        value = values.get(field)
        if not _has_value(value):
            continue
        slot = by_name.get(slot_name)
        if slot is None:
            record_warning(
                logger, warnings,
                f"No dynamic value slot '{slot_name}' for field '{field}'; skipped",
            )
            continue
        slot["defaultValue"] = value

    colors = values.get(COLORS_FIELD)
    if colors:
        defaults = settings.setdefault("defaults", {})
        defaults[COLORS_DEFAULTS_KEY] = join_colors(list(colors))

    extra = {key: values[key] for key in EXTRA_DATA_KEYS if _has_value(values.get(key))}

    # Any other field rides along in extraData for the runtime to read.
    known = set(FIELD_TO_SLOT) | set(EXTRA_DATA_KEYS) | PASSTHROUGH_FIELDS | {COLORS_FIELD}
    for field in sorted(set(values) - known):
        value = values[field]
        if _has_value(value):
            extra[field] = value
        elif value is not None and not isinstance(value, str):
            record_warning(
                logger, warnings,
                f"Dynamic value field '{field}' is not a string; ignored",
            )

    if extra:
        manifest.setdefault("extraData", {}).update(extra)

    return manifest
