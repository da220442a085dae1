"""Custom typography — web font registration and text layer rewiring.

Typography input (one entry per role):
  headerFont / bodyFont:
    fontFamily: str
    fontFileBase64: str | None     # raw font file, base64
    fontUrl: str | None            # hosted font file
    fontFormat: "woff2" | "woff" | "ttf" | "otf" | None
    isSystemFont: bool

System fonts and fonts without data are never registered; they can
still be assigned to layers by family name.
"""

import base64
import binascii
import logging
import re
from io import BytesIO

from PIL import ImageFont

from .common import record_warning
from .manifest import get_layers, get_settings

logger = logging.getLogger(__name__)


# ── Role classification ───────────────────────────────────────────
# Checked in this order; later matches overwrite earlier ones, so a
# CTA layer always ends up with the headline family.

HEADLINE_TAGS = {"maincopy", "headline", "h1", "h2"}
BODY_TAGS = {"subcopy", "body", "p", "desc"}
CTA_TAGS = {"cta", "button"}

TAG_KEYS = ("className", "textStyle")

# ── Font formats ──────────────────────────────────────────────────

CSS_FORMATS = {"ttf": "truetype", "otf": "opentype", "woff": "woff", "woff2": "woff2"}

_MAGIC_FORMATS = [(b"wOF2", "woff2"), (b"wOFF", "woff"), (b"OTTO", "otf")]


def _decode_font_bytes(font: dict) -> bytes | None:
    data = font.get("fontFileBase64")
    if not data:
        return None
    try:
        return base64.b64decode(data)
    except (binascii.Error, ValueError):
        return None


def font_format(font: dict) -> str:
    """Declared font format, else sniffed from the file header, else ttf."""
    declared = font.get("fontFormat")
    if declared:
        return declared
    raw = _decode_font_bytes(font)
    if raw:
        for magic, fmt in _MAGIC_FORMATS:
            if raw.startswith(magic):
                return fmt
    return "ttf"


def font_family_from_bytes(raw: bytes) -> str | None:
    """Read the family name stored in a font file, or None if unreadable."""
    try:
        font = ImageFont.truetype(BytesIO(raw), size=12)
    except (OSError, ValueError):
        return None
    family, _style = font.getname()
    return family or None


def resolve_font_family(font: dict) -> str | None:
    family = font.get("fontFamily")
    if family:
        return family
    raw = _decode_font_bytes(font)
    return font_family_from_bytes(raw) if raw else None


def is_custom_font(font: dict | None) -> bool:
    """True for fonts that carry data and must be registered."""
    if not font or font.get("isSystemFont", False):
        return False
    return bool(font.get("fontFileBase64") or font.get("fontUrl"))


def font_source_url(font: dict) -> str:
    """Hosted URL when given, else a data URI built from the font bytes."""
    if font.get("fontFileBase64"):
        fmt = font_format(font)
        return f"data:font/{fmt};base64,{font['fontFileBase64']}"
    return font["fontUrl"]


# ── Manifest edits ────────────────────────────────────────────────


def register_font(
    manifest: dict, font: dict, warnings: list[str] | None = None,
) -> bool:
    """Add a web font declaration to settings.webFonts.

    Keyed by fontFamily: the first registration of a family wins and
    later ones are ignored.

    Returns:
        True if a new declaration was added.
    """
    if not is_custom_font(font):
        return False

    settings = get_settings(manifest)
    if settings is None:
        record_warning(logger, warnings, "Manifest has no settings block; font not registered")
        return False

    family = resolve_font_family(font)
    if not family:
        record_warning(logger, warnings, "Font has no family name; not registered")
        return False

    web_fonts = settings.setdefault("webFonts", [])
    if any(decl.get("fontFamily") == family for decl in web_fonts):
        return False

    web_fonts.append({
        "fontFamily": family,
        "style": font.get("style", "normal"),
        "url": font_source_url(font),
    })
    return True


def _split_tags(value: str) -> set[str]:
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", value)
    return {tok for tok in re.split(r"[^0-9a-zA-Z]+", value.lower()) if tok}


def layer_tags(layer: dict) -> set[str]:
    """Lower-cased class/style tokens plus the layer name's tokens."""
    tags = _split_tags(str(layer.get("name", "")))
    for key in TAG_KEYS:
        value = layer.get(key)
        if isinstance(value, list):
            value = " ".join(str(v) for v in value)
        if isinstance(value, str):
            tags |= _split_tags(value)
    return tags


def classify_family(
    tags: set[str], headline_family: str | None, body_family: str | None,
) -> str | None:
    family = None
    if headline_family and tags & HEADLINE_TAGS:
        family = headline_family
    if body_family and tags & BODY_TAGS:
        family = body_family
    if headline_family and tags & CTA_TAGS:
        family = headline_family
    return family


def rewire_layers(
    manifest: dict, headline_family: str | None, body_family: str | None,
) -> int:
    """Point text layers at the headline or body family by role.

    Returns:
        Number of layers whose fontFamily changed.
    """
    changed = 0
    for layer in get_layers(manifest):
        if layer.get("fileType") != "text" and "fontFamily" not in layer:
            continue
        family = classify_family(layer_tags(layer), headline_family, body_family)
        if family and layer.get("fontFamily") != family:
            layer["fontFamily"] = family
            changed += 1
    return changed


def apply_typography(
    manifest: dict, typography: dict, warnings: list[str] | None = None,
) -> dict:
    """Register custom fonts and rewire text layers. Returns the manifest."""
    header = typography.get("headerFont")
    body = typography.get("bodyFont") or header

    for font in (header, body):
        if font:
            register_font(manifest, font, warnings)

    header_family = resolve_font_family(header) if header else None
    body_family = resolve_font_family(body) if body else None
    rewire_layers(manifest, header_family, body_family)
    return manifest


# ── CSS ───────────────────────────────────────────────────────────


def font_face_rule(font: dict) -> str:
    family = resolve_font_family(font)
    src = f"url('{font_source_url(font)}')"
    fmt = font_format(font) if font.get("fontFileBase64") else font.get("fontFormat")
    if fmt:
        src += f" format('{CSS_FORMATS.get(fmt, fmt)}')"
    return (
        "@font-face {\n"
        f"  font-family: '{family}';\n"
        f"  src: {src};\n"
        "  font-weight: normal;\n"
        "  font-style: normal;\n"
        "  font-display: swap;\n"
        "}"
    )


def font_css(typography: dict | None, stylesheet_url: str | None = None) -> str:
    """Build the font markup to insert before </head>.

    Inline @font-face rules for custom fonts plus class bindings in one
    <style> block. With *stylesheet_url* the font faces come from that
    stylesheet instead, emitted as a <link>, followed by the bindings.
    """
    if not typography:
        return ""

    header = typography.get("headerFont")
    body = typography.get("bodyFont") or header
    header_family = resolve_font_family(header) if header else None
    body_family = resolve_font_family(body) if body else None

    rules = []
    if stylesheet_url is None:
        seen = set()
        for font in (header, body):
            if is_custom_font(font):
                family = resolve_font_family(font)
                if family and family not in seen:
                    seen.add(family)
                    rules.append(font_face_rule(font))

    if header_family:
        rules.append(
            ".maincopy, .ctaCopy {\n"
            f"  font-family: '{header_family}', sans-serif !important;\n"
            "}"
        )
    if body_family:
        rules.append(
            ".subcopy {\n"
            f"  font-family: '{body_family}', sans-serif !important;\n"
            "}"
        )
    if not rules:
        return ""

    style = "<style>\n" + "\n".join(rules) + "\n</style>"
    if stylesheet_url is not None:
        return f'<link rel="stylesheet" href="{stylesheet_url}">\n{style}'
    return style
