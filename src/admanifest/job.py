"""Job file loader — one transformation request described in YAML.

Job schema:
  paths:
    templates: "/srv/templates"
    fonts: "/srv/fonts"
  template:
    dir: "${templates}/template000"        # holds <size>/manifest.js + index.html
    base_path: "/templates/template000"    # URL prefix, <size> appended
  sizes: ["300x600", "300x250"]            # default: every size dir found
  values:
    headline: "Summer Sale"
    colors: ["#4F46E5", "#F97316"]
    ctaColor: "4F46E5"
  typography:
    headerFont:
      fontFamily: "Brand Sans"
      fontFile: "${fonts}/BrandSans.woff2"  # read and base64-encoded here
      isSystemFont: false
    bodyFont:
      fontFamily: "Georgia"
      isSystemFont: true
  layer_edits:
    - layerName: logo
      positionDelta: {y: -10}
      scaleFactor: 1.2
      sizes: ["300x600"]
  font_stylesheet_url: null
  base_origin: null                         # e.g. "https://cdn.example.com"
"""

import base64
import re
from pathlib import Path

import yaml

from .common import HEX_RE, resolve_path_vars


SIZE_RE = re.compile(r"^\d+x\d+$")

VALID_FONT_FORMATS = {"woff2", "woff", "ttf", "otf"}

FONT_ROLES = ("headerFont", "bodyFont")

MAX_COLORS = 3


def load_job(job_path: str | Path) -> dict:
    """Load, validate, and normalize a transformation job.

    Processing pipeline:
      1. Parse YAML.
      2. Resolve ${path} variables in template.dir, template.base_path
         and font file paths.
      3. Validate sizes, values, typography, and layer edits.
      4. Read referenced font files into base64.

    Args:
        job_path: Path to the YAML job file.

    Returns:
        Normalized job dict.

    Raises:
        ValueError: Missing/invalid fields.
        FileNotFoundError: Missing job file or font file.
    """
    with open(job_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Job: top level must be a mapping")

    paths = raw.get("paths", {}) or {}

    template = raw.get("template")
    if not isinstance(template, dict):
        raise ValueError("Job: missing required 'template' section")
    for key in ("dir", "base_path"):
        if not isinstance(template.get(key), str) or not template[key].strip():
            raise ValueError(f"Job: template.{key} is required")

    job = {
        "template": {
            "dir": resolve_path_vars(template["dir"], paths),
            "base_path": resolve_path_vars(template["base_path"], paths),
        },
        "sizes": _validate_sizes(raw.get("sizes")),
        "values": _validate_values(raw.get("values") or {}),
        "typography": _load_typography(raw.get("typography"), paths),
        "layer_edits": [
            _validate_layer_edit(edit, i)
            for i, edit in enumerate(raw.get("layer_edits") or [])
        ],
        "font_stylesheet_url": _optional_str(raw, "font_stylesheet_url"),
        "base_origin": _optional_str(raw, "base_origin"),
    }
    return job


def _optional_str(raw: dict, key: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Job: '{key}' must be a string")
    return value


def _validate_sizes(sizes) -> list[str] | None:
    if sizes is None:
        return None
    if not isinstance(sizes, list):
        raise ValueError("Job: 'sizes' must be a list")
    for i, size in enumerate(sizes):
        if not isinstance(size, str) or not SIZE_RE.match(size):
            raise ValueError(
                f"Job: sizes[{i}] must look like '300x250', got {size!r}"
            )
    return sizes


def _validate_values(values) -> dict:
    if not isinstance(values, dict):
        raise ValueError("Job: 'values' must be a mapping")

    for key, value in values.items():
        if key == "colors":
            continue
        if key in ("layerModifications", "typography"):
            raise ValueError(
                f"Job: values.{key} is not supported; use the top-level "
                f"'{'layer_edits' if key == 'layerModifications' else 'typography'}' section"
            )
        if value is not None and not isinstance(value, (str, int, float)):
            raise ValueError(f"Job: values.{key} must be a string, got {value!r}")

    normalized = {k: str(v) if isinstance(v, (int, float)) else v for k, v in values.items()}

    colors = values.get("colors")
    if colors is not None:
        if not isinstance(colors, list):
            raise ValueError("Job: values.colors must be a list of hex colors")
        if len(colors) > MAX_COLORS:
            raise ValueError(
                f"Job: values.colors accepts at most {MAX_COLORS} colors, got {len(colors)}"
            )
        for i, color in enumerate(colors):
            if not isinstance(color, str) or not HEX_RE.match(color):
                raise ValueError(f"Job: values.colors[{i}] is not a hex color: {color!r}")
        normalized["colors"] = colors

    return normalized


def _load_typography(typography, paths: dict) -> dict | None:
    if typography is None:
        return None
    if not isinstance(typography, dict):
        raise ValueError("Job: 'typography' must be a mapping")

    result = {}
    for role in FONT_ROLES:
        font = typography.get(role)
        if font is None:
            continue
        prefix = f"Job: typography.{role}"
        if not isinstance(font, dict):
            raise ValueError(f"{prefix} must be a mapping")

        font = dict(font)
        font.setdefault("isSystemFont", False)
        if not isinstance(font["isSystemFont"], bool):
            raise ValueError(f"{prefix}.isSystemFont must be true or false")

        fmt = font.get("fontFormat")
        if fmt is not None and fmt not in VALID_FONT_FORMATS:
            raise ValueError(
                f"{prefix}: invalid fontFormat '{fmt}'. "
                f"Valid: {sorted(VALID_FONT_FORMATS)}"
            )

        font_file = font.pop("fontFile", None)
        if font_file is not None:
            font_path = Path(resolve_path_vars(str(font_file), paths))
            if not font_path.exists():
                raise FileNotFoundError(f"{prefix}: font file not found: {font_path}")
            font["fontFileBase64"] = base64.b64encode(font_path.read_bytes()).decode("ascii")
            suffix = font_path.suffix.lstrip(".").lower()
            if fmt is None and suffix in VALID_FONT_FORMATS:
                font["fontFormat"] = suffix

        if not font.get("fontFamily") and not font.get("fontFileBase64"):
            raise ValueError(f"{prefix}: needs 'fontFamily' or a font file")

        result[role] = font

    return result or None


def _validate_layer_edit(edit, index: int) -> dict:
    prefix = f"Job: layer_edits[{index}]"
    if not isinstance(edit, dict):
        raise ValueError(f"{prefix} must be a mapping")

    name = edit.get("layerName")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"{prefix}: missing required field 'layerName'")

    delta = edit.get("positionDelta")
    if delta is not None:
        if not isinstance(delta, dict):
            raise ValueError(f"{prefix}: 'positionDelta' must be a mapping")
        for axis, value in delta.items():
            if axis not in ("x", "y"):
                raise ValueError(f"{prefix}: positionDelta has unknown axis '{axis}'")
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{prefix}: positionDelta.{axis} must be a number")

    factor = edit.get("scaleFactor")
    if factor is not None:
        if not isinstance(factor, (int, float)) or isinstance(factor, bool) or factor <= 0:
            raise ValueError(
                f"{prefix}: scaleFactor must be a positive number, got {factor!r}"
            )

    sizes = edit.get("sizes")
    if sizes is not None:
        if not isinstance(sizes, list) or not all(isinstance(s, str) for s in sizes):
            raise ValueError(f"{prefix}: 'sizes' must be a list of strings")

    return edit
