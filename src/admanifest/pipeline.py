"""Per-size transformation pipeline.

Takes one template size (manifest.js text + index.html text) and a job,
and produces everything needed to serve that size:

  1. Parse the manifest and clone it (never mutate the canonical copy).
  2. Bind dynamic values, apply layer edits for this size, apply typography.
  3. Inline the manifest, inject dynamicData overrides, absolutize paths,
     optionally add a <base> tag, and insert font + color CSS.
  4. Reconstruct the animation timeline from the finished manifest.

No file or network I/O happens here; see cli.py for that.
"""

from .binder import bind_dynamic_values, join_colors
from .colors import emit_color_css
from .html import (
    inject_base_tag,
    inject_dynamic_data,
    inline_manifest_script,
    insert_before_head_close,
    rewrite_resource_paths,
)
from .layers import apply_layer_edits, edits_for_size
from .manifest import clone_manifest, parse_manifest, serialize_manifest
from .timeline import timeline_summary
from .typography import apply_typography, font_css


def size_base_path(base_path: str, size: str) -> str:
    return f"{base_path.rstrip('/')}/{size}"


def transform_manifest(
    canonical: dict, job: dict, size: str, warnings: list[str] | None = None,
) -> dict:
    """Apply the job's manifest edits for one size to a clone of *canonical*."""
    manifest = clone_manifest(canonical)
    values = job.get("values") or {}

    bind_dynamic_values(manifest, values, warnings)
    apply_layer_edits(manifest, edits_for_size(job.get("layer_edits") or [], size), warnings)

    typography = job.get("typography")
    if typography:
        apply_typography(manifest, typography, warnings)
    return manifest


def build_css(job: dict) -> str:
    """Font markup followed by the brand color utilities."""
    colors = (job.get("values") or {}).get("colors") or []
    blocks = [
        font_css(job.get("typography"), job.get("font_stylesheet_url")),
        emit_color_css(colors),
    ]
    return "\n".join(block for block in blocks if block)


def build_html(html: str, manifest: dict, job: dict, size: str) -> str:
    """Produce the servable index.html for one size."""
    colors = (job.get("values") or {}).get("colors") or []
    base_path = size_base_path(job["template"]["base_path"], size)

    html = inline_manifest_script(html, serialize_manifest(manifest))
    html = inject_dynamic_data(
        html, join_colors(colors) if colors else None, manifest.get("extraData"),
    )
    html = rewrite_resource_paths(html, base_path)

    origin = job.get("base_origin")
    if origin:
        html = inject_base_tag(html, f"{origin.rstrip('/')}{base_path}/")

    return insert_before_head_close(html, build_css(job))


def transform_size(manifest_text: str, html: str, job: dict, size: str) -> dict:
    """Run the full transformation for one output size.

    Args:
        manifest_text: Contents of <size>/manifest.js.
        html: Contents of <size>/index.html.
        job: Normalized job dict (see job.load_job).
        size: Output size, e.g. "300x250".

    Returns:
        {"size", "manifest", "manifest_js", "html", "css", "timeline",
         "warnings"}

    Raises:
        ParseError: manifest_text is not a valid manifest.
    """
    warnings = []
    manifest = transform_manifest(parse_manifest(manifest_text), job, size, warnings)

    return {
        "size": size,
        "manifest": manifest,
        "manifest_js": serialize_manifest(manifest),
        "html": build_html(html, manifest, job, size),
        "css": build_css(job),
        "timeline": timeline_summary(manifest),
        "warnings": warnings,
    }
