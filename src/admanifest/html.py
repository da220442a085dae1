"""HTML rewriting for serving an ad from outside its template folder.

The template's index.html references scripts, images and fonts relative
to its own directory. Once the document is served from somewhere else
(an inline blob, a preview route, a headless browser's setContent) those
references must be absolute. This module rewrites them and performs the
other document injections the runtime needs: the inlined manifest,
the dynamicData overrides, a <base> tag, and generated <style> blocks.

All functions are pure string transforms that only touch patterns they
recognize; anything else in the markup is left as it was.
"""

import json
import re


SRC_TAGS = ("script", "img", "source", "video", "audio", "embed", "iframe")
HREF_TAGS = ("link", "a")

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def _attr_pattern(tags: tuple[str, ...], attr: str) -> re.Pattern:
    names = "|".join(tags)
    return re.compile(
        rf"(?P<prefix><(?:{names})\b[^>]*?\s{attr}\s*=\s*)"
        r"""(?P<quote>["'])(?P<path>[^"'>]*)(?P=quote)""",
        re.IGNORECASE,
    )


_SRC_RE = _attr_pattern(SRC_TAGS, "src")
_HREF_RE = _attr_pattern(HREF_TAGS, "href")
_URL_RE = re.compile(
    r"""url\(\s*(?P<quote>["']?)(?P<path>[^"')]+?)\s*(?P=quote)\s*\)""",
    re.IGNORECASE,
)
_STYLE_ATTR_RE = re.compile(
    r"""(?P<prefix><[a-zA-Z][^>]*?\sstyle\s*=\s*)(?P<value>"[^"]*"|'[^']*')""",
    re.IGNORECASE,
)
_STYLE_BLOCK_RE = re.compile(
    r"(?P<open><style\b[^>]*>)(?P<css>[\s\S]*?)(?P<close></style\s*>)",
    re.IGNORECASE,
)

_MANIFEST_SCRIPT_RE = re.compile(
    r"""<script\s+src\s*=\s*["'](?:\./)?manifest\.js["']\s*>\s*</script>""",
    re.IGNORECASE,
)
_DYNAMIC_DATA_RE = re.compile(r"grid8player\.dynamicData\s*=\s*dynamicData;")
_HEAD_OPEN_RE = re.compile(r"<head(\s[^>]*)?>", re.IGNORECASE)
_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)


# ── Path classification ──────────────────────────────────────────


def is_absolute_path(path: str) -> bool:
    """True for root-relative paths, URIs with a scheme, and #fragments."""
    return path.startswith(("/", "#")) or bool(_SCHEME_RE.match(path))


def absolutize(path: str, base: str) -> str:
    """Prefix a relative path with *base*; absolute paths pass through."""
    if is_absolute_path(path) or path == base or path.startswith(base + "/"):
        return path
    if path.startswith("./"):
        path = path[2:]
    return f"{base}/{path}"


# ── Resource paths ───────────────────────────────────────────────


def rewrite_resource_paths(html: str, base_path: str) -> str:
    """Make relative src/href/url() references absolute under *base_path*.

    Rewrites:
      - src on script, img, source, video, audio, embed, iframe
      - href on link and a (fragment-only and javascript: links untouched)
      - url(...) inside style="..." attributes and <style> blocks;
        scripts, including an inlined manifest, are left alone

    Running it twice gives the same result as running it once.

    Example:
        <script src="./app.js">  with base "/templates/t1/300x600"
        → <script src="/templates/t1/300x600/app.js">
    """
    base = base_path[:-1] if base_path.endswith("/") else base_path

    def _fix_attr(match):
        path = match.group("path")
        if not path.strip():
            return match.group(0)
        quote = match.group("quote")
        return f"{match.group('prefix')}{quote}{absolutize(path, base)}{quote}"

    def _fix_url(match):
        path = match.group("path")
        fixed = absolutize(path, base)
        if fixed == path:
            return match.group(0)
        quote = match.group("quote")
        return f"url({quote}{fixed}{quote})"

    def _fix_style_attr(match):
        value = match.group("value")
        css = _URL_RE.sub(_fix_url, value[1:-1])
        return f"{match.group('prefix')}{value[0]}{css}{value[0]}"

    def _fix_style_block(match):
        css = _URL_RE.sub(_fix_url, match.group("css"))
        return f"{match.group('open')}{css}{match.group('close')}"

    html = _SRC_RE.sub(_fix_attr, html)
    html = _HREF_RE.sub(_fix_attr, html)
    html = _STYLE_ATTR_RE.sub(_fix_style_attr, html)
    html = _STYLE_BLOCK_RE.sub(_fix_style_block, html)
    return html


# ── Document injections ──────────────────────────────────────────


def _script_safe(text: str) -> str:
    # "</" cannot appear inside an inline <script>; "<\/" is the same JS string.
    return text.replace("</", "<\\/")


def inline_manifest_script(html: str, manifest_js: str) -> str:
    """Replace <script src="manifest.js"></script> with the manifest inline."""
    inline = f"<script>{_script_safe(manifest_js)}</script>"
    return _MANIFEST_SCRIPT_RE.sub(lambda _m: inline, html, count=1)


def dynamic_data_script(colors: str | None, extra_data: dict | None) -> str:
    """JS assignments that override the runtime's dynamicData entries."""
    lines = []
    if colors:
        lines.append(f'dynamicData["colors"] = {_script_safe(json.dumps(colors))};')
    for key, value in (extra_data or {}).items():
        lines.append(
            f"dynamicData[{json.dumps(key)}] = {_script_safe(json.dumps(str(value)))};"
        )
    return "\n".join(lines)


def inject_dynamic_data(
    html: str, colors: str | None, extra_data: dict | None = None,
) -> str:
    """Insert dynamicData overrides just before the runtime reads them.

    Args:
        colors: Pipe-joined brand colors ("#111111|#222222"), or None.
        extra_data: Runtime side-channel values (labelColor, ctaColor, …).
    """
    script = dynamic_data_script(colors, extra_data)
    if not script:
        return html
    return _DYNAMIC_DATA_RE.sub(
        lambda m: f"{script}\n      {m.group(0)}", html, count=1,
    )


def inject_base_tag(html: str, href: str) -> str:
    """Insert <base href> as the first element of <head>."""
    tag = f'<base href="{href}">'
    return _HEAD_OPEN_RE.sub(
        lambda m: f"<head{m.group(1) or ''}>\n    {tag}", html, count=1,
    )


def insert_before_head_close(html: str, snippet: str) -> str:
    """Insert *snippet* right before </head> (appended if there is none)."""
    if not snippet:
        return html
    match = _HEAD_CLOSE_RE.search(html)
    if match is None:
        return f"{html}\n{snippet}"
    return f"{html[:match.start()]}{snippet}\n{html[match.start():]}"
