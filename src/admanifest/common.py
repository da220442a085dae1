"""admanifest.common — shared utilities for manifest transformation.

Contains: hex color parsing, path variable resolution, and the warning
helper used by the non-fatal editors.
"""

import logging
import re


HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# ── Color utilities ────────────────────────────────────────────────

def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB', 'RRGGBB' or '#RGB' to an (R, G, B) tuple."""
    match = HEX_RE.match(hex_str.strip())
    if not match:
        raise ValueError(f"Invalid hex color: '{hex_str}'")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def format_hex_color(rgb: tuple[int, int, int]) -> str:
    """Convert an (R, G, B) tuple to an upper-case '#RRGGBB' string."""
    r, g, b = (max(0, min(255, int(round(c)))) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


# ── Path utilities ─────────────────────────────────────────────────

def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return paths[key]
    return re.sub(r"\$\{(\w+)\}", _replace, text)


# ── Warnings ───────────────────────────────────────────────────────

def record_warning(
    logger: logging.Logger, warnings: list[str] | None, message: str,
) -> None:
    """Log a skipped edit and append it to the caller's warning list."""
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
