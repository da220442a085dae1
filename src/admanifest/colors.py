"""Brand color ramps and the utility CSS generated from them.

Each brand color becomes an 11-step tint/shade ramp (50 … 950). Step 500
is the brand color itself; every other step keeps the color's hue and
saturation and takes its lightness from a fixed table. Foreground colors
for each step are picked by WCAG relative luminance.
"""

import colorsys

from .common import format_hex_color, parse_hex_color


# ── Constants ────────────────────────────────────────────────────

# Target HSL lightness per step. None = the input color unchanged.
SHADE_LIGHTNESS = {
    50: 0.97,
    100: 0.94,
    200: 0.86,
    300: 0.76,
    400: 0.64,
    500: None,
    600: 0.42,
    700: 0.34,
    800: 0.26,
    900: 0.18,
    950: 0.10,
}

SHADE_STEPS = tuple(SHADE_LIGHTNESS)

ROLES = ("primary", "secondary", "accent")

LUMINANCE_THRESHOLD = 0.179
LIGHT_FOREGROUND = "#FFFFFF"
DARK_FOREGROUND = "#111827"

SVG_SHAPE_CHILDREN = ("path", "rect", "circle", "ellipse", "polygon", "polyline")


# ── Color math ───────────────────────────────────────────────────


def hex_to_hsl(hex_str: str) -> tuple[float, float, float]:
    """Return (hue, saturation, lightness), each in 0..1."""
    r, g, b = parse_hex_color(hex_str)
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return h, s, l


def hsl_to_hex(h: float, s: float, l: float) -> str:
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return format_hex_color((r * 255, g * 255, b * 255))


def lightness(hex_str: str) -> float:
    return hex_to_hsl(hex_str)[2]


def relative_luminance(hex_str: str) -> float:
    """WCAG 2 relative luminance of an sRGB color."""
    def _linear(channel: int) -> float:
        c = channel / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = parse_hex_color(hex_str)
    return 0.2126 * _linear(r) + 0.7152 * _linear(g) + 0.0722 * _linear(b)


def foreground_for(hex_str: str) -> str:
    """Light text on dark backgrounds, dark text on light ones."""
    if relative_luminance(hex_str) < LUMINANCE_THRESHOLD:
        return LIGHT_FOREGROUND
    return DARK_FOREGROUND


# ── Ramps ────────────────────────────────────────────────────────


def generate_ramp(hex_str: str) -> dict[int, str]:
    """Build the 50…950 ramp for one brand color.

    Step 500 is the input exactly as given, with a leading '#' added
    when it was left off; generated steps are upper-case '#RRGGBB'.

    Raises:
        ValueError: Not a hex color.
    """
    base = hex_str.strip()
    if not base.startswith("#"):
        base = f"#{base}"
    h, s, _l = hex_to_hsl(base)

    ramp = {}
    for step, target in SHADE_LIGHTNESS.items():
        ramp[step] = base if target is None else hsl_to_hex(h, s, target)
    return ramp


def build_palette(colors: list[str]) -> dict[str, dict[int, dict]]:
    """Ramps for up to three brand colors, keyed by role.

    Returns:
        {role: {step: {"hex": "#RRGGBB", "foreground": "#RRGGBB"}}}
    """
    palette = {}
    for role, color in zip(ROLES, colors):
        palette[role] = {
            step: {"hex": shade, "foreground": foreground_for(shade)}
            for step, shade in generate_ramp(color).items()
        }
    return palette


# ── CSS ──────────────────────────────────────────────────────────


def emit_color_css(colors: list[str]) -> str:
    """Generate utility CSS for the brand palette as a <style> block.

    Per role and step:
      .bg-<role>-<step>        background-color
      .fill-<role>-<step>      fill, on the element and its SVG shapes
      .text-on-<role>-<step>   readable foreground for that background
    plus --color-<role>-<step> custom properties on :root.
    Output depends only on *colors*.
    """
    palette = build_palette(colors)
    if not palette:
        return ""

    variables = []
    rules = []
    for role, ramp in palette.items():
        for step, shade in ramp.items():
            name = f"{role}-{step}"
            variables.append(f"  --color-{name}: {shade['hex']};")
            fill_selectors = ", ".join(
                [f".fill-{name}"] + [f".fill-{name} {child}" for child in SVG_SHAPE_CHILDREN]
            )
            rules.append(f".bg-{name} {{ background-color: {shade['hex']}; }}")
            rules.append(f"{fill_selectors} {{ fill: {shade['hex']}; }}")
            rules.append(f".text-on-{name} {{ color: {shade['foreground']}; }}")

    lines = ["<style>", ":root {", *variables, "}", *rules, "</style>"]
    return "\n".join(lines)
