"""CLI for brand color ramps.

Usage:
    admanifest palette --color "#4F46E5"
    admanifest palette --color "#4F46E5" --color "#F97316" --css colors.css
    admanifest palette --color "#4F46E5" --swatch palette.png
"""

import argparse
from pathlib import Path

from .colors import build_palette, emit_color_css
from .swatch import render_palette_swatch


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Generate 50–950 ramps and utility CSS for brand colors.",
    )
    parser.add_argument(
        "--color", action="append", required=True,
        help="Brand color as hex; repeat for secondary and accent (max 3)",
    )
    parser.add_argument(
        "--css", default=None,
        help="Write the utility <style> block to this file",
    )
    parser.add_argument(
        "--swatch", default=None,
        help="Write a PNG preview of the ramps to this file",
    )
    parsed = parser.parse_args(args)

    if len(parsed.color) > 3:
        parser.error("At most 3 colors (primary, secondary, accent)")

    try:
        palette = build_palette(parsed.color)
    except ValueError as e:
        parser.error(str(e))

    for role, ramp in palette.items():
        print(f"{role}:")
        for step, shade in ramp.items():
            print(f"  {step:>3}  {shade['hex']}  on {shade['foreground']}")

    if parsed.css:
        Path(parsed.css).parent.mkdir(parents=True, exist_ok=True)
        Path(parsed.css).write_text(emit_color_css(parsed.color) + "\n", encoding="utf-8")
        print(f"\nCSS written to: {parsed.css}")

    if parsed.swatch:
        Path(parsed.swatch).parent.mkdir(parents=True, exist_ok=True)
        render_palette_swatch(parsed.color).save(parsed.swatch)
        print(f"Swatch written to: {parsed.swatch}")


if __name__ == "__main__":
    main()
