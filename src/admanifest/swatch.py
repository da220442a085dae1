"""Palette swatch rendering — a PNG preview of the generated color ramps.

One row per brand role, one cell per step (50 … 950). Each cell is
filled with the shade and labeled with its step number in the shade's
foreground color, so the contrast choice can be checked by eye.
"""

from PIL import Image, ImageDraw, ImageFont

from .colors import build_palette
from .common import parse_hex_color


SWATCH_CELL_W = 72
SWATCH_CELL_H = 48
SWATCH_LABEL_W = 96
SWATCH_PADDING = 6
SWATCH_BACKGROUND = (255, 255, 255)
SWATCH_LABEL_COLOR = (17, 24, 39)


def render_palette_swatch(colors: list[str]) -> Image.Image:
    """Render the ramps for up to three brand colors.

    Returns:
        RGB Pillow image, (label + 11 cells) wide and one row per role.

    Raises:
        ValueError: No colors given, or a color is not hex.
    """
    palette = build_palette(colors)
    if not palette:
        raise ValueError("At least one color is required to render a swatch")

    steps = len(next(iter(palette.values())))
    width = SWATCH_LABEL_W + steps * SWATCH_CELL_W
    height = len(palette) * SWATCH_CELL_H
    img = Image.new("RGB", (width, height), SWATCH_BACKGROUND)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    for row, (role, ramp) in enumerate(palette.items()):
        top = row * SWATCH_CELL_H
        draw.text(
            (SWATCH_PADDING, top + SWATCH_PADDING), role,
            fill=SWATCH_LABEL_COLOR, font=font,
        )
        for col, (step, shade) in enumerate(ramp.items()):
            left = SWATCH_LABEL_W + col * SWATCH_CELL_W
            draw.rectangle(
                [left, top, left + SWATCH_CELL_W - 1, top + SWATCH_CELL_H - 1],
                fill=parse_hex_color(shade["hex"]),
            )
            draw.text(
                (left + SWATCH_PADDING, top + SWATCH_PADDING), str(step),
                fill=parse_hex_color(shade["foreground"]), font=font,
            )

    return img
