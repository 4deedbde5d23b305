#!/usr/bin/env python3
"""
filters.py

Pixel transforms for 24-bit BMP images:
- Grayscale (channel average)
- Sepia (fixed colour matrix)
- Reflect (horizontal mirror)
- Blur (3x3 box, existing neighbours only)
- Edges (Sobel gradient magnitude, out-of-bounds treated as black)

Every transform takes RGB rows (list of rows, each a list of (r, g, b) tuples)
and rewrites them in place. Nothing is returned.
"""

import logging
import math
from typing import Callable, Dict, Iterator, List, Tuple

logger = logging.getLogger(__name__)

# RGB row type alias
Pixel = Tuple[int, int, int]
RGBRows = List[List[Pixel]]

# Sobel kernels, indexed [dy + 1][dx + 1]
GX = ((-1, 0, 1),
      (-2, 0, 2),
      (-1, 0, 1))
GY = ((-1, -2, -1),
      (0, 0, 0),
      (1, 2, 1))

SEPIA = ((0.393, 0.769, 0.189),
         (0.349, 0.686, 0.168),
         (0.272, 0.534, 0.131))

# ------------------ Utility functions ------------------

def clamp(value: int, low: int = 0, high: int = 255) -> int:
    """Saturating clamp of value into [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value

def round_half_up(x: float) -> int:
    # round() is banker's rounding; every value here is >= 0
    return int(math.floor(x + 0.5))

def snapshot(rgb_rows: RGBRows) -> RGBRows:
    # pixels are tuples, copying the row lists is enough
    return [row[:] for row in rgb_rows]

def neighbours(rgb_rows: RGBRows, y: int, x: int) -> Iterator[Tuple[int, int, Pixel]]:
    """Yield (dy, dx, pixel) for each in-bounds cell of the 3x3 window at (y, x)."""
    height = len(rgb_rows)
    width = len(rgb_rows[0]) if height else 0
    for dy in (-1, 0, 1):
        ny = y + dy
        if ny < 0 or ny >= height:
            continue
        row = rgb_rows[ny]
        for dx in (-1, 0, 1):
            nx = x + dx
            if 0 <= nx < width:
                yield dy, dx, row[nx]

# ------------------ Point transforms ------------------

def grayscale(rgb_rows: RGBRows) -> None:
    """s = round((R + G + B) / 3) on every channel."""
    for row in rgb_rows:
        for x, (r, g, b) in enumerate(row):
            s = clamp(round_half_up((r + g + b) / 3))
            row[x] = (s, s, s)

def sepia(rgb_rows: RGBRows) -> None:
    (rr, rg, rb), (gr, gg, gb), (br, bg, bb) = SEPIA
    for row in rgb_rows:
        for x, (r, g, b) in enumerate(row):
            row[x] = (
                clamp(round_half_up(rr * r + rg * g + rb * b)),
                clamp(round_half_up(gr * r + gg * g + gb * b)),
                clamp(round_half_up(br * r + bg * g + bb * b)),
            )

def reflect(rgb_rows: RGBRows) -> None:
    """Mirror each row left to right."""
    for row in rgb_rows:
        width = len(row)
        for x in range(width // 2):
            row[x], row[width - 1 - x] = row[width - 1 - x], row[x]

# ------------------ Neighbourhood transforms ------------------

def blur(rgb_rows: RGBRows) -> None:
    """3x3 box blur. Missing neighbours are left out of the average."""
    src = snapshot(rgb_rows)
    for y, row in enumerate(rgb_rows):
        for x in range(len(row)):
            tr = tg = tb = 0
            count = 0
            for _, _, (r, g, b) in neighbours(src, y, x):
                tr += r
                tg += g
                tb += b
                count += 1
            row[x] = (
                clamp(round_half_up(tr / count)),
                clamp(round_half_up(tg / count)),
                clamp(round_half_up(tb / count)),
            )

def edges(rgb_rows: RGBRows) -> None:
    """Sobel gradient magnitude per channel. Missing neighbours count as black."""
    src = snapshot(rgb_rows)
    for y, row in enumerate(rgb_rows):
        for x in range(len(row)):
            gx = [0, 0, 0]
            gy = [0, 0, 0]
            # a black neighbour adds nothing, so skipping it is the same
            for dy, dx, pixel in neighbours(src, y, x):
                kx = GX[dy + 1][dx + 1]
                ky = GY[dy + 1][dx + 1]
                for c in range(3):
                    gx[c] += pixel[c] * kx
                    gy[c] += pixel[c] * ky
            row[x] = tuple(
                clamp(round_half_up(math.sqrt(gx[c] ** 2 + gy[c] ** 2)))
                for c in range(3)
            )

# ------------------ Dispatch ------------------

FILTERS: Dict[str, Tuple[str, Callable[[RGBRows], None]]] = {
    "b": ("blur", blur),
    "e": ("edges", edges),
    "g": ("grayscale", grayscale),
    "r": ("reflect", reflect),
    "s": ("sepia", sepia),
}

def apply_filter(flag: str, rgb_rows: RGBRows) -> str:
    """Run the transform registered under flag on rgb_rows; returns its name."""
    name, transform = FILTERS[flag]
    height = len(rgb_rows)
    width = len(rgb_rows[0]) if height else 0
    logger.debug("Applying %s to %dx%d image", name, width, height)
    transform(rgb_rows)
    return name
