"""
preview.py

Display helpers for the BMP viewer that do not need a Tk root:
RGB rows to Pillow images, channel histograms, histogram thumbnails.
"""

from io import BytesIO
from typing import List, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

RGBRows = List[List[Tuple[int, int, int]]]

# ==== Conversions ====
def rows_to_pil(rgb_rows: RGBRows) -> Image.Image:
    height = len(rgb_rows)
    width = len(rgb_rows[0]) if height else 0
    arr = np.array(rgb_rows, dtype=np.uint8).reshape((height, width, 3))
    return Image.fromarray(arr)

# ==== Histograms ====
def compute_rgb_histograms(rgb_rows: RGBRows):
    rhist = [0]*256
    ghist = [0]*256
    bhist = [0]*256
    for row in rgb_rows:
        for (r,g,b) in row:
            rhist[r] += 1
            ghist[g] += 1
            bhist[b] += 1
    return rhist, ghist, bhist

def plot_histogram_image(hist, color="gray", width=128, height=128) -> Image.Image:
    fig, ax = plt.subplots(figsize=(width/100, height/100), dpi=100)
    ax.bar(range(256), hist, color=color)
    ax.set_xlim(0,255)
    ax.set_ylim(0, max(hist)*1.1 if any(hist) else 1)
    ax.axis('off')
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
    buf = BytesIO()
    fig.savefig(buf, format='png')
    plt.close(fig)
    buf.seek(0)
    img = Image.open(buf)
    img.load()
    return img
