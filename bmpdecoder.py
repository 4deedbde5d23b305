#!/usr/bin/env python3
"""
bmpdecoder.py — Manual 24-bit BMP decoder/encoder (no Pillow)

Reads:
- BITMAPFILEHEADER (type tag, file size, pixel-data offset)
- BITMAPINFOHEADER (dimensions, bit depth, compression, resolution)
- Padded BGR scanlines
Returns:
    rgb_rows (list[list[tuple[int,int,int]]]), BitmapFile (both headers)

Only uncompressed 24-bit BMP 4.0 style files (54-byte header) are accepted.
"""

from __future__ import annotations
import logging
import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Tuple

logger = logging.getLogger(__name__)

RGBRows = List[List[Tuple[int, int, int]]]

# 14-byte BITMAPFILEHEADER and 40-byte BITMAPINFOHEADER (little-endian, packed)
FILE_HEADER_FMT = "<2sIHHI"
INFO_HEADER_FMT = "<IiiHHIIiiII"
FILE_HEADER_SIZE = struct.calcsize(FILE_HEADER_FMT)
INFO_HEADER_SIZE = struct.calcsize(INFO_HEADER_FMT)

BMP_MAGIC = b"BM"
BI_RGB = 0


class BMPError(Exception):
    """Base class for BMP read/write failures."""


class BMPFormatError(BMPError):
    """File is truncated or not laid out like a BMP."""


class UnsupportedFormatError(BMPFormatError):
    """File is a BMP, but not a 24-bit uncompressed one."""


@dataclass
class BitmapFileHeader:
    type: bytes
    size: int
    reserved1: int
    reserved2: int
    off_bits: int

    @classmethod
    def unpack(cls, data: bytes) -> "BitmapFileHeader":
        if len(data) != FILE_HEADER_SIZE:
            raise BMPFormatError("Incomplete BMP file header")
        return cls(*struct.unpack(FILE_HEADER_FMT, data))

    def pack(self) -> bytes:
        return struct.pack(FILE_HEADER_FMT, self.type, self.size,
                           self.reserved1, self.reserved2, self.off_bits)


@dataclass
class BitmapInfoHeader:
    size: int
    width: int
    height: int
    planes: int
    bit_count: int
    compression: int
    size_image: int
    x_pels_per_meter: int
    y_pels_per_meter: int
    clr_used: int
    clr_important: int

    @classmethod
    def unpack(cls, data: bytes) -> "BitmapInfoHeader":
        if len(data) != INFO_HEADER_SIZE:
            raise BMPFormatError("Incomplete BMP info header")
        return cls(*struct.unpack(INFO_HEADER_FMT, data))

    def pack(self) -> bytes:
        return struct.pack(INFO_HEADER_FMT, self.size, self.width, self.height,
                           self.planes, self.bit_count, self.compression,
                           self.size_image, self.x_pels_per_meter,
                           self.y_pels_per_meter, self.clr_used, self.clr_important)


@dataclass
class BitmapFile:
    """Both headers of a decoded file, written back unchanged by the encoder."""
    file_header: BitmapFileHeader
    info_header: BitmapInfoHeader

    @property
    def width(self) -> int:
        return self.info_header.width

    @property
    def height(self) -> int:
        return abs(self.info_header.height)

    @property
    def top_down(self) -> bool:
        return self.info_header.height < 0


def row_padding(width: int) -> int:
    """Filler bytes after each scanline so its length is a multiple of 4."""
    return (4 - (width * 3) % 4) % 4


def read_bmp_headers(fp: BinaryIO) -> BitmapFile:
    bf = BitmapFileHeader.unpack(fp.read(FILE_HEADER_SIZE))
    bi = BitmapInfoHeader.unpack(fp.read(INFO_HEADER_SIZE))
    return BitmapFile(bf, bi)


def validate_headers(bmp: BitmapFile) -> None:
    """Ensure the file is (likely) a 24-bit uncompressed BMP 4.0."""
    bf, bi = bmp.file_header, bmp.info_header
    if bf.type != BMP_MAGIC:
        raise UnsupportedFormatError(f"Bad type tag {bf.type!r}")
    if bf.off_bits != FILE_HEADER_SIZE + INFO_HEADER_SIZE:
        raise UnsupportedFormatError(f"Unexpected pixel data offset {bf.off_bits}")
    if bi.size != INFO_HEADER_SIZE:
        raise UnsupportedFormatError(f"Unexpected info header size {bi.size}")
    if bi.bit_count != 24:
        raise UnsupportedFormatError(f"Unsupported bit depth {bi.bit_count}")
    if bi.compression != BI_RGB:
        raise UnsupportedFormatError(f"Compressed data (compression={bi.compression})")
    if bi.width < 0:
        raise UnsupportedFormatError(f"Negative width {bi.width}")


def read_scanlines(fp: BinaryIO, width: int, height: int) -> RGBRows:
    """Read height padded BGR scanlines into RGB rows."""
    padding = row_padding(width)
    row_bytes = width * 3
    rgb_rows = []
    for y in range(height):
        line = fp.read(row_bytes)
        if len(line) != row_bytes:
            raise BMPFormatError(f"Truncated pixel data at row {y}")
        rgb_rows.append([(line[i + 2], line[i + 1], line[i])
                         for i in range(0, row_bytes, 3)])
        fp.seek(padding, os.SEEK_CUR)
    return rgb_rows


def write_scanlines(fp: BinaryIO, rgb_rows: RGBRows) -> None:
    for row in rgb_rows:
        line = bytearray()
        for (r, g, b) in row:
            line += bytes((b, g, r))
        line += b"\x00" * row_padding(len(row))
        fp.write(line)


def decode_bmp(path: Path) -> Tuple[RGBRows, BitmapFile]:
    """Decode a 24-bit BMP. Rows are returned in file order."""
    with open(path, "rb") as fp:
        bmp = read_bmp_headers(fp)
        validate_headers(bmp)
        fp.seek(bmp.file_header.off_bits)
        rgb_rows = read_scanlines(fp, bmp.width, bmp.height)
    logger.debug("Decoded %s: %dx%d", path, bmp.width, bmp.height)
    return rgb_rows, bmp


def encode_bmp(path: Path, rgb_rows: RGBRows, bmp: BitmapFile) -> None:
    """Write the original headers unchanged followed by the padded pixel rows."""
    with open(path, "wb") as fp:
        fp.write(bmp.file_header.pack())
        fp.write(bmp.info_header.pack())
        write_scanlines(fp, rgb_rows)
    logger.debug("Encoded %s: %d rows", path, len(rgb_rows))


def header_info(path: Path, bmp: BitmapFile) -> dict:
    bf, bi = bmp.file_header, bmp.info_header
    path = Path(path)
    return {
        "Filename": os.path.basename(path),
        "File Size": f"{path.stat().st_size} bytes",
        "Type": bf.type.decode("latin-1"),
        "Declared Size": f"{bf.size} bytes",
        "Pixel Offset": bf.off_bits,
        "Header Size": bi.size,
        "Image Dimensions": f"{bmp.width} × {bmp.height}",
        "Row Order": "top-down" if bmp.top_down else "bottom-up",
        "Planes": bi.planes,
        "Bits per Pixel": bi.bit_count,
        "Compression": bi.compression,
        "Image Size": bi.size_image,
        "X px/m": bi.x_pels_per_meter,
        "Y px/m": bi.y_pels_per_meter,
        "Row Padding": f"{row_padding(bmp.width)} bytes",
    }


if __name__ == "__main__":
    import sys
    if len(sys.argv) < 2:
        print("Usage: python bmpdecoder.py <file.bmp>")
    else:
        p = Path(sys.argv[1])
        rows, bmp = decode_bmp(p)
        for k, v in header_info(p, bmp).items():
            print(f"{k}: {v}")
