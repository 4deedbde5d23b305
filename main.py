#!/usr/bin/env python3
"""
main.py — command-line front end

Usage: python main.py [-b|-e|-g|-r|-s] infile outfile

Exit status:
    1 invalid or missing filter flag
    2 more than one filter flag
    3 wrong number of file arguments
    4 infile could not be opened
    5 outfile could not be created
    6 infile is not a 24-bit uncompressed BMP
"""

import getopt
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bmpdecoder import BMPError, decode_bmp, encode_bmp
from filters import FILTERS, apply_filter

logger = logging.getLogger(__name__)

USAGE = "Usage: ./filter [flag] infile outfile"

EXIT_OK = 0
EXIT_INVALID_FILTER = 1
EXIT_MULTIPLE_FILTERS = 2
EXIT_USAGE = 3
EXIT_OPEN_INFILE = 4
EXIT_CREATE_OUTFILE = 5
EXIT_UNSUPPORTED = 6


def filter_before(argv: List[str], bad_opt: str) -> bool:
    """True if a filter flag appears in argv ahead of the option getopt rejected."""
    for arg in argv:
        if arg == "--":
            break
        if not arg.startswith("-") or arg.startswith("--") or arg == "-":
            continue
        for ch in arg[1:]:
            if ch == bad_opt:
                return False
            if ch in FILTERS:
                return True
    return False


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    try:
        opts, args = getopt.gnu_getopt(argv, "".join(FILTERS) + "v", ["verbose"])
    except getopt.GetoptError as e:
        logger.debug("getopt: %s", e)
        # a bad option after a good filter counts as a second filter
        if filter_before(argv, e.opt):
            print("Only one filter allowed.", file=sys.stderr)
            return EXIT_MULTIPLE_FILTERS
        print("Invalid filter.", file=sys.stderr)
        return EXIT_INVALID_FILTER

    verbose = any(o in ("-v", "--verbose") for o, _ in opts)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    # Ensure exactly one filter
    flags = [o[1:] for o, _ in opts if o[1:] in FILTERS]
    if not flags:
        print("Invalid filter.", file=sys.stderr)
        return EXIT_INVALID_FILTER
    if len(flags) > 1:
        print("Only one filter allowed.", file=sys.stderr)
        return EXIT_MULTIPLE_FILTERS

    if len(args) != 2:
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE
    infile, outfile = Path(args[0]), Path(args[1])

    try:
        rgb_rows, bmp = decode_bmp(infile)
    except BMPError as e:
        logger.debug("%s: %s", infile, e)
        print("Unsupported file format.", file=sys.stderr)
        return EXIT_UNSUPPORTED
    except OSError as e:
        logger.debug("%s: %s", infile, e)
        print(f"Could not open {infile}.", file=sys.stderr)
        return EXIT_OPEN_INFILE

    name = apply_filter(flags[0], rgb_rows)

    try:
        encode_bmp(outfile, rgb_rows, bmp)
    except OSError as e:
        logger.debug("%s: %s", outfile, e)
        print(f"Could not create {outfile}.", file=sys.stderr)
        return EXIT_CREATE_OUTFILE

    logger.info("Wrote %s (%s, %dx%d)", outfile, name, bmp.width, bmp.height)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
