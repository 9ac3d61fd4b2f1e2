"""Mirror an image left to right."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from os import PathLike

from PIL import Image

from astrolens.imaging import ImageLoadError


def flip_horizontally(source: str | PathLike[str], destination: str | PathLike[str]) -> None:
    """Read ``source``, mirror it left to right and write it to ``destination``."""
    try:
        with Image.open(source) as image:
            image.load()
            flipped = image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    except OSError as exc:
        raise ImageLoadError(f"cannot load image from file {source}") from exc
    flipped.save(destination)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Mirror an image left to right.")
    parser.add_argument("source", nargs="?", default="image.jpg")
    parser.add_argument("destination", nargs="?", default="new_image.jpg")
    args = parser.parse_args(argv)
    flip_horizontally(args.source, args.destination)
    return 0