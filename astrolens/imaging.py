"""Images, colours and the radial distortion transforms."""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from PIL import Image

from astrolens.numeric import func, sqr

THRESHOLD = 30

_NO_ALPHA_SUFFIXES = {".jpg", ".jpeg"}


class ImageLoadError(OSError):
    """Raised when an image file cannot be read."""


def _channel(value: float) -> int:
    return min(max(int(value), 0), 255)


@dataclass(frozen=True)
class NumColor:
    """An RGBA colour with arithmetic used for interpolation."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"channel {name} must be an integer in 0..255, got {value!r}")

    def __mul__(self, k: float) -> NumColor:
        """Scale the colour channels, truncating; alpha is kept."""
        return NumColor(_channel(self.r * k), _channel(self.g * k), _channel(self.b * k), self.a)

    __rmul__ = __mul__

    def __add__(self, other: NumColor) -> NumColor:
        """Add channel by channel, saturating at 255 (alpha included)."""
        return NumColor(
            min(self.r + other.r, 255),
            min(self.g + other.g, 255),
            min(self.b + other.b, 255),
            min(self.a + other.a, 255),
        )

    def __sub__(self, other: NumColor) -> int:
        """Distance between colours: sum of absolute RGB differences."""
        return abs(self.r - other.r) + abs(self.g - other.g) + abs(self.b - other.b)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


class SmartImage:
    """An RGBA image with a centre pivot and a table of radial scale factors."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"image size must be non-negative, got {width}x{height}")
        self._adopt(Image.new("RGBA", (width, height), (0, 0, 0, 255)))

    def _adopt(self, image: Image.Image) -> None:
        self._image = image
        self._pixels = image.load()
        width, height = image.size
        self.pivot_x = width // 2
        self.pivot_y = height // 2
        self.the_r = int(math.hypot(self.pivot_x, self.pivot_y))
        self.precalc: list[list[float]] = []

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> SmartImage:
        """Load an image from disk."""
        try:
            with Image.open(path) as source:
                loaded = source.convert("RGBA")
        except OSError as exc:
            raise ImageLoadError(f"cannot load image from file {path}") from exc
        instance = cls(0, 0)
        instance._adopt(loaded)
        return instance

    def save(self, path: str | PathLike[str]) -> None:
        """Write the image; the format follows the file extension."""
        image = self._image
        if Path(path).suffix.lower() in _NO_ALPHA_SUFFIXES:
            image = image.convert("RGB")
        image.save(path)

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def _check_bounds(self, x: int, y: int) -> None:
        width, height = self._image.size
        if not (0 <= x < width and 0 <= y < height):
            raise IndexError(f"pixel ({x}, {y}) is outside a {width}x{height} image")

    def get_pixel(self, x: int, y: int) -> NumColor:
        self._check_bounds(x, y)
        return NumColor(*self._pixels[x, y])

    def set_pixel(self, x: int, y: int, color: NumColor) -> None:
        self._check_bounds(x, y)
        self._pixels[x, y] = color.as_tuple()

    def init_new_r(self, coef: Sequence[float]) -> None:
        """Fill ``precalc[i][j]`` with func(d)/d for d = hypot(i, j)."""
        cols = self.pivot_x + 1
        rows = self.pivot_y + 1
        table = [[0.0] * rows for _ in range(cols)]
        for i in range(1, cols):
            table[i][0] = func(i, coef) / i
            if i < rows:
                table[0][i] = table[i][0]
        for i in range(1, cols):
            for j in range(1, min(i, rows - 1) + 1):
                radius = math.hypot(i, j)
                table[i][j] = func(radius, coef) / radius
                if i < rows and j < cols:
                    table[j][i] = table[i][j]
        self.precalc = table


def interpolation(x: float, y: float, image: SmartImage) -> NumColor:
    """Bilinear sample of ``image`` at a fractional position."""
    x1, x2 = math.floor(x), math.ceil(x)
    y1, y2 = math.floor(y), math.ceil(y)
    if x1 == x2 and y1 == y2:
        return image.get_pixel(int(x), int(y))
    if x1 == x2:
        return image.get_pixel(int(x), y1) * (y2 - y) + image.get_pixel(int(x), y2) * (y - y1)
    if y1 == y2:
        return image.get_pixel(x1, int(y)) * (x2 - x) + image.get_pixel(x2, int(y)) * (x - x1)
    top = image.get_pixel(x1, y1) * (x2 - x) + image.get_pixel(x2, y1) * (x - x1)
    bottom = image.get_pixel(x1, y2) * (x2 - x) + image.get_pixel(x2, y2) * (x - x1)
    return top * ((y2 - y) / (y2 - y1)) + bottom * ((y - y1) / (y2 - y1))


def test_distorce(image: SmartImage, test_color: NumColor) -> float:
    """Score how straight the pixels of ``test_color`` lie; 0 is a perfect line.

    Returns the largest float when fewer than five pixels match.
    """
    width, height = image.size
    coords = [
        (x, y)
        for x in range(width)
        for y in range(height)
        if image.get_pixel(x, y) - test_color < THRESHOLD
    ]
    cnt = len(coords)
    if cnt < 5:
        return sys.float_info.max
    sumx = sum(x for x, _ in coords)
    sumy = sum(y for _, y in coords)
    sumx2 = sum(x * x for x, _ in coords)
    sumxy = sum(x * y for x, y in coords)
    if sumx * sumx // cnt == sumx2:
        return 0.0
    slope = (sumxy - sumx * sumy / cnt) / (sumx2 - sumx * sumx / cnt)
    intercept = (sumy - slope * sumx) / cnt
    residual = sum(sqr(slope * x + intercept - y) for x, y in coords)
    return residual / cnt**1.5


def distorce(image: SmartImage, coef: Sequence[float]) -> SmartImage:
    """Apply the polynomial radial distortion; unmapped pixels stay black."""
    width, height = image.size
    out = SmartImage(width, height)
    out.init_new_r(coef)
    for x in range(width):
        xx = x - image.pivot_x
        scales = out.precalc[abs(xx)]
        for y in range(height):
            yy = y - image.pivot_y
            scale = scales[abs(yy)]
            source_x = image.pivot_x + scale * xx
            source_y = image.pivot_y + scale * yy
            if not (0 <= source_x < width - 1 and 0 <= source_y < height - 1):
                continue
            out.set_pixel(x, y, interpolation(source_x, source_y, image))
    return out


def distorce_dirch(image: SmartImage, f: float, k: float) -> SmartImage:
    """Apply a projection-family distortion with focal length f and parameter k.

    k == 0 is equidistant, k > 0 uses tan, k < 0 uses sin. A focal length of
    zero is derived from the image radius and a quarter-turn field angle.
    """
    width, height = image.size
    theta = math.pi / 4
    if f == 0.0:
        if k == 0.0:
            f = image.the_r / theta
        elif k > 0.0:
            f = image.the_r * k / math.tan(k * theta)
        else:
            f = image.the_r * k / math.sin(k * theta)
            if k < -1:
                f *= abs(k)
    if f == 0.0:
        raise ValueError("focal length is zero")
    out = SmartImage(width, height)
    for x in range(width):
        xx = x - image.pivot_x
        for y in range(height):
            yy = y - image.pivot_y
            dist = math.sqrt(xx * xx + yy * yy)
            alpha = math.atan2(yy, xx)
            phi = dist / f
            if k == 0.0:
                r = f * phi
            elif k < 0.0:
                r = f * math.sin(phi * k) / k
            else:
                r = f * math.tan(phi * k) / k
            source_x = image.pivot_x + r * math.cos(alpha)
            source_y = image.pivot_y + r * math.sin(alpha)
            if not (0 <= source_x < width - 1 and 0 <= source_y < height - 1):
                continue
            out.set_pixel(x, y, interpolation(source_x, source_y, image))
    return out