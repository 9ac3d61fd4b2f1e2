"""Objective and constraint functions for fitting distortion coefficients."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from astrolens.imaging import THRESHOLD, NumColor, SmartImage, distorce, test_distorce
from astrolens.numeric import LOWER_LIMIT, NUMCOEF, UPPER_LIMIT, cont_test_sign, func

logger = logging.getLogger(__name__)


def _coef_suffix(x: Sequence[float]) -> str:
    if len(x) < NUMCOEF:
        raise ValueError(f"expected {NUMCOEF} coefficients, got {len(x)}")
    return "".join(f"_{value:g}" for value in x[:NUMCOEF])


def _coef_text(x: Sequence[float]) -> str:
    return " ".join(f"{value:g}" for value in x[:NUMCOEF])


class DistortionTarget:
    """A source image, the colour of its reference line and a cache of distorted copies."""

    def __init__(
        self,
        image: SmartImage,
        test_color: NumColor,
        image_path: str = "image",
        cache_dir: str | PathLike[str] = "out",
    ) -> None:
        self.image = image
        self.test_color = test_color
        self.image_path = image_path
        self.cache_dir = Path(cache_dir)

    @classmethod
    def from_file(
        cls,
        path: str | PathLike[str],
        test_color: NumColor,
        cache_dir: str | PathLike[str] = "out",
    ) -> DistortionTarget:
        """Load the source image from disk; cached copies are named after its stem."""
        return cls(SmartImage.from_file(path), test_color, Path(path).stem, cache_dir)

    def cache_path(self, x: Sequence[float]) -> Path:
        """File in which the image distorted by ``x`` is kept."""
        return self.cache_dir / f"{self.image_path}{_coef_suffix(x)}.png"

    def distorted(self, x: Sequence[float]) -> SmartImage:
        """The image distorted by coefficients ``x``, read from the cache when present."""
        path = self.cache_path(x)
        if path.exists():
            return SmartImage.from_file(path)
        result = distorce(self.image, x)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        result.save(path)
        return result

    def count_matches(self, image: SmartImage) -> int:
        """Number of pixels whose colour is close to the reference colour."""
        width, height = image.size
        return sum(
            1
            for x in range(width)
            for y in range(height)
            if image.get_pixel(x, y) - self.test_color < THRESHOLD
        )


def objective(x: Sequence[float], target: DistortionTarget) -> float:
    """Straightness score of the reference line after distorting by ``x``."""
    result = test_distorce(target.distorted(x), target.test_color)
    logger.info("f(%s) = %s", _coef_text(x), result)
    return result


def count_constraint(x: Sequence[float], target: DistortionTarget) -> float:
    """Matching pixel count after distortion, less the minimum of five."""
    value = target.count_matches(target.distorted(x)) - 5
    logger.info("cntConstr(%s) = %s", _coef_text(x), value)
    return value


def lower_r(x: Sequence[float], target: DistortionTarget) -> float:
    """How far the distorted corner radius lies above its lower limit."""
    the_r = target.image.the_r
    value = func(the_r, x) - LOWER_LIMIT * the_r
    if math.isnan(value):
        logger.warning("lower limit is NaN for x = %s", _coef_text(x))
    logger.info("lowerR constraint(%s) = %s", _coef_text(x), value)
    return value


def upper_r(x: Sequence[float], target: DistortionTarget) -> float:
    """How far the distorted corner radius lies below its upper limit."""
    the_r = target.image.the_r
    value = UPPER_LIMIT * the_r - func(the_r, x)
    if math.isnan(value):
        logger.warning("upper limit is NaN for x = %s", _coef_text(x))
    logger.info("upperR constraint(%s) = %s", _coef_text(x), value)
    return value


def sign_constraint(x: Sequence[float], target: DistortionTarget) -> float:
    """Smallest derivative of the distortion over the image radius."""
    value = cont_test_sign(target.image.the_r, x)
    if math.isnan(value):
        logger.warning("sign constraint is NaN for x = %s", _coef_text(x))
    logger.info("sign constraint(%s) = %s", _coef_text(x), value)
    return value