"""
Canvas geometry: aspect-ratio padding and border sizes.
"""

from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidRatioError


@dataclass(frozen=True)
class AspectRatio:
    """A width:height ratio of two positive integers."""
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidRatioError(self.width, self.height)

    def __str__(self):
        return f"{self.width}:{self.height}"


@dataclass(frozen=True)
class Padding:
    """Pixels added on each side of the image."""
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0

    def is_zero(self) -> bool:
        return not (self.top or self.bottom or self.left or self.right)


def _split(total: int) -> Tuple[int, int]:
    # Odd pixel goes to the second side (bottom/right)
    first = total // 2
    return first, total - first


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def compute_padding(width: int, height: int, ratio: AspectRatio) -> Padding:
    """
    Compute the padding that brings an image to the target aspect ratio.

    Only one axis is ever padded: top/bottom when the image is wider than the
    target, left/right when it is taller. The padded side length is rounded
    up, so the result never crops and is off by less than one pixel.

    Args:
        width: Current image width in pixels
        height: Current image height in pixels
        ratio: Target aspect ratio

    Returns:
        Padding for each side

    Raises:
        InvalidRatioError: If a ratio term is not positive
    """
    if ratio.width <= 0 or ratio.height <= 0:
        raise InvalidRatioError(ratio.width, ratio.height)
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    current = width * ratio.height
    target = height * ratio.width

    if current > target:
        new_height = _ceil_div(width * ratio.height, ratio.width)
        top, bottom = _split(new_height - height)
        return Padding(top=top, bottom=bottom)
    if current < target:
        new_width = _ceil_div(height * ratio.width, ratio.height)
        left, right = _split(new_width - width)
        return Padding(left=left, right=right)
    return Padding()


def padded_size(width: int, height: int, padding: Padding) -> Tuple[int, int]:
    """Canvas size after padding has been applied."""
    return (width + padding.left + padding.right,
            height + padding.top + padding.bottom)


def border_width(width: int, height: int, percent: float) -> int:
    """
    Uniform border thickness in pixels for a canvas.

    Args:
        width: Canvas width the border is added around
        height: Canvas height the border is added around
        percent: Border thickness as a percentage of the longer side

    Returns:
        Border width in pixels, at least 1 when percent is positive
    """
    if percent < 0:
        raise ValueError(f"Border percent must not be negative, got {percent}")
    if percent == 0:
        return 0
    return max(1, int(round(max(width, height) * percent / 100.0)))
