"""
Extract caption fields from a photo's EXIF metadata.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from .errors import InvalidPathError
from .logging_setup import get_logger

logger = get_logger(__name__)

# Base IFD tags
TAG_MAKE = 0x010F
TAG_MODEL = 0x0110
TAG_EXIF_IFD = 0x8769

# Exif sub-IFD tags
TAG_EXPOSURE_TIME = 0x829A
TAG_F_NUMBER = 0x829D
TAG_ISO = 0x8827
TAG_FOCAL_LENGTH = 0x920A


@dataclass(frozen=True)
class CaptionFields:
    """Display-ready capture settings; any field may be missing."""
    camera: Optional[str] = None
    focal_length: Optional[str] = None
    aperture: Optional[str] = None
    shutter_speed: Optional[str] = None
    iso: Optional[str] = None

    def values(self):
        """Field values in caption order."""
        return [getattr(self, f.name) for f in fields(self)]

    def is_empty(self) -> bool:
        return not any(clean_text(v) for v in self.values())

    def merged(self, overrides: Optional[Dict[str, Optional[str]]]) -> 'CaptionFields':
        """Return a copy where every non-empty override replaces the EXIF value."""
        if not overrides:
            return self
        names = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in names and clean_text(v)}
        return replace(self, **changes)


def clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    text = str(value).replace("\x00", "").strip()
    return text or None


def _rational_to_float(x: Any) -> Optional[float]:
    """Numeric value of a tag, or None when it is missing or not finite.

    Pillow reads a 0/0 rational as NaN, which counts as missing.
    """
    if x is None:
        return None
    if isinstance(x, (list, tuple)):
        if len(x) == 2:
            num, den = x
            if not den:
                return None
            try:
                x = float(num) / float(den)
            except (TypeError, ValueError):
                return None
        elif len(x) == 1:
            x = x[0]
        else:
            return None
    try:
        result = float(x)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    return result if math.isfinite(result) else None


def _number(value: float) -> str:
    """50.0 -> '50', 1.8 -> '1.8'."""
    rounded = round(value, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.1f}"


def format_camera(make: Any, model: Any) -> Optional[str]:
    make = clean_text(make)
    model = clean_text(model)
    if make and model:
        if model.lower().startswith(make.lower()):
            return model
        return f"{make} {model}"
    return model or make


def format_focal_length(value: Any) -> Optional[str]:
    focal = _rational_to_float(value)
    if focal is None or focal <= 0:
        return None
    return f"{_number(focal)}mm"


def format_aperture(value: Any) -> Optional[str]:
    f_number = _rational_to_float(value)
    if f_number is None or f_number <= 0:
        return None
    return f"f/{_number(f_number)}"


def format_shutter_speed(value: Any) -> Optional[str]:
    """
    Render an exposure time in seconds the way cameras display it.

    Sub-second exposures become a reciprocal (0.005 -> '1/200s').
    """
    seconds = _rational_to_float(value)
    if seconds is None or seconds <= 0:
        return None
    if seconds < 1:
        return f"1/{int(round(1 / seconds))}s"
    return f"{_number(seconds)}s"


def format_iso(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    speed = _rational_to_float(value)
    if speed is None or speed <= 0:
        return None
    return f"ISO {int(round(speed))}"


def caption_fields_from_tags(tags: Dict[int, Any]) -> CaptionFields:
    """
    Build caption fields from a flat mapping of EXIF tag id to raw value.

    Args:
        tags: Base IFD and Exif sub-IFD tags merged into one dictionary

    Returns:
        CaptionFields with every value that could be rendered
    """
    return CaptionFields(
        camera=format_camera(tags.get(TAG_MAKE), tags.get(TAG_MODEL)),
        focal_length=format_focal_length(tags.get(TAG_FOCAL_LENGTH)),
        aperture=format_aperture(tags.get(TAG_F_NUMBER)),
        shutter_speed=format_shutter_speed(tags.get(TAG_EXPOSURE_TIME)),
        iso=format_iso(tags.get(TAG_ISO)),
    )


def read_caption_fields(path: str) -> CaptionFields:
    """
    Read the capture settings embedded in an image.

    Missing metadata is not an error here; the result simply has empty fields.

    Args:
        path: Path to the image file

    Returns:
        CaptionFields read from EXIF

    Raises:
        InvalidPathError: If the file cannot be opened as an image
    """
    try:
        with Image.open(path) as img:
            exif = img.getexif()
            tags: Dict[int, Any] = dict(exif)
            tags.update(exif.get_ifd(TAG_EXIF_IFD))
    except FileNotFoundError:
        raise InvalidPathError(path)
    except UnidentifiedImageError:
        raise InvalidPathError(path, "not a recognised image format")
    except OSError as e:
        raise InvalidPathError(path, str(e))

    caption_fields = caption_fields_from_tags(tags)
    if caption_fields.is_empty():
        logger.debug(f"No caption metadata found in {path}")
    else:
        logger.debug(f"Caption metadata for {path}: {caption_fields}")
    return caption_fields
