"""
Read the basic facts about a source image.
"""

import os
from dataclasses import dataclass
from PIL import Image, UnidentifiedImageError

from .errors import InvalidPathError
from .logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageRef:
    """A source image path and its pixel size."""
    path: str
    width: int
    height: int

    @property
    def size(self):
        return self.width, self.height


def read_image_ref(path: str) -> ImageRef:
    """
    Open an image just far enough to learn its dimensions.

    Dimensions are the stored pixel size, which is what ImageMagick operates
    on; EXIF orientation is not applied.

    Args:
        path: Path to the image file

    Returns:
        ImageRef for the file

    Raises:
        InvalidPathError: If the file is missing or is not a readable image
    """
    if not os.path.exists(path):
        raise InvalidPathError(path)
    if not os.path.isfile(path):
        raise InvalidPathError(path, "not a regular file")

    try:
        with Image.open(path) as img:
            width, height = img.size
    except UnidentifiedImageError:
        raise InvalidPathError(path, "not a recognised image format")
    except OSError as e:
        raise InvalidPathError(path, str(e))

    logger.debug(f"Read {path}: {width}x{height}")
    return ImageRef(path=path, width=width, height=height)
