"""
Render capture settings into a single caption line.
"""

from .metadata import CaptionFields, clean_text

DEFAULT_DELIMITER = " · "


def format_caption(caption_fields: CaptionFields, delimiter: str = DEFAULT_DELIMITER) -> str:
    """
    Join the available fields in camera, focal length, aperture, shutter
    speed, ISO order.

    Args:
        caption_fields: Fields to render
        delimiter: Text placed between fields

    Returns:
        Caption text, or an empty string when no field is available
    """
    segments = [text for text in (clean_text(v) for v in caption_fields.values()) if text]
    return delimiter.join(segments)
