"""
Build ImageMagick command lines for an edit.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .config import AppConfig
from .geometry import AspectRatio, Padding, border_width, compute_padding, padded_size
from .image_info import ImageRef
from .logging_setup import get_logger
from .operations import Operation

logger = get_logger(__name__)

EFFECT_FILL = "fill"
EFFECT_BORDER = "border"
EFFECT_CAPTION = "caption"

# Suffix appended to the file stem by each effect
OUTPUT_SUFFIXES = {
    EFFECT_FILL: "filled",
    EFFECT_BORDER: "border",
    EFFECT_CAPTION: "captioned",
}


@dataclass
class MagickStep:
    """One external tool invocation and the file it writes."""
    effect: str
    args: List[str] = field(default_factory=list)
    output: str = ""


def derived_path(path: str, suffix: str) -> str:
    """photo.jpg -> photo-{suffix}.jpg in the same directory."""
    stem, ext = os.path.splitext(path)
    return f"{stem}-{suffix}{ext}"


def escape_label_text(text: str) -> str:
    """
    Make caption text safe for an ImageMagick label: argument.

    A leading '@' would make ImageMagick read a file and '%' starts a format
    escape, so both are escaped to render literally.
    """
    text = text.replace("%", "%%")
    if text.startswith("@"):
        text = "\\" + text
    return text


class CommandBuilder:
    """Translate an operation into an ordered list of ImageMagick steps."""

    def __init__(self, config: AppConfig):
        """
        Initialize the command builder.

        Args:
            config: Application configuration
        """
        self.config = config

    def fill_args(self, source: str, target: str, width: int, height: int,
                  padding: Padding) -> List[str]:
        """Extend the canvas to width x height with the source placed at (left, top)."""
        new_width, new_height = padded_size(width, height, padding)
        return [
            self.config.magick_binary, source,
            "-background", self.config.fill_color,
            "-gravity", "NorthWest",
            "-extent", f"{new_width}x{new_height}-{padding.left}-{padding.top}",
            target,
        ]

    def border_args(self, source: str, target: str, border: int) -> List[str]:
        return [
            self.config.magick_binary, source,
            "-bordercolor", self.config.border_color,
            "-border", f"{border}x{border}",
            target,
        ]

    def caption_args(self, source: str, target: str, width: int, caption: str,
                     overlap: int = 0) -> List[str]:
        """
        Append a text label below the image.

        The label box is a third of the canvas width wide and a tenth tall,
        centered horizontally. A positive overlap pulls the label up into
        the bottom border by that many pixels.
        """
        args = [
            self.config.magick_binary, source,
            "-background", self.config.caption_background,
            "-fill", self.config.caption_color,
        ]
        if self.config.caption_font:
            args += ["-font", self.config.caption_font]
        args += [
            "-kerning", str(self.config.caption_kerning),
            "-interline-spacing", str(self.config.caption_interline_spacing),
            "-gravity", "Center",
            "-size", f"{max(1, width // 3)}x{max(1, width // 10)}",
            f"label:{escape_label_text(caption)}",
            "-smush", str(-overlap),
            target,
        ]
        return args

    def build(self, operation: Operation, image: ImageRef,
              ratio: Optional[AspectRatio] = None, caption: str = "",
              output: Optional[str] = None) -> List[MagickStep]:
        """
        Build the steps that realize an operation.

        Effects are chained fill, border, caption. Each effect is sized from
        the canvas the previous effect produced, not from the source image.

        Args:
            operation: Requested edit
            image: Source image
            ratio: Target aspect ratio, required when the operation fills
            caption: Caption text; an empty caption adds no step
            output: Path for the final file; derived from the source if None

        Returns:
            Steps in execution order

        Raises:
            ValueError: If the operation fills but no ratio was given
        """
        if operation.needs_fill and ratio is None:
            raise ValueError(f"{operation.value} requires a target aspect ratio")

        steps: List[MagickStep] = []
        source = image.path
        width, height = image.width, image.height
        border = 0

        if operation.needs_fill:
            padding = compute_padding(width, height, ratio)
            target = derived_path(source, OUTPUT_SUFFIXES[EFFECT_FILL])
            steps.append(MagickStep(EFFECT_FILL,
                                    self.fill_args(source, target, width, height, padding),
                                    target))
            logger.debug(f"Fill to {ratio}: {padding}")
            width, height = padded_size(width, height, padding)
            source = target

        if operation.needs_border:
            border = border_width(width, height, self.config.border_percent)
            target = derived_path(source, OUTPUT_SUFFIXES[EFFECT_BORDER])
            steps.append(MagickStep(EFFECT_BORDER,
                                    self.border_args(source, target, border),
                                    target))
            logger.debug(f"Border of {border}px around {width}x{height}")
            width, height = width + 2 * border, height + 2 * border
            source = target

        if operation.needs_caption and caption:
            target = derived_path(source, OUTPUT_SUFFIXES[EFFECT_CAPTION])
            steps.append(MagickStep(EFFECT_CAPTION,
                                    self.caption_args(source, target, width, caption, overlap=border),
                                    target))
            logger.debug(f"Caption '{caption}' on {width}x{height} canvas")

        if steps and output:
            last = steps[-1]
            last.args[-1] = output
            last.output = output

        return steps

