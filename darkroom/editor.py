"""
Apply an edit to one photo end to end.
"""

import os
import shutil
from typing import Dict, List, Optional

from tqdm import tqdm

from .caption import format_caption
from .commands import CommandBuilder, MagickStep, OUTPUT_SUFFIXES, EFFECT_CAPTION, derived_path
from .config import AppConfig
from .errors import InvalidPathError, MetadataUnavailableError
from .executor import ProcessExecutor
from .geometry import AspectRatio
from .image_info import ImageRef, read_image_ref
from .logging_setup import get_logger
from .metadata import read_caption_fields
from .operations import Operation

logger = get_logger(__name__)


class PhotoEditor:
    """Read a photo, plan the ImageMagick steps for an operation and run them."""

    def __init__(self, config: AppConfig, executor: Optional[ProcessExecutor] = None):
        """
        Initialize the editor.

        Args:
            config: Application configuration
            executor: Command runner; a ProcessExecutor is created if omitted
        """
        self.config = config
        self.executor = executor or ProcessExecutor(config)
        self.builder = CommandBuilder(config)

    def caption_for(self, image: ImageRef,
                    overrides: Optional[Dict[str, Optional[str]]] = None) -> str:
        """
        Build the caption text for an image.

        Args:
            image: Source image
            overrides: Field values that replace what EXIF provides

        Returns:
            Caption text, possibly empty

        Raises:
            MetadataUnavailableError: If nothing is available and metadata is required
        """
        fields = read_caption_fields(image.path).merged(overrides)
        caption = format_caption(fields, self.config.caption_delimiter)
        if not caption:
            if self.config.require_metadata:
                raise MetadataUnavailableError(image.path)
            logger.warning(f"No caption metadata for {image.path}, caption skipped")
        return caption

    def plan(self, operation: Operation, path: str, ratio: Optional[AspectRatio] = None,
             overrides: Optional[Dict[str, Optional[str]]] = None,
             output: Optional[str] = None) -> List[MagickStep]:
        """Read the image and build its steps without running anything."""
        image = read_image_ref(path)
        caption = self.caption_for(image, overrides) if operation.needs_caption else ""
        return self.builder.build(operation, image, ratio=ratio, caption=caption, output=output)

    def run(self, operation: Operation, path: str, ratio: Optional[AspectRatio] = None,
            overrides: Optional[Dict[str, Optional[str]]] = None,
            output: Optional[str] = None) -> str:
        """
        Perform an operation on a photo.

        Steps run one after another; each waits for the previous process to
        exit. Intermediate files are removed afterwards, and also when a step
        fails.

        Args:
            operation: Requested edit
            path: Source image path
            ratio: Target aspect ratio for filling operations
            overrides: Caption field overrides
            output: Final output path; derived from the source if None

        Returns:
            Path of the written output file

        Raises:
            DarkroomError: On invalid input or external tool failure
        """
        logger.info(f"{operation.value}: {path}")
        steps = self.plan(operation, path, ratio=ratio, overrides=overrides, output=output)

        if not steps:
            # Only an empty caption gets here
            target = output or derived_path(path, OUTPUT_SUFFIXES[EFFECT_CAPTION])
            return self._copy_source(path, target)

        written: List[str] = []
        try:
            for step in tqdm(steps, desc=operation.value, unit="step",
                             disable=not self.config.show_progress):
                self.executor.run(step.args)
                written.append(step.output)
                logger.debug(f"{step.effect} wrote {step.output}")
        finally:
            final = steps[-1].output
            if not self.config.keep_intermediates:
                self._remove_intermediates([p for p in written if p != final], path)

        logger.info(f"Wrote {final}")
        return final

    def _copy_source(self, path: str, target: str) -> str:
        if os.path.abspath(target) == os.path.abspath(path):
            logger.info(f"Nothing to draw, {path} left unchanged")
            return target
        try:
            shutil.copyfile(path, target)
        except OSError as e:
            raise InvalidPathError(target, f"cannot write output: {str(e)}")
        logger.info(f"Nothing to draw, copied source to {target}")
        return target

    def _remove_intermediates(self, paths: List[str], source: str) -> None:
        for intermediate in paths:
            if intermediate == source or not os.path.exists(intermediate):
                continue
            try:
                os.remove(intermediate)
                logger.debug(f"Removed intermediate file {intermediate}")
            except OSError as e:
                logger.warning(f"Could not remove intermediate file {intermediate}: {str(e)}")
