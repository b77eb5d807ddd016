"""
Exceptions raised while editing a photo.
"""

from typing import List, Optional


class DarkroomError(Exception):
    """Base class for all errors surfaced to the command line."""


class InvalidPathError(DarkroomError):
    """The source image is missing or cannot be read."""

    def __init__(self, path: str, reason: str = "file not found"):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read image {path}: {reason}")


class InvalidRatioError(DarkroomError, ValueError):
    """An aspect ratio term is zero or negative."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Invalid aspect ratio {width}:{height}, both terms must be positive")


class MetadataUnavailableError(DarkroomError):
    """A caption was required but the image carries no usable metadata."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No caption metadata available for {path}")


class ExternalToolError(DarkroomError):
    """The external image tool exited non-zero or could not be started."""

    def __init__(self, args: List[str], returncode: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        self.args_list = list(args)
        self.returncode = returncode
        self.cause = cause
        program = args[0] if args else "<empty command>"
        if cause is not None:
            message = f"Failed to run {program}: {cause}"
        else:
            message = f"{program} exited with status {returncode}"
        super().__init__(message)
