"""
Run external image tool commands.
"""

import subprocess
from typing import List

from .config import AppConfig
from .errors import ExternalToolError
from .logging_setup import get_logger

logger = get_logger(__name__)


class ProcessExecutor:
    """Run one command line at a time and wait for it to finish."""

    def __init__(self, config: AppConfig):
        """
        Initialize the executor.

        Args:
            config: Application configuration
        """
        self.config = config

    def run(self, args: List[str]) -> subprocess.CompletedProcess:
        """
        Run a command to completion.

        The tool's own output is logged but never interpreted; any failure is
        reported as a single ExternalToolError.

        Args:
            args: Full argument list, program first

        Returns:
            The completed process

        Raises:
            ExternalToolError: If the program cannot be started or exits non-zero
        """
        logger.debug(f"Running: {subprocess.list2cmdline(args)}")
        try:
            result = subprocess.run(args, capture_output=True, text=True)
        except OSError as e:
            logger.error(f"Could not start {args[0] if args else 'command'}: {str(e)}")
            raise ExternalToolError(args, cause=e)

        if result.stdout:
            logger.debug(f"stdout: {result.stdout.strip()}")
        if result.stderr:
            logger.debug(f"stderr: {result.stderr.strip()}")

        if result.returncode != 0:
            logger.error(f"{args[0]} exited with status {result.returncode}")
            raise ExternalToolError(args, returncode=result.returncode)

        return result

    def check_available(self) -> bool:
        """Return True if the configured ImageMagick binary can be run."""
        try:
            self.run([self.config.magick_binary, "-version"])
            return True
        except ExternalToolError:
            return False
