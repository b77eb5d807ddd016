"""
Command-line interface for the darkroom tool.
"""

import sys
import argparse
from typing import Dict, Optional, List

import pyperclip

from .config import AppConfig, load_config, validate_config
from .errors import DarkroomError
from .editor import PhotoEditor
from .geometry import AspectRatio
from .logging_setup import setup_logging, get_logger
from .operations import Operation
from .social import FilmType, DEFAULT_LAB, DEFAULT_TITLE, build_instagram_caption

logger = get_logger(__name__)

CAPTION_OPTIONS = ("camera", "focal_length", "aperture", "shutter_speed", "iso")


def _ratio_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("width", type=int, help="Aspect ratio width term (e.g. 4)")
    parent.add_argument("height", type=int, help="Aspect ratio height term (e.g. 5)")
    return parent


def _border_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--border-percent",
        type=float,
        help="Border thickness as a percent of the longer side (default: 5)"
    )
    return parent


def _caption_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("--camera", help="Camera name, overrides EXIF")
    parent.add_argument("--focal-length", help="Focal length text (e.g. 50mm), overrides EXIF")
    parent.add_argument("--aperture", help="Aperture text (e.g. f/1.8), overrides EXIF")
    parent.add_argument("--shutter-speed", help="Shutter speed text (e.g. 1/200s), overrides EXIF")
    parent.add_argument("--iso", help="ISO text (e.g. ISO 400), overrides EXIF")
    parent.add_argument(
        "--require-metadata",
        action="store_true",
        help="Fail when no caption field is available instead of skipping the caption"
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with one subcommand per operation.

    Returns:
        Configured parser
    """
    parser = argparse.ArgumentParser(
        prog="darkroom",
        description="Add borders, aspect-ratio fill and EXIF captions to a photo using ImageMagick"
    )

    parser.add_argument("-p", "--path", help="Path to the source image (required for image commands)")
    parser.add_argument("-o", "--output", help="Path of the output image (default: next to the source)")
    parser.add_argument("--config", help="Path to a configuration JSON file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--keep-intermediates",
        action="store_true",
        help="Keep the files written by intermediate steps of composite operations"
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar per step")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    ratio = _ratio_parent()
    border = _border_parent()
    caption = _caption_parent()

    subparsers.add_parser(
        Operation.ADD_BORDER.value, parents=[border],
        help="Add a white border to the image"
    )
    subparsers.add_parser(
        Operation.FILL_TO_ASPECT_RATIO.value, parents=[ratio],
        help="Fill the image with white to fit a given aspect ratio"
    )
    subparsers.add_parser(
        Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER.value, parents=[ratio, border],
        help="Fill to a given aspect ratio and add a white border"
    )
    subparsers.add_parser(
        Operation.ADD_CAPTION.value, parents=[caption],
        help="Add camera, focal length, aperture, shutter speed and ISO below the image"
    )
    subparsers.add_parser(
        Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER_AND_CAPTION.value, parents=[ratio, border, caption],
        help="Fill to a given aspect ratio, add a white border and a caption"
    )

    social = subparsers.add_parser(
        "instagram-caption",
        help="Print Instagram post text for a film photo, optionally copying it to the clipboard"
    )
    social.add_argument("camera", help="Camera used")
    social.add_argument("film", help="Film stock used")
    social.add_argument(
        "film_type", nargs="?", default=FilmType.COLOR.value,
        choices=[t.value for t in FilmType],
        help="Type of film (default: color)"
    )
    social.add_argument("lab", nargs="?", default=DEFAULT_LAB, help=f"Lab used (default: {DEFAULT_LAB})")
    social.add_argument("title", nargs="?", default=DEFAULT_TITLE, help="Title of the post")
    social.add_argument(
        "--copy",
        action="store_true",
        help="Also copy the post text to the clipboard"
    )

    help_parser = subparsers.add_parser("help", help="Show help for darkroom or a subcommand")
    help_parser.add_argument("topic", nargs="?", help="Subcommand to describe")

    parser.set_defaults(subparsers=subparsers)
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments to parse; defaults to sys.argv

    Returns:
        Parsed arguments namespace
    """
    return build_parser().parse_args(argv)


def process_arguments(args: argparse.Namespace, config: AppConfig) -> AppConfig:
    """
    Process command-line arguments and override config values.

    Args:
        args: Parsed arguments
        config: Loaded configuration

    Returns:
        Updated configuration
    """
    if args.debug:
        config.debug_mode = True
    if args.keep_intermediates:
        config.keep_intermediates = True
    if args.progress:
        config.show_progress = True
    if getattr(args, "border_percent", None) is not None:
        config.border_percent = args.border_percent
    if getattr(args, "require_metadata", False):
        config.require_metadata = True

    return validate_config(config)


def caption_overrides(args: argparse.Namespace) -> Dict[str, Optional[str]]:
    """Caption field values given on the command line."""
    return {name: getattr(args, name, None) for name in CAPTION_OPTIONS
            if getattr(args, name, None)}


def show_help(args: argparse.Namespace) -> int:
    topic = getattr(args, "topic", None)
    choices = args.subparsers.choices
    if topic:
        if topic not in choices:
            print(f"Unknown command: {topic}", file=sys.stderr)
            return 1
        choices[topic].print_help()
    else:
        build_parser().print_help()
    return 0


def run_instagram_caption(args: argparse.Namespace) -> int:
    """
    Print the post text and, with --copy, place it on the clipboard.

    Args:
        args: Parsed instagram-caption arguments

    Returns:
        Exit code
    """
    text = build_instagram_caption(
        args.camera, args.film, FilmType(args.film_type), args.lab, args.title
    )
    print(text)
    if args.copy:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.error(f"Could not copy caption to clipboard: {str(e)}")
            return 1
        logger.info("Caption copied to clipboard")
    return 0


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Run the command-line interface.

    Args:
        argv: Arguments to parse; defaults to sys.argv

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None or args.command == "help":
        return show_help(args)

    if args.command == "instagram-caption":
        return run_instagram_caption(args)

    if not args.path:
        parser.error(f"--path is required for {args.command}")

    config = None
    try:
        config = load_config(args.config) if args.config else AppConfig()
        config = process_arguments(args, config)

        setup_logging(config)

        operation = Operation(args.command)
        ratio = AspectRatio(args.width, args.height) if operation.needs_fill else None

        editor = PhotoEditor(config)
        output = editor.run(
            operation,
            args.path,
            ratio=ratio,
            overrides=caption_overrides(args),
            output=args.output,
        )
        print(output)
        return 0

    except (DarkroomError, ValueError, RuntimeError) as e:
        logger.error(f"{args.command} failed: {str(e)}")
        if config is not None and config.debug_mode:
            import traceback
            logger.error(f"Traceback: {traceback.format_exc()}")
        return 1
