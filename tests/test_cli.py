"""
Tests for the command-line interface.
"""
import io
import json
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

import pyperclip
from PIL import Image

from darkroom.cli import caption_overrides, parse_arguments, process_arguments, run_cli
from darkroom.config import AppConfig
from darkroom.errors import ExternalToolError
from darkroom.geometry import AspectRatio
from darkroom.operations import Operation


class TestCli(unittest.TestCase):
    """Test cases for run_cli and argument handling."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.image_path = os.path.join(self.temp_dir, "photo.jpg")
        Image.new('RGB', (60, 40), color='white').save(self.image_path)

        self.editor_patch = patch('darkroom.cli.PhotoEditor')
        self.mock_editor_class = self.editor_patch.start()
        self.mock_editor = self.mock_editor_class.return_value
        self.mock_editor.run.return_value = os.path.join(self.temp_dir, "photo-border.jpg")

    def tearDown(self):
        self.editor_patch.stop()
        shutil.rmtree(self.temp_dir)

    def run_quiet(self, argv):
        with redirect_stdout(io.StringIO()) as out:
            code = run_cli(argv)
        return code, out.getvalue()

    def test_add_border(self):
        code, out = self.run_quiet(["--path", self.image_path, "add-border"])

        self.assertEqual(code, 0)
        self.assertIn("photo-border.jpg", out)
        self.mock_editor.run.assert_called_once_with(
            Operation.ADD_BORDER, self.image_path, ratio=None, overrides={}, output=None
        )

    def test_fill_with_border_and_caption(self):
        code, _ = self.run_quiet([
            "--path", self.image_path, "--output", "out.jpg",
            "fill-to-aspect-ratio-with-border-and-caption", "4", "5",
            "--camera", "Leica M6", "--iso", "ISO 400", "--border-percent", "3",
        ])

        self.assertEqual(code, 0)
        config = self.mock_editor_class.call_args[0][0]
        self.assertEqual(config.border_percent, 3)
        self.mock_editor.run.assert_called_once_with(
            Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER_AND_CAPTION,
            self.image_path,
            ratio=AspectRatio(4, 5),
            overrides={"camera": "Leica M6", "iso": "ISO 400"},
            output="out.jpg",
        )

    def test_invalid_ratio(self):
        code, _ = self.run_quiet(["--path", self.image_path, "fill-to-aspect-ratio", "0", "5"])
        self.assertEqual(code, 1)
        self.mock_editor.run.assert_not_called()

    def test_missing_path_is_usage_error(self):
        with patch('sys.stderr', new_callable=io.StringIO) as err:
            with self.assertRaises(SystemExit) as ctx:
                self.run_quiet(["add-border"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("--path is required", err.getvalue())
        self.mock_editor.run.assert_not_called()

    def test_same_input_and_output_without_metadata(self):
        """With no caption metadata, writing over the source is a no-op, not a crash."""
        self.editor_patch.stop()
        try:
            code, out = self.run_quiet(["--path", self.image_path, "--output", self.image_path,
                                        "add-caption"])
        finally:
            self.editor_patch.start()
        self.assertEqual(code, 0)
        self.assertIn(self.image_path, out)

    def test_editor_failure(self):
        self.mock_editor.run.side_effect = ExternalToolError(["magick"], returncode=1)
        code, _ = self.run_quiet(["--path", self.image_path, "add-border"])
        self.assertEqual(code, 1)

    def test_config_file(self):
        config_path = os.path.join(self.temp_dir, "config.json")
        with open(config_path, 'w') as f:
            json.dump({"border_color": "black"}, f)

        code, _ = self.run_quiet(["--path", self.image_path, "--config", config_path, "add-border"])

        self.assertEqual(code, 0)
        self.assertEqual(self.mock_editor_class.call_args[0][0].border_color, "black")

    def test_bad_config_file(self):
        code, _ = self.run_quiet(["--path", self.image_path, "--config",
                                  os.path.join(self.temp_dir, "none.json"), "add-border"])
        self.assertEqual(code, 1)

    def test_help(self):
        code, out = self.run_quiet(["help"])
        self.assertEqual(code, 0)
        self.assertIn("fill-to-aspect-ratio-with-border-and-caption", out)

    def test_help_topic(self):
        code, out = self.run_quiet(["help", "add-caption"])
        self.assertEqual(code, 0)
        self.assertIn("--shutter-speed", out)

    def test_help_unknown_topic(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            code, _ = self.run_quiet(["help", "crop"])
        self.assertEqual(code, 1)

    def test_instagram_caption(self):
        code, out = self.run_quiet(["instagram-caption", "Nikon FM2", "Kodak Gold 200",
                                    "color", "@lab", "Title"])
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("Title\n"))
        self.assertIn("#KodakGold200", out)
        self.mock_editor_class.assert_not_called()

    @patch('darkroom.cli.pyperclip.copy')
    def test_instagram_caption_copy(self, mock_copy):
        code, out = self.run_quiet(["instagram-caption", "Nikon FM2", "Kodak Gold 200", "--copy"])
        self.assertEqual(code, 0)
        mock_copy.assert_called_once_with(out.rstrip("\n"))

    @patch('darkroom.cli.pyperclip.copy')
    def test_instagram_caption_without_copy(self, mock_copy):
        code, _ = self.run_quiet(["instagram-caption", "Nikon FM2", "Kodak Gold 200"])
        self.assertEqual(code, 0)
        mock_copy.assert_not_called()

    @patch('darkroom.cli.pyperclip.copy')
    def test_instagram_caption_copy_failure(self, mock_copy):
        mock_copy.side_effect = pyperclip.PyperclipException("no clipboard")
        code, out = self.run_quiet(["instagram-caption", "Nikon FM2", "Kodak Gold 200", "--copy"])
        self.assertEqual(code, 1)
        self.assertIn("#KodakGold200", out)

    def test_process_arguments(self):
        args = parse_arguments(["--path", "x.jpg", "--debug", "--keep-intermediates",
                                "--progress", "add-caption", "--require-metadata"])
        config = process_arguments(args, AppConfig())
        self.assertTrue(config.debug_mode)
        self.assertTrue(config.keep_intermediates)
        self.assertTrue(config.show_progress)
        self.assertTrue(config.require_metadata)

    def test_caption_overrides_only_given_values(self):
        args = parse_arguments(["--path", "x.jpg", "add-caption", "--aperture", "f/8"])
        self.assertEqual(caption_overrides(args), {"aperture": "f/8"})


if __name__ == '__main__':
    unittest.main()
