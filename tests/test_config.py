"""
Tests for configuration loading.
"""
import json
import os
import shutil
import tempfile
import unittest

from darkroom.config import AppConfig, load_config, validate_config


class TestConfig(unittest.TestCase):
    """Test cases for the config module."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.temp_dir, "config.json")

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def write_config(self, data):
        with open(self.config_path, 'w') as f:
            json.dump(data, f)

    def test_defaults(self):
        config = AppConfig()
        self.assertEqual(config.magick_binary, "magick")
        self.assertEqual(config.border_percent, 5.0)
        self.assertFalse(config.require_metadata)

    def test_load_config(self):
        self.write_config({"border_color": "black", "border_percent": 3, "log_level": "debug"})

        config = load_config(self.config_path)

        self.assertEqual(config.border_color, "black")
        self.assertEqual(config.border_percent, 3)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.fill_color, "white")

    def test_unknown_field(self):
        self.write_config({"border_colour": "black"})
        with self.assertRaises(ValueError):
            load_config(self.config_path)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            validate_config(AppConfig(log_level="LOUD"))
        with self.assertRaises(ValueError):
            validate_config(AppConfig(border_percent=-2))

    def test_not_an_object(self):
        self.write_config(["border_color"])
        with self.assertRaises(ValueError):
            load_config(self.config_path)

    def test_missing_file(self):
        with self.assertRaises(RuntimeError):
            load_config(os.path.join(self.temp_dir, "missing.json"))

    def test_malformed_json(self):
        with open(self.config_path, 'w') as f:
            f.write("{not json")
        with self.assertRaises(RuntimeError):
            load_config(self.config_path)


if __name__ == '__main__':
    unittest.main()
