"""Unit tests for configuration loading."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from chatwords.config import (
    CONFIG_ENV,
    Config,
    ConfigNotFound,
    InvalidConfig,
    load_config,
    parse_config,
    resolve_config_path,
)


class TestConfig(unittest.TestCase):
    """Test config file discovery and parsing."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = Path(self.tmp.name)

        env = mock.patch.dict(os.environ, {}, clear=False)
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop(CONFIG_ENV, None)

        config_dir = mock.patch(
            "chatwords.config.user_config_dir", return_value=str(self.dir / "user")
        )
        config_dir.start()
        self.addCleanup(config_dir.stop)

    def write(self, name: str, content: str) -> Path:
        path = self.dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def test_defaults_without_file(self):
        """Test that a missing default config file gives defaults."""
        config = load_config()
        self.assertEqual(Config(), config)
        self.assertEqual("table", config.format)
        self.assertIsNone(config.take)
        self.assertIsNone(config.path)

    def test_default_location(self):
        """Test loading config.toml from the user config dir."""
        path = self.write("user/config.toml", '[output]\nformat = "plain"\n')
        config = load_config()
        self.assertEqual("plain", config.format)
        self.assertEqual(path, config.path)

    def test_explicit_path(self):
        """Test loading an explicitly given config file."""
        path = self.write("custom.toml", '[output]\nformat = "json"\ntake = 2\n')
        config = load_config(str(path))
        self.assertEqual("json", config.format)
        self.assertEqual(2, config.take)

    def test_explicit_path_missing(self):
        """Test that a missing explicit config file raises."""
        with self.assertRaises(ConfigNotFound):
            load_config(str(self.dir / "missing.toml"))

    def test_env_path(self):
        """Test that the environment variable picks the config file."""
        path = self.write("env.toml", "[output]\ntake = 0\n")
        os.environ[CONFIG_ENV] = str(path)
        self.assertEqual((path, True), resolve_config_path())
        self.assertEqual(0, load_config().take)

    def test_env_path_missing(self):
        """Test that a missing config file named by the environment raises."""
        os.environ[CONFIG_ENV] = str(self.dir / "missing.toml")
        with self.assertRaises(ConfigNotFound):
            load_config()

    def test_explicit_beats_env(self):
        """Test that the command-line path wins over the environment."""
        os.environ[CONFIG_ENV] = str(self.dir / "env.toml")
        path, required = resolve_config_path(str(self.dir / "cli.toml"))
        self.assertEqual(self.dir / "cli.toml", path)
        self.assertTrue(required)

    def test_invalid_toml(self):
        """Test that unparsable TOML raises InvalidConfig."""
        path = self.write("bad.toml", "[output]\nformat = json\n")
        with self.assertRaises(InvalidConfig):
            load_config(str(path))

    def test_unknown_section(self):
        """Test that unknown sections are rejected."""
        with self.assertRaises(InvalidConfig):
            parse_config({"player": {"volume": 10}})

    def test_section_not_a_table(self):
        """Test that a section must be a table."""
        with self.assertRaises(InvalidConfig):
            parse_config({"output": "json"})

    def test_unknown_key(self):
        """Test that unknown keys are rejected."""
        with self.assertRaisesRegex(InvalidConfig, "output.colour"):
            parse_config({"output": {"colour": True}})

    def test_invalid_format(self):
        """Test that unknown output formats are rejected."""
        with self.assertRaises(InvalidConfig):
            parse_config({"output": {"format": "yaml"}})

    def test_invalid_take(self):
        """Test that take must be a non-negative integer."""
        for value in [-1, "3", True, 1.5]:
            with self.assertRaises(InvalidConfig):
                parse_config({"output": {"take": value}})

    def test_empty_config(self):
        """Test that an empty config gives defaults."""
        self.assertEqual(Config(), parse_config({}))


if __name__ == "__main__":
    unittest.main()
