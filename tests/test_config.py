from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from linesearch.config import Config, load_config, validate_config


class ConfigTests(unittest.TestCase):
    def test_loads_toml_sections(self) -> None:
        toml = """
[search]
workers = 3
collect = "buffer"
follow_symlinks = true
encoding = "latin-1"

[output]
line_numbers = true
summary = true
"""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "linesearch.toml"
            path.write_text(toml, encoding="utf-8")
            config = load_config(str(path))

        self.assertEqual(config.search.workers, 3)
        self.assertEqual(config.search.collect, "buffer")
        self.assertTrue(config.search.follow_symlinks)
        self.assertEqual(config.search.encoding, "latin-1")
        self.assertTrue(config.output.line_numbers)
        self.assertTrue(config.output.summary)
        self.assertEqual(validate_config(config), [])

    def test_missing_explicit_config_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                load_config(str(Path(tmp) / "nope.toml"))

    def test_defaults(self) -> None:
        config = Config()
        self.assertIsNone(config.search.workers)
        self.assertEqual(config.search.collect, "stream")
        self.assertFalse(config.search.follow_symlinks)
        self.assertFalse(config.output.line_numbers)

    def test_validates_workers(self) -> None:
        config = Config()
        config.search.workers = 0

        errors = validate_config(config)
        self.assertTrue(any("workers" in error for error in errors))

    def test_validates_collect_strategy(self) -> None:
        config = Config()
        config.search.collect = "sorted"  # type: ignore[assignment]

        errors = validate_config(config)
        self.assertTrue(any("collect" in error for error in errors))

    def test_validates_encoding(self) -> None:
        config = Config()
        config.search.encoding = "no-such-codec"

        errors = validate_config(config)
        self.assertTrue(any("encoding" in error for error in errors))

    def test_rejects_codec_that_is_not_a_text_encoding(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "linesearch.toml"
            path.write_text('[search]\nencoding = "rot13"\n', encoding="utf-8")
            config = load_config(str(path))

        errors = validate_config(config)
        self.assertEqual(errors, ["encoding must be a text encoding: rot13"])

if __name__ == "__main__":
    unittest.main()
