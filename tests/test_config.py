import os
import tempfile
import unittest
from pathlib import Path

from aiff2mp3.config import EncoderSettings, Settings, find_config
from aiff2mp3.errors import ConfigError, ErrorKind


class TestSettings(unittest.TestCase):
    def test_defaults_match_fixed_behavior(self) -> None:
        settings = Settings()
        self.assertEqual(
            (
                settings.encoder.channels,
                settings.encoder.sample_rate,
                settings.encoder.bitrate,
                settings.encoder.comment,
            ),
            (2, 44100, 192, "Created by aiff2mp3"),
        )
        self.assertEqual(settings.scan.audio_suffix, ".aiff")
        self.assertEqual(settings.scan.tag_file_name, "mp3tag.txt")
        self.assertEqual(settings.output.directory_name, "aiff2mp3")
        self.assertFalse(settings.scaffold.write_placeholders)

    def test_all_encoder_problems_are_reported_at_once(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            Settings.validate_raw(
                {"encoder": {"channels": 6, "bitrate": 193, "sample_rate": 1234, "quality": 12}}
            )
        self.assertEqual(ctx.exception.kind, ErrorKind.CONFIG)
        self.assertEqual(len(ctx.exception.problems), 4)
        self.assertIn("encoder.bitrate", str(ctx.exception))

    def test_load_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "aiff2mp3.yaml"
            path.write_text(
                "encoder:\n  bitrate: 320\noutput:\n  extension: mp3\n", encoding="utf-8"
            )
            settings = Settings.load(path)
        self.assertEqual(settings.encoder.bitrate, 320)
        self.assertEqual(settings.output.extension, ".mp3")
        self.assertEqual(settings.encoder, EncoderSettings(bitrate=320))

    def test_load_none_gives_defaults(self) -> None:
        self.assertEqual(Settings.load(None), Settings())

    def test_missing_explicit_config_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigError):
                Settings.load(Path(tmpdir) / "missing.yaml")

    def test_find_config_prefers_explicit_then_cwd(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            previous = os.getcwd()
            os.chdir(tmpdir)
            try:
                self.assertIsNone(find_config(None))
                Path("aiff2mp3.yml").write_text("{}", encoding="utf-8")
                self.assertEqual(find_config(None), Path(tmpdir).resolve() / "aiff2mp3.yml")
                self.assertEqual(find_config(Path("x.yaml")), Path("x.yaml"))
            finally:
                os.chdir(previous)


if __name__ == "__main__":
    unittest.main()
