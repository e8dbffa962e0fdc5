import tempfile
import unittest
from pathlib import Path

import numpy as np
import soundfile as sf

from aiff2mp3.decoder import AiffDecoder, SampleEncoding
from aiff2mp3.errors import MalformedAudioError


class TestAiffDecoder(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _decode(self, path: Path, block_frames: int = 1024) -> list:
        return list(AiffDecoder(block_frames=block_frames).decode(path))

    def test_pcm16_samples_are_interleaved(self) -> None:
        path = self.tmp / "s16.aiff"
        data = np.array([[1, -1], [100, -100], [32767, -32768]], dtype=np.int16)
        sf.write(str(path), data, 44100, format="AIFF", subtype="PCM_16")

        blocks = self._decode(path)

        self.assertEqual({block.encoding for block in blocks}, {SampleEncoding.I16})
        samples = np.concatenate([block.samples for block in blocks])
        self.assertEqual(samples.tolist(), [1, -1, 100, -100, 32767, -32768])

    def test_pcm24_values_are_native_width(self) -> None:
        path = self.tmp / "s24.aiff"
        raw = np.array([[5, -5], [8388607, -8388608]], dtype=np.int32)
        sf.write(str(path), raw * 256, 44100, format="AIFF", subtype="PCM_24")

        blocks = self._decode(path)

        self.assertEqual(blocks[0].encoding, SampleEncoding.I24)
        self.assertEqual(blocks[0].samples.tolist(), [5, -5, 8388607, -8388608])

    def test_pcm_s8_values_are_native_width(self) -> None:
        path = self.tmp / "s8.aiff"
        raw = np.array([[3], [-128], [127], [0]], dtype=np.int16)
        sf.write(str(path), raw * 256, 22050, format="AIFF", subtype="PCM_S8")

        blocks = self._decode(path)

        self.assertEqual(blocks[0].encoding, SampleEncoding.I8)
        self.assertEqual(blocks[0].samples.dtype, np.int8)
        self.assertEqual(blocks[0].samples.tolist(), [3, -128, 127, 0])

    def test_float_samples_keep_raw_values(self) -> None:
        path = self.tmp / "f32.aiff"
        data = np.array([[0.5, -0.25], [0.125, 0.0]], dtype=np.float32)
        sf.write(str(path), data, 44100, format="AIFF", subtype="FLOAT")

        blocks = self._decode(path)

        self.assertEqual(blocks[0].encoding, SampleEncoding.F32)
        self.assertEqual(blocks[0].samples.tolist(), [0.5, -0.25, 0.125, 0.0])

    def test_decoding_is_lazy_and_blocked(self) -> None:
        path = self.tmp / "long.aiff"
        sf.write(str(path), np.zeros((2500, 2), dtype=np.int16), 44100, format="AIFF", subtype="PCM_16")

        blocks = self._decode(path, block_frames=1000)

        self.assertEqual([len(block) for block in blocks], [2000, 2000, 1000])

    def test_info_reports_layout(self) -> None:
        path = self.tmp / "info.aiff"
        sf.write(str(path), np.zeros((10, 2), dtype=np.int16), 44100, format="AIFF", subtype="PCM_16")

        info = AiffDecoder().info(path)

        self.assertEqual((info.channels, info.sample_rate, info.frames), (2, 44100, 10))
        self.assertEqual(info.encoding, SampleEncoding.I16)

    def test_non_aiff_container_is_rejected(self) -> None:
        path = self.tmp / "fake.aiff"
        sf.write(str(path), np.zeros((10, 2), dtype=np.int16), 44100, format="WAV", subtype="PCM_16")
        with self.assertRaises(MalformedAudioError):
            self._decode(path)

    def test_unsupported_encoding_is_rejected(self) -> None:
        path = self.tmp / "ulaw.aiff"
        sf.write(str(path), np.zeros((10, 1), dtype=np.int16), 8000, format="AIFF", subtype="ULAW")
        with self.assertRaises(MalformedAudioError):
            self._decode(path)

    def test_garbage_is_malformed(self) -> None:
        path = self.tmp / "garbage.aiff"
        path.write_bytes(b"definitely not audio")
        with self.assertRaises(MalformedAudioError):
            self._decode(path)


if __name__ == "__main__":
    unittest.main()
