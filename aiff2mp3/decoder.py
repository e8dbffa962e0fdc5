from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np
import soundfile as sf

from .errors import MalformedAudioError

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_FRAMES = 65_536


class SampleEncoding(str, Enum):
    U8 = "u8"
    I8 = "i8"
    I16 = "i16"
    I24 = "i24"
    I32 = "i32"
    F32 = "f32"
    F64 = "f64"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(_NATIVE_DTYPES[self])

    @property
    def is_float(self) -> bool:
        return self in (SampleEncoding.F32, SampleEncoding.F64)


_NATIVE_DTYPES = {
    SampleEncoding.U8: np.uint8,
    SampleEncoding.I8: np.int8,
    SampleEncoding.I16: np.int16,
    # no 24-bit numpy type; values stay within the signed 24-bit range
    SampleEncoding.I24: np.int32,
    SampleEncoding.I32: np.int32,
    SampleEncoding.F32: np.float32,
    SampleEncoding.F64: np.float64,
}

# libsndfile widens small integers on read (8-bit to the top of an int16,
# 24-bit to the top of an int32); the shifts undo that to recover raw values.
_Restore = Optional[Callable[[np.ndarray], np.ndarray]]
_SUBTYPES: Dict[str, Tuple[SampleEncoding, str, _Restore]] = {
    "PCM_U8": (SampleEncoding.U8, "int16", lambda a: (a >> 8) + 128),
    "PCM_S8": (SampleEncoding.I8, "int16", lambda a: a >> 8),
    "PCM_16": (SampleEncoding.I16, "int16", None),
    "PCM_24": (SampleEncoding.I24, "int32", lambda a: a >> 8),
    "PCM_32": (SampleEncoding.I32, "int32", None),
    "FLOAT": (SampleEncoding.F32, "float32", None),
    "DOUBLE": (SampleEncoding.F64, "float64", None),
}

AIFF_FORMATS = {"AIFF"}


@dataclass(slots=True)
class SampleBlock:
    """A run of interleaved samples, all in one native encoding."""

    encoding: SampleEncoding
    samples: np.ndarray

    def __len__(self) -> int:
        return int(self.samples.size)


@dataclass(slots=True)
class AudioInfo:
    channels: int
    sample_rate: int
    frames: int
    encoding: SampleEncoding


class AiffDecoder:
    def __init__(self, block_frames: int = DEFAULT_BLOCK_FRAMES) -> None:
        self.block_frames = block_frames

    def info(self, path: Path) -> AudioInfo:
        try:
            with sf.SoundFile(str(path)) as handle:
                encoding, _, _ = self._subtype(handle, path)
                return AudioInfo(
                    channels=handle.channels,
                    sample_rate=handle.samplerate,
                    frames=handle.frames,
                    encoding=encoding,
                )
        except (RuntimeError, OSError) as exc:
            raise MalformedAudioError(f"could not open audio: {exc}", path=path) from exc

    def decode(self, path: Path) -> Iterator[SampleBlock]:
        """Yield the file's samples lazily, block by block, in interleaved order."""
        try:
            with sf.SoundFile(str(path)) as handle:
                encoding, read_dtype, restore = self._subtype(handle, path)
                logger.debug(
                    "%s: %s, %d channel(s), %d Hz, %d frame(s)",
                    path,
                    encoding.value,
                    handle.channels,
                    handle.samplerate,
                    handle.frames,
                )
                for block in handle.blocks(
                    blocksize=self.block_frames, dtype=read_dtype, always_2d=True
                ):
                    raw = block.reshape(-1)
                    if restore is not None:
                        raw = restore(raw)
                    yield SampleBlock(encoding=encoding, samples=raw.astype(encoding.dtype))
        except (RuntimeError, OSError) as exc:
            raise MalformedAudioError(f"could not decode audio: {exc}", path=path) from exc

    @staticmethod
    def _subtype(handle: sf.SoundFile, path: Path) -> Tuple[SampleEncoding, str, _Restore]:
        if handle.format not in AIFF_FORMATS:
            raise MalformedAudioError(f"not an AIFF file (format {handle.format})", path=path)
        native = _SUBTYPES.get(handle.subtype)
        if native is None:
            raise MalformedAudioError(f"unsupported sample encoding {handle.subtype}", path=path)
        return native
