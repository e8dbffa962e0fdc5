from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np

from .meta_keys import ALBUM, ARTIST, TAG_KEYS, YEAR


@dataclass(slots=True)
class FolderTag:
    artist: Optional[str] = None
    album: Optional[str] = None
    year: Optional[str] = None

    def get(self, key: str) -> Optional[str]:
        if key not in TAG_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def set(self, key: str, value: Optional[str]) -> None:
        if key not in TAG_KEYS:
            raise KeyError(key)
        setattr(self, key, value)

    def value(self, key: str) -> str:
        """Field value with absent fields reported as an empty string."""
        return self.get(key) or ""

    @classmethod
    def for_folder(cls, name: str, *, placeholders: bool = False) -> "FolderTag":
        if placeholders:
            return cls(artist="", album=name, year="")
        return cls(album=name)

    def describe(self) -> str:
        return ", ".join(f"{key}: {self.value(key)}" for key in (ARTIST, ALBUM, YEAR))


@dataclass(slots=True)
class AudioFolder:
    name: str
    path: Path
    tag: Optional[FolderTag] = None
    files: List[Path] = field(default_factory=list)


@dataclass(slots=True)
class DirectoryListing:
    """Direct entries of one directory, classified but not descended into."""

    path: Path
    audio_files: List[Path] = field(default_factory=list)
    tag_files: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.name or self.path.resolve().name

    @property
    def has_audio(self) -> bool:
        return bool(self.audio_files)

    @property
    def tag_file(self) -> Optional[Path]:
        return self.tag_files[-1] if self.tag_files else None


@dataclass(slots=True)
class NormalizedSampleBuffer:
    samples: np.ndarray

    def __post_init__(self) -> None:
        if self.samples.dtype != np.uint16:
            raise TypeError(f"expected uint16 samples, got {self.samples.dtype}")

    def __len__(self) -> int:
        return int(self.samples.size)

    def to_pcm_bytes(self) -> bytes:
        # Raw reinterpretation: the encoder reads the same bits as signed 16-bit PCM.
        return self.samples.tobytes()
