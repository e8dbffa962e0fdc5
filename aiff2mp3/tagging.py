from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from mutagen import MutagenError
from mutagen.id3 import COMM, ID3, TALB, TIT2, TPE1, TYER, ID3NoHeaderError

from .errors import OutputWriteError

logger = logging.getLogger(__name__)

# ID3v2.3 keeps the year in TYER as plain text; v2.4's TDRC would parse it as a date.
ID3_VERSION = 3


@dataclass(frozen=True, slots=True)
class Id3Tag:
    title: str
    artist: str = ""
    album: str = ""
    year: str = ""
    comment: str = ""


class TagWriter:
    """Embeds ID3v2.3 frames into a written MP3 file."""

    def apply(self, path: Path, tag: Id3Tag) -> None:
        try:
            try:
                tags = ID3(path, translate=False)
            except ID3NoHeaderError:
                tags = ID3()
            self._set_frame(tags, TIT2, tag.title)
            self._set_frame(tags, TPE1, tag.artist)
            self._set_frame(tags, TALB, tag.album)
            self._set_frame(tags, TYER, tag.year)
            if tag.comment:
                tags.setall("COMM", [COMM(encoding=3, lang="eng", desc="", text=tag.comment)])
            tags.save(path, v2_version=ID3_VERSION)
            logger.debug("Tagged %s: %s", path, tag.title)
        except (MutagenError, OSError) as exc:
            raise OutputWriteError(f"could not write ID3 tag: {exc}", path=path) from exc

    def read(self, path: Path) -> Dict[str, Optional[str]]:
        # translate=False keeps TYER as written instead of folding it into TDRC
        tags = ID3(path, translate=False)
        return {
            "title": self._id3_text(tags, "TIT2"),
            "artist": self._id3_text(tags, "TPE1"),
            "album": self._id3_text(tags, "TALB"),
            "year": self._id3_text(tags, "TYER"),
            "comment": self._id3_text(tags, "COMM"),
        }

    def _id3_text(self, tags: ID3, frame_id: str) -> Optional[str]:
        frame = tags.getall(frame_id)
        if not frame:
            return None
        return str(frame[0].text[0]) if frame[0].text else None

    def _set_frame(self, tags: ID3, frame_cls, value: str | None) -> None:
        if value:
            tags.setall(frame_cls.__name__, [frame_cls(encoding=3, text=value)])
