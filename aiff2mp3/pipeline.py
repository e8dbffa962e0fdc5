from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .decoder import AiffDecoder
from .encoder import Mp3Encoder, max_required_buffer_size
from .fs_utils import ensure_directory, write_bytes
from .meta_keys import ALBUM, ARTIST, YEAR
from .models import AudioFolder, FolderTag, NormalizedSampleBuffer
from .normalize import SampleNormalizer
from .scanner import FolderScanner
from .tagging import Id3Tag, TagWriter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FileResult:
    source: Path
    output: Path
    samples: int
    bytes_written: int


@dataclass(slots=True)
class FolderReport:
    folder: AudioFolder
    output_dir: Path
    files: List[FileResult] = field(default_factory=list)


@dataclass(slots=True)
class ConvertReport:
    root: Path
    folders: List[FolderReport] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return sum(len(folder.files) for folder in self.folders)

    @property
    def bytes_written(self) -> int:
        return sum(item.bytes_written for folder in self.folders for item in folder.files)


class EncodePipeline:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        decoder: Optional[AiffDecoder] = None,
        normalizer: Optional[SampleNormalizer] = None,
        tag_writer: Optional[TagWriter] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.decoder = decoder or AiffDecoder()
        self.normalizer = normalizer or SampleNormalizer()
        self.tag_writer = tag_writer or TagWriter()

    def output_dir(self, folder_path: Path) -> Path:
        return folder_path / self.settings.output.directory_name

    def output_path(self, source: Path) -> Path:
        return self.output_dir(source.parent) / f"{_stem(source)}{self.settings.output.extension}"

    def build_tag(self, source: Path, tag: Optional[FolderTag]) -> Id3Tag:
        tag = tag or FolderTag()
        return Id3Tag(
            title=source.name,
            artist=tag.value(ARTIST),
            album=tag.value(ALBUM),
            year=tag.value(YEAR),
            comment=self.settings.encoder.comment,
        )

    def encode_folder(self, folder: AudioFolder) -> FolderReport:
        logger.info("Parsing folder %s (%s)", folder.name, folder.path)
        output_dir = ensure_directory(self.output_dir(folder.path))
        logger.debug("Output folder ready: %s", output_dir)
        report = FolderReport(folder=folder, output_dir=output_dir)
        for source in folder.files:
            report.files.append(self.encode_file(source, folder.tag))
        return report

    def encode_file(self, source: Path, tag: Optional[FolderTag]) -> FileResult:
        logger.info(" - Converting %s", source.name)
        self._check_layout(source)
        buffer = self.normalizer.normalize(self.decoder.decode(source))
        id3 = self.build_tag(source, tag)
        logger.info(
            "  - artist: %s, album: %s, year: %s", id3.artist, id3.album, id3.year
        )
        payload = self.encode_samples(buffer)
        target = self.output_path(source)
        written = write_bytes(target, payload)
        self.tag_writer.apply(target, id3)
        logger.info("  - Wrote %s (%d bytes)", target, written)
        return FileResult(source=source, output=target, samples=len(buffer), bytes_written=written)

    def _check_layout(self, source: Path) -> None:
        # No resampling or remixing happens; a mismatch only changes pitch/speed.
        info = self.decoder.info(source)
        wanted = self.settings.encoder
        if (info.channels, info.sample_rate) != (wanted.channels, wanted.sample_rate):
            logger.warning(
                "%s is %d Hz / %d channel(s); encoding as %d Hz / %d channel(s)",
                source,
                info.sample_rate,
                info.channels,
                wanted.sample_rate,
                wanted.channels,
            )

    def encode_samples(self, buffer: NormalizedSampleBuffer) -> bytes:
        encoder = Mp3Encoder(self.settings.encoder)
        capacity = max_required_buffer_size(len(buffer) // encoder.channels)
        logger.debug("  - Encoding %d sample(s), capacity %d bytes", len(buffer), capacity)
        out = bytearray(encoder.encode(buffer.to_pcm_bytes(), capacity))
        out += encoder.flush(capacity - len(out))
        return bytes(out)


def _stem(path: Path) -> str:
    # text before the first dot, so "a.b.aiff" becomes "a"
    name = path.name
    if name.startswith("."):
        head, _, _ = name[1:].partition(".")
        return "." + head
    head, _, _ = name.partition(".")
    return head


def convert_tree(root: Path, settings: Optional[Settings] = None) -> ConvertReport:
    settings = settings or Settings()
    pipeline = EncodePipeline(settings)
    folders = FolderScanner(settings.scan).scan(root)
    report = ConvertReport(root=root)
    for folder in folders:
        report.folders.append(pipeline.encode_folder(folder))
    return report
