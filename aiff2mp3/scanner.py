from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from .config import ScanSettings
from .errors import ScanError
from .models import AudioFolder, DirectoryListing
from .tag_codec import read_tag_file

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    listing: DirectoryListing
    subdirs: Iterator[Path]


@dataclass
class DirectoryWalker:
    """Depth-first walk that yields each directory after all of its subdirectories.

    Uses an explicit stack instead of recursion. Each directory is listed
    once by its canonical path, so symlink loops are skipped with a warning.
    """

    settings: ScanSettings = field(default_factory=ScanSettings)

    def walk(self, root: Path) -> Iterator[DirectoryListing]:
        root = Path(root)
        if not root.is_dir():
            raise ScanError("not a directory", path=root)
        visited: Set[Path] = set()
        stack: List[_Frame] = []
        frame = self._enter(root, visited)
        if frame is not None:
            stack.append(frame)
        while stack:
            top = stack[-1]
            child = next(top.subdirs, None)
            if child is None:
                stack.pop()
                yield top.listing
                continue
            frame = self._enter(child, visited)
            if frame is not None:
                stack.append(frame)

    def _enter(self, directory: Path, visited: Set[Path]) -> Optional[_Frame]:
        try:
            canonical = directory.resolve(strict=True)
        except OSError as exc:
            raise ScanError(f"could not resolve directory: {exc.strerror or exc}", path=directory) from exc
        if canonical in visited:
            logger.warning("Skipping %s: already visited as %s", directory, canonical)
            return None
        visited.add(canonical)
        listing, subdirs = self.list_directory(directory)
        return _Frame(listing=listing, subdirs=iter(subdirs))

    def list_directory(self, directory: Path) -> tuple[DirectoryListing, List[Path]]:
        """Classify the direct entries of ``directory`` in listing order."""
        listing = DirectoryListing(path=directory)
        subdirs: List[Path] = []
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as exc:
            raise ScanError(f"could not list directory: {exc.strerror or exc}", path=directory) from exc
        follow = self.settings.follow_symlinks
        for entry in entries:
            path = Path(entry.path)
            try:
                is_file = entry.is_file(follow_symlinks=follow)
                is_dir = not is_file and entry.is_dir(follow_symlinks=follow)
            except OSError as exc:
                raise ScanError(f"could not read entry metadata: {exc.strerror or exc}", path=path) from exc
            if is_file:
                if entry.name.endswith(self.settings.audio_suffix):
                    listing.audio_files.append(path)
                elif entry.name == self.settings.tag_file_name:
                    listing.tag_files.append(path)
            elif is_dir:
                subdirs.append(path)
            else:
                logger.warning("Invalid entry %s - skip", path)
                listing.skipped.append(path)
        return listing, subdirs


class FolderScanner:
    """Collects the folders that directly contain audio files, with their sidecar tag."""

    def __init__(self, settings: Optional[ScanSettings] = None) -> None:
        self.settings = settings or ScanSettings()
        self._walker = DirectoryWalker(self.settings)

    def scan(self, root: Path) -> List[AudioFolder]:
        folders: List[AudioFolder] = []
        for listing in self._walker.walk(root):
            folder = self.build_folder(listing)
            if folder is not None:
                folders.append(folder)
        logger.debug("Scan of %s found %d folder(s) with audio", root, len(folders))
        return folders

    def build_folder(self, listing: DirectoryListing) -> Optional[AudioFolder]:
        tag_file = listing.tag_file
        tag = read_tag_file(tag_file) if tag_file is not None else None
        if not listing.has_audio:
            return None
        return AudioFolder(
            name=listing.name,
            path=listing.path,
            tag=tag,
            files=list(listing.audio_files),
        )
