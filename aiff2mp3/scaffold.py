from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import ScaffoldSettings, ScanSettings
from .models import DirectoryListing, FolderTag
from .scanner import DirectoryWalker
from .tag_codec import write_tag_file

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScaffoldReport:
    written: List[Path] = field(default_factory=list)
    existing: List[Path] = field(default_factory=list)


class TagScaffolder:
    """Seeds a sidecar tag file into audio folders that do not have one yet.

    Existing sidecar files are never touched, so running it twice is a no-op.
    """

    def __init__(
        self,
        scan_settings: Optional[ScanSettings] = None,
        scaffold_settings: Optional[ScaffoldSettings] = None,
    ) -> None:
        self.scan_settings = scan_settings or ScanSettings()
        self.scaffold_settings = scaffold_settings or ScaffoldSettings()
        self._walker = DirectoryWalker(self.scan_settings)

    def scaffold(self, root: Path) -> ScaffoldReport:
        report = ScaffoldReport()
        for listing in self._walker.walk(root):
            if not listing.has_audio:
                continue
            if listing.tag_file is not None:
                logger.debug("Keeping existing %s", listing.tag_file)
                report.existing.append(listing.tag_file)
                continue
            report.written.append(self._write(listing))
        return report

    def _write(self, listing: DirectoryListing) -> Path:
        target = listing.path / self.scan_settings.tag_file_name
        tag = FolderTag.for_folder(
            listing.name, placeholders=self.scaffold_settings.write_placeholders
        )
        write_tag_file(target, tag)
        logger.info("Created %s (album: %s)", target, tag.album)
        return target
