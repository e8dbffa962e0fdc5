from __future__ import annotations

from pathlib import Path

from ..config import Settings
from ..scaffold import ScaffoldReport, TagScaffolder
from .output import created, kept, ok


def run(root: Path, settings: Settings) -> ScaffoldReport:
    print(f"Creating {settings.scan.tag_file_name} files on {root} subfolders")
    report = TagScaffolder(settings.scan, settings.scaffold).scaffold(root)
    for path in report.written:
        print(created(str(path)))
    for path in report.existing:
        print(kept(str(path), "already present"))
    print(
        ok(
            "Init complete",
            f"{len(report.written)} created, {len(report.existing)} kept",
        )
    )
    return report
