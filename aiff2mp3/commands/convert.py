from __future__ import annotations

from pathlib import Path

from ..config import Settings
from ..pipeline import ConvertReport, convert_tree
from .output import converted, ok


def run(root: Path, settings: Settings) -> ConvertReport:
    print(f"Converting aiff to mp3 on {root} subfolders")
    report = convert_tree(root, settings)
    for folder in report.folders:
        print(converted(folder.folder.name, f"{len(folder.files)} file(s) -> {folder.output_dir}"))
    print(
        ok(
            "Convert complete",
            f"{len(report.folders)} folder(s), {report.file_count} file(s), {report.bytes_written} bytes",
        )
    )
    return report
