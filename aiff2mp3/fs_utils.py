from __future__ import annotations

from pathlib import Path

from .errors import OutputWriteError


def ensure_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"could not create directory: {exc.strerror or exc}", path=path) from exc
    return path


def write_bytes(path: Path, payload: bytes) -> int:
    try:
        with path.open("wb") as fh:
            fh.write(payload)
    except OSError as exc:
        raise OutputWriteError(f"could not write file: {exc.strerror or exc}", path=path) from exc
    return len(payload)
