"""Reading and writing of the ``key: value`` sidecar tag format."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import TagFileError
from .fs_utils import write_bytes
from .meta_keys import TAG_KEYS
from .models import FolderTag

logger = logging.getLogger(__name__)


def parse(text: str) -> FolderTag:
    """Build a tag from sidecar text.

    Lines without a colon and unknown keys are ignored. When a key repeats,
    the last occurrence wins.
    """
    tag = FolderTag()
    for line in text.split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key not in TAG_KEYS:
            continue
        tag.set(key, value.strip())
    return tag


def serialize(tag: FolderTag) -> str:
    lines = []
    for key in TAG_KEYS:
        value = tag.get(key)
        if value is None:
            continue
        lines.append(f"{key}: {value}\n")
    return "".join(lines)


def read_tag_file(path: Path) -> FolderTag:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise TagFileError(f"could not read tag file: {exc.strerror or exc}", path=path) from exc
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TagFileError(f"tag file is not valid UTF-8: {exc.reason}", path=path) from exc
    tag = parse(text)
    logger.debug("Parsed %s -> %s", path, tag.describe())
    return tag


def write_tag_file(path: Path, tag: FolderTag) -> None:
    write_bytes(path, serialize(tag).encode("utf-8"))
