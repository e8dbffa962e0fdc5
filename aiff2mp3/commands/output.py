from __future__ import annotations

from enum import Enum
from typing import Optional


class Status(str, Enum):
    OK = "OK"
    CREATED = "CREATED"
    KEPT = "KEPT"
    CONVERTED = "CONVERTED"


def status_line(label: str, status: Status, detail: Optional[str] = None) -> str:
    line = f"{label}: {status.value}"
    return f"{line} ({detail})" if detail else line


def ok(label: str, detail: Optional[str] = None) -> str:
    return status_line(label, Status.OK, detail)


def created(label: str, detail: Optional[str] = None) -> str:
    return status_line(label, Status.CREATED, detail)


def kept(label: str, detail: Optional[str] = None) -> str:
    return status_line(label, Status.KEPT, detail)


def converted(label: str, detail: Optional[str] = None) -> str:
    return status_line(label, Status.CONVERTED, detail)
