from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional


class ErrorKind(str, Enum):
    IO = "io"
    MALFORMED_AUDIO = "malformed_audio"
    ENCODER_CONFIG = "encoder_config"
    ENCODE = "encode"
    WRITE = "write"
    CONFIG = "config"


class Aiff2Mp3Error(Exception):
    """Base class for every fatal error of a run."""

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class ScanError(Aiff2Mp3Error):
    kind = ErrorKind.IO


class TagFileError(Aiff2Mp3Error):
    kind = ErrorKind.IO


class MalformedAudioError(Aiff2Mp3Error):
    kind = ErrorKind.MALFORMED_AUDIO


class EncodeError(Aiff2Mp3Error):
    kind = ErrorKind.ENCODE


class OutputWriteError(Aiff2Mp3Error):
    kind = ErrorKind.WRITE


class _MultiProblemError(Aiff2Mp3Error):
    label = "invalid configuration"

    def __init__(self, problems: Iterable[str], *, path: Optional[Path] = None) -> None:
        self.problems = list(problems)
        super().__init__(f"{self.label}: " + "; ".join(self.problems), path=path)


class EncoderConfigError(_MultiProblemError):
    kind = ErrorKind.ENCODER_CONFIG
    label = "encoder configuration failed"


class ConfigError(_MultiProblemError):
    kind = ErrorKind.CONFIG
    label = "invalid settings"
