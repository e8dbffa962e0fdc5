from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .meta_keys import (
    AUDIO_SUFFIX,
    OUTPUT_DIR_NAME,
    OUTPUT_EXTENSION,
    PRODUCT_COMMENT,
    TAG_FILE_NAME,
)

MPEG_SAMPLE_RATES = (8000, 11025, 12000, 16000, 22050, 24000, 32000, 44100, 48000)
MPEG_BITRATES = (8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 192, 224, 256, 320)
CONFIG_FILE_NAMES = ("aiff2mp3.yaml", "aiff2mp3.yml")


class ScanSettings(BaseModel):
    audio_suffix: str = AUDIO_SUFFIX
    tag_file_name: str = TAG_FILE_NAME
    follow_symlinks: bool = True

    @field_validator("tag_file_name")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        if not value or "/" in value:
            raise ValueError("tag_file_name must be a bare file name")
        return value


class EncoderSettings(BaseModel):
    channels: int = Field(default=2, ge=1, le=2)
    sample_rate: int = 44_100
    bitrate: int = 192
    # lameenc: 2 is the highest quality, 7 the fastest
    quality: int = Field(default=2, ge=0, le=9)
    comment: str = PRODUCT_COMMENT

    @field_validator("sample_rate")
    @classmethod
    def _supported_rate(cls, value: int) -> int:
        if value not in MPEG_SAMPLE_RATES:
            raise ValueError(f"unsupported sample rate {value}")
        return value

    @field_validator("bitrate")
    @classmethod
    def _supported_bitrate(cls, value: int) -> int:
        if value not in MPEG_BITRATES:
            raise ValueError(f"unsupported bitrate {value} kbps")
        return value


class OutputSettings(BaseModel):
    directory_name: str = OUTPUT_DIR_NAME
    extension: str = OUTPUT_EXTENSION

    @field_validator("extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        return value if value.startswith(".") else f".{value}"


class ScaffoldSettings(BaseModel):
    write_placeholders: bool = False


class Settings(BaseModel):
    scan: ScanSettings = ScanSettings()
    encoder: EncoderSettings = EncoderSettings()
    output: OutputSettings = OutputSettings()
    scaffold: ScaffoldSettings = ScaffoldSettings()

    @classmethod
    def load(cls, path: Optional[Path]) -> "Settings":
        if path is None:
            return cls()
        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError([str(exc)], path=path) from exc
        return cls.validate_raw(raw or {}, path=path)

    @classmethod
    def validate_raw(cls, raw: object, *, path: Optional[Path] = None) -> "Settings":
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigError(describe_validation_error(exc), path=path) from exc


def describe_validation_error(exc: ValidationError) -> list[str]:
    problems = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        problems.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
    return problems


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None
