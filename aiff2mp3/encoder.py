from __future__ import annotations

import logging
import math

import lameenc

from .config import EncoderSettings
from .errors import EncodeError, EncoderConfigError

logger = logging.getLogger(__name__)

# LAME's documented worst case for one encode call: 1.25 * samples + 7200 bytes.
_WORST_CASE_RATIO = 1.25
_WORST_CASE_SLACK = 7200


def max_required_buffer_size(samples_per_channel: int) -> int:
    return math.ceil(_WORST_CASE_RATIO * samples_per_channel) + _WORST_CASE_SLACK


class Mp3Encoder:
    """One-shot LAME stream: a single ``encode`` followed by a single ``flush``."""

    def __init__(self, settings: EncoderSettings) -> None:
        self.settings = settings
        self._lame = self._configure(settings)
        self._flushed = False

    @property
    def channels(self) -> int:
        return self.settings.channels

    @staticmethod
    def _configure(settings: EncoderSettings) -> "lameenc.Encoder":
        lame = lameenc.Encoder()
        steps = (
            ("channels", lame.set_channels, settings.channels),
            ("sample rate", lame.set_in_sample_rate, settings.sample_rate),
            ("bitrate", lame.set_bit_rate, settings.bitrate),
            ("quality", lame.set_quality, settings.quality),
        )
        problems: list[str] = []
        for label, setter, value in steps:
            try:
                setter(value)
            except (ValueError, TypeError, RuntimeError) as exc:
                problems.append(f"{label}={value}: {exc}")
        if problems:
            raise EncoderConfigError(problems)
        logger.debug(
            "LAME configured: %d ch, %d Hz, %d kbps, quality %d",
            settings.channels,
            settings.sample_rate,
            settings.bitrate,
            settings.quality,
        )
        return lame

    def encode(self, pcm: bytes, capacity: int) -> bytes:
        if self._flushed:
            raise EncodeError("stream already flushed")
        try:
            data = bytes(self._lame.encode(pcm))
        except (ValueError, RuntimeError) as exc:
            raise EncodeError(f"encode failed: {exc}") from exc
        return self._check_capacity("encode", data, capacity)

    def flush(self, capacity: int) -> bytes:
        """Finalize the stream; no further audio may follow."""
        try:
            data = bytes(self._lame.flush())
        except (ValueError, RuntimeError) as exc:
            raise EncodeError(f"flush failed: {exc}") from exc
        self._flushed = True
        return self._check_capacity("flush", data, capacity)

    @staticmethod
    def _check_capacity(stage: str, data: bytes, capacity: int) -> bytes:
        if len(data) > capacity:
            raise EncodeError(f"{stage} produced {len(data)} bytes, capacity is {capacity}")
        return data
