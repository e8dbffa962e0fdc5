"""Conversion of decoded samples into the encoder's unsigned 16-bit input.

Every sample is cast numerically, as-is: integer samples keep their low 16
bits (two's complement wrap, so ``-1`` becomes ``65535``) and float samples
are truncated toward zero and saturated to ``[0, 65535]`` with NaN mapped to
``0``. Nothing is rescaled between sample widths, so 24/32-bit and float
sources do not come out as musically equivalent 16-bit audio. This matches
the converter's established output and is kept as is.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from .decoder import SampleBlock, SampleEncoding
from .errors import MalformedAudioError
from .models import NormalizedSampleBuffer

logger = logging.getLogger(__name__)

U16_MAX = 0xFFFF


def cast_to_u16(encoding: SampleEncoding, samples: np.ndarray) -> np.ndarray:
    if samples.dtype != encoding.dtype:
        raise MalformedAudioError(
            f"{encoding.value} block carries {samples.dtype} samples"
        )
    flat = samples.reshape(-1)
    if encoding.is_float:
        values = np.nan_to_num(flat.astype(np.float64), nan=0.0, posinf=U16_MAX, neginf=0.0)
        return np.clip(np.trunc(values), 0, U16_MAX).astype(np.uint16)
    return (flat.astype(np.int64) & U16_MAX).astype(np.uint16)


class SampleNormalizer:
    def normalize(self, blocks: Iterable[SampleBlock]) -> NormalizedSampleBuffer:
        parts = []
        total = 0
        for block in blocks:
            parts.append(cast_to_u16(block.encoding, block.samples))
            total += len(block)
        if not parts:
            return NormalizedSampleBuffer(np.empty(0, dtype=np.uint16))
        samples = np.concatenate(parts)
        logger.debug("Normalized %d sample(s) from %d block(s)", total, len(parts))
        return NormalizedSampleBuffer(samples)


def normalize(blocks: Iterable[SampleBlock]) -> NormalizedSampleBuffer:
    return SampleNormalizer().normalize(blocks)
