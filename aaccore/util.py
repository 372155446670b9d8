"""Sample-rate lookup and bit budget helpers."""

from __future__ import annotations

import math

from aaccore.coder import FRAME_LEN

_SR_THRESHOLDS = (92017, 75132, 55426, 46009, 37566, 27713, 23004, 18783, 13856, 11502, 9391)

_MAX_PRED_SFB = (33, 33, 38, 40, 40, 40, 41, 41, 37, 37, 37, 34, 0)

_MAX_BITS_PER_CHANNEL = 6144


def get_sr_index(sample_rate: int) -> int:
    """Return the sampling-frequency index for a sample rate."""
    if sample_rate < 0:
        raise ValueError("sample rate must not be negative")
    return next(
        (idx for idx, threshold in enumerate(_SR_THRESHOLDS) if sample_rate >= threshold),
        len(_SR_THRESHOLDS),
    )


def max_bitrate(sample_rate: int) -> int:
    """Maximum bit rate per channel for a sample rate."""
    return int(_MAX_BITS_PER_CHANNEL * sample_rate / FRAME_LEN + 0.5)


def min_bitrate() -> int:
    """Minimum bit rate per channel."""
    return 8000


def get_max_pred_sfb(sample_rate_index: int) -> int:
    """Highest band used for backward prediction at a sampling-frequency index."""
    if not 0 <= sample_rate_index < len(_MAX_PRED_SFB):
        raise IndexError(f"sample rate index out of range: {sample_rate_index}")
    return _MAX_PRED_SFB[sample_rate_index]


def bit_allocation(pe: float, short_block: bool) -> int:
    """Bits to allocate for a block of given perceptual entropy."""
    if pe < 0:
        raise ValueError("perceptual entropy must not be negative")
    pew1, pew2 = (0.6, 24.0) if short_block else (0.3, 6.0)
    bits = pew1 * pe + pew2 * math.sqrt(pe)
    bits = min(max(0.0, bits), float(_MAX_BITS_PER_CHANNEL))
    return int(bits + 0.5)


def max_bitres_size(bit_rate: int, sample_rate: int) -> int:
    """Maximum size of the bit reservoir."""
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    return _MAX_BITS_PER_CHANNEL - int(bit_rate / sample_rate * FRAME_LEN)