"""Frame geometry, window types and temporal-noise-shaping state for the AAC coder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

MAX_CHANNELS = 64

FRAME_LEN = 1024
BLOCK_LEN_LONG = 1024
BLOCK_LEN_SHORT = 128

NSFB_LONG = 51
NSFB_SHORT = 15
MAX_SHORT_WINDOWS = 8
MAX_SCFAC_BANDS = (NSFB_SHORT + 1) * MAX_SHORT_WINDOWS

TNS_MAX_ORDER = 20
DEF_TNS_GAIN_THRESH = 1.4
DEF_TNS_COEFF_THRESH = 0.1
DEF_TNS_COEFF_RES = 4
DEF_TNS_RES_OFFSET = 3
LEN_TNS_NFILTL = 2
LEN_TNS_NFILTS = 1

DELAY = 2048
LEN_LTP_DATA_PRESENT = 1
LEN_LTP_LAG = 11
LEN_LTP_COEF = 3
LEN_LTP_SHORT_USED = 1
LEN_LTP_SHORT_LAG_PRESENT = 1
LEN_LTP_SHORT_LAG = 5
LTP_LAG_OFFSET = 16
LEN_LTP_LONG_USED = 1
MAX_LT_PRED_LONG_SFB = 40
MAX_LT_PRED_SHORT_SFB = 13
SHORT_SQ_OFFSET = BLOCK_LEN_LONG - (BLOCK_LEN_SHORT * 4 + BLOCK_LEN_SHORT // 2)
CODESIZE = 8
NOK_LT_BLEN = 3 * BLOCK_LEN_LONG

SBMAX_L = 49
LPC = 2

MAX_TNS_FILTERS = 1 << LEN_TNS_NFILTL


class WindowType(IntEnum):
    """Block (window sequence) type of a frame."""

    ONLY_LONG_WINDOW = 0
    LONG_SHORT_WINDOW = 1
    ONLY_SHORT_WINDOW = 2
    SHORT_LONG_WINDOW = 3


def _coeff_array() -> list[float]:
    return [0.0] * (TNS_MAX_ORDER + 1)


@dataclass
class TnsFilterData:
    """One TNS filter: order, direction and its coefficient sets."""

    order: int = 0
    direction: int = 0
    coef_compress: int = 0
    length: int = 0
    a_coeffs: list[float] = field(default_factory=_coeff_array)
    k_coeffs: list[float] = field(default_factory=_coeff_array)
    index: list[int] = field(default_factory=lambda: [0] * (TNS_MAX_ORDER + 1))


@dataclass
class TnsWindowData:
    """TNS filters applied within a single window."""

    num_filters: int = 0
    coef_resolution: int = 0
    tns_filter: list[TnsFilterData] = field(
        default_factory=lambda: [TnsFilterData() for _ in range(MAX_TNS_FILTERS)]
    )


@dataclass
class TnsInfo:
    """Per-channel TNS limits and per-window filter data."""

    tns_data_present: int = 0
    tns_min_band_number_long: int = 0
    tns_min_band_number_short: int = 0
    tns_max_bands_long: int = 0
    tns_max_bands_short: int = 0
    tns_max_order_long: int = 0
    tns_max_order_short: int = 0
    window_data: list[TnsWindowData] = field(
        default_factory=lambda: [TnsWindowData() for _ in range(MAX_SHORT_WINDOWS)]
    )