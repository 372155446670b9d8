"""Temporal noise shaping: per-channel setup, analysis and synthesis filtering."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence

from aaccore.coder import (
    BLOCK_LEN_LONG,
    BLOCK_LEN_SHORT,
    DEF_TNS_COEFF_RES,
    DEF_TNS_COEFF_THRESH,
    DEF_TNS_GAIN_THRESH,
    MAX_SHORT_WINDOWS,
    TnsFilterData,
    TnsInfo,
    WindowType,
)
from aaccore.config import MpegVersion, ObjectType
from aaccore.lpc import (
    levinson_durbin,
    quantize_reflection_coeffs,
    step_up,
    tns_filter,
    tns_inv_filter,
    truncate_coeffs,
)

# Limit bands to > 2.0 kHz, indexed by sampling-frequency index.
_MIN_BAND_NUMBER_LONG = (11, 12, 15, 16, 17, 20, 25, 26, 24, 28, 30, 31)
_MIN_BAND_NUMBER_SHORT = (2, 2, 2, 3, 3, 4, 6, 6, 8, 10, 10, 12)

# Main/Low profile limits.
_MAX_BANDS_LONG_MAIN_LOW = (31, 31, 34, 40, 42, 51, 46, 46, 42, 42, 42, 39)
_MAX_BANDS_SHORT_MAIN_LOW = (9, 9, 10, 14, 14, 14, 14, 14, 14, 14, 14, 14)

_MAX_ORDER_LONG_MAIN = 20
_MAX_ORDER_LONG_LOW = 12
_MAX_ORDER_SHORT_MAIN_LOW = 7


def tns_init(
    tns_info: TnsInfo,
    sample_rate_index: int,
    object_type: ObjectType,
    mpeg_version: MpegVersion,
) -> None:
    """Set the TNS band and order limits of one channel."""
    if not 0 <= sample_rate_index < len(_MIN_BAND_NUMBER_LONG):
        raise IndexError(f"sample rate index out of range: {sample_rate_index}")
    object_type = ObjectType(object_type)
    mpeg_version = MpegVersion(mpeg_version)

    if object_type in (ObjectType.MAIN, ObjectType.LTP, ObjectType.LOW):
        tns_info.tns_max_bands_long = _MAX_BANDS_LONG_MAIN_LOW[sample_rate_index]
        tns_info.tns_max_bands_short = _MAX_BANDS_SHORT_MAIN_LOW[sample_rate_index]
        if mpeg_version is MpegVersion.MPEG2:
            tns_info.tns_max_order_long = (
                _MAX_ORDER_LONG_LOW if object_type is ObjectType.LOW else _MAX_ORDER_LONG_MAIN
            )
        else:
            # fs > 32000 Hz allows a lower order
            tns_info.tns_max_order_long = 12 if sample_rate_index <= 5 else 20
        tns_info.tns_max_order_short = _MAX_ORDER_SHORT_MAIN_LOW

    tns_info.tns_min_band_number_long = _MIN_BAND_NUMBER_LONG[sample_rate_index]
    tns_info.tns_min_band_number_short = _MIN_BAND_NUMBER_SHORT[sample_rate_index]


def _band_limits(
    tns_info: TnsInfo, number_of_bands: int, max_sfb: int, short: bool
) -> tuple[int, int]:
    if short:
        start = min(tns_info.tns_min_band_number_short, tns_info.tns_max_bands_short)
        stop = min(number_of_bands, tns_info.tns_max_bands_short)
    else:
        start = min(tns_info.tns_min_band_number_long, tns_info.tns_max_bands_long)
        stop = min(number_of_bands, tns_info.tns_max_bands_long)
    start = max(min(start, max_sfb), 0)
    stop = max(min(stop, max_sfb), 0)
    return start, stop


def _apply(spec: MutableSequence[float], start: int, length: int, fn, filter_data: TnsFilterData) -> None:
    end = start + max(length, 0)
    segment = list(spec[start:end])
    fn(segment, filter_data)
    spec[start:end] = segment


def tns_encode(
    tns_info: TnsInfo,
    number_of_bands: int,
    max_sfb: int,
    block_type: WindowType,
    sfb_offsets: Sequence[int],
    spec: MutableSequence[float],
) -> None:
    """Analyse ``spec`` and, where TNS pays off, filter it in place.

    Short blocks are not processed: TNS is switched off for them.
    """
    block_type = WindowType(block_type)
    if block_type is WindowType.ONLY_SHORT_WINDOW:
        tns_info.tns_data_present = 0
        return

    number_of_windows = 1
    window_size = BLOCK_LEN_SHORT
    length_in_bands = number_of_bands - tns_info.tns_min_band_number_long
    order = tns_info.tns_max_order_long
    start_band, stop_band = _band_limits(tns_info, number_of_bands, max_sfb, short=False)

    tns_info.tns_data_present = 0

    for w, window_data in enumerate(tns_info.window_data[:number_of_windows]):
        tns_filter_data = window_data.tns_filter[0]
        window_data.num_filters = 0
        window_data.coef_resolution = DEF_TNS_COEFF_RES
        start_index = w * window_size + sfb_offsets[start_band]
        length = sfb_offsets[stop_band] - sfb_offsets[start_band]
        segment = spec[start_index : start_index + max(length, 0)]

        gain, k_coeffs = levinson_durbin(order, segment)
        tns_filter_data.k_coeffs[: order + 1] = k_coeffs

        if gain > DEF_TNS_GAIN_THRESH:
            window_data.num_filters += 1
            tns_info.tns_data_present = 1
            tns_filter_data.direction = 0
            tns_filter_data.coef_compress = 0
            tns_filter_data.length = length_in_bands
            indices, k_coeffs = quantize_reflection_coeffs(order, DEF_TNS_COEFF_RES, k_coeffs)
            tns_filter_data.index[1 : order + 1] = indices[1:]
            truncated_order, k_coeffs = truncate_coeffs(order, DEF_TNS_COEFF_THRESH, k_coeffs)
            tns_filter_data.k_coeffs[: order + 1] = k_coeffs
            tns_filter_data.order = truncated_order
            tns_filter_data.a_coeffs[: truncated_order + 1] = step_up(truncated_order, k_coeffs)
            _apply(spec, start_index, length, tns_inv_filter, tns_filter_data)


def _filter_only(
    tns_info: TnsInfo,
    number_of_bands: int,
    max_sfb: int,
    block_type: WindowType,
    sfb_offsets: Sequence[int],
    spec: MutableSequence[float],
    fn,
) -> None:
    short = WindowType(block_type) is WindowType.ONLY_SHORT_WINDOW
    if short:
        number_of_windows, window_size = MAX_SHORT_WINDOWS, BLOCK_LEN_SHORT
    else:
        number_of_windows, window_size = 1, BLOCK_LEN_LONG
    start_band, stop_band = _band_limits(tns_info, number_of_bands, max_sfb, short)

    for w, window_data in enumerate(tns_info.window_data[:number_of_windows]):
        start_index = w * window_size + sfb_offsets[start_band]
        length = sfb_offsets[stop_band] - sfb_offsets[start_band]
        if tns_info.tns_data_present and window_data.num_filters:
            _apply(spec, start_index, length, fn, window_data.tns_filter[0])


def tns_encode_filter_only(
    tns_info: TnsInfo,
    number_of_bands: int,
    max_sfb: int,
    block_type: WindowType,
    sfb_offsets: Sequence[int],
    spec: MutableSequence[float],
) -> None:
    """Apply the already chosen TNS analysis filters to ``spec`` in place."""
    _filter_only(tns_info, number_of_bands, max_sfb, block_type, sfb_offsets, spec, tns_inv_filter)


def tns_decode_filter_only(
    tns_info: TnsInfo,
    number_of_bands: int,
    max_sfb: int,
    block_type: WindowType,
    sfb_offsets: Sequence[int],
    spec: MutableSequence[float],
) -> None:
    """Apply the TNS synthesis filters to ``spec`` in place, undoing the analysis."""
    _filter_only(tns_info, number_of_bands, max_sfb, block_type, sfb_offsets, spec, tns_filter)