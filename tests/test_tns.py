import math

import pytest

from aaccore.coder import TnsInfo, WindowType
from aaccore.config import MpegVersion, ObjectType
from aaccore.tns import (
    tns_decode_filter_only,
    tns_encode,
    tns_encode_filter_only,
    tns_init,
)

SFB_OFFSETS = [16 * i for i in range(65)]
NUM_BANDS = 49
MAX_SFB = 49
SR_INDEX_44100 = 4


def _info():
    info = TnsInfo()
    tns_init(info, SR_INDEX_44100, ObjectType.LOW, MpegVersion.MPEG4)
    return info


def _tonal_spec():
    return [math.cos(0.2 * i) for i in range(1024)]


def test_init_low_mpeg4_limits():
    info = _info()
    assert info.tns_max_bands_long == 42
    assert info.tns_max_bands_short == 14
    assert info.tns_max_order_long == 12
    assert info.tns_max_order_short == 7
    assert info.tns_min_band_number_long == 17
    assert info.tns_min_band_number_short == 3


@pytest.mark.parametrize(
    "object_type, mpeg, index, order",
    [
        (ObjectType.LOW, MpegVersion.MPEG2, 4, 12),
        (ObjectType.MAIN, MpegVersion.MPEG2, 4, 20),
        (ObjectType.LTP, MpegVersion.MPEG2, 4, 20),
        (ObjectType.LOW, MpegVersion.MPEG4, 5, 12),
        (ObjectType.LOW, MpegVersion.MPEG4, 6, 20),
        (ObjectType.MAIN, MpegVersion.MPEG4, 11, 20),
    ],
)
def test_init_long_order(object_type, mpeg, index, order):
    info = TnsInfo()
    tns_init(info, index, object_type, mpeg)
    assert info.tns_max_order_long == order


def test_init_ssr_sets_only_min_bands():
    info = TnsInfo()
    tns_init(info, 11, ObjectType.SSR, MpegVersion.MPEG4)
    assert info.tns_min_band_number_long == 31
    assert info.tns_min_band_number_short == 12
    assert info.tns_max_bands_long == 0
    assert info.tns_max_order_long == 0


def test_init_rejects_bad_index():
    with pytest.raises(IndexError):
        tns_init(TnsInfo(), 12, ObjectType.LOW, MpegVersion.MPEG4)


def test_short_window_disables_tns():
    info = _info()
    info.tns_data_present = 1
    spec = _tonal_spec()
    original = list(spec)
    tns_encode(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_SHORT_WINDOW, SFB_OFFSETS, spec)
    assert info.tns_data_present == 0
    assert spec == original


def test_silent_spectrum_uses_no_filter():
    info = _info()
    spec = [0.0] * 1024
    tns_encode(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, spec)
    assert info.tns_data_present == 0
    assert info.window_data[0].num_filters == 0
    assert spec == [0.0] * 1024


def test_tonal_spectrum_is_filtered_inside_band_range():
    info = _info()
    spec = _tonal_spec()
    original = list(spec)
    tns_encode(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, spec)

    assert info.tns_data_present == 1
    window = info.window_data[0]
    assert window.num_filters == 1
    flt = window.tns_filter[0]
    assert flt.length == NUM_BANDS - info.tns_min_band_number_long
    assert 1 <= flt.order <= info.tns_max_order_long
    assert flt.direction == 0
    assert flt.a_coeffs[0] == 1.0

    start, stop = SFB_OFFSETS[17], SFB_OFFSETS[42]
    assert spec[:start] == original[:start]
    assert spec[stop:] == original[stop:]
    assert sum(x * x for x in spec[start:stop]) < sum(x * x for x in original[start:stop])


def test_decode_undoes_encode():
    info = _info()
    spec = _tonal_spec()
    original = list(spec)
    tns_encode(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, spec)
    tns_decode_filter_only(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, spec)
    assert spec == pytest.approx(original, abs=1e-6)


def test_filter_only_matches_full_encode():
    info = _info()
    encoded = _tonal_spec()
    tns_encode(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, encoded)
    again = _tonal_spec()
    tns_encode_filter_only(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, again)
    assert again == pytest.approx(encoded)


def test_filter_only_without_data_leaves_spectrum():
    info = _info()
    spec = _tonal_spec()
    original = list(spec)
    tns_encode_filter_only(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, spec)
    tns_decode_filter_only(info, NUM_BANDS, MAX_SFB, WindowType.ONLY_SHORT_WINDOW, SFB_OFFSETS, spec)
    assert spec == original


def test_max_sfb_zero_gives_empty_range():
    info = _info()
    spec = _tonal_spec()
    original = list(spec)
    tns_encode(info, NUM_BANDS, 0, WindowType.ONLY_LONG_WINDOW, SFB_OFFSETS, spec)
    assert info.tns_data_present == 0
    assert spec == original