import math

import pytest

from aaccore.coder import TNS_MAX_ORDER, TnsFilterData
from aaccore.lpc import (
    autocorrelation,
    levinson_durbin,
    quantize_reflection_coeffs,
    step_up,
    tns_filter,
    tns_inv_filter,
    truncate_coeffs,
)


def _ar1(coef, n=256):
    return [coef**i for i in range(n)]


def _noise_like(n=200):
    return [math.sin(0.37 * i) + 0.5 * math.cos(1.91 * i) + 0.1 * math.sin(5.3 * i * i) for i in range(n)]


def _filter(order, a, direction=0):
    f = TnsFilterData()
    f.order = order
    f.direction = direction
    f.a_coeffs[: len(a)] = a
    return f


# autocorrelation

def test_autocorrelation_small_example():
    assert autocorrelation(2, [1.0, 2.0, 3.0]) == [14.0, 8.0, 3.0]


def test_autocorrelation_lags_beyond_data_are_zero():
    r = autocorrelation(4, [1.5, -2.0])
    assert r[2:] == [0.0, 0.0, 0.0]
    assert len(r) == 5


def test_autocorrelation_reversal_invariant():
    data = _noise_like(50)
    r1 = autocorrelation(6, data)
    r2 = autocorrelation(6, data[::-1])
    assert r1 == pytest.approx(r2)


def test_autocorrelation_scales_quadratically():
    data = _noise_like(40)
    r1 = autocorrelation(5, data)
    r2 = autocorrelation(5, [3 * x for x in data])
    assert r2 == pytest.approx([9 * x for x in r1])


def test_autocorrelation_negative_order():
    with pytest.raises(ValueError):
        autocorrelation(-1, [1.0])


# levinson_durbin

def test_levinson_zero_signal():
    gain, k = levinson_durbin(4, [0.0] * 10)
    assert gain == 0.0
    assert k == [1.0, 0.0, 0.0, 0.0, 0.0]


def test_levinson_ar1_recovers_coefficient():
    gain, k = levinson_durbin(2, _ar1(0.9))
    assert k[0] == 1.0
    assert k[1] == pytest.approx(-0.9, abs=1e-2)
    assert gain > 1.4


def test_levinson_reflection_coeffs_bounded_and_gain_at_least_one():
    gain, k = levinson_durbin(8, _noise_like())
    assert len(k) == 9
    assert all(abs(x) < 1.0 for x in k[1:])
    assert gain >= 1.0


def test_levinson_order_too_high():
    with pytest.raises(ValueError):
        levinson_durbin(TNS_MAX_ORDER + 1, [1.0, 2.0])


# step_up

def test_step_up_order_zero():
    assert step_up(0, [1.0]) == [1.0]


def test_step_up_first_order_equals_reflection():
    assert step_up(1, [1.0, -0.4]) == [1.0, -0.4]


def test_step_up_last_coeff_equals_last_reflection():
    k = [1.0, 0.3, -0.2, 0.1]
    a = step_up(3, k)
    assert a[0] == 1.0
    assert a[3] == pytest.approx(0.1)
    assert len(a) == 4


def test_step_up_too_few_coeffs():
    with pytest.raises(ValueError):
        step_up(3, [1.0, 0.2])


def test_prediction_residual_has_less_energy():
    data = _noise_like()
    order = 6
    gain, k = levinson_durbin(order, data)
    residual = list(data)
    tns_inv_filter(residual, _filter(order, step_up(order, k)))
    assert sum(x * x for x in residual) < sum(x * x for x in data)
    assert gain > 1.0


# quantize_reflection_coeffs

def test_quantize_zero_stays_zero():
    idx, k = quantize_reflection_coeffs(2, 4, [1.0, 0.0, 0.0])
    assert idx == [0, 0, 0]
    assert k == [1.0, 0.0, 0.0]


def test_quantize_positive_is_idempotent():
    _, k1 = quantize_reflection_coeffs(3, 4, [1.0, 0.8, 0.35, 0.1])
    idx2, k2 = quantize_reflection_coeffs(3, 4, k1)
    idx3, k3 = quantize_reflection_coeffs(3, 4, k2)
    assert idx2 == idx3
    assert k2 == pytest.approx(k3)


def test_quantize_results_bounded():
    idx, k = quantize_reflection_coeffs(4, 4, [1.0, -0.95, 0.6, -0.3, 0.99])
    assert all(abs(x) <= 1.0 for x in k[1:])
    assert all(-8 <= i <= 8 for i in idx)
    assert k[0] == 1.0


def test_quantize_out_of_domain():
    with pytest.raises(ValueError):
        quantize_reflection_coeffs(1, 4, [1.0, 1.5])


# truncate_coeffs

def test_truncate_drops_small_tail():
    order, k = truncate_coeffs(3, 0.1, [1.0, 0.5, 0.05, 0.02])
    assert order == 1
    assert k == [1.0, 0.5, 0.0, 0.0]


def test_truncate_keeps_full_order():
    order, k = truncate_coeffs(2, 0.1, [1.0, 0.05, 0.5])
    assert order == 2
    assert k == [1.0, 0.05, 0.5]


def test_truncate_all_zero():
    order, k = truncate_coeffs(2, 0.1, [0.0, 0.0, 0.0])
    assert order == 0
    assert k == [0.0, 0.0, 0.0]


# tns filters

def test_inv_filter_forward_impulse():
    spec = [1.0, 0.0, 0.0]
    tns_inv_filter(spec, _filter(1, [1.0, 0.5]))
    assert spec == [1.0, 0.5, 0.0]


def test_inv_filter_reverse_impulse():
    spec = [0.0, 0.0, 1.0]
    tns_inv_filter(spec, _filter(1, [1.0, 0.5], direction=1))
    assert spec == [0.0, 0.5, 1.0]


def test_order_zero_filters_leave_spec_unchanged():
    data = _noise_like(20)
    spec = list(data)
    tns_inv_filter(spec, _filter(0, [1.0]))
    tns_filter(spec, _filter(0, [1.0]))
    assert spec == data


@pytest.mark.parametrize("direction", [0, 1])
def test_filter_round_trip(direction):
    data = _noise_like(64)
    order = 5
    _, k = levinson_durbin(order, data)
    f = _filter(order, step_up(order, k), direction)
    spec = list(data)
    tns_inv_filter(spec, f)
    assert spec != pytest.approx(data)
    tns_filter(spec, f)
    assert spec == pytest.approx(data)


def test_filter_empty_spec():
    spec = []
    tns_filter(spec, _filter(2, [1.0, 0.1, 0.2]))
    tns_inv_filter(spec, _filter(2, [1.0, 0.1, 0.2]))
    assert spec == []