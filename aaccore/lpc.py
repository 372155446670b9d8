"""Linear prediction helpers used by temporal noise shaping.

Autocorrelation, Levinson-Durbin recursion, conversion of reflection
coefficients to predictor coefficients, coefficient quantisation and the
TNS analysis (FIR) and synthesis (IIR) filters.
"""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence

from aaccore.coder import TNS_MAX_ORDER, TnsFilterData


def _check_order(order: int) -> None:
    if not 0 <= order <= TNS_MAX_ORDER:
        raise ValueError(f"filter order must lie in 0..{TNS_MAX_ORDER}, got {order}")


def autocorrelation(max_order: int, data: Sequence[float]) -> list[float]:
    """Autocorrelation estimate of ``data`` for lags 0..max_order.

    Lags at or beyond the length of the data are zero.
    """
    if max_order < 0:
        raise ValueError("maximum order must not be negative")
    size = len(data)
    result = []
    for lag in range(max_order + 1):
        total = 0.0
        for left, right in zip(data[: max(size - lag, 0)], data[lag:]):
            total += left * right
        result.append(total)
    return result


def levinson_durbin(order: int, data: Sequence[float]) -> tuple[float, list[float]]:
    """Reflection coefficients of ``data`` by Levinson-Durbin recursion.

    Returns ``(gain, k_coeffs)`` where ``gain`` is the prediction gain
    (signal energy over residual energy) and ``k_coeffs`` holds
    ``order + 1`` reflection coefficients, the first being 1.0. A signal
    without energy gives a gain of 0 and all higher coefficients 0.
    """
    _check_order(order)
    r = autocorrelation(order, data)
    signal = r[0]
    k_coeffs = [1.0] + [0.0] * order
    if not signal:
        return 0.0, k_coeffs

    error = r[0]
    last = [1.0]
    for m in range(1, order + 1):
        if error == 0.0:
            # The signal is fully predicted: no residual energy is left.
            return math.inf, k_coeffs
        acc = last[0] * r[m]
        for i in range(1, m):
            acc += last[i] * r[m - i]
        k = -acc / error
        k_coeffs[m] = k
        last = [1.0] + [last[i] + k * last[m - i] for i in range(1, m)] + [k]
        error = error * (1 - k * k)

    if error == 0.0:
        return math.inf, k_coeffs
    return signal / error, k_coeffs


def step_up(order: int, k_coeffs: Sequence[float]) -> list[float]:
    """Convert reflection coefficients into ``order + 1`` predictor coefficients."""
    _check_order(order)
    if len(k_coeffs) < order + 1:
        raise ValueError("not enough reflection coefficients for the order")
    a = [1.0]
    for m in range(1, order + 1):
        a.append(0.0)
        a = [1.0] + [a[i] + k_coeffs[m] * a[m - i] for i in range(1, m + 1)]
    return a


def quantize_reflection_coeffs(
    order: int, coef_res: int, k_coeffs: Sequence[float]
) -> tuple[list[int], list[float]]:
    """Quantise reflection coefficients 1..order to ``coef_res`` bits.

    Returns ``(indices, k_coeffs)``: the quantisation indices and the
    coefficients after inverse quantisation. Entry 0 is carried over
    unchanged, with index 0.
    """
    _check_order(order)
    if coef_res < 1:
        raise ValueError("coefficient resolution must be at least one bit")
    if len(k_coeffs) < order + 1:
        raise ValueError("not enough reflection coefficients for the order")
    steps = 1 << (coef_res - 1)
    iqfac = (steps - 0.5) / (math.pi / 2)
    iqfac_m = (steps + 0.5) / (math.pi / 2)

    indices = [0] * (order + 1)
    quantized = list(k_coeffs[: order + 1])
    for i in range(1, order + 1):
        k = quantized[i]
        if not -1.0 <= k <= 1.0:
            raise ValueError(f"reflection coefficient out of range: {k}")
        idx = int(0.5 + math.asin(k) * (iqfac if k >= 0 else iqfac_m))
        indices[i] = idx
        quantized[i] = math.sin(idx / (iqfac if idx >= 0 else iqfac_m))
    return indices, quantized


def truncate_coeffs(
    order: int, threshold: float, k_coeffs: Sequence[float]
) -> tuple[int, list[float]]:
    """Zero the tail coefficients whose magnitude does not exceed ``threshold``.

    Returns ``(truncated_order, k_coeffs)``; the order is the index of the
    last coefficient left non-zero, or 0 if none is.
    """
    _check_order(order)
    if len(k_coeffs) < order + 1:
        raise ValueError("not enough reflection coefficients for the order")
    result = list(k_coeffs[: order + 1])
    for i in range(order, -1, -1):
        if abs(result[i]) <= threshold:
            result[i] = 0.0
        if result[i] != 0.0:
            return i, result
    return 0, result


def tns_filter(spec: MutableSequence[float], filter_data: TnsFilterData) -> None:
    """Synthesis (all-pole) filtering of ``spec`` in place."""
    order = filter_data.order
    a = filter_data.a_coeffs
    n = len(spec)
    if filter_data.direction:
        for i in range(n - 2, -1, -1):
            acc = spec[i]
            for j in range(1, min(n - 1 - i, order) + 1):
                acc -= spec[i + j] * a[j]
            spec[i] = acc
    else:
        for i in range(1, n):
            acc = spec[i]
            for j in range(1, min(i, order) + 1):
                acc -= spec[i - j] * a[j]
            spec[i] = acc


def tns_inv_filter(spec: MutableSequence[float], filter_data: TnsFilterData) -> None:
    """Analysis (all-zero) filtering of ``spec`` in place."""
    order = filter_data.order
    a = filter_data.a_coeffs
    n = len(spec)
    original = list(spec)
    if filter_data.direction:
        for i in range(n - 2, -1, -1):
            acc = original[i]
            for j in range(1, min(n - 1 - i, order) + 1):
                acc += original[i + j] * a[j]
            spec[i] = acc
    else:
        for i in range(1, n):
            acc = original[i]
            for j in range(1, min(i, order) + 1):
                acc += original[i - j] * a[j]
            spec[i] = acc