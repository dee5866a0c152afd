"""positioncore.quantization

Step quantization of quantities and prices.

Every rounding variant snaps the raw value onto a multiple of `step` and then
rounds the product to 12 decimal places, which strips the representation noise
left behind by the division/multiplication (e.g. 3 * 0.1 -> 0.3 rather than
0.30000000000000004). Downstream equality checks rely on that second pass, so
the decimal count must not change.

Rounding convention
-------------------
Nearest rounding resolves ties away from zero (2.5 -> 3, -2.5 -> -3). Python's
built-in round() uses banker's rounding and is deliberately not used here.

Degenerate input
----------------
`step` must be non-zero. A zero step raises ZeroDivisionError for scalars and
arrays alike. NaN and infinite values pass through unchanged.
"""

import math

import numpy as np

from .array_utils import ensure_float_array, select_array_module
from .constants import DECIMAL_PLACES


def _round_half_away(x: float) -> float:
    if not math.isfinite(x):
        return x
    a = abs(x)
    r = math.floor(a)
    if a - r >= 0.5:
        r += 1
    return math.copysign(r, x)


def _ceil(x: float) -> float:
    return math.ceil(x) if math.isfinite(x) else x


def _floor(x: float) -> float:
    return math.floor(x) if math.isfinite(x) else x


def round_to_decimal_places(value: float, decimal_places: int = DECIMAL_PLACES) -> float:
    """Round `value` to `decimal_places` decimals, ties away from zero."""
    multiplier = 10.0 ** decimal_places
    return _round_half_away(value * multiplier) / multiplier


def round_up(n: float, step: float) -> float:
    """Smallest multiple of `step` that is >= n."""
    return round_to_decimal_places(_ceil(n / step) * step)


def round_nearest(n: float, step: float) -> float:
    """Nearest multiple of `step`; ties go away from zero."""
    return round_to_decimal_places(_round_half_away(n / step) * step)


def round_down(n: float, step: float) -> float:
    """Largest multiple of `step` that is <= n."""
    return round_to_decimal_places(_floor(n / step) * step)


# short names used throughout the strategy code
round_ = round_nearest
round_dn = round_down


# vectorized variants -------------------------------------------------------

def _round_half_away_array(x, xp):
    a = xp.abs(x)
    r = xp.floor(a)
    r = r + (a - r >= 0.5)
    return xp.copysign(r, x)


def _snap_array(x, xp):
    multiplier = 10.0 ** DECIMAL_PLACES
    return _round_half_away_array(x * multiplier, xp) / multiplier


def _quantize_array(values, step, op, prefer_gpu, gpu_min_size):
    if step == 0:
        raise ZeroDivisionError("step must be non-zero")
    size = getattr(values, "size", None)
    length = int(size) if size is not None else int(np.size(values))
    xp = select_array_module(prefer_gpu, length, gpu_min_size)
    arr = ensure_float_array(values, xp)
    units = arr / step
    if op == "up":
        units = xp.ceil(units)
    elif op == "down":
        units = xp.floor(units)
    else:
        units = _round_half_away_array(units, xp)
    return _snap_array(units * step, xp)


def round_up_array(values, step: float, prefer_gpu: object = False, gpu_min_size: int = 100_000):
    """
    Element-wise round_up over a sequence or array.

    Parameters
    ----------
    values:
        List, NumPy array or CuPy array of raw values.
    step:
        Quantization step.
    prefer_gpu:
        False (NumPy), True (CuPy if installed) or "auto" (CuPy once the input
        has at least `gpu_min_size` elements).

    Returns an array of the selected array module; each element equals
    round_up(value, step).
    """
    return _quantize_array(values, step, "up", prefer_gpu, gpu_min_size)


def round_nearest_array(values, step: float, prefer_gpu: object = False, gpu_min_size: int = 100_000):
    """Element-wise round_nearest; see round_up_array for parameters."""
    return _quantize_array(values, step, "nearest", prefer_gpu, gpu_min_size)


def round_down_array(values, step: float, prefer_gpu: object = False, gpu_min_size: int = 100_000):
    """Element-wise round_down; see round_up_array for parameters."""
    return _quantize_array(values, step, "down", prefer_gpu, gpu_min_size)
