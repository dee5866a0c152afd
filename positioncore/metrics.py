"""positioncore.metrics

Exposure, PnL and price-difference metrics derived from a position.

Guarded inputs resolve to a fixed value instead of raising:
- quantity_from_cost: price <= 0 -> 0.0
- relative_difference: y == 0 -> 0.0 if x == 0 else +inf
- wallet_exposure: balance <= 0 or position_size == 0 -> 0.0
- price_difference_signed: position_price <= 0 -> 0.0

Side-dependent functions accept only LONG and SHORT and raise ValueError for
anything else.
"""

from numbers import Integral

from .constants import Side
from .exchange_params import ExchangeParams
from .position import calc_new_psize_pprice, cost_from_quantity
from .quantization import round_nearest


def _check_side(pside) -> None:
    # bools and floats compare equal to the int tags but are not sides
    if isinstance(pside, bool) or not isinstance(pside, Integral):
        raise ValueError(f"unknown pside {pside!r}")


def quantity_from_cost(cost: float, price: float, c_mult: float) -> float:
    if price > 0.0:
        return (cost / price) / c_mult
    return 0.0


def relative_difference(x: float, y: float) -> float:
    """
    |x - y| / |y|, measured against the reference `y`.

    A zero reference gives 0.0 when `x` is also zero and +inf otherwise. The
    function is not symmetric in its arguments.
    """
    if y == 0.0:
        return 0.0 if x == 0.0 else float('inf')
    return abs(x - y) / abs(y)


def wallet_exposure(c_mult: float, balance: float, position_size: float, position_price: float) -> float:
    """Fraction of `balance` committed to the position's cost."""
    if balance <= 0.0 or position_size == 0.0:
        return 0.0
    return cost_from_quantity(position_size, position_price, c_mult) / balance


def wallet_exposure_if_filled(balance: float, psize: float, pprice: float, qty: float, price: float, exchange_params: ExchangeParams) -> float:
    """
    Wallet exposure the position would have after a hypothetical fill.

    Size and fill quantity are taken as magnitudes and rounded to the
    exchange's qty_step before merging. Nothing is mutated; this is only a
    what-if for order evaluation.
    """
    psize = round_nearest(abs(psize), exchange_params.qty_step)
    qty = round_nearest(abs(qty), exchange_params.qty_step)
    new_psize, new_pprice = calc_new_psize_pprice(psize, pprice, qty, price, exchange_params.qty_step)
    return wallet_exposure(exchange_params.c_mult, balance, new_psize, new_pprice)


def pnl_long(entry_price: float, close_price: float, qty: float, c_mult: float) -> float:
    return abs(qty) * c_mult * (close_price - entry_price)


def pnl_short(entry_price: float, close_price: float, qty: float, c_mult: float) -> float:
    return abs(qty) * c_mult * (entry_price - close_price)


def calc_pnl(pside: int, entry_price: float, close_price: float, qty: float, c_mult: float) -> float:
    """PnL of closing `qty` for the given side."""
    _check_side(pside)
    match pside:
        case Side.LONG:
            return pnl_long(entry_price, close_price, qty, c_mult)
        case Side.SHORT:
            return pnl_short(entry_price, close_price, qty, c_mult)
    raise ValueError(f"unknown pside {pside}")


def price_difference_signed(pside: int, position_price: float, price: float) -> float:
    """
    Signed relative distance of `price` from the entry price.

    Positive values point in the losing direction for the side:
    - LONG:  1 - price / position_price
    - SHORT: price / position_price - 1

    Returns 0.0 when position_price <= 0. Raises ValueError for any side other
    than LONG or SHORT, including NO_POS and CLOSE.
    """
    _check_side(pside)
    match pside:
        case Side.LONG:
            return 1.0 - price / position_price if position_price > 0.0 else 0.0
        case Side.SHORT:
            return price / position_price - 1.0 if position_price > 0.0 else 0.0
    raise ValueError(f"unknown pside {pside}")
