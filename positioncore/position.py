"""positioncore.position

Position size / average entry price bookkeeping.

A position is the pair (psize, pprice). A flat position is (0.0, 0.0): the
entry price carries no meaning without size and is reset to 0.0 (never NaN)
whenever the size goes to zero.
"""

import math
from dataclasses import dataclass

from .quantization import round_nearest


def cost_from_quantity(qty: float, price: float, c_mult: float) -> float:
    return abs(qty) * price * c_mult


def nan_to_0(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def calc_new_psize_pprice(psize: float, pprice: float, qty: float, price: float, qty_step: float) -> tuple[float, float]:
    """
    Merge a fill into a position.

    Parameters
    ----------
    psize, pprice:
        Current position size and average entry price.
    qty, price:
        Fill quantity and fill price.
    qty_step:
        Exchange quantity step; the merged size is rounded to it.

    Returns
    -------
    (new_psize, new_pprice)
        - qty == 0: the position unchanged.
        - psize == 0: the fill itself, (qty, price).
        - merged size rounds to 0: (0.0, 0.0).
        - otherwise the size-weighted average of old and fill prices. A NaN
          old price counts as 0.0.

    Notes
    -----
    Nothing is clamped. A tiny non-zero merged size yields large weights and
    the result is returned as computed.
    """
    if qty == 0.0:
        return psize, pprice
    if psize == 0.0:
        return qty, price
    new_psize = round_nearest(psize + qty, qty_step)
    if new_psize == 0.0:
        return 0.0, 0.0
    return new_psize, nan_to_0(pprice) * (psize / new_psize) + price * (qty / new_psize)


@dataclass(frozen=True)
class Position:
    """Immutable (size, entry price) pair. Fills produce new instances."""
    psize: float = 0.0
    pprice: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.psize != 0.0

    def apply_fill(self, qty: float, price: float, qty_step: float) -> "Position":
        new_psize, new_pprice = calc_new_psize_pprice(self.psize, self.pprice, qty, price, qty_step)
        return Position(psize=new_psize, pprice=new_pprice)

    def cost(self, c_mult: float) -> float:
        """Notional cost of the position (always non-negative)."""
        return cost_from_quantity(self.psize, self.pprice, c_mult)
