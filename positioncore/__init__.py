"""
The positioncore module provides the arithmetic a trading engine needs to track
one leveraged position: step quantization, average entry price updates on
fills, exposure and PnL metrics, the auto-unstuck loss allowance, and
Lagrange interpolation for configuration curves.

All functions are pure. The calling engine owns every piece of state and
passes it in per call; nothing is kept between calls.

Typical flow
- Build ExchangeParams for the symbol
- Merge fills with calc_new_psize_pprice (or Position.apply_fill)
- Read wallet_exposure / price_difference_signed / PnL from the result

"""

from .constants import Side, LONG, SHORT, NO_POS, CLOSE
from .exchange_params import ExchangeParams
from .quantization import (
    round_to_decimal_places,
    round_up,
    round_nearest,
    round_down,
    round_,
    round_dn,
    round_up_array,
    round_nearest_array,
    round_down_array,
)
from .position import Position, calc_new_psize_pprice
from .metrics import (
    cost_from_quantity,
    quantity_from_cost,
    relative_difference,
    wallet_exposure,
    wallet_exposure_if_filled,
    pnl_long,
    pnl_short,
    calc_pnl,
    price_difference_signed,
)
from .unstuck import calc_auto_unstuck_allowance, calc_auto_unstuck_allowance_from_pnls
from .interpolation import interpolate
