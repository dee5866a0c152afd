"""positioncore.replay

Replay a fill log through the position formulas.

The fill log is a DataFrame with one row per fill:
- qty: signed quantity (positive buys, negative sells)
- price: fill price

Fills that open or grow the position are merged with calc_new_psize_pprice.
Fills against the position reduce its size at an unchanged entry price and book
the PnL of the closed part; a fill that crosses zero opens the remainder at its
own price. Extra columns (timestamps, symbols, comments) are carried through
unchanged.
"""

import logging
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .array_utils import df_to_arrays
from .constants import LONG, SHORT
from .exchange_params import ExchangeParams
from .metrics import calc_pnl, wallet_exposure
from .position import calc_new_psize_pprice
from .quantization import round_nearest

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["qty", "price"]


def replay_fills(fills: pd.DataFrame, exchange_params: ExchangeParams, psize: float = 0.0, pprice: float = 0.0) -> pd.DataFrame:
    """
    Apply fills in order and return a copy with position columns added.

    Parameters
    ----------
    fills:
        DataFrame with at least `qty` and `price` columns.
    exchange_params:
        Supplies qty_step (fill quantities and sizes are rounded to it) and
        c_mult for realized PnL.
    psize, pprice:
        Starting position. Defaults to flat.

    Returns
    -------
    pd.DataFrame
        Copy of `fills` with `psize`, `pprice` (position after the fill) and
        `realized_pnl` (PnL of the reducing part of the fill, 0.0 otherwise).

    Raises
    ------
    TypeError
        If `fills` is not a DataFrame.
    KeyError
        If `qty` or `price` is missing.
    """
    arrays = df_to_arrays(fills, REQUIRED_COLUMNS)
    qtys = arrays["qty"]
    prices = arrays["price"]

    n = len(qtys)
    psizes = np.empty(n, dtype=float)
    pprices = np.empty(n, dtype=float)
    realized = np.zeros(n, dtype=float)

    for i in range(n):
        qty = exchange_params.round_qty(float(qtys[i]))
        price = float(prices[i])
        if psize != 0.0 and qty != 0.0 and (psize > 0.0) != (qty > 0.0):
            # reducing fill: close at the current entry price, open any remainder at the fill price
            closed_qty = min(abs(qty), abs(psize))
            pside = LONG if psize > 0.0 else SHORT
            realized[i] = calc_pnl(pside, pprice, price, closed_qty, exchange_params.c_mult)
            remainder = round_nearest(psize + qty, exchange_params.qty_step)
            if remainder == 0.0:
                psize, pprice = 0.0, 0.0
                logger.debug("Position closed at row %d, realized %.8f", i, realized[i])
            elif (remainder > 0.0) == (psize > 0.0):
                psize = remainder
            else:
                psize, pprice = calc_new_psize_pprice(0.0, 0.0, remainder, price, exchange_params.qty_step)
                logger.debug("Position flipped at row %d to %.8f @ %.8f", i, psize, pprice)
        else:
            psize, pprice = calc_new_psize_pprice(psize, pprice, qty, price, exchange_params.qty_step)
        psizes[i] = psize
        pprices[i] = pprice

    out = fills.copy()
    out["psize"] = psizes
    out["pprice"] = pprices
    out["realized_pnl"] = realized
    return out


def summarize_replay(replay: pd.DataFrame, balance: float, c_mult: float = 1.0) -> dict:
    """
    Summary statistics for a replayed fill log.

    Wallet exposure is measured against the fixed `balance` after every fill.

    Returns
    -------
    dict
        FinalSize, FinalPrice, RealizedPnL, MaxWalletExposure, Fills.
    """
    if replay.empty:
        return {
            'FinalSize': 0.0,
            'FinalPrice': 0.0,
            'RealizedPnL': 0.0,
            'MaxWalletExposure': 0.0,
            'Fills': 0,
        }
    exposures = [
        wallet_exposure(c_mult, balance, psize, pprice)
        for psize, pprice in zip(replay['psize'], replay['pprice'])
    ]
    return {
        'FinalSize': float(replay['psize'].iloc[-1]),
        'FinalPrice': float(replay['pprice'].iloc[-1]),
        'RealizedPnL': float(replay['realized_pnl'].sum()),
        'MaxWalletExposure': float(max(exposures)),
        'Fills': int(len(replay)),
    }


def plot_replay(replay: pd.DataFrame, save: bool = False, path: str = "position_replay.png"):
    """
    Plot position size and average entry price over the fill sequence.

    When `save` is True the figure is written to `path` instead of shown.
    Returns the matplotlib Figure.
    """
    fig, (ax_size, ax_price) = plt.subplots(2, 1, figsize=(10, 6), sharex=True)
    ax_size.step(range(len(replay)), replay['psize'], where='post', color='tab:blue')
    ax_size.axhline(0.0, color='black', linewidth=0.5)
    ax_size.set_ylabel('Position Size')
    ax_size.set_title('Position Replay')

    # flat rows carry pprice 0.0, which is not a price
    entry = replay['pprice'].where(replay['psize'] != 0.0)
    ax_price.plot(range(len(replay)), entry, color='tab:orange', label='Entry Price')
    ax_price.scatter(range(len(replay)), replay['price'], s=8, color='tab:gray', label='Fill Price')
    ax_price.set_xlabel('Fill #')
    ax_price.set_ylabel('Price')
    ax_price.legend()
    fig.tight_layout()

    if save:
        fig.savefig(path)
        logger.info("Saved replay plot to %s", path)
    else:
        try:
            plt.show()
        except Exception:
            logger.debug('Non-interactive backend; skipping plt.show()')
    return fig
