"""positioncore.unstuck

Loss budget for force-closing a stuck position.

The allowance is measured against the balance the account had at its
cumulative-PnL peak. It shrinks as the account draws down from that peak and
is floored at 0.0.
"""

import numpy as np


def calc_auto_unstuck_allowance(balance: float, loss_allowance_pct: float, pnl_cumsum_max: float, pnl_cumsum_last: float) -> float:
    """
    Realized loss currently allowed for auto unstuck.

    Parameters
    ----------
    balance:
        Current balance.
    loss_allowance_pct:
        Allowed drop from the peak balance, e.g. 0.01 for 1%.
    pnl_cumsum_max:
        Maximum of the cumulative realized-PnL series so far.
    pnl_cumsum_last:
        Latest value of the cumulative realized-PnL series.

    Notes
    -----
    balance_peak = balance + (pnl_cumsum_max - pnl_cumsum_last) must be
    non-zero; a zero peak raises ZeroDivisionError.
    """
    balance_peak = balance + (pnl_cumsum_max - pnl_cumsum_last)
    drop_since_peak_pct = balance / balance_peak - 1.0
    return max(0.0, balance_peak * (loss_allowance_pct + drop_since_peak_pct))


def calc_auto_unstuck_allowance_from_pnls(balance: float, loss_allowance_pct: float, pnls) -> float:
    """
    Same as calc_auto_unstuck_allowance, reading the peak from realized PnLs.

    The cumulative series starts at 0.0 before the first PnL, so the peak is
    never below zero. An empty series means no drawdown.
    """
    pnls = np.asarray(pnls, dtype=float)
    if pnls.size == 0:
        return calc_auto_unstuck_allowance(balance, loss_allowance_pct, 0.0, 0.0)
    cumsum = np.cumsum(pnls)
    pnl_cumsum_max = max(0.0, float(cumsum.max()))
    return calc_auto_unstuck_allowance(balance, loss_allowance_pct, pnl_cumsum_max, float(cumsum[-1]))
