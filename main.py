"""Example run script: replay a CSV fill log and report the resulting position and exposure.

Usage
-----
    python main.py --fills data/fills.csv --qty-step 0.001 --balance 1000
    python main.py --fills data/fills.csv --plot --save

The CSV needs `qty` (signed) and `price` columns; other columns are kept.
This script stands in for the calling engine; the positioncore package has no CLI.
"""

import argparse
import logging

import pandas as pd

from positioncore import ExchangeParams
from positioncore.replay import replay_fills, summarize_replay, plot_replay

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Replay fills through the position formulas and print exposure stats.",
    )
    p.add_argument("--fills", "-f", required=True, help="CSV with qty and price columns.")
    p.add_argument("--qty-step", type=float, default=ExchangeParams.qty_step, help="Exchange quantity step.")
    p.add_argument("--c-mult", type=float, default=ExchangeParams.c_mult, help="Contract multiplier.")
    p.add_argument("--balance", type=float, default=1000.0, help="Balance used for wallet exposure.")
    p.add_argument("--plot", action="store_true", help="Plot position size and entry price.")
    p.add_argument("--save", action="store_true", help="With --plot, save the figure instead of showing it.")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        exchange_params = ExchangeParams(qty_step=args.qty_step, c_mult=args.c_mult)
    except ValueError as e:
        parser.error(str(e))

    fills = pd.read_csv(args.fills)
    logger.info("Loaded %d fills from %s", len(fills), args.fills)

    replay = replay_fills(fills, exchange_params)
    stats = summarize_replay(replay, args.balance, exchange_params.c_mult)

    print(f"Fills: {stats['Fills']}")
    print(f"Final Position Size: {stats['FinalSize']}")
    print(f"Final Entry Price: {stats['FinalPrice']:.8f}")
    print(f"Realized PnL: {stats['RealizedPnL']:.8f}")
    print(f"Max Wallet Exposure: {stats['MaxWalletExposure']*100:.2f}%")

    if args.plot:
        plot_replay(replay, save=args.save)


if __name__ == "__main__":
    main()
