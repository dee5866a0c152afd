"""positioncore.exchange_params

Per-symbol exchange constants.

The bundle is built by the caller from exchange metadata and only read by the
formulas. Only `qty_step` and `c_mult` feed the position/exposure math;
`price_step`, `min_qty` and `min_cost` travel with it for the caller's order
sizing.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

from .quantization import round_nearest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeParams:
    """
    Immutable exchange constraints for one symbol.

    Attributes
    ----------
    qty_step:
        Smallest tradable quantity increment.
    price_step:
        Smallest price increment.
    min_qty:
        Minimum order quantity.
    min_cost:
        Minimum order notional.
    c_mult:
        Contract multiplier converting qty * price into cost.
    """
    qty_step: float = 0.00001
    price_step: float = 0.00001
    min_qty: float = 0.00001
    min_cost: float = 1.0
    c_mult: float = 1.0

    def __post_init__(self):
        for name in ("qty_step", "price_step", "c_mult"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"{name} must be > 0, got {value}")

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "ExchangeParams":
        """
        Build ExchangeParams from a metadata mapping.

        Keys that are not fields are ignored. Values are cast to float, missing
        fields keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            logger.debug("Ignoring unknown exchange param keys: %s", unknown)
        return cls(**{k: float(v) for k, v in params.items() if k in known})

    def round_qty(self, qty: float) -> float:
        return round_nearest(qty, self.qty_step)

    def round_price(self, price: float) -> float:
        return round_nearest(price, self.price_step)
