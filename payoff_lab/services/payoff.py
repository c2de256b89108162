from __future__ import annotations

import math
from collections.abc import Iterable

from payoff_lab.schemas.positions import Position


def intrinsic_value(position: Position, price: float) -> float:
    if position.kind == "call":
        return max(0.0, price - position.strike)
    return max(0.0, position.strike - price)


def payoff(position: Position, price: float) -> float:
    """Profit/loss of one leg at expiration.

    The premium is always subtracted as the cost basis of a long leg; a short leg
    is the exact mirror image.
    """
    raw = intrinsic_value(position, price) - position.premium
    if position.direction == "short":
        return -raw
    return raw


def evaluate(portfolio: Iterable[Position], price: float) -> float:
    """Aggregate P/L of all legs at `price` (0.0 for an empty portfolio).

    fsum is exactly rounded, so the total does not depend on leg order.
    """
    return math.fsum(payoff(p, price) for p in portfolio)
