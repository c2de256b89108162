from __future__ import annotations

from payoff_lab.schemas.payoff import BREAK_EVEN_EPSILON, Metrics, SampledCurve


def extract(curve: SampledCurve, epsilon: float = BREAK_EVEN_EPSILON) -> Metrics:
    """Max profit, max loss and break-even prices of a sampled curve.

    Break-evens are sample prices whose |P/L| is strictly below `epsilon`. This is
    a sampling approximation: crossings between two sample prices can be missed,
    and a flat stretch near zero reports every price in it.
    """
    if epsilon <= 0:
        raise ValueError("epsilon must be > 0")

    if not curve.points or curve.leg_count == 0:
        return Metrics(status="undefined")

    values = curve.values
    break_even: set[int] = set()
    for point in curve.points:
        if abs(point.pnl) < epsilon:
            break_even.add(point.price)

    return Metrics(
        status="ok",
        max_profit=max(values),
        max_loss=min(values),
        break_even_points=sorted(break_even),
    )
