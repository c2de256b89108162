from __future__ import annotations

import logging
from collections.abc import Sequence

from payoff_lab.errors import DegenerateSweep
from payoff_lab.schemas.payoff import CurvePoint, SampledCurve, SweepConfig
from payoff_lab.schemas.positions import Position
from payoff_lab.services.payoff import evaluate, payoff


logger = logging.getLogger(__name__)


def sweep_prices(config: SweepConfig | None = None) -> list[int]:
    """Return the integer prices of the sweep, bounds inclusive."""
    cfg = config or SweepConfig()
    if cfg.step <= 0:
        logger.warning("Rejected sweep with step=%s", cfg.step)
        raise DegenerateSweep(f"step must be > 0 (got {cfg.step})")
    if cfg.price_max < cfg.price_min:
        logger.warning("Rejected sweep with price_min=%s > price_max=%s", cfg.price_min, cfg.price_max)
        raise DegenerateSweep(f"price_max ({cfg.price_max}) must be >= price_min ({cfg.price_min})")
    return list(range(cfg.price_min, cfg.price_max + 1, cfg.step))


def sample(portfolio: Sequence[Position], config: SweepConfig | None = None) -> SampledCurve:
    """Sweep the price range and evaluate the whole portfolio at each price.

    The same curve feeds both the chart and the metrics, so the two always agree.
    """
    cfg = config or SweepConfig()
    legs = list(portfolio)
    points = [CurvePoint(price=s, pnl=evaluate(legs, s)) for s in sweep_prices(cfg)]
    return SampledCurve(points=points, leg_count=len(legs), sweep=cfg)


def leg_contributions(portfolio: Sequence[Position], config: SweepConfig | None = None) -> list[list[float]]:
    """Per-leg P/L over the sweep, indexed by [leg][price_index]."""
    prices = sweep_prices(config)
    return [[payoff(leg, s) for s in prices] for leg in portfolio]
