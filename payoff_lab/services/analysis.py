from __future__ import annotations

from collections.abc import Sequence

from payoff_lab.schemas.payoff import BREAK_EVEN_EPSILON, PayoffAnalysis, SweepConfig
from payoff_lab.schemas.positions import Position
from payoff_lab.services.display import chart_series, metrics_display
from payoff_lab.services.metrics import extract
from payoff_lab.services.sweep import sample


def analyze(
    positions: Sequence[Position],
    *,
    sweep: SweepConfig | None = None,
    epsilon: float = BREAK_EVEN_EPSILON,
) -> PayoffAnalysis:
    """Full re-sweep: curve -> metrics -> chart series + display strings.

    Raises DegenerateSweep for an ill-formed sweep.
    """
    legs = list(positions)
    curve = sample(legs, sweep)
    metrics = extract(curve, epsilon=epsilon)
    return PayoffAnalysis(
        positions=legs,
        curve=curve,
        metrics=metrics,
        chart=chart_series(curve),
        display=metrics_display(metrics),
    )
