from __future__ import annotations

from payoff_lab.schemas.payoff import ChartPoint, ChartSeries, Metrics, MetricsDisplay, SampledCurve


# Shown on the metric cards when there is nothing to measure.
PLACEHOLDER = "-"


def format_number(x: float) -> str:
    """Render like a browser would: 12.0 -> "12", 11.045 -> "11.045"."""
    x = float(x)
    if x.is_integer():
        return str(int(x))
    return repr(x)


def tooltip_text(price: int, pnl: float) -> str:
    return f"Price: {price}, P/L: {format_number(pnl)}"


def chart_series(curve: SampledCurve) -> ChartSeries:
    return ChartSeries(
        labels=curve.prices,
        values=curve.values,
        points=[ChartPoint(x=p.price, y=p.pnl, tooltip=tooltip_text(p.price, p.pnl)) for p in curve.points],
    )


def metrics_display(metrics: Metrics) -> MetricsDisplay:
    if metrics.status == "undefined" or metrics.max_profit is None or metrics.max_loss is None:
        return MetricsDisplay(max_profit=PLACEHOLDER, max_loss=PLACEHOLDER, break_even_points="")

    return MetricsDisplay(
        max_profit=format_number(metrics.max_profit),
        max_loss=format_number(metrics.max_loss),
        break_even_points=", ".join(str(p) for p in metrics.break_even_points),
    )
