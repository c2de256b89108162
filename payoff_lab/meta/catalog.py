"""Static metadata for the payoff page.

The UI fetches CATALOG to build the leg editor (dropdowns, number inputs) and the
chart captions. DEFAULT_QUOTES seeds a new session with four legs.
"""

from __future__ import annotations

from payoff_lab.schemas.payoff import (
    BREAK_EVEN_EPSILON,
    DEFAULT_PRICE_MAX,
    DEFAULT_PRICE_MIN,
    DEFAULT_STEP,
    X_AXIS_TITLE,
    Y_AXIS_TITLE,
)


DEFAULT_QUOTES: list[dict[str, object]] = [
    {
        "strike_price": 100,
        "type": "Call",
        "bid": 10.05,
        "ask": 12.04,
        "long_short": "long",
        "expiration_date": "2025-12-17T00:00:00Z",
    },
    {
        "strike_price": 102.5,
        "type": "Call",
        "bid": 12.1,
        "ask": 14,
        "long_short": "long",
        "expiration_date": "2025-12-17T00:00:00Z",
    },
    {
        "strike_price": 103,
        "type": "Put",
        "bid": 14,
        "ask": 15.5,
        "long_short": "short",
        "expiration_date": "2025-12-17T00:00:00Z",
    },
    {
        "strike_price": 105,
        "type": "Put",
        "bid": 16,
        "ask": 18,
        "long_short": "long",
        "expiration_date": "2025-12-17T00:00:00Z",
    },
]


CATALOG: dict[str, object] = {
    "version": "1.0",
    "position_fields": [
        {
            "key": "kind",
            "label": "Type",
            "type": "select",
            "default": "call",
            "options": [
                {"value": "call", "label": "Call"},
                {"value": "put", "label": "Put"},
            ],
        },
        {
            "key": "strike",
            "label": "Strike",
            "type": "number",
            "default": 100.0,
            "min": 0.000001,
            "step": 0.5,
        },
        {
            "key": "premium",
            "label": "Premium",
            "type": "number",
            "default": 0.0,
            "step": 0.01,
        },
        {
            "key": "direction",
            "label": "Long/Short",
            "type": "select",
            "default": "long",
            "options": [
                {"value": "long", "label": "Long"},
                {"value": "short", "label": "Short"},
            ],
        },
    ],
    "sweep": {
        "price_min": DEFAULT_PRICE_MIN,
        "price_max": DEFAULT_PRICE_MAX,
        "step": DEFAULT_STEP,
        "break_even_epsilon": BREAK_EVEN_EPSILON,
    },
    "chart": {
        "x_axis_title": X_AXIS_TITLE,
        "y_axis_title": Y_AXIS_TITLE,
        "tooltip_format": "Price: {price}, P/L: {pnl}",
    },
    "metric_cards": [
        {"key": "max_profit", "label": "Max Profit"},
        {"key": "max_loss", "label": "Max Loss"},
        {"key": "break_even_points", "label": "Break Even Points"},
    ],
}
