from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from payoff_lab.services.display import PLACEHOLDER, format_number


# Curve rows are laid out side by side to keep a 151-point sweep on one or two pages.
CURVE_COLUMNS = 4

_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#0b1020")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 8),
    ("GRID", (0, 0), (-1, -1), 0.3, colors.HexColor("#999999")),
    ("BACKGROUND", (0, 1), (-1, -1), colors.whitesmoke),
]


def _table(rows: list[list[str]], col_widths: list[float] | None = None) -> Table:
    t = Table(rows, colWidths=col_widths, repeatRows=1)
    t.setStyle(TableStyle(_HEADER_STYLE))
    return t


def _curve_rows(points: list[dict[str, Any]]) -> list[list[str]]:
    header = []
    for _ in range(CURVE_COLUMNS):
        header += ["Price", "P/L"]

    n_rows = -(-len(points) // CURVE_COLUMNS)
    rows: list[list[str]] = [header]
    for r in range(n_rows):
        row: list[str] = []
        for c in range(CURVE_COLUMNS):
            i = c * n_rows + r
            if i < len(points):
                row += [str(points[i].get("price", "")), format_number(float(points[i].get("pnl", 0.0)))]
            else:
                row += ["", ""]
        rows.append(row)
    return rows


def build_analysis_report_pdf(
    *,
    title: str,
    run_meta: dict[str, Any],
    positions: list[dict[str, Any]],
    display: dict[str, Any],
    curve_points: list[dict[str, Any]],
    notes: list[str] | None = None,
) -> bytes:
    """Render a recorded payoff analysis as a PDF.

    Sections: run metadata, legs, the three metric cards and the sampled curve.
    """

    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, title=title, author="Payoff Lab")

    styles = getSampleStyleSheet()
    story: list[Any] = []

    story.append(Paragraph(title, styles["Title"]))
    story.append(
        Paragraph(
            f"Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%SZ')}",
            styles["Normal"],
        )
    )
    story.append(Spacer(1, 10))

    meta_rows = [[k, str(v)] for k, v in (run_meta or {}).items()]
    if meta_rows:
        story.append(Paragraph("Run metadata", styles["Heading2"]))
        story.append(_table([["Field", "Value"], *meta_rows], [120, 410]))
        story.append(Spacer(1, 10))

    story.append(Paragraph("Legs", styles["Heading2"]))
    if positions:
        leg_rows = [["#", "Type", "Strike", "Premium", "Long/Short"]]
        for i, p in enumerate(positions, start=1):
            leg_rows.append(
                [
                    str(i),
                    str(p.get("kind", "")).title(),
                    format_number(float(p.get("strike", 0.0))),
                    format_number(float(p.get("premium", 0.0))),
                    str(p.get("direction", "")).title(),
                ]
            )
        story.append(_table(leg_rows))
    else:
        story.append(Paragraph("No legs.", styles["Normal"]))
    story.append(Spacer(1, 10))

    story.append(Paragraph("Metrics", styles["Heading2"]))
    story.append(
        _table(
            [
                ["Max Profit", "Max Loss", "Break Even Points"],
                [
                    str(display.get("max_profit", PLACEHOLDER)),
                    str(display.get("max_loss", PLACEHOLDER)),
                    str(display.get("break_even_points", "")) or PLACEHOLDER,
                ],
            ],
            [120, 120, 290],
        )
    )
    story.append(Spacer(1, 10))

    if notes:
        story.append(Paragraph("Notes", styles["Heading2"]))
        for n in notes:
            story.append(Paragraph(str(n), styles["Normal"]))
        story.append(Spacer(1, 10))

    if curve_points:
        story.append(Paragraph("Profit/Loss at expiry", styles["Heading2"]))
        story.append(_table(_curve_rows(curve_points)))

    doc.build(story)
    return buf.getvalue()
