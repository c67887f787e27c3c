"""
PDF report of a build feasibility scenario.

A single A4 page listing the headline inputs and the result snapshot.
"""

import io
import math
from typing import List

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from app.calculations.feasibility import FeasibilityInputs, FeasibilityOutputs
from app.calculations.rates import normalize_fraction

REPORT_TITLE = "ReBuild ROI - Feasibility Report"

FONT = "Helvetica"
TEXT_COLOR = (0.1, 0.1, 0.1)
LEFT_MARGIN = 40
TOP = 800
LINE_HEIGHT = 16


def _currency(value: float) -> str:
    if not math.isfinite(value):
        return "n/a"
    return f"${round(value):,}"


def input_lines(inputs: FeasibilityInputs) -> List[str]:
    growth_pct = normalize_fraction(inputs.annual_market_growth) * 100
    return [
        f"Land price: {_currency(inputs.land_price)}",
        f"Hold years: {inputs.hold_years:g}",
        f"Annual growth: {growth_pct:.1f}%",
        f"Build cost (ex GST): {_currency(inputs.build_cost)}",
    ]


def snapshot_lines(outputs: FeasibilityOutputs) -> List[str]:
    return [
        f"Total project cost (all-in): {_currency(outputs.total_project_cost_all_in)}",
        f"Resale after hold years: {_currency(outputs.resale_after_hold_years)}",
        f"Estimated tax: {_currency(outputs.estimated_tax)}",
        f"ROI: {outputs.roi_percent:.1f}%",
    ]


def render_feasibility_pdf(
    inputs: FeasibilityInputs, outputs: FeasibilityOutputs
) -> bytes:
    """
    Render the feasibility report.

    Args:
        inputs: Scenario inputs
        outputs: Results of calculate_feasibility(inputs)

    Returns:
        PDF document bytes
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(REPORT_TITLE)
    pdf.setFillColorRGB(*TEXT_COLOR)

    def draw(text: str, y: float, size: int = 12) -> None:
        pdf.setFont(FONT, size)
        pdf.drawString(LEFT_MARGIN, y, text)

    y = TOP
    draw(REPORT_TITLE, y, 18)
    y -= 28

    for heading, lines in (
        ("Inputs", input_lines(inputs)),
        ("Snapshot", snapshot_lines(outputs)),
    ):
        draw(heading, y, 14)
        y -= 18
        for line in lines:
            draw(line, y)
            y -= LINE_HEIGHT
        y -= 10

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
