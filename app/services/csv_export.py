"""
CSV export of a build feasibility scenario.

Flattens inputs and rounded outputs into section,key,value rows.
"""

import csv
import io
import math
from typing import Any, List, Tuple

from app.calculations.feasibility import FeasibilityInputs, FeasibilityOutputs

HEADER = ("section", "key", "value")

# Outputs kept to 2 decimals; every other output is whole dollars
TWO_DECIMAL_OUTPUTS = {"roi_percent"}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with .5 going up (round() would go to even)."""
    factor = 10**digits
    scaled = value * factor + 0.5
    # inf and nan are written as-is
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def format_value(value: Any) -> str:
    """Render a cell: lowercase booleans, integral floats without '.0'."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_feasibility_rows(
    inputs: FeasibilityInputs, outputs: FeasibilityOutputs
) -> List[Tuple[str, str, str]]:
    """Build input rows followed by rounded output rows."""
    rows = [
        ("input", key, format_value(value)) for key, value in inputs.to_dict().items()
    ]

    for key, value in outputs.to_dict().items():
        digits = 2 if key in TWO_DECIMAL_OUTPUTS else 0
        rows.append(("output", key, format_value(round_half_up(value, digits))))

    return rows


def render_feasibility_csv(
    inputs: FeasibilityInputs, outputs: FeasibilityOutputs
) -> str:
    """Render the scenario as CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADER)
    writer.writerows(build_feasibility_rows(inputs, outputs))
    return buffer.getvalue()
