"""
Export API endpoints.

Runs the build ROI calculation and returns it as a CSV or PDF download.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import Response

from app.api.build_roi import BuildRoiRequest
from app.calculations.feasibility import calculate_feasibility
from app.config import get_settings
from app.services.csv_export import render_feasibility_csv
from app.services.pdf_report import render_feasibility_pdf

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.post("/csv")
async def export_csv(form: BuildRoiRequest):
    """Download inputs and rounded outputs as section,key,value CSV."""
    inputs = form.to_inputs()
    outputs = calculate_feasibility(inputs)

    csv_text = render_feasibility_csv(inputs, outputs)
    logger.info(f"CSV export generated ({len(csv_text)} bytes)")

    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers=_attachment(f"{settings.export_basename}-export.csv"),
    )


@router.post("/pdf")
async def export_pdf(form: BuildRoiRequest):
    """Download a one-page feasibility report."""
    inputs = form.to_inputs()
    outputs = calculate_feasibility(inputs)

    pdf_bytes = render_feasibility_pdf(inputs, outputs)
    logger.info(f"PDF export generated ({len(pdf_bytes)} bytes)")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers=_attachment(f"{settings.export_basename}-report.pdf"),
    )
