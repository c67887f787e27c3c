"""
Application services module.
"""

from app.services.analysis_lookup import PropertyAnalysis, lookup_property
from app.services.csv_export import render_feasibility_csv
from app.services.pdf_report import render_feasibility_pdf

__all__ = [
    "PropertyAnalysis",
    "lookup_property",
    "render_feasibility_csv",
    "render_feasibility_pdf",
]
