"""
Property analysis API endpoint.
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from app.config import get_settings
from app.services.analysis_lookup import PropertyAnalysis, lookup_property

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()


@router.post("", response_model=PropertyAnalysis)
async def analyse_property(request: Request):
    """Look up geospatial, listing and comparable-sales data for an address."""
    if not settings.analysis_lookup_enabled:
        raise HTTPException(status_code=503, detail="Property analysis is unavailable")

    try:
        payload = await request.json()
    except ValueError:
        payload = {}

    address = payload.get("address") if isinstance(payload, dict) else None
    if not isinstance(address, str) or not address.strip():
        raise HTTPException(status_code=400, detail="Invalid address")

    return lookup_property(address)
