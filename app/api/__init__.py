"""
API routes for the calculators.
"""

from fastapi import APIRouter

from app.api import analysis, build_roi, exports, pathways, rental_roi

router = APIRouter()

# Include sub-routers
router.include_router(build_roi.router, prefix="/build-roi", tags=["build-roi"])
router.include_router(rental_roi.router, prefix="/rental-roi", tags=["rental-roi"])
router.include_router(exports.router, prefix="/export", tags=["exports"])
router.include_router(pathways.router, prefix="/pathways", tags=["pathways"])
router.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
