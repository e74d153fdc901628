"""
API routes for the calculation engine.
"""

from fastapi import APIRouter

from budget_engine.api import analysis, calculators

router = APIRouter()

# Include sub-routers
router.include_router(calculators.router, prefix="/calculators", tags=["calculators"])
router.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
