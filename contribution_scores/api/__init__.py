"""
API package initialization.

This package contains FastAPI router modules for the Contribution Scores service:
- reports: Contribution score reports (query, presets, include parameter)
"""

from fastapi import APIRouter

from contribution_scores.api.reports import router as reports_router

# Main API router
api_router = APIRouter()

# reports router carries its own /reports prefix
api_router.include_router(reports_router, tags=["reports"])

__all__ = [
    "api_router",
    "reports_router",
]
