"""
Top-level router for version 1 of the API.

This router aggregates the per-resource routers under their path
prefixes.  The application mounts it under ``settings.api_prefix``.
"""

from fastapi import APIRouter

from .endpoints import cities, trips

router = APIRouter()

router.include_router(cities.router, prefix="/cities", tags=["cities"])
router.include_router(trips.router, prefix="/trips", tags=["trips"])
