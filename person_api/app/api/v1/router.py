"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified router.  The
person endpoints define their paths relative to the ``/persons``
prefix given here.
"""

from fastapi import APIRouter

from .endpoints import persons

router = APIRouter()

router.include_router(persons.router, prefix="/persons", tags=["persons"])
