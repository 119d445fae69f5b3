"""Maintenance module: referential integrity sweep."""

from .routers import router
from .schemas import IntegrityReport, IntegrityRequest, IntegrityScope
from .services import check_integrity, run_integrity_check

__all__ = [
    "router",
    "IntegrityReport",
    "IntegrityRequest",
    "IntegrityScope",
    "check_integrity",
    "run_integrity_check",
]
