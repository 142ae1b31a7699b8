# src/adms_gateway/api/__init__.py
"""HTTP routers for the device protocol and the admin API."""

from .admin import router as admin_router
from .iclock import router as iclock_router

__all__ = [
    "admin_router",
    "iclock_router",
]
