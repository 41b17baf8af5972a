"""
AUTHGATE Web - Dashboard Module

Authenticated areas guarded by the auth middleware.
"""

from authgate.dashboard.router import router as dashboard_router

__all__ = ["dashboard_router"]
