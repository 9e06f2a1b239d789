"""
API Module
FastAPI routers for the CarePair application
"""

from api.auth import router as auth_router
from api.medications import router as medications_router
from api.dashboard import router as dashboard_router

from api.deps import (
    get_db,
    get_current_principal,
    require_access,
    services,
)


__all__ = [
    # Routers
    "auth_router",
    "medications_router",
    "dashboard_router",
    # Dependencies
    "get_db",
    "get_current_principal",
    "require_access",
    "services",
]


def include_routers(app, prefix: str = ""):
    """
    Include all API routers in the FastAPI app
    
    Usage:
        from api import include_routers
        include_routers(app)
    """
    app.include_router(auth_router, prefix=prefix)
    app.include_router(medications_router, prefix=prefix)
    app.include_router(dashboard_router, prefix=prefix)
