"""
API Dependencies
Common dependencies for FastAPI endpoints
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from database import get_db
from errors import AuthError
from security import Principal, decode_access_token
from services.access_control import Operation, check_access


bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Principal:
    """
    Resolve the bearer token into a principal
    Raises AuthError if missing, InvalidTokenError if invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing token")
    return decode_access_token(credentials.credentials)


def require_access(operation: Operation):
    """
    Dependency factory enforcing the role precondition of an operation
    
    Usage:
        @router.post("/mark")
        async def mark(principal: Principal = Depends(require_access(Operation.MARK_TAKEN))):
            ...
    """
    async def _dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        return check_access(principal, operation)
    
    return _dependency


class ServiceDependency:
    """
    Dependency injection for services
    """
    
    @staticmethod
    def get_identity_service():
        from services.identity_service import identity_service
        return identity_service
    
    @staticmethod
    def get_pairing_service():
        from services.pairing_service import pairing_service
        return pairing_service
    
    @staticmethod
    def get_medication_service():
        from services.medication_service import medication_service
        return medication_service
    
    @staticmethod
    def get_adherence_service():
        from services.adherence_service import adherence_service
        return adherence_service
    
    @staticmethod
    def get_dashboard_service():
        from services.dashboard_service import dashboard_service
        return dashboard_service


# Service dependency instances
services = ServiceDependency()


__all__ = [
    "get_db",
    "bearer_scheme",
    "get_current_principal",
    "require_access",
    "services",
]
