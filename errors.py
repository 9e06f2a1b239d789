"""
Domain Errors
Exception taxonomy raised by the services and rendered by the API layer
"""

from fastapi import status


class CarePairError(Exception):
    """Base class for errors that are reported back to the caller"""
    
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"
    default_message: str = "Request failed"
    
    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ==================== VALIDATION ====================

class ValidationError(CarePairError):
    """Missing or malformed input"""
    code = "ValidationError"
    default_message = "Invalid request data"


class DuplicateEmailError(ValidationError):
    """Email already registered"""
    code = "DuplicateEmail"
    default_message = "User already exists or invalid data"


# ==================== CONFLICTS ====================

class ConflictError(CarePairError):
    """Request collides with existing data"""
    code = "Conflict"
    default_message = "Request conflicts with existing data"


class DuplicateMedicationError(ConflictError):
    code = "DuplicateMedication"
    default_message = "Medication already exists"


class AssignmentFailedError(ConflictError):
    """The chosen caretaker was taken before the pairing committed"""
    status_code = status.HTTP_409_CONFLICT
    code = "AssignmentFailed"
    default_message = "Assignment failed, please retry registration"


# ==================== NOT FOUND ====================

class NotFoundError(CarePairError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NotFound"
    default_message = "Resource not found"


class NoCaretakerAvailableError(NotFoundError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "NoCaretakerAvailable"
    default_message = "No available caretakers"


class AssignmentNotFoundError(NotFoundError):
    code = "AssignmentNotFound"
    default_message = "No assignment found"


class UserNotFoundError(NotFoundError):
    code = "UserNotFound"
    default_message = "User not found"


# ==================== AUTH ====================

class AuthError(CarePairError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AuthError"
    default_message = "Not authenticated"


class InvalidCredentialsError(AuthError):
    code = "InvalidCredentials"
    default_message = "Invalid credentials"


class InvalidTokenError(AuthError):
    code = "InvalidToken"
    default_message = "Invalid or expired token"


class PermissionDeniedError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "PermissionDenied"
    default_message = "Access denied"


class CaretakerUnassignedError(PermissionDeniedError):
    code = "CaretakerUnassigned"
    default_message = "No patient assigned to this caretaker"


__all__ = [
    "CarePairError",
    "ValidationError",
    "DuplicateEmailError",
    "ConflictError",
    "DuplicateMedicationError",
    "AssignmentFailedError",
    "NotFoundError",
    "NoCaretakerAvailableError",
    "AssignmentNotFoundError",
    "UserNotFoundError",
    "AuthError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PermissionDeniedError",
    "CaretakerUnassignedError",
]
