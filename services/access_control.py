"""
Access Control
Role preconditions for each core operation
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet
from sqlalchemy.orm import Session

import models
from models import UserRole
from errors import PermissionDeniedError, CaretakerUnassignedError
from security import Principal


logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Operations guarded by a role check"""
    ADD_MEDICATION = "add_medication"
    LIST_MEDICATIONS = "list_medications"
    MARK_TAKEN = "mark_taken"
    PATIENT_DASHBOARD = "patient_dashboard"
    CARETAKER_DASHBOARD = "caretaker_dashboard"


REQUIRED_ROLES: Dict[Operation, FrozenSet[UserRole]] = {
    Operation.ADD_MEDICATION: frozenset({UserRole.PATIENT}),
    Operation.LIST_MEDICATIONS: frozenset({UserRole.PATIENT}),
    Operation.MARK_TAKEN: frozenset({UserRole.PATIENT}),
    Operation.PATIENT_DASHBOARD: frozenset({UserRole.PATIENT}),
    Operation.CARETAKER_DASHBOARD: frozenset({UserRole.CARETAKER}),
}

DENIAL_MESSAGES: Dict[Operation, str] = {
    Operation.ADD_MEDICATION: "Only patients can add medications",
    Operation.MARK_TAKEN: "Only patients can mark medication",
}


def check_access(principal: Principal, operation: Operation) -> Principal:
    """Raise PermissionDeniedError unless the principal's role may run the operation"""
    if principal.role not in REQUIRED_ROLES[operation]:
        logger.info(f"User {principal.user_id} ({principal.role.value}) denied {operation.value}")
        raise PermissionDeniedError(DENIAL_MESSAGES.get(operation))
    return principal


def ensure_login_allowed(user: models.User, db: Session) -> None:
    """Caretakers may only sign in once a patient has been assigned to them"""
    if user.role != UserRole.CARETAKER:
        return
    
    assignment = db.query(models.Assignment.patient_id).filter(
        models.Assignment.caretaker_id == user.id
    ).first()
    if not assignment:
        logger.info(f"Login denied for caretaker {user.id}: no assigned patient")
        raise CaretakerUnassignedError()
