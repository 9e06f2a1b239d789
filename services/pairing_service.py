"""
Pairing Service
Maintains the one-to-one assignment between patients and caretakers
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

import models
from models import UserRole
from errors import NoCaretakerAvailableError, AssignmentFailedError, AssignmentNotFoundError
from services.identity_service import identity_service


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PairingResult:
    """Ids bound by a successful patient signup"""
    patient_id: int
    caretaker_id: int


class PairingService:
    """
    Service for patient/caretaker pairing.
    
    Each patient has at most one caretaker and each caretaker at most one
    patient. A patient account only exists together with its assignment.
    """
    
    def __init__(self):
        # Serializes caretaker selection and binding within this process.
        # Unique constraints on assignments cover other processes.
        self._pairing_lock = threading.Lock()
    
    def _select_available_caretaker(self, session: Session) -> Optional[int]:
        """Lowest-id caretaker that is not yet assigned, if any"""
        assigned = select(models.Assignment.caretaker_id)
        row = session.query(models.User.id).filter(
            models.User.role == UserRole.CARETAKER,
            models.User.id.not_in(assigned)
        ).order_by(models.User.id).first()
        return row[0] if row else None
    
    async def assign_caretaker_to_new_patient(
        self,
        name: str,
        email: str,
        password: str,
        phone: str,
        db: Session
    ) -> PairingResult:
        """
        Register a patient and bind them to an available caretaker
        
        The caretaker lookup, user insert and assignment insert commit as one
        unit. On any failure nothing is written.
        
        Raises:
            NoCaretakerAvailableError: every caretaker already has a patient
            DuplicateEmailError: email already registered
            AssignmentFailedError: the caretaker was bound elsewhere first
        """
        with self._pairing_lock:
            caretaker_id = self._select_available_caretaker(db)
            if caretaker_id is None:
                logger.warning(f"Patient signup for {email} rejected: no caretaker available")
                raise NoCaretakerAvailableError()
            
            try:
                patient = identity_service.add_user(
                    db, name, email, password, phone, UserRole.PATIENT
                )
                db.add(models.Assignment(patient_id=patient.id, caretaker_id=caretaker_id))
                db.flush()
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.error(
                    f"Assignment of caretaker {caretaker_id} failed for {email}; "
                    f"patient registration rolled back"
                )
                raise AssignmentFailedError()
            except Exception:
                db.rollback()
                raise
            
            result = PairingResult(patient_id=patient.id, caretaker_id=caretaker_id)
        
        logger.info(f"Patient {result.patient_id} assigned to caretaker {result.caretaker_id}")
        return result
    
    async def register_caretaker(
        self,
        name: str,
        email: str,
        password: str,
        phone: str,
        db: Session
    ) -> models.User:
        """Caretakers register without pairing; they wait for a patient"""
        return await identity_service.create_user(
            name=name,
            email=email,
            password=password,
            phone=phone,
            role=UserRole.CARETAKER,
            db=db
        )
    
    async def get_assignment_for_patient(
        self,
        patient_id: int,
        db: Session
    ) -> Optional[models.Assignment]:
        return db.query(models.Assignment).filter(
            models.Assignment.patient_id == patient_id
        ).first()
    
    async def get_assignment_for_caretaker(
        self,
        caretaker_id: int,
        db: Session
    ) -> Optional[models.Assignment]:
        return db.query(models.Assignment).filter(
            models.Assignment.caretaker_id == caretaker_id
        ).first()
    
    async def get_caretaker_for_patient(self, patient_id: int, db: Session) -> models.User:
        """Caretaker bound to the patient; AssignmentNotFoundError if none"""
        assignment = await self.get_assignment_for_patient(patient_id, db)
        if not assignment:
            raise AssignmentNotFoundError("Caretaker not found")
        return assignment.caretaker
    
    async def get_patient_for_caretaker(self, caretaker_id: int, db: Session) -> models.User:
        """Patient bound to the caretaker; AssignmentNotFoundError if none"""
        assignment = await self.get_assignment_for_caretaker(caretaker_id, db)
        if not assignment:
            raise AssignmentNotFoundError("No assigned patient found")
        return assignment.patient


# Singleton instance
pairing_service = PairingService()
