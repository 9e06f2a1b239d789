"""
Medication Service
Business logic for medication management
"""

import logging
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

import models
from errors import DuplicateMedicationError, ValidationError


logger = logging.getLogger(__name__)


class MedicationService:
    """
    Service for medication-related operations
    """
    
    async def add_medication(
        self,
        patient_id: int,
        name: str,
        dosage: str,
        frequency: str,
        db: Session
    ) -> models.Medication:
        """
        Add a new medication for a patient
        
        Args:
            patient_id: Patient ID
            name: Medication name, unique per patient ignoring case
            dosage: Dosage (e.g., "500mg")
            frequency: Frequency description (e.g., "twice daily")
            db: Database session
            
        Returns:
            Created Medication object
        """
        if not name or not name.strip():
            raise ValidationError("Medication name is required")
        
        existing = db.query(models.Medication.id).filter(
            models.Medication.patient_id == patient_id,
            func.lower(models.Medication.name) == name.lower()
        ).first()
        if existing:
            raise DuplicateMedicationError()
        
        medication = models.Medication(
            patient_id=patient_id,
            name=name,
            dosage=dosage,
            frequency=frequency
        )
        db.add(medication)
        
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateMedicationError()
        
        db.refresh(medication)
        logger.info(f"Added medication {name} for patient {patient_id}")
        return medication
    
    async def get_patient_medications(
        self,
        patient_id: int,
        db: Session
    ) -> List[models.Medication]:
        """Get all medications for a patient"""
        return db.query(models.Medication).filter(
            models.Medication.patient_id == patient_id
        ).order_by(models.Medication.id).all()


# Singleton instance
medication_service = MedicationService()
