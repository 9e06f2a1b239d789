"""
Medications API Router
Endpoints for medication management and daily marking
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_db, require_access, services
from api.schemas.medication import (
    MedicationCreate,
    MedicationResponse,
    MedicationList,
    MarkTakenResponse,
)
from security import Principal
from services.access_control import Operation


router = APIRouter(prefix="/medications", tags=["medications"])


@router.post("", response_model=MedicationResponse, status_code=status.HTTP_201_CREATED)
async def create_medication(
    medication_data: MedicationCreate,
    principal: Principal = Depends(require_access(Operation.ADD_MEDICATION)),
    db: Session = Depends(get_db)
):
    """
    Add a new medication for the signed-in patient
    
    - **name**: Medication name (unique per patient, case-insensitive)
    - **dosage**: Dosage (e.g., "500mg")
    - **frequency**: Frequency description
    """
    medication_service = services.get_medication_service()
    
    return await medication_service.add_medication(
        patient_id=principal.user_id,
        name=medication_data.name,
        dosage=medication_data.dosage,
        frequency=medication_data.frequency,
        db=db
    )


@router.get("", response_model=MedicationList)
async def list_medications(
    principal: Principal = Depends(require_access(Operation.LIST_MEDICATIONS)),
    db: Session = Depends(get_db)
):
    """
    Get all medications for the signed-in patient
    """
    medication_service = services.get_medication_service()
    
    medications = await medication_service.get_patient_medications(principal.user_id, db)
    
    return MedicationList(
        medications=[MedicationResponse.model_validate(m) for m in medications],
        total=len(medications)
    )


@router.post("/mark", response_model=MarkTakenResponse)
async def mark_taken(
    principal: Principal = Depends(require_access(Operation.MARK_TAKEN)),
    db: Session = Depends(get_db)
):
    """
    Mark today's medication as taken, replacing any earlier status for today
    """
    adherence_service = services.get_adherence_service()
    
    log = await adherence_service.mark_taken(principal.user_id, db)
    
    return MarkTakenResponse(
        message="Medication marked as taken for today",
        date=log.date,
        status=log.status
    )
