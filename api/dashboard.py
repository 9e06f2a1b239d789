"""
Dashboard API Router
Adherence dashboards for patients and caretakers
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_db, require_access, services
from api.schemas.dashboard import PatientDashboard, CaretakerDashboard
from security import Principal
from services.access_control import Operation


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/patient", response_model=PatientDashboard)
async def get_patient_dashboard(
    principal: Principal = Depends(require_access(Operation.PATIENT_DASHBOARD)),
    db: Session = Depends(get_db)
):
    """
    Patient dashboard
    
    Fills in missed days, then returns adherence rate, streak, today's status,
    the last 30 days of logs and the patient's medications.
    """
    dashboard_service = services.get_dashboard_service()
    
    dashboard = await dashboard_service.get_patient_dashboard(principal.user_id, db)
    return PatientDashboard(**dashboard)


@router.get("/caretaker", response_model=CaretakerDashboard)
async def get_caretaker_dashboard(
    principal: Principal = Depends(require_access(Operation.CARETAKER_DASHBOARD)),
    db: Session = Depends(get_db)
):
    """
    Caretaker dashboard for the assigned patient
    
    Adds the weekly taken count and monthly missed count to the patient view.
    """
    dashboard_service = services.get_dashboard_service()
    
    dashboard = await dashboard_service.get_caretaker_dashboard(principal.user_id, db)
    return CaretakerDashboard(**dashboard)
