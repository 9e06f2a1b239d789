"""
Dashboard Service
Assembles the patient and caretaker dashboards
"""

import logging
from typing import Any, Dict, Optional
from datetime import date
from sqlalchemy.orm import Session

from config import settings
from services.adherence_service import adherence_service, local_today
from services.identity_service import identity_service
from services.medication_service import medication_service
from services.pairing_service import pairing_service
from services.metrics import compute_metrics


logger = logging.getLogger(__name__)


def _serialize_logs(logs) -> list:
    return [
        {"date": log.date.isoformat(), "status": log.status.value}
        for log in logs
    ]


class DashboardService:
    """
    Backfill, fetch the recent window and compute metrics for a patient.
    Metrics are recomputed on every call.
    """
    
    async def _patient_window(self, patient_id: int, today: date, db: Session):
        await adherence_service.backfill_missed(patient_id, db, as_of=today)
        logs = await adherence_service.get_recent_logs(patient_id, db, today=today)
        metrics = compute_metrics(logs, today, week_entries=settings.WEEK_WINDOW_ENTRIES)
        return logs, metrics
    
    async def get_patient_dashboard(
        self,
        patient_id: int,
        db: Session,
        today: Optional[date] = None
    ) -> Dict[str, Any]:
        """Dashboard for the signed-in patient"""
        today = today or local_today()
        
        patient = await identity_service.get_user(patient_id, db)
        caretaker = await pairing_service.get_caretaker_for_patient(patient_id, db)
        logs, metrics = await self._patient_window(patient_id, today, db)
        medications = await medication_service.get_patient_medications(patient_id, db)
        
        return {
            "patient_name": patient.name,
            "caretaker_name": caretaker.name,
            "adherence_rate": metrics.adherence_rate,
            "streak": metrics.streak,
            "today_status": metrics.today_status,
            "logs": _serialize_logs(logs),
            "medications": [
                {"name": m.name, "dosage": m.dosage, "frequency": m.frequency}
                for m in medications
            ],
        }
    
    async def get_caretaker_dashboard(
        self,
        caretaker_id: int,
        db: Session,
        today: Optional[date] = None
    ) -> Dict[str, Any]:
        """Dashboard for a caretaker, describing their assigned patient"""
        today = today or local_today()
        
        patient = await pairing_service.get_patient_for_caretaker(caretaker_id, db)
        caretaker = await identity_service.get_user(caretaker_id, db)
        logs, metrics = await self._patient_window(patient.id, today, db)
        
        return {
            "caretaker_name": caretaker.name,
            "patient": patient.name,
            "adherence_rate": metrics.adherence_rate,
            "streak": metrics.streak,
            "taken_in_week": metrics.taken_in_week,
            "missed_in_month": metrics.missed_in_month,
            "today_status": metrics.today_status,
            "logs": _serialize_logs(logs),
        }


# Singleton instance
dashboard_service = DashboardService()
