"""
Dashboard Schemas
Pydantic models for the patient and caretaker dashboards
"""

from typing import List
import datetime

from api.schemas.common import CamelModel
from api.schemas.medication import MedicationSummary
from models import LogStatus


class DailyLog(CamelModel):
    """Status for a single calendar day"""
    date: datetime.date
    status: LogStatus


class PatientDashboard(CamelModel):
    """Dashboard shown to a patient"""
    patient_name: str
    caretaker_name: str
    adherence_rate: str
    streak: int
    today_status: str
    logs: List[DailyLog]
    medications: List[MedicationSummary]


class CaretakerDashboard(CamelModel):
    """Dashboard shown to a caretaker about their patient"""
    caretaker_name: str
    patient: str
    adherence_rate: str
    streak: int
    taken_in_week: int
    missed_in_month: int
    today_status: str
    logs: List[DailyLog]
