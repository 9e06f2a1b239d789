"""
Medication Schemas
Pydantic models for medication-related API requests and responses
"""

from typing import List
import datetime
from pydantic import BaseModel, Field, ConfigDict

from models import LogStatus


# ==================== BASE SCHEMAS ====================

class MedicationBase(BaseModel):
    """Base medication schema"""
    model_config = ConfigDict(str_strip_whitespace=True)
    
    name: str = Field(..., min_length=1, max_length=255)
    dosage: str = Field(..., min_length=1, max_length=100)
    frequency: str = Field(..., min_length=1, max_length=100)


# ==================== REQUEST SCHEMAS ====================

class MedicationCreate(MedicationBase):
    """Schema for creating a new medication"""
    pass


# ==================== RESPONSE SCHEMAS ====================

class MedicationResponse(MedicationBase):
    """Schema for medication response"""
    id: int
    
    model_config = ConfigDict(from_attributes=True)


class MedicationSummary(MedicationBase):
    """Medication as listed on the patient dashboard"""
    model_config = ConfigDict(from_attributes=True)


class MedicationList(BaseModel):
    """List of a patient's medications"""
    medications: List[MedicationResponse]
    total: int


class MarkTakenResponse(BaseModel):
    """Result of marking today's medication as taken"""
    message: str
    date: datetime.date
    status: LogStatus
