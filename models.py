"""
Database Models
SQLAlchemy ORM models for CarePair
"""

from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Enum, Index, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum as PyEnum

from config import TableNames
from database import Base


# ==================== ENUMS ====================

class UserRole(str, PyEnum):
    """Role a user signs up with; fixed for the lifetime of the account"""
    PATIENT = "patient"
    CARETAKER = "caretaker"


class LogStatus(str, PyEnum):
    """Status of a patient's medication for one calendar day"""
    TAKEN = "taken"
    MISSED = "missed"


# ==================== MODELS ====================

class User(Base):
    """Patient or caretaker account"""
    __tablename__ = TableNames.USERS
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    role = Column(
        Enum(UserRole, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        nullable=False
    )
    
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    medications = relationship("Medication", back_populates="patient")
    medication_logs = relationship("MedicationLog", back_populates="patient")
    
    @property
    def is_patient(self) -> bool:
        return self.role == UserRole.PATIENT
    
    @property
    def is_caretaker(self) -> bool:
        return self.role == UserRole.CARETAKER


class Assignment(Base):
    """Exclusive pairing of one patient with one caretaker"""
    __tablename__ = TableNames.ASSIGNMENTS
    
    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    caretaker_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    patient = relationship("User", foreign_keys=[patient_id])
    caretaker = relationship("User", foreign_keys=[caretaker_id])
    
    __table_args__ = (
        CheckConstraint("patient_id <> caretaker_id", name="ck_assignments_distinct_users"),
    )


class Medication(Base):
    """Medication a patient has registered"""
    __tablename__ = TableNames.MEDICATIONS
    
    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    dosage = Column(String(100), nullable=False)  # e.g., "500mg"
    frequency = Column(String(100), nullable=False)  # "2x daily", "once daily"
    created_at = Column(DateTime, default=datetime.utcnow)
    
    patient = relationship("User", back_populates="medications")


# Medication names are unique per patient regardless of case
Index(
    "uq_medications_patient_name_ci",
    Medication.patient_id,
    func.lower(Medication.name),
    unique=True,
)


class MedicationLog(Base):
    """One adherence status per patient per calendar day"""
    __tablename__ = TableNames.MEDICATION_LOGS
    
    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(
        Enum(LogStatus, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        nullable=False
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    patient = relationship("User", back_populates="medication_logs")
    
    __table_args__ = (
        UniqueConstraint("patient_id", "date", name="uq_medication_logs_patient_date"),
        Index("ix_medication_logs_patient_date", "patient_id", "date"),
    )
