"""
Pytest Configuration and Shared Fixtures
========================================

This module provides shared fixtures for all CarePair tests.
Fixtures include database sessions, test clients, users and auth headers.
"""

import os
import sys
from datetime import date
from typing import Callable, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Base, create_db_engine, create_session_factory, get_db
from models import User, Assignment, MedicationLog, UserRole, LogStatus
from security import create_access_token, get_password_hash
from services.adherence_service import local_today
from app import app
from tests import TEST_DATABASE_URL, TEST_PASSWORD


# ==================== DATABASE FIXTURES ====================

@pytest.fixture(scope="function")
def test_engine():
    """Create a test database engine with in-memory SQLite"""
    engine = create_db_engine(TEST_DATABASE_URL, echo=False)
    
    # Create all tables
    Base.metadata.create_all(bind=engine)
    
    yield engine
    
    # Cleanup
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine) -> Generator[Session, None, None]:
    """Create a test database session"""
    TestingSessionLocal = create_session_factory(test_engine)
    
    session = TestingSessionLocal()
    
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(test_engine, db_session: Session) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with database override"""
    
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
    
    app.state.engine = test_engine
    app.state.session_factory = create_session_factory(test_engine)
    app.dependency_overrides[get_db] = override_get_db
    
    with TestClient(app) as test_client:
        yield test_client
    
    app.dependency_overrides.clear()
    app.state.engine = None
    app.state.session_factory = None


# ==================== USER FIXTURES ====================

@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash of TEST_PASSWORD, computed once"""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def make_user(db_session: Session, password_hash: str) -> Callable[..., User]:
    """Factory inserting users directly, bypassing pairing"""
    counter = {"n": 0}
    
    def _make(role: UserRole, name: str = None, email: str = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"{role.value.title()} {n}",
            email=email or f"{role.value}{n}@example.com",
            password_hash=password_hash,
            phone=f"+1555000{n:04d}",
            role=role
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    
    return _make


@pytest.fixture
def caretaker(make_user) -> User:
    """An unassigned caretaker"""
    return make_user(UserRole.CARETAKER, name="Carol Caretaker", email="carol@example.com")


@pytest.fixture
def paired_patient(db_session: Session, make_user, caretaker: User) -> User:
    """A patient already assigned to the caretaker fixture"""
    patient = make_user(UserRole.PATIENT, name="Paula Patient", email="paula@example.com")
    db_session.add(Assignment(patient_id=patient.id, caretaker_id=caretaker.id))
    db_session.commit()
    return patient


@pytest.fixture
def today() -> date:
    return local_today()


@pytest.fixture
def add_logs(db_session: Session) -> Callable[[int, Dict[date, LogStatus]], List[MedicationLog]]:
    """Insert explicit log rows for a patient"""
    def _add(patient_id: int, statuses: Dict[date, LogStatus]) -> List[MedicationLog]:
        logs = [
            MedicationLog(patient_id=patient_id, date=day, status=status)
            for day, status in statuses.items()
        ]
        db_session.add_all(logs)
        db_session.commit()
        return logs
    
    return _add


@pytest.fixture
def log_statuses(db_session: Session) -> Callable[[int], Dict[date, LogStatus]]:
    """Read back a patient's logs as {date: status}"""
    def _read(patient_id: int) -> Dict[date, LogStatus]:
        db_session.expire_all()
        rows = db_session.query(MedicationLog).filter(
            MedicationLog.patient_id == patient_id
        ).all()
        return {row.date: row.status for row in rows}
    
    return _read


# ==================== AUTH FIXTURES ====================

def auth_headers_for(user: User) -> Dict[str, str]:
    token = create_access_token(user.id, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def patient_headers(paired_patient: User) -> Dict[str, str]:
    return auth_headers_for(paired_patient)


@pytest.fixture
def caretaker_headers(caretaker: User, paired_patient: User) -> Dict[str, str]:
    return auth_headers_for(caretaker)
