"""
Tests for Medications API
==========================

Adding and listing medications, and marking today's dose as taken.
"""

import pytest
from datetime import timedelta
from fastapi import status
from fastapi.testclient import TestClient

from models import LogStatus, Medication
from security import create_access_token
from tests import SAMPLE_MEDICATIONS


# ==================== CREATE TESTS ====================

class TestCreateMedication:
    """Tests for medication creation endpoint"""
    
    @pytest.mark.api
    def test_create_medication_success(self, client: TestClient, patient_headers, paired_patient):
        response = client.post("/medications", json=SAMPLE_MEDICATIONS[0], headers=patient_headers)
        
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Metformin"
        assert data["dosage"] == "500mg"
        assert data["frequency"] == "2x daily"
    
    @pytest.mark.api
    def test_duplicate_name_ignores_case(self, client: TestClient, db_session, patient_headers):
        first = client.post("/medications", json={"name": "Aspirin", "dosage": "81mg", "frequency": "daily"}, headers=patient_headers)
        second = client.post("/medications", json={"name": "aspirin", "dosage": "100mg", "frequency": "daily"}, headers=patient_headers)
        
        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.json()["code"] == "DuplicateMedication"
        assert db_session.query(Medication).count() == 1
    
    @pytest.mark.api
    def test_same_name_for_different_patients(self, client: TestClient, patient_headers, make_user):
        from models import UserRole
        other = make_user(UserRole.PATIENT)
        other_headers = {"Authorization": f"Bearer {create_access_token(other.id, other.role)}"}
        
        first = client.post("/medications", json=SAMPLE_MEDICATIONS[1], headers=patient_headers)
        second = client.post("/medications", json=SAMPLE_MEDICATIONS[1], headers=other_headers)
        
        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_201_CREATED
    
    @pytest.mark.api
    def test_missing_required_fields(self, client: TestClient, patient_headers):
        response = client.post("/medications", json={"name": "Incomplete Med"}, headers=patient_headers)
        
        assert response.status_code == status.HTTP_400_BAD_REQUEST
    
    @pytest.mark.api
    def test_blank_name_rejected(self, client: TestClient, db_session, patient_headers):
        response = client.post(
            "/medications",
            json={"name": "   ", "dosage": "81mg", "frequency": "daily"},
            headers=patient_headers
        )
        
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "ValidationError"
        assert db_session.query(Medication).count() == 0
        
        dashboard = client.get("/dashboard/patient", headers=patient_headers)
        assert dashboard.status_code == status.HTTP_200_OK
        assert dashboard.json()["medications"] == []
    
    @pytest.mark.api
    def test_surrounding_whitespace_trimmed(self, client: TestClient, patient_headers):
        first = client.post("/medications", json={"name": "  Aspirin ", "dosage": "81mg", "frequency": "daily"}, headers=patient_headers)
        second = client.post("/medications", json={"name": "aspirin", "dosage": "81mg", "frequency": "daily"}, headers=patient_headers)
        
        assert first.status_code == status.HTTP_201_CREATED
        assert first.json()["name"] == "Aspirin"
        assert second.status_code == status.HTTP_400_BAD_REQUEST
    
    @pytest.mark.api
    def test_caretaker_cannot_add(self, client: TestClient, caretaker_headers):
        response = client.post("/medications", json=SAMPLE_MEDICATIONS[0], headers=caretaker_headers)
        
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Only patients can add medications"
    
    @pytest.mark.api
    def test_missing_token(self, client: TestClient):
        response = client.post("/medications", json=SAMPLE_MEDICATIONS[0])
        
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
    
    @pytest.mark.api
    def test_invalid_token(self, client: TestClient):
        response = client.post(
            "/medications",
            json=SAMPLE_MEDICATIONS[0],
            headers={"Authorization": "Bearer not-a-token"}
        )
        
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["code"] == "InvalidToken"


# ==================== READ TESTS ====================

class TestListMedications:
    
    @pytest.mark.api
    def test_lists_own_medications(self, client: TestClient, patient_headers):
        for med in SAMPLE_MEDICATIONS:
            client.post("/medications", json=med, headers=patient_headers)
        
        response = client.get("/medications", headers=patient_headers)
        
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 3
        assert [m["name"] for m in data["medications"]] == [m["name"] for m in SAMPLE_MEDICATIONS]


# ==================== MARK TESTS ====================

class TestMarkTaken:
    
    @pytest.mark.api
    def test_mark_today(self, client: TestClient, patient_headers, paired_patient, today, log_statuses):
        response = client.post("/medications/mark", headers=patient_headers)
        
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Medication marked as taken for today"
        assert data["date"] == today.isoformat()
        assert data["status"] == "taken"
        assert log_statuses(paired_patient.id) == {today: LogStatus.TAKEN}
    
    @pytest.mark.api
    def test_mark_replaces_existing_today(self, client: TestClient, patient_headers, paired_patient, today, add_logs, log_statuses):
        add_logs(paired_patient.id, {today: LogStatus.MISSED})
        
        client.post("/medications/mark", headers=patient_headers)
        
        assert log_statuses(paired_patient.id) == {today: LogStatus.TAKEN}
    
    @pytest.mark.api
    def test_mark_does_not_touch_past_days(self, client: TestClient, patient_headers, paired_patient, today, add_logs, log_statuses):
        yesterday = today - timedelta(days=1)
        add_logs(paired_patient.id, {yesterday: LogStatus.MISSED})
        
        client.post("/medications/mark", headers=patient_headers)
        
        assert log_statuses(paired_patient.id)[yesterday] == LogStatus.MISSED
    
    @pytest.mark.api
    def test_caretaker_cannot_mark(self, client: TestClient, caretaker_headers):
        response = client.post("/medications/mark", headers=caretaker_headers)
        
        assert response.status_code == status.HTTP_403_FORBIDDEN
