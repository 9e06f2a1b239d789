"""
CarePair Test Suite
===================

This package contains all tests for the CarePair adherence service.

Test Structure:
- test_api/: API endpoint tests for FastAPI routes
- test_services/: Service and metrics tests
- conftest.py: Shared pytest fixtures

Running Tests:
    # Run all tests
    pytest

    # Run specific test module
    pytest tests/test_api/

    # Run only marked tests
    pytest -m "unit"
    pytest -m "api"
"""

# Test configuration
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_PASSWORD = "s3cret-pass"

# Common test data
SAMPLE_MEDICATIONS = [
    {"name": "Metformin", "dosage": "500mg", "frequency": "2x daily"},
    {"name": "Lisinopril", "dosage": "10mg", "frequency": "once daily"},
    {"name": "Atorvastatin", "dosage": "20mg", "frequency": "once daily"},
]

__all__ = [
    "TEST_DATABASE_URL",
    "TEST_PASSWORD",
    "SAMPLE_MEDICATIONS",
]
