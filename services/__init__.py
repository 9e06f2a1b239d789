"""
Services Module
Business logic layer for the CarePair application
"""

from services.identity_service import IdentityService, identity_service
from services.pairing_service import PairingService, PairingResult, pairing_service
from services.medication_service import MedicationService, medication_service
from services.adherence_service import AdherenceService, adherence_service, local_today
from services.dashboard_service import DashboardService, dashboard_service
from services.metrics import AdherenceMetrics, compute_metrics
from services.access_control import Operation, check_access, ensure_login_allowed


__all__ = [
    # Service classes
    "IdentityService",
    "PairingService",
    "PairingResult",
    "MedicationService",
    "AdherenceService",
    "DashboardService",
    # Singleton instances
    "identity_service",
    "pairing_service",
    "medication_service",
    "adherence_service",
    "dashboard_service",
    # Pure helpers
    "AdherenceMetrics",
    "compute_metrics",
    "local_today",
    "Operation",
    "check_access",
    "ensure_login_allowed",
]
