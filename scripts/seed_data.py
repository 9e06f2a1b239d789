#!/usr/bin/env python
"""
Seed Data
Script to seed the database with demo caretakers, patients and log history
"""

import sys
import os
import argparse
import asyncio
import logging
import random
from datetime import timedelta
from typing import List

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import settings
from database import create_db_engine, create_session_factory, init_db, reset_db, session_scope
from errors import DuplicateEmailError
from models import User, Assignment, Medication, MedicationLog
from services.adherence_service import adherence_service, local_today
from services.identity_service import identity_service
from services.medication_service import medication_service
from services.pairing_service import pairing_service
from services.metrics import compute_metrics


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

CARETAKERS = [
    {"name": "Carol Caretaker", "email": "carol@carepair.dev", "phone": "+15550000001"},
    {"name": "Chris Caretaker", "email": "chris@carepair.dev", "phone": "+15550000002"},
]

PATIENTS = [
    {"name": "Paula Patient", "email": "paula@carepair.dev", "phone": "+15550000101"},
    {"name": "Peter Patient", "email": "peter@carepair.dev", "phone": "+15550000102"},
]

MEDICATIONS = [
    {"name": "Metformin", "dosage": "500mg", "frequency": "2x daily"},
    {"name": "Lisinopril", "dosage": "10mg", "frequency": "once daily"},
]


async def seed_caretakers(db) -> None:
    """Register demo caretakers"""
    logger.info("Creating caretakers...")
    for data in CARETAKERS:
        try:
            caretaker = await pairing_service.register_caretaker(password=DEMO_PASSWORD, db=db, **data)
            logger.info(f"Created caretaker: {caretaker.name} (ID: {caretaker.id})")
        except DuplicateEmailError:
            logger.info(f"Caretaker {data['email']} already exists")


async def seed_patients(db) -> List[int]:
    """Register demo patients; each one is paired with a free caretaker"""
    logger.info("Creating patients...")
    patient_ids = []
    for data in PATIENTS:
        existing = db.query(User).filter(User.email == data["email"]).first()
        if existing:
            logger.info(f"Patient {data['email']} already exists")
            patient_ids.append(existing.id)
            continue
        
        result = await pairing_service.assign_caretaker_to_new_patient(
            password=DEMO_PASSWORD, db=db, **data
        )
        logger.info(f"Created patient {result.patient_id} paired with caretaker {result.caretaker_id}")
        patient_ids.append(result.patient_id)
    return patient_ids


async def seed_history(db, patient_id: int, days: int, taken_ratio: float) -> None:
    """Mark a random share of past days as taken, then backfill the rest"""
    today = local_today()
    for offset in range(1, days + 1):
        if random.random() < taken_ratio:
            await adherence_service.mark_taken(patient_id, db, day=today - timedelta(days=offset))
    await adherence_service.backfill_missed(patient_id, db, as_of=today, window_days=days)


async def seed_all(clear_existing: bool = False, days: int = 29, seed: int = 42):
    """Run all seed operations"""
    random.seed(seed)
    
    print("\n" + "="*60)
    print("Database Seeding")
    print("="*60)
    
    engine = create_db_engine()
    if clear_existing:
        logger.info("Clearing existing data...")
        reset_db(engine)
    else:
        init_db(engine)
    
    try:
        with session_scope(create_session_factory(engine)) as db:
            await seed_caretakers(db)
            patient_ids = await seed_patients(db)
            
            for patient_id in patient_ids:
                for med in MEDICATIONS:
                    if not db.query(Medication).filter(
                        Medication.patient_id == patient_id,
                        Medication.name == med["name"]
                    ).first():
                        await medication_service.add_medication(patient_id=patient_id, db=db, **med)
                await seed_history(db, patient_id, days, taken_ratio=random.uniform(0.5, 0.95))
            
            # Print summary
            print("\n" + "="*60)
            print("Seeding Complete!")
            print("="*60)
            print(f"\nDatabase Statistics:")
            print(f"  Users: {db.query(User).count()}")
            print(f"  Assignments: {db.query(Assignment).count()}")
            print(f"  Medications: {db.query(Medication).count()}")
            print(f"  Medication Logs: {db.query(MedicationLog).count()}")
            
            for patient_id in patient_ids:
                patient = await identity_service.get_user(patient_id, db)
                logs = await adherence_service.get_recent_logs(patient_id, db)
                metrics = compute_metrics(logs, local_today())
                print(f"\n{patient.name} <{patient.email}>")
                print(f"  Adherence Rate: {metrics.adherence_rate}%")
                print(f"  Streak: {metrics.streak}")
                print(f"  Missed (30d): {metrics.missed_in_month}")
            
            print(f"\nAll demo accounts use password: {DEMO_PASSWORD}")
            print(f"Database: {settings.DATABASE_URL}")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        raise
    finally:
        engine.dispose()


def main():
    parser = argparse.ArgumentParser(
        description="Seed the database with demo caretakers, patients and logs"
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Drop and recreate all tables before seeding"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=settings.BACKFILL_WINDOW_DAYS,
        help="Number of past days of history to generate"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for the generated history"
    )
    
    args = parser.parse_args()
    
    asyncio.run(seed_all(clear_existing=args.clear, days=args.days, seed=args.seed))


if __name__ == "__main__":
    main()
