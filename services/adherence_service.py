"""
Adherence Service
Per-day medication logs: explicit "taken" marks and backfill of missed days
"""

import logging
from typing import List, Optional
from datetime import datetime, date, timedelta
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session

from config import settings
import models
from models import LogStatus


logger = logging.getLogger(__name__)


def local_today() -> date:
    """Current calendar day in the configured timezone"""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def _dialect_insert(session: Session):
    """Dialect-specific insert supporting ON CONFLICT, or None if unavailable"""
    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    return None


class AdherenceService:
    """
    Service for daily adherence logs
    """
    
    async def backfill_missed(
        self,
        patient_id: int,
        db: Session,
        as_of: Optional[date] = None,
        window_days: Optional[int] = None
    ) -> None:
        """
        Record "missed" for every day in the trailing window that has no log.
        
        Covers the ``window_days`` days strictly before ``as_of``; ``as_of``
        itself is never written. Existing rows are left untouched, so repeated
        calls are harmless.
        
        Args:
            patient_id: Patient ID
            db: Database session
            as_of: Reference day (defaults to today)
            window_days: Number of past days to cover
        """
        as_of = as_of or local_today()
        window_days = settings.BACKFILL_WINDOW_DAYS if window_days is None else window_days
        days = [as_of - timedelta(days=offset) for offset in range(1, window_days + 1)]
        if not days:
            return
        
        now = datetime.utcnow()
        insert = _dialect_insert(db)
        
        try:
            if insert is not None:
                stmt = insert(models.MedicationLog).values([
                    {
                        "patient_id": patient_id,
                        "date": day,
                        "status": LogStatus.MISSED,
                        "created_at": now,
                        "updated_at": now,
                    }
                    for day in days
                ]).on_conflict_do_nothing(index_elements=["patient_id", "date"])
                inserted = db.execute(stmt).rowcount
            else:
                existing = {
                    row.date for row in db.query(models.MedicationLog.date).filter(
                        models.MedicationLog.patient_id == patient_id,
                        models.MedicationLog.date.in_(days)
                    )
                }
                missing = [day for day in days if day not in existing]
                db.add_all([
                    models.MedicationLog(patient_id=patient_id, date=day, status=LogStatus.MISSED)
                    for day in missing
                ])
                inserted = len(missing)
            db.commit()
        except Exception:
            db.rollback()
            raise
        
        if inserted and inserted > 0:
            logger.info(f"Backfilled {inserted} missed day(s) for patient {patient_id}")
    
    async def mark_taken(
        self,
        patient_id: int,
        db: Session,
        day: Optional[date] = None
    ) -> models.MedicationLog:
        """
        Record that the patient took their medication on ``day`` (default today).
        Replaces whatever status the day had before.
        """
        day = day or local_today()
        now = datetime.utcnow()
        insert = _dialect_insert(db)
        
        try:
            if insert is not None:
                stmt = insert(models.MedicationLog).values(
                    patient_id=patient_id,
                    date=day,
                    status=LogStatus.TAKEN,
                    created_at=now,
                    updated_at=now,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=["patient_id", "date"],
                    set_={
                        "status": stmt.excluded.status,
                        "updated_at": stmt.excluded.updated_at,
                    }
                )
                db.execute(stmt)
            else:
                log = db.query(models.MedicationLog).filter(
                    models.MedicationLog.patient_id == patient_id,
                    models.MedicationLog.date == day
                ).first()
                if log:
                    log.status = LogStatus.TAKEN
                    log.updated_at = now
                else:
                    db.add(models.MedicationLog(patient_id=patient_id, date=day, status=LogStatus.TAKEN))
            db.commit()
        except Exception:
            db.rollback()
            raise
        
        logger.info(f"Patient {patient_id} marked medication taken for {day.isoformat()}")
        
        # The core upsert bypasses the identity map
        db.expire_all()
        return db.query(models.MedicationLog).filter(
            models.MedicationLog.patient_id == patient_id,
            models.MedicationLog.date == day
        ).one()
    
    async def get_logs(
        self,
        patient_id: int,
        db: Session,
        since: Optional[date] = None,
        until: Optional[date] = None
    ) -> List[models.MedicationLog]:
        """Logs for the patient ordered by date, optionally bounded (inclusive)"""
        query = db.query(models.MedicationLog).filter(
            models.MedicationLog.patient_id == patient_id
        )
        if since:
            query = query.filter(models.MedicationLog.date >= since)
        if until:
            query = query.filter(models.MedicationLog.date <= until)
        return query.order_by(models.MedicationLog.date).all()
    
    async def get_recent_logs(
        self,
        patient_id: int,
        db: Session,
        today: Optional[date] = None,
        window_days: Optional[int] = None
    ) -> List[models.MedicationLog]:
        """Logs from ``window_days`` days ago through today"""
        today = today or local_today()
        window_days = settings.DASHBOARD_WINDOW_DAYS if window_days is None else window_days
        return await self.get_logs(
            patient_id,
            db,
            since=today - timedelta(days=window_days),
            until=today
        )


# Singleton instance
adherence_service = AdherenceService()
