import logging

from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from summercamp.db.session import SessionLocal
from summercamp.services.email_service import process_pending_emails
from summercamp.tasks.celery_app import celery

logger = logging.getLogger(__name__)


def run_email_queue(limit: int = 50) -> dict:
    db: Session = SessionLocal()
    try:
        try:
            result = process_pending_emails(db, limit=limit)
        except (ProgrammingError, OperationalError):
            # DB not migrated yet; don't crash the worker.
            db.rollback()
            return {"skipped": True, "reason": "missing_tables"}
        if result["processed"]:
            logger.info("email queue: %s", result)
        return result
    finally:
        db.close()


@celery.task(name="summercamp.tasks.jobs.process_email_queue")
def process_email_queue(limit: int = 50):
    return run_email_queue(limit=limit)
