"""Scheduler-triggered reminder run."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from glimmer.config import settings
from glimmer.database import get_db
from glimmer.services.mailer import Mailer, SmtpMailer
from glimmer.services.reminder_job import check_inactivity_and_remind

logger = logging.getLogger(__name__)
router = APIRouter()


def get_mailer() -> Mailer:
    return SmtpMailer.from_settings(settings)


def verify_cron_secret(authorization: Optional[str] = Header(default=None)) -> None:
    """Bearer-token check against CRON_SECRET; open when no secret is configured."""
    if settings.CRON_SECRET and authorization != f"Bearer {settings.CRON_SECRET}":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


@router.api_route("/reminder", methods=["GET", "POST"], dependencies=[Depends(verify_cron_secret)])
def run_reminders(db: Session = Depends(get_db), mailer: Mailer = Depends(get_mailer)):
    """Run one inactivity check and reminder pass."""
    try:
        summary = check_inactivity_and_remind(db, mailer, settings)
    except Exception as e:
        logger.exception("Reminder run failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"success": False, "error": "Reminder run failed", "details": str(e)},
        )
    return {"success": True, "message": "Reminder check complete", "summary": summary.as_dict()}
