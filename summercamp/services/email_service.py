import base64
from datetime import datetime, timezone
import logging
import smtplib
from email.message import EmailMessage
from sqlalchemy.orm import Session
import uuid
import requests

from summercamp.core.config import settings
from summercamp.models.email_log import EmailLog

logger = logging.getLogger(__name__)


def queue_email(db: Session, to_email: str, subject: str, body: str, related_booking_ref: str = "", attachments: list[tuple[str, bytes, str]] | None = None) -> str:
    """Queue and attempt immediate send. Body is stored so the worker can retry on failure.

    attachments: list of (filename, content_bytes, mime_type)
    """
    eid = str(uuid.uuid4())
    db.add(
        EmailLog(
            id=eid,
            to_email=to_email,
            subject=subject,
            body=body,
            status="queued",
            related_booking_ref=related_booking_ref,
        )
    )
    db.commit()

    log = db.get(EmailLog, eid)
    try:
        send_email(to_email, subject, body, attachments=attachments or [])
        log.status = "sent"
        log.sent_at = datetime.now(timezone.utc)
    except Exception as e:
        # Worker will retry via process_email_queue
        logger.warning("email %s to %s failed: %s", eid, to_email, e)
        log.status = "failed"
    log.attempts = (log.attempts or 0) + 1
    db.commit()
    return eid


def send_email(to_email: str, subject: str, body: str, attachments: list[tuple[str, bytes, str]]):
    """Deliver one message. SendGrid when an API key is configured, SMTP otherwise (MailHog works locally)."""
    if settings.SENDGRID_API_KEY:
        _send_via_sendgrid(to_email, subject, body, attachments)
    else:
        _send_via_smtp(build_message(to_email, subject, body, attachments))


def build_message(to_email: str, subject: str, body: str,
                  attachments: list[tuple[str, bytes, str]]) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.SMTP_FROM
    msg["To"] = to_email
    msg["Subject"] = subject
    if settings.SUPPORT_EMAIL:
        msg["Reply-To"] = settings.SUPPORT_EMAIL
    msg.set_content(body)
    for filename, content, mime in attachments:
        maintype, _, subtype = mime.partition("/")
        msg.add_attachment(content, maintype=maintype, subtype=subtype or "octet-stream", filename=filename)
    return msg


def _send_via_smtp(msg: EmailMessage):
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.EMAIL_TIMEOUT_SECONDS) as smtp:
        if settings.SMTP_USE_TLS:
            smtp.starttls()
        if settings.SMTP_USERNAME:
            smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        smtp.send_message(msg)


def sendgrid_payload(to_email: str, subject: str, body: str,
                     attachments: list[tuple[str, bytes, str]]) -> dict:
    payload = {
        "personalizations": [{"to": [{"email": to_email}]}],
        "from": {"email": settings.SENDGRID_FROM_EMAIL or settings.SMTP_FROM, "name": settings.APP_NAME},
        "subject": subject,
        "content": [{"type": "text/plain", "value": body}],
    }
    if settings.SUPPORT_EMAIL:
        payload["reply_to"] = {"email": settings.SUPPORT_EMAIL}
    if attachments:
        payload["attachments"] = [
            {
                "content": base64.b64encode(content).decode("ascii"),
                "type": mime,
                "filename": filename,
                "disposition": "attachment",
            }
            for filename, content, mime in attachments
        ]
    return payload


def _send_via_sendgrid(to_email: str, subject: str, body: str, attachments: list[tuple[str, bytes, str]]):
    r = requests.post(
        settings.SENDGRID_API_URL,
        json=sendgrid_payload(to_email, subject, body, attachments),
        headers={"Authorization": f"Bearer {settings.SENDGRID_API_KEY}"},
        timeout=settings.EMAIL_TIMEOUT_SECONDS,
    )
    if r.status_code >= 400:
        raise RuntimeError(f"SendGrid error {r.status_code}: {r.text}")


def process_pending_emails(db: Session, limit: int = 50, max_attempts: int = 5) -> dict:
    """Retry up to `limit` queued or failed emails. Returns counts."""
    pending = (
        db.query(EmailLog)
        .filter(
            EmailLog.status.in_(["queued", "failed"]),
            EmailLog.attempts < max_attempts,
            EmailLog.body.isnot(None),
            EmailLog.body != "",
        )
        .order_by(EmailLog.created_at.asc())
        .limit(limit)
        .all()
    )
    sent, failed = 0, 0
    for log in pending:
        log.attempts = (log.attempts or 0) + 1
        try:
            send_email(log.to_email, log.subject, log.body, [])
            log.status = "sent"
            log.sent_at = datetime.now(timezone.utc)
            sent += 1
        except Exception as e:
            logger.warning("retry of email %s failed (attempt %s): %s", log.id, log.attempts, e)
            log.status = "failed"
            failed += 1
    if pending:
        db.commit()
    return {"processed": len(pending), "sent": sent, "failed": failed}
