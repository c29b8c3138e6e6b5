from summercamp.core.config import settings
from summercamp.models.email_log import EmailLog
from summercamp.services import email_service
from summercamp.services.email_service import build_message, process_pending_emails, queue_email, sendgrid_payload


def test_failed_email_is_retried_by_worker(db_session, monkeypatch):
    def down(*args, **kwargs):
        raise OSError("smtp down")

    monkeypatch.setattr(email_service, "send_email", down)
    queue_email(db_session, "parent@example.com", "Hello", "Body", related_booking_ref="SC-ABC123")
    log = db_session.query(EmailLog).one()
    assert log.status == "failed" and log.attempts == 1

    sent = []
    monkeypatch.setattr(email_service, "send_email", lambda *a, **k: sent.append(a))
    assert process_pending_emails(db_session) == {"processed": 1, "sent": 1, "failed": 0}
    assert log.status == "sent" and log.attempts == 2
    assert sent[0][0] == "parent@example.com"


def test_worker_gives_up_after_max_attempts(db_session, monkeypatch):
    def down(*args, **kwargs):
        raise OSError("smtp down")

    monkeypatch.setattr(email_service, "send_email", down)
    queue_email(db_session, "parent@example.com", "Hello", "Body")
    for _ in range(6):
        process_pending_emails(db_session, max_attempts=3)
    assert db_session.query(EmailLog).one().attempts == 3


def test_smtp_message_has_reply_to_and_attachment(monkeypatch):
    monkeypatch.setattr(settings, "SUPPORT_EMAIL", "help@summercamp.local")
    msg = build_message("parent@example.com", "Booking", "Body", [("SC-ABC123.pdf", b"%PDF-1.4", "application/pdf")])
    assert msg["To"] == "parent@example.com"
    assert msg["Reply-To"] == "help@summercamp.local"
    attachment = next(msg.iter_attachments())
    assert attachment.get_filename() == "SC-ABC123.pdf"
    assert attachment.get_content_type() == "application/pdf"
    assert attachment.get_content() == b"%PDF-1.4"


def test_sendgrid_payload():
    payload = sendgrid_payload("parent@example.com", "Booking", "Body", [("r.pdf", b"abc", "application/pdf")])
    assert payload["personalizations"] == [{"to": [{"email": "parent@example.com"}]}]
    assert payload["from"]["name"] == settings.APP_NAME
    assert payload["attachments"][0]["content"] == "YWJj"
    assert payload["attachments"][0]["disposition"] == "attachment"


def test_send_email_uses_sendgrid_when_configured(monkeypatch):
    calls = []

    class Accepted:
        status_code = 202
        text = ""

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return Accepted()

    monkeypatch.setattr(settings, "SENDGRID_API_KEY", "SG.test")
    monkeypatch.setattr(settings, "SENDGRID_API_URL", "https://sendgrid.test/v3/mail/send")
    monkeypatch.setattr(settings, "EMAIL_TIMEOUT_SECONDS", 5)
    monkeypatch.setattr(email_service.requests, "post", fake_post)

    email_service.send_email("parent@example.com", "Booking", "Body", [])
    assert calls[0]["url"] == "https://sendgrid.test/v3/mail/send"
    assert calls[0]["headers"]["Authorization"] == "Bearer SG.test"
    assert calls[0]["timeout"] == 5
    assert calls[0]["json"]["subject"] == "Booking"
