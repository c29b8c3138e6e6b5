from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from summercamp.db.session import Base

class ConsentForm(Base):
    __tablename__ = "consent_forms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    booking_id: Mapped[str] = mapped_column(String(36), index=True)
    booking_ref: Mapped[str] = mapped_column(String(20), index=True)

    kid_full_name: Mapped[str] = mapped_column(String(200))
    guardian_name: Mapped[str] = mapped_column(String(200))
    guardian_email: Mapped[str] = mapped_column(String(320))
    answers_json: Mapped[str] = mapped_column(Text, default="{}")  # every submitted field except signatures

    player_signature: Mapped[str] = mapped_column(Text)    # data:image/png;base64,...
    guardian_signature: Mapped[str] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
