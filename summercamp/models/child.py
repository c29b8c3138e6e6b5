from sqlalchemy import String, Integer, DateTime, Date, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from datetime import date, datetime, timezone
from decimal import Decimal
from summercamp.db.session import Base

class BookingChild(Base):
    __tablename__ = "booking_children"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    booking_id: Mapped[str] = mapped_column(String(36), index=True)
    position: Mapped[int] = mapped_column(Integer)  # 0-based; drives the sibling discount

    name: Mapped[str] = mapped_column(String(20))
    date_of_birth: Mapped[date] = mapped_column(Date)
    gender: Mapped[str] = mapped_column(String(10))  # boy|girl
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
