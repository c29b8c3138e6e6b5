from sqlalchemy import String, Integer, DateTime, Date, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import date, datetime, timezone
from decimal import Decimal
from summercamp.db.session import Base

class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    booking_ref: Mapped[str] = mapped_column(String(20), unique=True, index=True)

    product: Mapped[str] = mapped_column(String(30))    # kidsCamp|footballClinic
    location: Mapped[str] = mapped_column(String(20))   # abuDhabi|alAin
    plan_name: Mapped[str] = mapped_column(String(80))
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)

    parent_name: Mapped[str] = mapped_column(String(200))
    parent_email: Mapped[str] = mapped_column(String(320), index=True)
    parent_phone: Mapped[str] = mapped_column(String(40))
    parent_address: Mapped[str] = mapped_column(Text, default="")

    currency: Mapped[str] = mapped_column(String(3), default="AED")
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    discount_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    final_total: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    children_count: Mapped[int] = mapped_column(Integer, default=1)

    status: Mapped[str] = mapped_column(String(30), default="CONFIRMED")  # CONFIRMED, CANCELLED
    payment_status: Mapped[str] = mapped_column(String(30), default="paid")
    payment_id: Mapped[str] = mapped_column(String(120), index=True, default="")

    consent_status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, received

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
