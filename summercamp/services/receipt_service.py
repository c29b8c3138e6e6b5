from __future__ import annotations

import io
from datetime import date, datetime, timezone
from decimal import Decimal

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def render_receipt_pdf_bytes(*, booking_ref: str, parent_name: str, product_label: str, location_label: str,
                             plan_name: str, start_date: date, end_date: date,
                             children: list[tuple[str, Decimal]], subtotal: Decimal, discount_total: Decimal,
                             tax_amount: Decimal, final_total: Decimal, currency: str, payment_id: str) -> bytes:
    """Return an A4 PDF receipt. Pure function."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    _, h = A4

    c.setFont("Helvetica-Bold", 18)
    c.drawString(40, h - 60, f"Summer Camp Receipt - {product_label}")
    c.setFont("Helvetica", 11)
    c.drawString(40, h - 80, f"Booking Reference: {booking_ref}")
    c.drawString(40, h - 96, f"Payment Reference: {payment_id}")

    c.setFont("Helvetica-Bold", 12)
    c.drawString(40, h - 130, "Booking")
    c.setFont("Helvetica", 11)
    c.drawString(40, h - 148, f"Parent:   {parent_name}")
    c.drawString(40, h - 164, f"Plan:     {plan_name}")
    c.drawString(40, h - 180, f"Location: {location_label}")
    c.drawString(40, h - 196, f"Access:   {start_date.isoformat()} to {end_date.isoformat()}")

    c.setFont("Helvetica-Bold", 12)
    c.drawString(40, h - 232, "Children")
    c.setFont("Helvetica", 11)
    y = h - 250
    for name, price in children:
        c.drawString(40, y, name)
        c.drawRightString(360, y, f"{currency} {price:,.2f}")
        y -= 16

    y -= 12
    for label, amount in (("Subtotal", subtotal), ("Sibling discount", -discount_total),
                          ("VAT (5%)", tax_amount)):
        c.drawString(40, y, label)
        c.drawRightString(360, y, f"{currency} {amount:,.2f}")
        y -= 16
    c.setFont("Helvetica-Bold", 12)
    c.drawString(40, y, "Total paid")
    c.drawRightString(360, y, f"{currency} {final_total:,.2f}")

    c.setFont("Helvetica", 9)
    c.drawString(40, 40, "Please complete the parent consent form before your child's first day.")
    c.drawString(40, 26, f"Generated: {datetime.now(timezone.utc).isoformat()}")

    c.showPage()
    c.save()
    return buf.getvalue()
