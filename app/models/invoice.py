"""Invoice stage: submission, finance office receipt, payment request and payment."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class Invoice(TimestampMixin, Base):
    __tablename__ = "invoices"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    invoice_submission_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    invoice_received_by_the_finance_office_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True
    )
    requested_for_payment_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    date_of_invoice_payment: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, default="Pending", server_default="Pending"
    )

    contract_management_id: Mapped[Optional[int]] = stage_link(
        "invoices", "contract_management_id", "contract_managements"
    )
