"""Item identification: root of the procurement chain."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class ItemIdentification(TimestampMixin, Base):
    """
    Need identified by a division: what to buy, how much, for which budget.
    Has no upstream reference; plannings point at it via identification_id.
    """

    __tablename__ = "item_identifications"

    procurement_division: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    division: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    financial_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    manager_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    division_manager_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    contract_manager_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    budget: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    estimated_amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    technical_specification: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    market_survey_report: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    timeline_for_delivery: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)  # free text
