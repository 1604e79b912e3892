"""Planning stage: tender method, budget and planned milestone dates."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class Planning(TimestampMixin, Base):
    __tablename__ = "plannings"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tender_final_given_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tender_methods: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    estimated_budget: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tender_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    framework_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    planned_tender_document_preparation: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    planned_publication_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    planned_bid_opening_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    planned_evaluation_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    planned_notification_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    planned_contract_closure_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    planning_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    identification_id: Mapped[Optional[int]] = stage_link(
        "plannings", "identification_id", "item_identifications"
    )
