"""Bid evaluation stage: evaluation, bid validity window, notification and negotiation."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class BidEvaluation(TimestampMixin, Base):
    __tablename__ = "bid_evaluations"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    bid_evaluation_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    bid_validity_starting_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    bid_validity_ending_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    notification_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    contract_negotiation_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    contract_amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, default="Pending", server_default="Pending"
    )

    opening_bid_id: Mapped[Optional[int]] = stage_link(
        "bid_evaluations", "opening_bid_id", "opening_bids"
    )
