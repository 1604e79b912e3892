"""Bid opening stage."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class OpeningBid(TimestampMixin, Base):
    __tablename__ = "opening_bids"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    bid_opening_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    publication_tender_id: Mapped[Optional[int]] = stage_link(
        "opening_bids", "publication_tender_id", "publication_tenders"
    )
