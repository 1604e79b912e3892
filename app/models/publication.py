"""Publication stage: procurement plan publications (initial, Q2, Q3)."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class Publication(TimestampMixin, Base):
    __tablename__ = "publications"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    initial_procurement_plan_publication: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    quarter_ii_procurement_plan_publication: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    quarter_iii_procurement_plan_publication: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    revision: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tat_publication: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # turnaround, days

    planning_id: Mapped[Optional[int]] = stage_link("publications", "planning_id", "plannings")
