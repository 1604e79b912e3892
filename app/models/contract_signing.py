"""Contract signing stage: drafting, legal review, guarantees and approvals."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class ContractSigning(TimestampMixin, Base):
    __tablename__ = "contract_signings"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    draft_of_the_contract_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    review_and_approval_by_the_legal_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    contractor_bidder_approval_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    contractor_bidder_names: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contractor_bidder_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contractor_bidder_phone_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    performance_guarantee_validity_start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    performance_guarantee_validity_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    submission_of_performance_guarantee_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    approval_of_contract_by_the_moj_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    approval_of_the_cbm_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    contract_start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    contract_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, default="Pending", server_default="Pending"
    )

    bid_evaluation_id: Mapped[Optional[int]] = stage_link(
        "contract_signings", "bid_evaluation_id", "bid_evaluations"
    )
