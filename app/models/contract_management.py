"""Contract management stage: purchase order, execution, inspection, delivery and warranty."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class ContractManagement(TimestampMixin, Base):
    __tablename__ = "contract_managements"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    date_of_purchase_order_issue: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    division_issuing_a_purchase_order: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    focal_performance_from_the_program: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    procurement_staff: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    performance_guarantee_end_period: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    tender_execution_start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    tender_execution_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    inspection_done_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    inspection_list: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    delivery_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    acceptance_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    warranty_liability_start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    warranty_liability_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, default="Pending", server_default="Pending"
    )

    contract_signing_id: Mapped[Optional[int]] = stage_link(
        "contract_managements", "contract_signing_id", "contract_signings"
    )
