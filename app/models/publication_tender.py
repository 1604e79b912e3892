"""Publication tender stage: tender document preparation, approvals and publication."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, stage_link


class PublicationTender(TimestampMixin, Base):
    __tablename__ = "publication_tenders"

    tender_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    date_of_preparation_of_tender_document: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    date_of_submission_of_the_document_committee_for_approval: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True
    )
    date_of_cbm_approval: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    date_of_tender_publication: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    publication_id: Mapped[Optional[int]] = stage_link(
        "publication_tenders", "publication_id", "publications"
    )
