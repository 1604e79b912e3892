"""Declarative base, timestamp mixin and stage-link delete policy."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (storage convention for all timestamps)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ON DELETE behaviour of each child -> parent stage link, keyed by "<child table>.<fk column>".
# The first chain links null the child's reference; the contract-side links cascade.
STAGE_LINK_ON_DELETE = {
    "plannings.identification_id": "SET NULL",
    "publications.planning_id": "SET NULL",
    "publication_tenders.publication_id": "SET NULL",
    "opening_bids.publication_tender_id": "SET NULL",
    "bid_evaluations.opening_bid_id": "CASCADE",
    "contract_signings.bid_evaluation_id": "CASCADE",
    "contract_managements.contract_signing_id": "CASCADE",
    "invoices.contract_management_id": "CASCADE",
}


def stage_link(child_table: str, column: str, parent_table: str) -> Mapped[Optional[int]]:
    """Nullable FK column to the preceding stage, with the configured delete policy."""
    return mapped_column(
        Integer,
        ForeignKey(
            f"{parent_table}.id",
            ondelete=STAGE_LINK_ON_DELETE[f"{child_table}.{column}"],
        ),
        nullable=True,
        index=True,
    )


class TimestampMixin:
    """created_at / updated_at columns shared by every stage table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )
