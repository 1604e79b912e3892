"""Schemas for cross-stage procurement views (chain, timeline, summaries, statistics)."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_serializer

from app.api.schemas.stages import (
    IdentificationRead,
    PlanningRead,
    PublicationRead,
    PublicationTenderRead,
)

# Stage discriminators of the identification -> publication tender prefix.
# Clients switch on these literal values.
ProcurementStage = Literal["identification", "planning", "publication", "publicationTender"]
CHAIN_STAGES: tuple[str, ...] = ("identification", "planning", "publication", "publicationTender")


class ProcurementChainRead(BaseModel):
    """Resolved chain for one identification; absent downstream stages are null."""

    identification: IdentificationRead
    planning: Optional[PlanningRead] = None
    publication: Optional[PublicationRead] = None
    publication_tender: Optional[PublicationTenderRead] = None
    stage: ProcurementStage


class ChainCandidatesRead(BaseModel):
    """Every downstream record linked to an identification, not only the first match."""

    identification_id: int
    plannings: list[PlanningRead] = Field(default_factory=list)
    publications: list[PublicationRead] = Field(default_factory=list)
    publication_tenders: list[PublicationTenderRead] = Field(default_factory=list)


class TimelineEvent(BaseModel):
    stage: ProcurementStage
    title: str
    date: datetime
    status: Optional[str] = None


class ProcurementSummary(BaseModel):
    """Flattened view of one identification and how far its chain has progressed."""

    id: int
    tender_title: Optional[str] = None
    division: Optional[str] = None
    status: Optional[str] = None
    status_kind: str
    budget: Optional[int] = None
    estimated_budget: Optional[int] = None
    planning_status: Optional[str] = None
    date_of_tender_publication: Optional[datetime] = None
    stage: ProcurementStage

    @model_serializer(mode="wrap")
    def omit_unreached_stages(self, handler):
        # Fields of stages the chain has not reached are left out rather than null
        data = handler(self)
        for field in DOWNSTREAM_SUMMARY_FIELDS:
            if data.get(field) is None:
                data.pop(field, None)
        return data


DOWNSTREAM_SUMMARY_FIELDS = ("estimated_budget", "planning_status", "date_of_tender_publication")


class ProcurementStatistics(BaseModel):
    total_items: int
    by_stage: dict[str, int]
    by_division: dict[str, int]
    by_status: dict[str, int]


class ProcurementProgress(BaseModel):
    identification_id: int
    stage: ProcurementStage
    progress: int = Field(..., ge=0, le=100)
