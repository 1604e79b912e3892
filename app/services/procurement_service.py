"""Cross-stage procurement views: chain resolution, timeline, summaries, statistics.

The chain covers the identification -> planning -> publication -> publication tender
prefix. Each link is followed by foreign key; when a parent has several children the
earliest created one is "the" child (list_chain_candidates exposes all of them).
A missing downstream record ends the chain and is not an error; only a missing
identification raises NotFoundError.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from sqlalchemy.orm import Session

from app.api.schemas.procurement import (
    CHAIN_STAGES,
    ChainCandidatesRead,
    ProcurementChainRead,
    ProcurementProgress,
    ProcurementStatistics,
    ProcurementSummary,
    TimelineEvent,
)
from app.core.errors import NotFoundError, ValidationError
from app.db.crud.registry import STAGES
from app.db.crud.stages import get_record, list_records, search_records
from app.models import ItemIdentification, Planning, Publication, PublicationTender
from app.utils.status import UNKNOWN_BUCKET, ProcurementStatus

logger = logging.getLogger(__name__)

IDENTIFICATION = STAGES["identification"]
PLANNING = STAGES["planning"]
PUBLICATION = STAGES["publication"]
PUBLICATION_TENDER = STAGES["publicationTender"]

# (field, title) of the dated milestones each stage contributes to the timeline, in emit order
PLANNING_MILESTONES = [
    ("planned_tender_document_preparation", "Planned Tender Document Preparation"),
    ("planned_publication_date", "Planned Publication Date"),
    ("planned_bid_opening_date", "Planned Bid Opening Date"),
    ("planned_evaluation_date", "Planned Evaluation Date"),
    ("planned_notification_date", "Planned Notification Date"),
    ("planned_contract_closure_date", "Planned Contract Closure Date"),
]
PUBLICATION_MILESTONES = [
    ("initial_procurement_plan_publication", "Initial Procurement Plan Publication"),
    ("quarter_ii_procurement_plan_publication", "Quarter II Procurement Plan Publication"),
    ("quarter_iii_procurement_plan_publication", "Quarter III Procurement Plan Publication"),
]
PUBLICATION_TENDER_MILESTONES = [
    ("date_of_preparation_of_tender_document", "Preparation of Tender Document"),
    ("date_of_submission_of_the_document_committee_for_approval", "Submission of Document Committee for Approval"),
    ("date_of_cbm_approval", "CBM Approval"),
    ("date_of_tender_publication", "Tender Publication"),
]


@dataclass
class ProcurementChain:
    identification: ItemIdentification
    planning: Optional[Planning] = None
    publication: Optional[Publication] = None
    publication_tender: Optional[PublicationTender] = None

    @property
    def stage(self) -> str:
        """Furthest stage reached; precedence publicationTender > publication > planning."""
        if self.publication_tender is not None:
            return "publicationTender"
        if self.publication is not None:
            return "publication"
        if self.planning is not None:
            return "planning"
        return "identification"

    @property
    def depth(self) -> int:
        """Number of resolved stages after the identification (0-3)."""
        return sum(
            r is not None for r in (self.planning, self.publication, self.publication_tender)
        )

    def to_read(self) -> ProcurementChainRead:
        return ProcurementChainRead(
            identification=IDENTIFICATION.read_schema.model_validate(self.identification),
            planning=PLANNING.read_schema.model_validate(self.planning) if self.planning else None,
            publication=PUBLICATION.read_schema.model_validate(self.publication) if self.publication else None,
            publication_tender=(
                PUBLICATION_TENDER.read_schema.model_validate(self.publication_tender)
                if self.publication_tender
                else None
            ),
            stage=self.stage,
        )


def build_timeline(chain: ProcurementChain) -> list[TimelineEvent]:
    """
    Every dated milestone of the chain, oldest first.
    Creation events come first within each stage; ties keep insertion order
    (identification -> planning -> publication -> publication tender).
    """
    identification = chain.identification
    events = [
        TimelineEvent(
            stage="identification",
            title="Identification Created",
            date=identification.created_at,
            status=identification.status,
        )
    ]

    planning = chain.planning
    if planning is not None:
        events.append(
            TimelineEvent(
                stage="planning",
                title="Planning Created",
                date=planning.created_at,
                status=planning.planning_status,
            )
        )
        events.extend(_milestones("planning", planning, PLANNING_MILESTONES, "planned"))

    publication = chain.publication
    if publication is not None:
        events.append(
            TimelineEvent(stage="publication", title="Publication Created", date=publication.created_at, status="active")
        )
        events.extend(_milestones("publication", publication, PUBLICATION_MILESTONES, "completed"))

    tender = chain.publication_tender
    if tender is not None:
        events.append(
            TimelineEvent(
                stage="publicationTender",
                title="Publication Tender Created",
                date=tender.created_at,
                status="active",
            )
        )
        events.extend(_milestones("publicationTender", tender, PUBLICATION_TENDER_MILESTONES, "completed"))

    # sorted() is stable: equal dates keep insertion order
    return sorted(events, key=lambda e: e.date)


def _milestones(stage: str, record: Any, milestones: list[tuple[str, str]], status: str) -> list[TimelineEvent]:
    events = []
    for field, title in milestones:
        value = getattr(record, field)
        if value is not None:
            events.append(TimelineEvent(stage=stage, title=title, date=value, status=status))
    return events


def compute_progress(chain: Optional[ProcurementChain]) -> int:
    """25 points per resolved stage: 25, 50, 75 or 100; 0 without an identification."""
    if chain is None or chain.identification is None:
        return 0
    return 25 + 25 * chain.depth


def build_summary_from_chain(chain: ProcurementChain) -> ProcurementSummary:
    identification = chain.identification
    return ProcurementSummary(
        id=identification.id,
        tender_title=identification.tender_title,
        division=identification.division,
        status=identification.status,
        status_kind=ProcurementStatus.classify(identification.status).value,
        budget=identification.budget,
        estimated_budget=chain.planning.estimated_budget if chain.planning else None,
        planning_status=chain.planning.planning_status if chain.planning else None,
        date_of_tender_publication=(
            chain.publication_tender.date_of_tender_publication if chain.publication_tender else None
        ),
        stage=chain.stage,
    )


class ProcurementService:
    """Read-only aggregation over the stage tables."""

    def __init__(self, db: Session):
        self.db = db

    # ── Chain resolution ────────────────────────────────────────────

    def get_identification(self, identification_id: int) -> ItemIdentification:
        identification = get_record(self.db, IDENTIFICATION, identification_id)
        if identification is None:
            raise NotFoundError("Identification not found")
        return identification

    def resolve_chain(self, identification_id: int) -> ProcurementChain:
        """Follow identification -> planning -> publication -> publication tender, first match per link."""
        identification = self.get_identification(identification_id)
        chain = ProcurementChain(identification=identification)

        chain.planning = self._first_child(PLANNING, identification.id)
        if chain.planning is not None:
            chain.publication = self._first_child(PUBLICATION, chain.planning.id)
        if chain.publication is not None:
            chain.publication_tender = self._first_child(PUBLICATION_TENDER, chain.publication.id)

        logger.debug("Resolved chain for identification %s: stage=%s", identification_id, chain.stage)
        return chain

    def resolve_chains(self, identifications: Iterable[ItemIdentification]) -> list[ProcurementChain]:
        """
        Batched resolve_chain: one IN query per link instead of one query per identification.
        Returns chains in the order of `identifications`, identical to resolving each one alone.
        """
        identifications = list(identifications)
        plannings = self._first_children(PLANNING, [i.id for i in identifications])
        publications = self._first_children(PUBLICATION, [p.id for p in plannings.values()])
        tenders = self._first_children(PUBLICATION_TENDER, [p.id for p in publications.values()])

        chains = []
        for identification in identifications:
            planning = plannings.get(identification.id)
            publication = publications.get(planning.id) if planning else None
            tender = tenders.get(publication.id) if publication else None
            chains.append(ProcurementChain(identification, planning, publication, tender))
        return chains

    def list_chain_candidates(self, identification_id: int) -> ChainCandidatesRead:
        """All plannings of the identification, all their publications and all their tenders."""
        identification = self.get_identification(identification_id)
        plannings = search_records(self.db, PLANNING, {"identification_id": identification.id})
        publications = (
            search_records(self.db, PUBLICATION, {"planning_ids": [p.id for p in plannings]})
            if plannings
            else []
        )
        tenders = (
            search_records(self.db, PUBLICATION_TENDER, {"publication_ids": [p.id for p in publications]})
            if publications
            else []
        )
        return ChainCandidatesRead(
            identification_id=identification.id,
            plannings=[PLANNING.read_schema.model_validate(p) for p in plannings],
            publications=[PUBLICATION.read_schema.model_validate(p) for p in publications],
            publication_tenders=[PUBLICATION_TENDER.read_schema.model_validate(t) for t in tenders],
        )

    def _first_child(self, stage, parent_id: int):
        children = search_records(self.db, stage, {stage.parent_field: parent_id})
        return children[0] if children else None

    def _first_children(self, stage, parent_ids: list[int]) -> dict[int, Any]:
        """Map parent id -> earliest created child, for every parent that has one."""
        if not parent_ids:
            return {}
        first: dict[int, Any] = {}
        for child in search_records(self.db, stage, {stage.parent_ids_field: parent_ids}):
            first.setdefault(getattr(child, stage.parent_field), child)
        return first

    # ── Timeline / progress ─────────────────────────────────────────

    def get_timeline(self, identification_id: int) -> list[TimelineEvent]:
        return build_timeline(self.resolve_chain(identification_id))

    def get_progress(self, identification_id: int) -> ProcurementProgress:
        chain = self.resolve_chain(identification_id)
        return ProcurementProgress(
            identification_id=identification_id,
            stage=chain.stage,
            progress=compute_progress(chain),
        )

    # ── Summaries ───────────────────────────────────────────────────

    def build_summary(self, identification: Union[ItemIdentification, int]) -> ProcurementSummary:
        identification_id = identification if isinstance(identification, int) else identification.id
        return build_summary_from_chain(self.resolve_chain(identification_id))

    def build_all_summaries(self) -> list[ProcurementSummary]:
        return self._summaries(list_records(self.db, IDENTIFICATION))

    def filter_by_stage(self, stage: str) -> list[ProcurementSummary]:
        if stage not in CHAIN_STAGES:
            raise ValidationError(
                f"Invalid stage: {stage!r}",
                errors=[{"loc": ["stage"], "msg": f"must be one of {list(CHAIN_STAGES)}", "type": "enum"}],
            )
        return [s for s in self.build_all_summaries() if s.stage == stage]

    def filter_by_division(self, division: str) -> list[ProcurementSummary]:
        return self._summaries(search_records(self.db, IDENTIFICATION, {"division": division}))

    def filter_by_status(self, status: str) -> list[ProcurementSummary]:
        return self._summaries(search_records(self.db, IDENTIFICATION, {"status": status}))

    def _summaries(self, identifications: list[ItemIdentification]) -> list[ProcurementSummary]:
        return [build_summary_from_chain(chain) for chain in self.resolve_chains(identifications)]

    # ── Statistics ──────────────────────────────────────────────────

    def compute_statistics(self) -> ProcurementStatistics:
        """Counts by stage, division and status across every identification."""
        identifications = list_records(self.db, IDENTIFICATION)
        by_stage = {stage: 0 for stage in CHAIN_STAGES}
        by_division: dict[str, int] = {}
        by_status: dict[str, int] = {}

        for chain in self.resolve_chains(identifications):
            identification = chain.identification
            division = identification.division or UNKNOWN_BUCKET
            by_division[division] = by_division.get(division, 0) + 1
            status = identification.status or UNKNOWN_BUCKET
            by_status[status] = by_status.get(status, 0) + 1
            by_stage[chain.stage] += 1

        return ProcurementStatistics(
            total_items=len(identifications),
            by_stage=by_stage,
            by_division=by_division,
            by_status=by_status,
        )
