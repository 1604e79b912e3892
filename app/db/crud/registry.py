"""Stage registry: one declarative description per procurement stage.

CRUD, search, prefill and the per-stage routers are all driven from STAGES.
"""
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from app.api.schemas import stages as schemas
from app.core.errors import ValidationError
from app.models import (
    BidEvaluation,
    ContractManagement,
    ContractSigning,
    Invoice,
    ItemIdentification,
    OpeningBid,
    Planning,
    Publication,
    PublicationTender,
)
from app.models.base import Base

# Query keys for the primary date window, shared by every stage
DATE_FROM = "date_from"
DATE_TO = "date_to"


@dataclass(frozen=True)
class StageDefinition:
    """How one stage is stored, validated, linked and searched."""

    key: str  # stage discriminator, e.g. "publicationTender"
    label: str  # human label used in messages
    slug: str  # URL segment under /api
    model: type[Base]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    read_schema: type[BaseModel]
    parent_key: Optional[str] = None
    parent_field: Optional[str] = None
    exact_fields: tuple[str, ...] = ()
    substring_fields: tuple[str, ...] = ("tender_title",)
    date_from_field: Optional[str] = None
    date_to_field: Optional[str] = None

    @property
    def parent(self) -> Optional["StageDefinition"]:
        return STAGES[self.parent_key] if self.parent_key else None

    @property
    def parent_ids_field(self) -> Optional[str]:
        """OR-set search key for the parent link, e.g. identification_ids."""
        return f"{self.parent_field}s" if self.parent_field else None

    @property
    def search_keys(self) -> frozenset[str]:
        keys = {"id", *self.exact_fields, *self.substring_fields}
        if self.parent_field:
            keys.update({self.parent_field, self.parent_ids_field})
        if self.date_from_field:
            keys.add(DATE_FROM)
        if self.date_to_field:
            keys.add(DATE_TO)
        return frozenset(keys)


_DEFINITIONS = [
    StageDefinition(
        key="identification",
        label="Identification",
        slug="item-identifications",
        model=ItemIdentification,
        create_schema=schemas.IdentificationCreate,
        update_schema=schemas.IdentificationUpdate,
        read_schema=schemas.IdentificationRead,
        exact_fields=("division", "procurement_division", "status", "category", "financial_year"),
        date_from_field="timeline_for_delivery",
        date_to_field="timeline_for_delivery",
    ),
    StageDefinition(
        key="planning",
        label="Planning",
        slug="plannings",
        model=Planning,
        create_schema=schemas.PlanningCreate,
        update_schema=schemas.PlanningUpdate,
        read_schema=schemas.PlanningRead,
        parent_key="identification",
        parent_field="identification_id",
        exact_fields=("estimated_budget", "planning_status", "tender_type", "framework_type"),
        substring_fields=("tender_title", "tender_final_given_title"),
        date_from_field="planned_publication_date",
        date_to_field="planned_publication_date",
    ),
    StageDefinition(
        key="publication",
        label="Publication",
        slug="publications",
        model=Publication,
        create_schema=schemas.PublicationCreate,
        update_schema=schemas.PublicationUpdate,
        read_schema=schemas.PublicationRead,
        parent_key="planning",
        parent_field="planning_id",
        exact_fields=("revision",),
        date_from_field="initial_procurement_plan_publication",
        date_to_field="initial_procurement_plan_publication",
    ),
    StageDefinition(
        key="publicationTender",
        label="Publication tender",
        slug="publication-tenders",
        model=PublicationTender,
        create_schema=schemas.PublicationTenderCreate,
        update_schema=schemas.PublicationTenderUpdate,
        read_schema=schemas.PublicationTenderRead,
        parent_key="publication",
        parent_field="publication_id",
        exact_fields=("date_of_tender_publication",),
        date_from_field="date_of_tender_publication",
        date_to_field="date_of_tender_publication",
    ),
    StageDefinition(
        key="openBid",
        label="Opening bid",
        slug="open-bids",
        model=OpeningBid,
        create_schema=schemas.OpeningBidCreate,
        update_schema=schemas.OpeningBidUpdate,
        read_schema=schemas.OpeningBidRead,
        parent_key="publicationTender",
        parent_field="publication_tender_id",
        date_from_field="bid_opening_date",
        date_to_field="bid_opening_date",
    ),
    StageDefinition(
        key="bidEvaluation",
        label="Bid evaluation",
        slug="bid-evaluations",
        model=BidEvaluation,
        create_schema=schemas.BidEvaluationCreate,
        update_schema=schemas.BidEvaluationUpdate,
        read_schema=schemas.BidEvaluationRead,
        parent_key="openBid",
        parent_field="opening_bid_id",
        exact_fields=("status",),
        date_from_field="bid_evaluation_date",
        date_to_field="bid_evaluation_date",
    ),
    StageDefinition(
        key="contractSigning",
        label="Contract signing",
        slug="contract-signings",
        model=ContractSigning,
        create_schema=schemas.ContractSigningCreate,
        update_schema=schemas.ContractSigningUpdate,
        read_schema=schemas.ContractSigningRead,
        parent_key="bidEvaluation",
        parent_field="bid_evaluation_id",
        exact_fields=("status",),
        substring_fields=("tender_title", "contractor_bidder_names", "contractor_bidder_email"),
        date_from_field="contract_start_date",
        date_to_field="contract_end_date",
    ),
    StageDefinition(
        key="contractManagement",
        label="Contract management",
        slug="contract-managements",
        model=ContractManagement,
        create_schema=schemas.ContractManagementCreate,
        update_schema=schemas.ContractManagementUpdate,
        read_schema=schemas.ContractManagementRead,
        parent_key="contractSigning",
        parent_field="contract_signing_id",
        exact_fields=("status",),
        substring_fields=("tender_title", "procurement_staff", "inspection_done_by"),
        date_from_field="tender_execution_start_date",
        date_to_field="tender_execution_end_date",
    ),
    StageDefinition(
        key="invoice",
        label="Invoice",
        slug="invoices",
        model=Invoice,
        create_schema=schemas.InvoiceCreate,
        update_schema=schemas.InvoiceUpdate,
        read_schema=schemas.InvoiceRead,
        parent_key="contractManagement",
        parent_field="contract_management_id",
        exact_fields=("status",),
        date_from_field="invoice_submission_date",
        date_to_field="date_of_invoice_payment",
    ),
]

# Chain order: Identification -> ... -> Invoice
STAGES: dict[str, StageDefinition] = {d.key: d for d in _DEFINITIONS}
STAGE_ORDER: list[str] = [d.key for d in _DEFINITIONS]


def get_stage(key: str) -> StageDefinition:
    """Look up a stage by key; unknown keys are a caller error."""
    try:
        return STAGES[key]
    except KeyError:
        raise ValidationError(
            f"Unknown stage: {key!r}",
            errors=[{"loc": ["stage"], "msg": f"must be one of {STAGE_ORDER}", "type": "enum"}],
        ) from None
