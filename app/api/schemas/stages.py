"""Request/response schemas for the nine procurement stages.

Per stage:
- <Stage>Create: every field required except optional ones and the parent link.
- <Stage>Update: every field may be left out; only supplied fields are written.
  Fields required on create may not be sent as null.
- <Stage>Read: persisted record including id and timestamps.
"""
from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from app.utils.dates import StageDatetime


class StageRead(BaseModel):
    """Fields every persisted stage record carries."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StageUpdate(BaseModel):
    """Partial update of a stage record, checked against the stage's create schema."""

    create_schema: ClassVar[type[BaseModel]]

    @field_validator("*", mode="before")
    @classmethod
    def reject_null_for_required(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and cls.create_schema.model_fields[info.field_name].is_required():
            raise ValueError("Field is required and cannot be null")
        return value


# ── Identification ───────────────────────────────────────────────────


class IdentificationCreate(BaseModel):
    procurement_division: Optional[str] = Field(None, max_length=255)
    division: str = Field(..., max_length=255)
    financial_year: int = Field(..., gt=0, description="Financial year must be a positive integer")
    manager_email: EmailStr
    division_manager_phone: str = Field(..., max_length=50)
    contract_manager_phone: str = Field(..., max_length=50)
    tender_title: str = Field(..., max_length=255)
    category: str = Field(..., max_length=100)
    quantity: int
    budget: int
    estimated_amount: int
    technical_specification: str
    market_survey_report: Optional[str] = None
    timeline_for_delivery: StageDatetime
    status: str = Field(..., max_length=50)


class IdentificationUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = IdentificationCreate

    procurement_division: Optional[str] = Field(None, max_length=255)
    division: Optional[str] = Field(None, max_length=255)
    financial_year: Optional[int] = Field(None, gt=0)
    manager_email: Optional[EmailStr] = None
    division_manager_phone: Optional[str] = Field(None, max_length=50)
    contract_manager_phone: Optional[str] = Field(None, max_length=50)
    tender_title: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    quantity: Optional[int] = None
    budget: Optional[int] = None
    estimated_amount: Optional[int] = None
    technical_specification: Optional[str] = None
    market_survey_report: Optional[str] = None
    timeline_for_delivery: Optional[StageDatetime] = None
    status: Optional[str] = Field(None, max_length=50)


class IdentificationRead(StageRead):
    procurement_division: Optional[str] = None
    division: Optional[str] = None
    financial_year: Optional[int] = None
    manager_email: Optional[str] = None
    division_manager_phone: Optional[str] = None
    contract_manager_phone: Optional[str] = None
    tender_title: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    budget: Optional[int] = None
    estimated_amount: Optional[int] = None
    technical_specification: Optional[str] = None
    market_survey_report: Optional[str] = None
    timeline_for_delivery: Optional[datetime] = None
    status: Optional[str] = None


# ── Planning ─────────────────────────────────────────────────────────


class PlanningCreate(BaseModel):
    tender_title: str = Field(..., max_length=255)
    tender_final_given_title: str = Field(..., max_length=255)
    tender_methods: str = Field(..., max_length=255)
    estimated_budget: int
    tender_type: str = Field(..., max_length=50)
    framework_type: str = Field(..., max_length=50)
    planned_tender_document_preparation: StageDatetime
    planned_publication_date: StageDatetime
    planned_bid_opening_date: StageDatetime
    planned_evaluation_date: StageDatetime
    planned_notification_date: StageDatetime
    planned_contract_closure_date: StageDatetime
    planning_status: str = Field(..., max_length=50)
    identification_id: Optional[int] = None


class PlanningUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = PlanningCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    tender_final_given_title: Optional[str] = Field(None, max_length=255)
    tender_methods: Optional[str] = Field(None, max_length=255)
    estimated_budget: Optional[int] = None
    tender_type: Optional[str] = Field(None, max_length=50)
    framework_type: Optional[str] = Field(None, max_length=50)
    planned_tender_document_preparation: Optional[StageDatetime] = None
    planned_publication_date: Optional[StageDatetime] = None
    planned_bid_opening_date: Optional[StageDatetime] = None
    planned_evaluation_date: Optional[StageDatetime] = None
    planned_notification_date: Optional[StageDatetime] = None
    planned_contract_closure_date: Optional[StageDatetime] = None
    planning_status: Optional[str] = Field(None, max_length=50)
    identification_id: Optional[int] = None


class PlanningRead(StageRead):
    tender_title: Optional[str] = None
    tender_final_given_title: Optional[str] = None
    tender_methods: Optional[str] = None
    estimated_budget: Optional[int] = None
    tender_type: Optional[str] = None
    framework_type: Optional[str] = None
    planned_tender_document_preparation: Optional[datetime] = None
    planned_publication_date: Optional[datetime] = None
    planned_bid_opening_date: Optional[datetime] = None
    planned_evaluation_date: Optional[datetime] = None
    planned_notification_date: Optional[datetime] = None
    planned_contract_closure_date: Optional[datetime] = None
    planning_status: Optional[str] = None
    identification_id: Optional[int] = None


# ── Publication ──────────────────────────────────────────────────────


class PublicationCreate(BaseModel):
    tender_title: str = Field(..., max_length=255)
    initial_procurement_plan_publication: StageDatetime
    quarter_ii_procurement_plan_publication: StageDatetime
    quarter_iii_procurement_plan_publication: StageDatetime
    revision: str
    tat_publication: int
    planning_id: Optional[int] = None


class PublicationUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = PublicationCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    initial_procurement_plan_publication: Optional[StageDatetime] = None
    quarter_ii_procurement_plan_publication: Optional[StageDatetime] = None
    quarter_iii_procurement_plan_publication: Optional[StageDatetime] = None
    revision: Optional[str] = None
    tat_publication: Optional[int] = None
    planning_id: Optional[int] = None


class PublicationRead(StageRead):
    tender_title: Optional[str] = None
    initial_procurement_plan_publication: Optional[datetime] = None
    quarter_ii_procurement_plan_publication: Optional[datetime] = None
    quarter_iii_procurement_plan_publication: Optional[datetime] = None
    revision: Optional[str] = None
    tat_publication: Optional[int] = None
    planning_id: Optional[int] = None


# ── Publication tender ───────────────────────────────────────────────


class PublicationTenderCreate(BaseModel):
    tender_title: Optional[str] = Field(None, max_length=255)
    date_of_preparation_of_tender_document: StageDatetime
    date_of_submission_of_the_document_committee_for_approval: StageDatetime
    date_of_cbm_approval: StageDatetime
    date_of_tender_publication: StageDatetime
    publication_id: Optional[int] = None


class PublicationTenderUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = PublicationTenderCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    date_of_preparation_of_tender_document: Optional[StageDatetime] = None
    date_of_submission_of_the_document_committee_for_approval: Optional[StageDatetime] = None
    date_of_cbm_approval: Optional[StageDatetime] = None
    date_of_tender_publication: Optional[StageDatetime] = None
    publication_id: Optional[int] = None


class PublicationTenderRead(StageRead):
    tender_title: Optional[str] = None
    date_of_preparation_of_tender_document: Optional[datetime] = None
    date_of_submission_of_the_document_committee_for_approval: Optional[datetime] = None
    date_of_cbm_approval: Optional[datetime] = None
    date_of_tender_publication: Optional[datetime] = None
    publication_id: Optional[int] = None


# ── Opening bid ──────────────────────────────────────────────────────


class OpeningBidCreate(BaseModel):
    tender_title: str = Field(..., max_length=255)
    bid_opening_date: StageDatetime
    publication_tender_id: Optional[int] = None


class OpeningBidUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = OpeningBidCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    bid_opening_date: Optional[StageDatetime] = None
    publication_tender_id: Optional[int] = None


class OpeningBidRead(StageRead):
    tender_title: Optional[str] = None
    bid_opening_date: Optional[datetime] = None
    publication_tender_id: Optional[int] = None


# ── Bid evaluation ───────────────────────────────────────────────────


class BidEvaluationCreate(BaseModel):
    tender_title: str = Field(..., max_length=255)
    bid_evaluation_date: StageDatetime
    bid_validity_starting_date: StageDatetime
    bid_validity_ending_date: StageDatetime
    notification_date: StageDatetime
    contract_negotiation_date: StageDatetime
    contract_amount: int
    status: str = Field(..., max_length=50)
    opening_bid_id: Optional[int] = None


class BidEvaluationUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = BidEvaluationCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    bid_evaluation_date: Optional[StageDatetime] = None
    bid_validity_starting_date: Optional[StageDatetime] = None
    bid_validity_ending_date: Optional[StageDatetime] = None
    notification_date: Optional[StageDatetime] = None
    contract_negotiation_date: Optional[StageDatetime] = None
    contract_amount: Optional[int] = None
    status: Optional[str] = Field(None, max_length=50)
    opening_bid_id: Optional[int] = None


class BidEvaluationRead(StageRead):
    tender_title: Optional[str] = None
    bid_evaluation_date: Optional[datetime] = None
    bid_validity_starting_date: Optional[datetime] = None
    bid_validity_ending_date: Optional[datetime] = None
    notification_date: Optional[datetime] = None
    contract_negotiation_date: Optional[datetime] = None
    contract_amount: Optional[int] = None
    status: Optional[str] = None
    opening_bid_id: Optional[int] = None


# ── Contract signing ─────────────────────────────────────────────────


class ContractSigningCreate(BaseModel):
    tender_title: str = Field(..., max_length=255)
    draft_of_the_contract_date: StageDatetime
    review_and_approval_by_the_legal_date: StageDatetime
    contractor_bidder_approval_date: StageDatetime
    contractor_bidder_names: str = Field(..., max_length=255)
    contractor_bidder_email: EmailStr
    contractor_bidder_phone_number: str = Field(..., max_length=50)
    performance_guarantee_validity_start_date: StageDatetime
    performance_guarantee_validity_end_date: StageDatetime
    submission_of_performance_guarantee_date: StageDatetime
    approval_of_contract_by_the_moj_date: StageDatetime
    approval_of_the_cbm_date: StageDatetime
    contract_start_date: StageDatetime
    contract_end_date: StageDatetime
    status: str = Field(..., max_length=50)
    bid_evaluation_id: Optional[int] = None


class ContractSigningUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = ContractSigningCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    draft_of_the_contract_date: Optional[StageDatetime] = None
    review_and_approval_by_the_legal_date: Optional[StageDatetime] = None
    contractor_bidder_approval_date: Optional[StageDatetime] = None
    contractor_bidder_names: Optional[str] = Field(None, max_length=255)
    contractor_bidder_email: Optional[EmailStr] = None
    contractor_bidder_phone_number: Optional[str] = Field(None, max_length=50)
    performance_guarantee_validity_start_date: Optional[StageDatetime] = None
    performance_guarantee_validity_end_date: Optional[StageDatetime] = None
    submission_of_performance_guarantee_date: Optional[StageDatetime] = None
    approval_of_contract_by_the_moj_date: Optional[StageDatetime] = None
    approval_of_the_cbm_date: Optional[StageDatetime] = None
    contract_start_date: Optional[StageDatetime] = None
    contract_end_date: Optional[StageDatetime] = None
    status: Optional[str] = Field(None, max_length=50)
    bid_evaluation_id: Optional[int] = None


class ContractSigningRead(StageRead):
    tender_title: Optional[str] = None
    draft_of_the_contract_date: Optional[datetime] = None
    review_and_approval_by_the_legal_date: Optional[datetime] = None
    contractor_bidder_approval_date: Optional[datetime] = None
    contractor_bidder_names: Optional[str] = None
    contractor_bidder_email: Optional[str] = None
    contractor_bidder_phone_number: Optional[str] = None
    performance_guarantee_validity_start_date: Optional[datetime] = None
    performance_guarantee_validity_end_date: Optional[datetime] = None
    submission_of_performance_guarantee_date: Optional[datetime] = None
    approval_of_contract_by_the_moj_date: Optional[datetime] = None
    approval_of_the_cbm_date: Optional[datetime] = None
    contract_start_date: Optional[datetime] = None
    contract_end_date: Optional[datetime] = None
    status: Optional[str] = None
    bid_evaluation_id: Optional[int] = None


# ── Contract management ──────────────────────────────────────────────


class ContractManagementCreate(BaseModel):
    tender_title: str = Field(..., max_length=255)
    date_of_purchase_order_issue: StageDatetime
    division_issuing_a_purchase_order: str = Field(..., max_length=255)
    focal_performance_from_the_program: str = Field(..., max_length=255)
    procurement_staff: str = Field(..., max_length=255)
    performance_guarantee_end_period: StageDatetime
    tender_execution_start_date: StageDatetime
    tender_execution_end_date: StageDatetime
    inspection_done_by: str = Field(..., max_length=255)
    inspection_list: str = Field(..., max_length=50)
    delivery_date: StageDatetime
    acceptance_date: StageDatetime
    warranty_liability_start_date: StageDatetime
    warranty_liability_end_date: StageDatetime
    status: str = Field(..., max_length=50)
    contract_signing_id: Optional[int] = None


class ContractManagementUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = ContractManagementCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    date_of_purchase_order_issue: Optional[StageDatetime] = None
    division_issuing_a_purchase_order: Optional[str] = Field(None, max_length=255)
    focal_performance_from_the_program: Optional[str] = Field(None, max_length=255)
    procurement_staff: Optional[str] = Field(None, max_length=255)
    performance_guarantee_end_period: Optional[StageDatetime] = None
    tender_execution_start_date: Optional[StageDatetime] = None
    tender_execution_end_date: Optional[StageDatetime] = None
    inspection_done_by: Optional[str] = Field(None, max_length=255)
    inspection_list: Optional[str] = Field(None, max_length=50)
    delivery_date: Optional[StageDatetime] = None
    acceptance_date: Optional[StageDatetime] = None
    warranty_liability_start_date: Optional[StageDatetime] = None
    warranty_liability_end_date: Optional[StageDatetime] = None
    status: Optional[str] = Field(None, max_length=50)
    contract_signing_id: Optional[int] = None


class ContractManagementRead(StageRead):
    tender_title: Optional[str] = None
    date_of_purchase_order_issue: Optional[datetime] = None
    division_issuing_a_purchase_order: Optional[str] = None
    focal_performance_from_the_program: Optional[str] = None
    procurement_staff: Optional[str] = None
    performance_guarantee_end_period: Optional[datetime] = None
    tender_execution_start_date: Optional[datetime] = None
    tender_execution_end_date: Optional[datetime] = None
    inspection_done_by: Optional[str] = None
    inspection_list: Optional[str] = None
    delivery_date: Optional[datetime] = None
    acceptance_date: Optional[datetime] = None
    warranty_liability_start_date: Optional[datetime] = None
    warranty_liability_end_date: Optional[datetime] = None
    status: Optional[str] = None
    contract_signing_id: Optional[int] = None


# ── Invoice ──────────────────────────────────────────────────────────


class InvoiceCreate(BaseModel):
    tender_title: str = Field(..., max_length=255)
    invoice_submission_date: StageDatetime
    invoice_received_by_the_finance_office_date: StageDatetime
    requested_for_payment_date: StageDatetime
    date_of_invoice_payment: StageDatetime
    status: str = Field(..., max_length=50)
    contract_management_id: Optional[int] = None


class InvoiceUpdate(StageUpdate):
    create_schema: ClassVar[type[BaseModel]] = InvoiceCreate

    tender_title: Optional[str] = Field(None, max_length=255)
    invoice_submission_date: Optional[StageDatetime] = None
    invoice_received_by_the_finance_office_date: Optional[StageDatetime] = None
    requested_for_payment_date: Optional[StageDatetime] = None
    date_of_invoice_payment: Optional[StageDatetime] = None
    status: Optional[str] = Field(None, max_length=50)
    contract_management_id: Optional[int] = None


class InvoiceRead(StageRead):
    tender_title: Optional[str] = None
    invoice_submission_date: Optional[datetime] = None
    invoice_received_by_the_finance_office_date: Optional[datetime] = None
    requested_for_payment_date: Optional[datetime] = None
    date_of_invoice_payment: Optional[datetime] = None
    status: Optional[str] = None
    contract_management_id: Optional[int] = None
