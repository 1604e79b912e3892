"""Baseline: the nine procurement stage tables.

Revision ID: 001
Revises: (none)
Create Date: 2026-10-19 09:00:00.000000

Creates every stage table with its link to the preceding stage.
The chain links identification -> ... -> opening bid use ON DELETE SET NULL;
the contract-side links (bid evaluation onwards) use ON DELETE CASCADE.

For FRESH databases:
    alembic upgrade head
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def _link(column: str, parent_table: str, ondelete: str) -> list:
    return [
        sa.Column(column, sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint([column], [f"{parent_table}.id"], ondelete=ondelete),
    ]


def _status() -> sa.Column:
    return sa.Column("status", sa.String(length=50), nullable=True, server_default="Pending")


def upgrade() -> None:
    # ── item_identifications ─────────────────────────────────────────────
    op.create_table(
        "item_identifications",
        *_base_columns(),
        sa.Column("procurement_division", sa.String(length=255), nullable=True),
        sa.Column("division", sa.String(length=255), nullable=True),
        sa.Column("financial_year", sa.Integer(), nullable=True),
        sa.Column("manager_email", sa.String(length=255), nullable=True),
        sa.Column("division_manager_phone", sa.String(length=50), nullable=True),
        sa.Column("contract_manager_phone", sa.String(length=50), nullable=True),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=True),
        sa.Column("budget", sa.Integer(), nullable=True),
        sa.Column("estimated_amount", sa.Integer(), nullable=True),
        sa.Column("technical_specification", sa.Text(), nullable=True),
        sa.Column("market_survey_report", sa.Text(), nullable=True),
        sa.Column("timeline_for_delivery", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_item_identifications_division", "item_identifications", ["division"])
    op.create_index("ix_item_identifications_status", "item_identifications", ["status"])

    # ── plannings ────────────────────────────────────────────────────────
    op.create_table(
        "plannings",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("tender_final_given_title", sa.String(length=255), nullable=True),
        sa.Column("tender_methods", sa.String(length=255), nullable=True),
        sa.Column("estimated_budget", sa.Integer(), nullable=True),
        sa.Column("tender_type", sa.String(length=50), nullable=True),
        sa.Column("framework_type", sa.String(length=50), nullable=True),
        sa.Column("planned_tender_document_preparation", sa.DateTime(), nullable=True),
        sa.Column("planned_publication_date", sa.DateTime(), nullable=True),
        sa.Column("planned_bid_opening_date", sa.DateTime(), nullable=True),
        sa.Column("planned_evaluation_date", sa.DateTime(), nullable=True),
        sa.Column("planned_notification_date", sa.DateTime(), nullable=True),
        sa.Column("planned_contract_closure_date", sa.DateTime(), nullable=True),
        sa.Column("planning_status", sa.String(length=50), nullable=True),
        *_link("identification_id", "item_identifications", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_plannings_identification_id", "plannings", ["identification_id"])

    # ── publications ─────────────────────────────────────────────────────
    op.create_table(
        "publications",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("initial_procurement_plan_publication", sa.DateTime(), nullable=True),
        sa.Column("quarter_ii_procurement_plan_publication", sa.DateTime(), nullable=True),
        sa.Column("quarter_iii_procurement_plan_publication", sa.DateTime(), nullable=True),
        sa.Column("revision", sa.Text(), nullable=True),
        sa.Column("tat_publication", sa.Integer(), nullable=True),
        *_link("planning_id", "plannings", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_publications_planning_id", "publications", ["planning_id"])

    # ── publication_tenders ──────────────────────────────────────────────
    op.create_table(
        "publication_tenders",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("date_of_preparation_of_tender_document", sa.DateTime(), nullable=True),
        sa.Column("date_of_submission_of_the_document_committee_for_approval", sa.DateTime(), nullable=True),
        sa.Column("date_of_cbm_approval", sa.DateTime(), nullable=True),
        sa.Column("date_of_tender_publication", sa.DateTime(), nullable=True),
        *_link("publication_id", "publications", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_publication_tenders_publication_id", "publication_tenders", ["publication_id"])

    # ── opening_bids ─────────────────────────────────────────────────────
    op.create_table(
        "opening_bids",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("bid_opening_date", sa.DateTime(), nullable=True),
        *_link("publication_tender_id", "publication_tenders", "SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_opening_bids_publication_tender_id", "opening_bids", ["publication_tender_id"])

    # ── bid_evaluations ──────────────────────────────────────────────────
    op.create_table(
        "bid_evaluations",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("bid_evaluation_date", sa.DateTime(), nullable=True),
        sa.Column("bid_validity_starting_date", sa.DateTime(), nullable=True),
        sa.Column("bid_validity_ending_date", sa.DateTime(), nullable=True),
        sa.Column("notification_date", sa.DateTime(), nullable=True),
        sa.Column("contract_negotiation_date", sa.DateTime(), nullable=True),
        sa.Column("contract_amount", sa.Integer(), nullable=True),
        _status(),
        *_link("opening_bid_id", "opening_bids", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bid_evaluations_opening_bid_id", "bid_evaluations", ["opening_bid_id"])

    # ── contract_signings ────────────────────────────────────────────────
    op.create_table(
        "contract_signings",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("draft_of_the_contract_date", sa.DateTime(), nullable=True),
        sa.Column("review_and_approval_by_the_legal_date", sa.DateTime(), nullable=True),
        sa.Column("contractor_bidder_approval_date", sa.DateTime(), nullable=True),
        sa.Column("contractor_bidder_names", sa.String(length=255), nullable=True),
        sa.Column("contractor_bidder_email", sa.String(length=255), nullable=True),
        sa.Column("contractor_bidder_phone_number", sa.String(length=50), nullable=True),
        sa.Column("performance_guarantee_validity_start_date", sa.DateTime(), nullable=True),
        sa.Column("performance_guarantee_validity_end_date", sa.DateTime(), nullable=True),
        sa.Column("submission_of_performance_guarantee_date", sa.DateTime(), nullable=True),
        sa.Column("approval_of_contract_by_the_moj_date", sa.DateTime(), nullable=True),
        sa.Column("approval_of_the_cbm_date", sa.DateTime(), nullable=True),
        sa.Column("contract_start_date", sa.DateTime(), nullable=True),
        sa.Column("contract_end_date", sa.DateTime(), nullable=True),
        _status(),
        *_link("bid_evaluation_id", "bid_evaluations", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contract_signings_bid_evaluation_id", "contract_signings", ["bid_evaluation_id"])

    # ── contract_managements ─────────────────────────────────────────────
    op.create_table(
        "contract_managements",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("date_of_purchase_order_issue", sa.DateTime(), nullable=True),
        sa.Column("division_issuing_a_purchase_order", sa.String(length=255), nullable=True),
        sa.Column("focal_performance_from_the_program", sa.String(length=255), nullable=True),
        sa.Column("procurement_staff", sa.String(length=255), nullable=True),
        sa.Column("performance_guarantee_end_period", sa.DateTime(), nullable=True),
        sa.Column("tender_execution_start_date", sa.DateTime(), nullable=True),
        sa.Column("tender_execution_end_date", sa.DateTime(), nullable=True),
        sa.Column("inspection_done_by", sa.String(length=255), nullable=True),
        sa.Column("inspection_list", sa.String(length=50), nullable=True),
        sa.Column("delivery_date", sa.DateTime(), nullable=True),
        sa.Column("acceptance_date", sa.DateTime(), nullable=True),
        sa.Column("warranty_liability_start_date", sa.DateTime(), nullable=True),
        sa.Column("warranty_liability_end_date", sa.DateTime(), nullable=True),
        _status(),
        *_link("contract_signing_id", "contract_signings", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contract_managements_contract_signing_id", "contract_managements", ["contract_signing_id"])

    # ── invoices ─────────────────────────────────────────────────────────
    op.create_table(
        "invoices",
        *_base_columns(),
        sa.Column("tender_title", sa.String(length=255), nullable=True),
        sa.Column("invoice_submission_date", sa.DateTime(), nullable=True),
        sa.Column("invoice_received_by_the_finance_office_date", sa.DateTime(), nullable=True),
        sa.Column("requested_for_payment_date", sa.DateTime(), nullable=True),
        sa.Column("date_of_invoice_payment", sa.DateTime(), nullable=True),
        _status(),
        *_link("contract_management_id", "contract_managements", "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_invoices_contract_management_id", "invoices", ["contract_management_id"])


def downgrade() -> None:
    for table in (
        "invoices",
        "contract_managements",
        "contract_signings",
        "bid_evaluations",
        "opening_bids",
        "publication_tenders",
        "publications",
        "plannings",
        "item_identifications",
    ):
        op.drop_table(table)
