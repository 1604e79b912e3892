#!/usr/bin/env python3
"""Seed a small demo corpus: identifications at every chain depth, one full contract chain.

Usage:
    python scripts/seed_demo.py            # add demo records
    python scripts/seed_demo.py --reset    # drop and recreate all tables first
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.logging import setup_logging
from app.db.crud.registry import STAGES
from app.db.crud.stages import create_record
from app.db.session import SessionLocal, engine, init_db
from app.models import Base

logger = logging.getLogger("seed_demo")

DATE_FMT = "%Y-%m-%d %H:%M:%S"


def _identification(title: str, division: str, status: str, budget: int) -> dict:
    return {
        "procurement_division": "Central Procurement",
        "division": division,
        "financial_year": 2024,
        "manager_email": "manager@agency.org",
        "division_manager_phone": "+251-11-000-0001",
        "contract_manager_phone": "+251-11-000-0002",
        "tender_title": title,
        "category": "Works",
        "quantity": 1,
        "budget": budget,
        "estimated_amount": budget,
        "technical_specification": f"Specification for {title}",
        "timeline_for_delivery": "2024-12-31",
        "status": status,
    }


def _planning(identification, estimated_budget: int) -> dict:
    return {
        "tender_title": identification.tender_title,
        "tender_final_given_title": f"{identification.tender_title} (final)",
        "tender_methods": "Open tender",
        "estimated_budget": estimated_budget,
        "tender_type": "National",
        "framework_type": "Single",
        "planned_tender_document_preparation": "2024-02-01",
        "planned_publication_date": "2024-03-01",
        "planned_bid_opening_date": "2024-04-01",
        "planned_evaluation_date": "2024-04-15",
        "planned_notification_date": "2024-05-01",
        "planned_contract_closure_date": "2024-12-01",
        "planning_status": "Approved",
        "identification_id": identification.id,
    }


def _publication(planning) -> dict:
    return {
        "tender_title": planning.tender_title,
        "initial_procurement_plan_publication": "2024-03-01",
        "quarter_ii_procurement_plan_publication": "2024-04-01",
        "quarter_iii_procurement_plan_publication": "2024-07-01",
        "revision": "Initial",
        "tat_publication": 14,
        "planning_id": planning.id,
    }


def _publication_tender(publication) -> dict:
    return {
        "tender_title": publication.tender_title,
        "date_of_preparation_of_tender_document": "2024-03-05",
        "date_of_submission_of_the_document_committee_for_approval": "2024-03-10",
        "date_of_cbm_approval": "2024-03-15",
        "date_of_tender_publication": "2024-03-20",
        "publication_id": publication.id,
    }


def seed(db) -> dict[str, int]:
    """Create the demo records; returns the number of records created per stage."""
    counts = {key: 0 for key in STAGES}

    def create(key: str, data: dict):
        counts[key] += 1
        return create_record(db, STAGES[key], data)

    create("identification", _identification("Office Furniture", "Administration", "Pending", 40000))
    ident = create("identification", _identification("Laptop Procurement", "IT", "Approved", 120000))
    create("planning", _planning(ident, 115000))

    ident = create("identification", _identification("Water Supply Pumps", "Operations", "Approved", 90000))
    planning = create("planning", _planning(ident, 88000))
    create("publication", _publication(planning))

    ident = create("identification", _identification("Road Repair", "Works", "Approved", 500000))
    planning = create("planning", _planning(ident, 450000))
    publication = create("publication", _publication(planning))
    tender = create("publicationTender", _publication_tender(publication))

    opening = create("openBid", {
        "tender_title": tender.tender_title,
        "bid_opening_date": "2024-04-02",
        "publication_tender_id": tender.id,
    })
    evaluation = create("bidEvaluation", {
        "tender_title": opening.tender_title,
        "bid_evaluation_date": "2024-04-16",
        "bid_validity_starting_date": "2024-04-02",
        "bid_validity_ending_date": "2024-07-02",
        "notification_date": "2024-05-02",
        "contract_negotiation_date": "2024-05-10",
        "contract_amount": 445000,
        "status": "Approved",
        "opening_bid_id": opening.id,
    })
    signing = create("contractSigning", {
        "tender_title": evaluation.tender_title,
        "draft_of_the_contract_date": "2024-05-12",
        "review_and_approval_by_the_legal_date": "2024-05-15",
        "contractor_bidder_approval_date": "2024-05-18",
        "contractor_bidder_names": "Acme Road Works PLC",
        "contractor_bidder_email": "bids@acmeroads.com",
        "contractor_bidder_phone_number": "+251-11-000-0100",
        "performance_guarantee_validity_start_date": "2024-05-20",
        "performance_guarantee_validity_end_date": "2025-05-20",
        "submission_of_performance_guarantee_date": "2024-05-19",
        "approval_of_contract_by_the_moj_date": "2024-05-22",
        "approval_of_the_cbm_date": "2024-05-24",
        "contract_start_date": "2024-06-01",
        "contract_end_date": "2024-11-30",
        "status": "Active",
        "bid_evaluation_id": evaluation.id,
    })
    management = create("contractManagement", {
        "tender_title": signing.tender_title,
        "date_of_purchase_order_issue": "2024-06-01",
        "division_issuing_a_purchase_order": "Works",
        "focal_performance_from_the_program": "Roads Program",
        "procurement_staff": "J. Doe",
        "performance_guarantee_end_period": "2025-05-20",
        "tender_execution_start_date": "2024-06-01",
        "tender_execution_end_date": "2024-11-30",
        "inspection_done_by": "Site Engineer",
        "inspection_list": "Passed",
        "delivery_date": "2024-11-25",
        "acceptance_date": "2024-11-28",
        "warranty_liability_start_date": "2024-12-01",
        "warranty_liability_end_date": "2025-12-01",
        "status": "Completed",
        "contract_signing_id": signing.id,
    })
    create("invoice", {
        "tender_title": management.tender_title,
        "invoice_submission_date": "2024-12-02",
        "invoice_received_by_the_finance_office_date": "2024-12-03",
        "requested_for_payment_date": "2024-12-05",
        "date_of_invoice_payment": "2024-12-15",
        "status": "Completed",
        "contract_management_id": management.id,
    })
    return counts


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Seed demo procurement records (identification through invoice).",
        epilog="Example: python scripts/seed_demo.py --reset",
    )
    p.add_argument("--reset", action="store_true", help="Drop and recreate all tables before seeding")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    setup_logging()
    ts = datetime.now().strftime(DATE_FMT)

    if args.reset:
        Base.metadata.drop_all(bind=engine)
        print(f"{ts} [INFO] Dropped all tables")
    init_db()

    db = SessionLocal()
    try:
        counts = seed(db)
    finally:
        db.close()

    print(f"{ts} [INFO] Seeded {sum(counts.values())} records")
    for key, n in counts.items():
        print(f"  - {STAGES[key].label}: {n}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
