"""Tests for the generic stage CRUD service: validation, persistence, delete policy, search, prefill."""
from datetime import datetime

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.db.crud.registry import STAGES, get_stage
from app.db.crud.stages import (
    create_record,
    delete_record,
    get_record,
    list_records,
    prefill_next,
    search_records,
    update_record,
)
from app.models import BidEvaluation, ContractSigning, Publication
from app.models.base import utcnow
from conftest import identification_payload, planning_payload

IDENTIFICATION = STAGES["identification"]
PLANNING = STAGES["planning"]
PUBLICATION = STAGES["publication"]


# ── Create / get ─────────────────────────────────────────────────────

def test_create_and_get_round_trip(db):
    before = utcnow()
    created = create_record(db, IDENTIFICATION, identification_payload())

    fetched = get_record(db, IDENTIFICATION, created.id)
    assert fetched is not None
    assert fetched.tender_title == "Road Repair"
    assert fetched.division == "Works"
    assert fetched.financial_year == 2024
    assert fetched.timeline_for_delivery == datetime(2024, 12, 31)
    assert fetched.created_at is not None and fetched.created_at >= before
    assert fetched.updated_at is not None and fetched.updated_at >= before


def test_get_missing_returns_none(db):
    assert get_record(db, IDENTIFICATION, 999) is None


def test_create_accepts_schema_instance(db):
    data = IDENTIFICATION.create_schema(**identification_payload(tender_title="Desks"))
    created = create_record(db, IDENTIFICATION, data)
    assert created.tender_title == "Desks"


def test_create_normalizes_aware_datetimes_to_utc(db):
    created = create_record(
        db, IDENTIFICATION, identification_payload(timeline_for_delivery="2024-06-01T12:00:00+02:00")
    )
    assert created.timeline_for_delivery == datetime(2024, 6, 1, 10, 0, 0)


def test_create_missing_required_field_is_itemized(db):
    payload = identification_payload()
    del payload["division"]
    with pytest.raises(ValidationError) as exc_info:
        create_record(db, IDENTIFICATION, payload)
    locs = [e["loc"] for e in exc_info.value.errors]
    assert ["division"] in locs


def test_create_rejects_non_positive_financial_year(db):
    with pytest.raises(ValidationError) as exc_info:
        create_record(db, IDENTIFICATION, identification_payload(financial_year=0))
    assert exc_info.value.errors[0]["loc"] == ["financial_year"]


def test_create_rejects_malformed_email(db):
    with pytest.raises(ValidationError):
        create_record(db, IDENTIFICATION, identification_payload(manager_email="not-an-email"))


def test_create_rejects_link_to_missing_parent(db):
    with pytest.raises(ValidationError) as exc_info:
        create_record(db, PLANNING, planning_payload(identification_id=999))
    assert exc_info.value.errors[0]["type"] == "foreign_key"
    assert list_records(db, PLANNING) == []


def test_list_records_oldest_first(db, make_identification):
    first = make_identification(tender_title="A")
    second = make_identification(tender_title="B")
    assert [r.id for r in list_records(db, IDENTIFICATION)] == [first.id, second.id]


# ── Update ───────────────────────────────────────────────────────────

def test_update_writes_only_supplied_fields(db, make_identification):
    record = make_identification()
    created_at = record.created_at

    updated = update_record(db, IDENTIFICATION, record.id, {"status": "Rejected"})

    assert updated.status == "Rejected"
    assert updated.tender_title == "Road Repair"
    assert updated.budget == 500000
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


def test_update_missing_returns_none(db):
    assert update_record(db, IDENTIFICATION, 42, {"status": "Approved"}) is None


def test_update_validates_fields(db, make_identification):
    record = make_identification()
    with pytest.raises(ValidationError):
        update_record(db, IDENTIFICATION, record.id, {"financial_year": -1})


def test_update_rejects_null_for_required_field(db, make_identification):
    record = make_identification()
    with pytest.raises(ValidationError) as exc_info:
        update_record(db, IDENTIFICATION, record.id, {"tender_title": None})
    assert exc_info.value.errors[0]["loc"] == ["tender_title"]

    with pytest.raises(ValidationError) as exc_info:
        update_record(db, IDENTIFICATION, record.id, {"tender_title": None, "status": None, "financial_year": None})
    locs = [e["loc"] for e in exc_info.value.errors]
    assert sorted(locs) == [["financial_year"], ["status"], ["tender_title"]]

    unchanged = get_record(db, IDENTIFICATION, record.id)
    assert unchanged.tender_title == "Road Repair"
    assert unchanged.status is not None


def test_update_rejects_null_estimated_budget(db, make_planning):
    planning = make_planning(estimated_budget=450000)
    with pytest.raises(ValidationError) as exc_info:
        update_record(db, PLANNING, planning.id, {"estimated_budget": None})
    assert exc_info.value.errors[0]["loc"] == ["estimated_budget"]
    assert get_record(db, PLANNING, planning.id).estimated_budget == 450000


def test_update_allows_null_for_optional_fields(db, make_identification, make_planning, make_publication_tender):
    identification = make_identification(market_survey_report="Survey", procurement_division="Central")
    updated = update_record(
        db, IDENTIFICATION, identification.id, {"market_survey_report": None, "procurement_division": None}
    )
    assert updated.market_survey_report is None
    assert updated.procurement_division is None

    planning = make_planning(identification)
    assert update_record(db, PLANNING, planning.id, {"identification_id": None}).identification_id is None

    tender = make_publication_tender(tender_title="Bridge")
    assert update_record(db, STAGES["publicationTender"], tender.id, {"tender_title": None}).tender_title is None


def test_update_rejects_link_to_missing_parent(db, make_planning):
    planning = make_planning()
    with pytest.raises(ValidationError):
        update_record(db, PLANNING, planning.id, {"identification_id": 12345})


# ── Delete and link policy ───────────────────────────────────────────

def test_delete_missing_returns_false(db):
    assert delete_record(db, IDENTIFICATION, 7) is False


def test_delete_planning_keeps_identification_and_nulls_publication_link(
    db, make_identification, make_planning, make_publication
):
    identification = make_identification()
    planning = make_planning(identification)
    publication_id = make_publication(planning).id
    identification_id, planning_id = identification.id, planning.id

    assert delete_record(db, PLANNING, planning_id) is True

    assert get_record(db, IDENTIFICATION, identification_id) is not None
    assert get_record(db, PLANNING, planning_id) is None
    remaining = db.get(Publication, publication_id)
    assert remaining is not None
    assert remaining.planning_id is None


def test_delete_bid_evaluation_cascades_to_contract_signing(db):
    evaluation = create_record(
        db,
        STAGES["bidEvaluation"],
        {
            "tender_title": "Road Repair",
            "bid_evaluation_date": "2024-04-16",
            "bid_validity_starting_date": "2024-04-02",
            "bid_validity_ending_date": "2024-07-02",
            "notification_date": "2024-05-02",
            "contract_negotiation_date": "2024-05-10",
            "contract_amount": 445000,
            "status": "Approved",
        },
    )
    signing = create_record(
        db,
        STAGES["contractSigning"],
        {
            "tender_title": "Road Repair",
            "draft_of_the_contract_date": "2024-05-12",
            "review_and_approval_by_the_legal_date": "2024-05-15",
            "contractor_bidder_approval_date": "2024-05-18",
            "contractor_bidder_names": "Acme Road Works",
            "contractor_bidder_email": "bids@acmeroads.com",
            "contractor_bidder_phone_number": "0100",
            "performance_guarantee_validity_start_date": "2024-05-20",
            "performance_guarantee_validity_end_date": "2025-05-20",
            "submission_of_performance_guarantee_date": "2024-05-19",
            "approval_of_contract_by_the_moj_date": "2024-05-22",
            "approval_of_the_cbm_date": "2024-05-24",
            "contract_start_date": "2024-06-01",
            "contract_end_date": "2024-11-30",
            "status": "Active",
            "bid_evaluation_id": evaluation.id,
        },
    )
    signing_id, evaluation_id = signing.id, evaluation.id

    assert delete_record(db, STAGES["bidEvaluation"], evaluation_id) is True

    assert db.get(BidEvaluation, evaluation_id) is None
    assert db.get(ContractSigning, signing_id) is None


# ── Search ───────────────────────────────────────────────────────────

def test_search_tender_title_is_case_insensitive_substring(db, make_identification):
    road = make_identification(tender_title="Road Repair")
    make_identification(tender_title="Office Furniture")

    results = search_records(db, IDENTIFICATION, {"tender_title": "road"})
    assert [r.id for r in results] == [road.id]


def test_search_exact_fields_coerce_query_strings(db, make_identification):
    a = make_identification(financial_year=2023)
    make_identification(financial_year=2024)

    results = search_records(db, IDENTIFICATION, {"financial_year": "2023"})
    assert [r.id for r in results] == [a.id]


def test_search_status_is_exact(db, make_identification):
    make_identification(status="Approved")
    pending = make_identification(status="Pending")

    results = search_records(db, IDENTIFICATION, {"status": "Pending"})
    assert [r.id for r in results] == [pending.id]
    assert search_records(db, IDENTIFICATION, {"status": "Pend"}) == []


def test_search_parent_ids_is_or_set(db, make_identification, make_planning):
    a, b, c = make_identification(), make_identification(), make_identification()
    pa, pb = make_planning(a), make_planning(b)
    make_planning(c)

    results = search_records(db, PLANNING, {"identification_ids": f"{a.id},{b.id}"})
    assert [r.id for r in results] == [pa.id, pb.id]

    results = search_records(db, PLANNING, {"identification_ids": [b.id]})
    assert [r.id for r in results] == [pb.id]


def test_search_date_window_is_inclusive(db, make_planning):
    march = make_planning(planned_publication_date="2024-03-01")
    make_planning(planned_publication_date="2024-05-01")

    results = search_records(
        db, PLANNING, {"date_from": "2024-03-01", "date_to": "2024-03-31"}
    )
    assert [r.id for r in results] == [march.id]


def test_search_unknown_field_rejected(db):
    with pytest.raises(ValidationError) as exc_info:
        search_records(db, IDENTIFICATION, {"colour": "red"})
    assert exc_info.value.errors[0]["loc"] == ["colour"]


def test_search_uncoercible_value_rejected(db):
    with pytest.raises(ValidationError) as exc_info:
        search_records(db, IDENTIFICATION, {"financial_year": "next year"})
    assert exc_info.value.errors[0]["loc"] == ["financial_year"]


def test_search_without_criteria_lists_all(db, make_identification):
    make_identification()
    make_identification()
    assert len(search_records(db, IDENTIFICATION, {})) == 2


# ── Prefill ──────────────────────────────────────────────────────────

def test_prefill_next_copies_title_and_links_parent(db, make_identification):
    identification = make_identification(tender_title="Water Pumps")
    assert prefill_next(db, PLANNING, identification.id) == {
        "tender_title": "Water Pumps",
        "identification_id": identification.id,
    }


def test_prefill_next_missing_parent(db):
    with pytest.raises(NotFoundError):
        prefill_next(db, PUBLICATION, 404)


def test_prefill_next_root_stage_has_no_parent(db):
    with pytest.raises(ValidationError):
        prefill_next(db, IDENTIFICATION, 1)


# ── Registry ─────────────────────────────────────────────────────────

def test_registry_links_every_stage_to_its_predecessor():
    assert get_stage("publicationTender").parent.key == "publication"
    assert get_stage("invoice").parent_ids_field == "contract_management_ids"
    assert get_stage("identification").parent is None


def test_get_stage_unknown_key():
    with pytest.raises(ValidationError):
        get_stage("tendering")
