"""CRUD operations."""
from app.db.crud.registry import STAGE_ORDER, STAGES, StageDefinition, get_stage
from app.db.crud.stages import (
    create_record,
    delete_record,
    get_record,
    list_records,
    prefill_next,
    search_records,
    update_record,
)

__all__ = [
    "STAGES",
    "STAGE_ORDER",
    "StageDefinition",
    "get_stage",
    "create_record",
    "get_record",
    "list_records",
    "update_record",
    "delete_record",
    "search_records",
    "prefill_next",
]
