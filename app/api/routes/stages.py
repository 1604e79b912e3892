"""CRUD endpoints for the nine procurement stages, one router per stage."""
from typing import Any, List

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.crud.registry import STAGE_ORDER, STAGES, StageDefinition
from app.db.crud.stages import (
    create_record,
    delete_record,
    get_record,
    list_records,
    prefill_next,
    search_records,
    update_record,
)
from app.db.session import get_db


def _search_criteria(stage: StageDefinition, request: Request) -> dict[str, Any]:
    """Query parameters as search criteria; repeated or comma separated ids form one OR-set."""
    params = request.query_params
    criteria: dict[str, Any] = {}
    for key in params.keys():
        if key == stage.parent_ids_field:
            criteria[key] = ",".join(params.getlist(key))
        else:
            criteria[key] = params[key]
    return criteria


def build_stage_router(stage: StageDefinition) -> APIRouter:
    """Router with list/search, create, read, update, delete and prefill for one stage."""
    router = APIRouter(prefix=f"/{stage.slug}", tags=[stage.slug])
    label = stage.label
    read_schema = stage.read_schema

    @router.get("", response_model=List[read_schema])
    def list_or_search(request: Request, db: Session = Depends(get_db)):
        """List all records, or search when query parameters are given."""
        criteria = _search_criteria(stage, request)
        if criteria:
            return search_records(db, stage, criteria)
        return list_records(db, stage)

    @router.post("", response_model=read_schema, status_code=201)
    def create(data: stage.create_schema, db: Session = Depends(get_db)):
        return create_record(db, stage, data)

    if stage.parent_field:

        @router.get("/prefill")
        def prefill(parent_id: int = Query(..., description=f"{stage.parent.label} id"), db: Session = Depends(get_db)):
            """Defaults for a new record taken from its parent."""
            return prefill_next(db, stage, parent_id)

    @router.get("/{record_id}", response_model=read_schema)
    def get_by_id(record_id: int, db: Session = Depends(get_db)):
        record = get_record(db, stage, record_id)
        if record is None:
            raise NotFoundError(f"{label} not found")
        return record

    @router.put("/{record_id}", response_model=read_schema)
    @router.patch("/{record_id}", response_model=read_schema)
    def update(record_id: int, data: stage.update_schema, db: Session = Depends(get_db)):
        """Partial update: only supplied fields are written."""
        record = update_record(db, stage, record_id, data)
        if record is None:
            raise NotFoundError(f"{label} not found")
        return record

    @router.delete("/{record_id}", status_code=204)
    def delete(record_id: int, db: Session = Depends(get_db)) -> Response:
        if not delete_record(db, stage, record_id):
            raise NotFoundError(f"{label} not found")
        return Response(status_code=204)

    return router


routers: list[APIRouter] = [build_stage_router(STAGES[key]) for key in STAGE_ORDER]
