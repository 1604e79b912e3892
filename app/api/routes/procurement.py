"""Aggregate procurement endpoint: GET /procurement?action=..."""
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.db.session import get_db
from app.services.procurement_service import ProcurementService

router = APIRouter(prefix="/procurement", tags=["procurement"])


def _require(name: str, value: Any) -> Any:
    if value is None or value == "":
        raise ValidationError(
            f"{name} is required",
            errors=[{"loc": ["query", name], "msg": "Field required", "type": "missing"}],
        )
    return value


def _complete_process(service: ProcurementService, params: dict[str, Any]) -> Any:
    return service.resolve_chain(_require("identification_id", params["identification_id"])).to_read()


def _timeline(service: ProcurementService, params: dict[str, Any]) -> Any:
    return service.get_timeline(_require("identification_id", params["identification_id"]))


def _progress(service: ProcurementService, params: dict[str, Any]) -> Any:
    return service.get_progress(_require("identification_id", params["identification_id"]))


def _candidates(service: ProcurementService, params: dict[str, Any]) -> Any:
    return service.list_chain_candidates(_require("identification_id", params["identification_id"]))


ACTIONS: dict[str, Callable[[ProcurementService, dict[str, Any]], Any]] = {
    "complete-process": _complete_process,
    "summaries": lambda service, params: service.build_all_summaries(),
    "by-stage": lambda service, params: service.filter_by_stage(_require("stage", params["stage"])),
    "by-division": lambda service, params: service.filter_by_division(_require("division", params["division"])),
    "by-status": lambda service, params: service.filter_by_status(_require("status", params["status"])),
    "timeline": _timeline,
    "statistics": lambda service, params: service.compute_statistics(),
    "progress": _progress,
    "candidates": _candidates,
}


@router.get("")
def procurement_action(
    action: Optional[str] = Query(None, description=f"One of: {', '.join(ACTIONS)}"),
    identification_id: Optional[int] = Query(None),
    stage: Optional[str] = Query(None),
    division: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> Any:
    """Cross-stage views selected by `action`."""
    handler = ACTIONS.get(_require("action", action))
    if handler is None:
        raise ValidationError(
            f"Invalid action: {action!r}",
            errors=[{"loc": ["query", "action"], "msg": f"must be one of {list(ACTIONS)}", "type": "enum"}],
        )
    params = {
        "identification_id": identification_id,
        "stage": stage,
        "division": division,
        "status": status,
    }
    return jsonable_encoder(handler(ProcurementService(db), params))
