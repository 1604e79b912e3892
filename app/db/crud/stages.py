"""CRUD operations for procurement stage records.

Every function takes a StageDefinition (see registry.py) so one implementation serves all
nine stages. Input is validated at this boundary; persistence failures are rolled back,
logged and re-raised as InternalError.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Mapping, Optional, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import InternalError, NotFoundError, ValidationError
from app.db.crud.registry import DATE_FROM, DATE_TO, StageDefinition
from app.models.base import Base
from app.utils.dates import StageDatetime

logger = logging.getLogger(__name__)

StageInput = Union[Mapping[str, Any], BaseModel]

_INT = TypeAdapter(int)
_DATETIME = TypeAdapter(StageDatetime)


@contextmanager
def persistence_guard(db: Session, stage: StageDefinition, operation: str) -> Iterator[None]:
    """Roll back and surface unexpected database errors as InternalError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error during %s of %s", operation, stage.key)
        raise InternalError(f"Failed to {operation} {stage.label.lower()}") from exc


def _validate(schema: type[BaseModel], data: StageInput, stage: StageDefinition) -> BaseModel:
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc, f"Invalid {stage.label.lower()} data") from exc


def _check_parent_exists(db: Session, stage: StageDefinition, values: Mapping[str, Any]) -> None:
    """Reject a parent link that points at a missing record before the FK constraint does."""
    if not stage.parent_field:
        return
    parent_id = values.get(stage.parent_field)
    if parent_id is None:
        return
    if get_record(db, stage.parent, parent_id) is None:
        raise ValidationError(
            f"{stage.parent.label} {parent_id} does not exist",
            errors=[{"loc": [stage.parent_field], "msg": "referenced record not found", "type": "foreign_key"}],
        )


def create_record(db: Session, stage: StageDefinition, data: StageInput) -> Base:
    """Validate against the stage's create schema and persist a new record."""
    payload = _validate(stage.create_schema, data, stage).model_dump()
    _check_parent_exists(db, stage, payload)

    record = stage.model(**payload)
    with persistence_guard(db, stage, "create"):
        db.add(record)
        db.commit()
        db.refresh(record)
    logger.info("Created %s id=%s", stage.key, record.id)
    return record


def get_record(db: Session, stage: StageDefinition, record_id: int) -> Optional[Base]:
    """Get a record by ID; None when absent."""
    model = stage.model
    with persistence_guard(db, stage, "fetch"):
        return db.query(model).filter(model.id == record_id).first()


def list_records(db: Session, stage: StageDefinition) -> list[Base]:
    """All records of a stage, oldest first."""
    model = stage.model
    with persistence_guard(db, stage, "list"):
        return db.query(model).order_by(model.created_at.asc(), model.id.asc()).all()


def update_record(
    db: Session, stage: StageDefinition, record_id: int, data: StageInput
) -> Optional[Base]:
    """Write only the supplied fields. None when the record does not exist."""
    update_data = _validate(stage.update_schema, data, stage).model_dump(exclude_unset=True)

    record = get_record(db, stage, record_id)
    if record is None:
        return None
    _check_parent_exists(db, stage, update_data)

    for key, value in update_data.items():
        setattr(record, key, value)

    with persistence_guard(db, stage, "update"):
        db.commit()
        db.refresh(record)
    logger.info("Updated %s id=%s fields=%s", stage.key, record_id, sorted(update_data))
    return record


def delete_record(db: Session, stage: StageDefinition, record_id: int) -> bool:
    """Delete by ID. Downstream links follow the table's ON DELETE policy."""
    record = get_record(db, stage, record_id)
    if record is None:
        return False

    with persistence_guard(db, stage, "delete"):
        db.delete(record)
        db.commit()
    logger.info("Deleted %s id=%s", stage.key, record_id)
    return True


def _coerce(stage: StageDefinition, field: str, value: Any) -> Any:
    python_type = stage.model.__table__.c[field].type.python_type
    if python_type is datetime:
        return _DATETIME.validate_python(value)
    if python_type is int:
        return _INT.validate_python(value)
    return str(value)


def _coerce_ids(value: Any) -> list[int]:
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    elif not isinstance(value, (list, tuple, set)):
        value = [value]
    return [_INT.validate_python(v.strip() if isinstance(v, str) else v) for v in value]


def search_records(db: Session, stage: StageDefinition, criteria: Mapping[str, Any]) -> list[Base]:
    """
    Search a stage with:
    - exact matches on the stage's exact fields, id and parent link;
    - <parent link>s: OR-set of parent ids (IN clause);
    - case-insensitive substring matches on the stage's substring fields;
    - date_from / date_to: inclusive bounds on the stage's primary date window.
    Values may be strings (query parameters); they are coerced to the column type.
    """
    model = stage.model
    unknown = sorted(set(criteria) - stage.search_keys)
    if unknown:
        raise ValidationError(
            f"Unsupported search criteria for {stage.label.lower()}: {', '.join(unknown)}",
            errors=[{"loc": [key], "msg": "unsupported search field", "type": "extra_forbidden"} for key in unknown],
        )

    query = db.query(model)
    errors: list[dict[str, Any]] = []

    for key, value in criteria.items():
        if value is None:
            continue
        try:
            if key == stage.parent_ids_field:
                ids = _coerce_ids(value)
                if ids:
                    query = query.filter(getattr(model, stage.parent_field).in_(ids))
            elif key == DATE_FROM:
                query = query.filter(getattr(model, stage.date_from_field) >= _DATETIME.validate_python(value))
            elif key == DATE_TO:
                query = query.filter(getattr(model, stage.date_to_field) <= _DATETIME.validate_python(value))
            elif key in stage.substring_fields:
                query = query.filter(getattr(model, key).ilike(f"%{value}%"))
            else:
                query = query.filter(getattr(model, key) == _coerce(stage, key, value))
        except PydanticValidationError as exc:
            for err in exc.errors():
                errors.append({"loc": [key], "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))})

    if errors:
        raise ValidationError(f"Invalid search criteria for {stage.label.lower()}", errors=errors)

    with persistence_guard(db, stage, "search"):
        return query.order_by(model.created_at.asc(), model.id.asc()).all()


def prefill_next(db: Session, stage: StageDefinition, parent_id: int) -> dict[str, Any]:
    """
    Default values for a new record of `stage`, taken from the parent record:
    the tender title and the parent link.
    """
    if not stage.parent_field:
        raise ValidationError(
            f"{stage.label} has no preceding stage to prefill from",
            errors=[{"loc": ["stage"], "msg": "stage has no parent", "type": "value_error"}],
        )
    parent = get_record(db, stage.parent, parent_id)
    if parent is None:
        raise NotFoundError(f"{stage.parent.label} not found")
    return {
        "tender_title": parent.tender_title,
        stage.parent_field: parent.id,
    }
