"""Datetime coercion shared by request schemas and search criteria."""
from datetime import date, datetime, time, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator


def coerce_datetime_input(value: Any) -> Any:
    """Accept bare dates (YYYY-MM-DD or date objects) as midnight datetimes."""
    if isinstance(value, str):
        s = value.strip()
        if len(s) == 10 and s[4] == "-" and s[7] == "-":
            return f"{s}T00:00:00"
        if s.endswith("Z"):
            return s[:-1] + "+00:00"
        return s
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


def to_naive_utc(value: datetime) -> datetime:
    """Storage convention: timezone-aware values are converted to UTC and stripped."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


StageDatetime = Annotated[
    datetime,
    BeforeValidator(coerce_datetime_input),
    AfterValidator(to_naive_utc),
]
