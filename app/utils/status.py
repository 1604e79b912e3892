"""Status vocabulary for free-text status columns.

Status values are stored exactly as clients send them. ProcurementStatus classifies
a raw value into a closed set; anything unrecognised maps to UNKNOWN so legacy
free-text values stay readable without being rewritten.
"""
import enum
from typing import Optional


class ProcurementStatus(str, enum.Enum):
    """Canonical status kinds."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    DRAFT = "Draft"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    PLANNED = "Planned"
    UNKNOWN = "Unknown"

    @classmethod
    def classify(cls, raw: Optional[str]) -> "ProcurementStatus":
        """Case-insensitive match on the raw value; empty or unmatched -> UNKNOWN."""
        if not raw or not raw.strip():
            return cls.UNKNOWN
        return _BY_LOWER.get(raw.strip().lower(), cls.UNKNOWN)


_BY_LOWER = {s.value.lower(): s for s in ProcurementStatus}

# Bucket key used by statistics for missing division / status values
UNKNOWN_BUCKET = ProcurementStatus.UNKNOWN.value
