"""Application services."""
from app.services.procurement_service import ProcurementChain, ProcurementService

__all__ = ["ProcurementChain", "ProcurementService"]
