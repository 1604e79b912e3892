"""All SQLAlchemy models, one module per procurement stage.

Import models from here:
    from app.models import ItemIdentification, Planning, Publication, ...
"""
from app.models.base import Base, STAGE_LINK_ON_DELETE
from app.models.bid_evaluation import BidEvaluation
from app.models.contract_management import ContractManagement
from app.models.contract_signing import ContractSigning
from app.models.identification import ItemIdentification
from app.models.invoice import Invoice
from app.models.opening_bid import OpeningBid
from app.models.planning import Planning
from app.models.publication import Publication
from app.models.publication_tender import PublicationTender

__all__ = [
    "Base",
    "STAGE_LINK_ON_DELETE",
    "ItemIdentification",
    "Planning",
    "Publication",
    "PublicationTender",
    "OpeningBid",
    "BidEvaluation",
    "ContractSigning",
    "ContractManagement",
    "Invoice",
]
