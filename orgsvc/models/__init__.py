"""SQLAlchemy models."""

from orgsvc.models.base import Base, BaseModel
from orgsvc.models.organization import Organization

__all__ = [
    "Base",
    "BaseModel",
    "Organization",
]
