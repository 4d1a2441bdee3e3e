"""Organization model."""
from sqlalchemy import CheckConstraint, Column, DateTime, String, Text

from orgsvc.models.base import BaseModel


class Organization(BaseModel):
    """Organization entity: the top-level tenancy container.

    ``name`` is the lookup key and is unique. ``guid``, ``assigned_at`` and
    the key pair are written once at creation and never touched again.
    ``clientname`` always tracks the current name.
    """

    __tablename__ = "organizations"

    name = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(1023), nullable=False)
    # Accepted for compatibility with older clients; never validated or read back.
    org_type = Column(String(255), nullable=True)

    guid = Column(String(32), nullable=False, unique=True)
    assigned_at = Column(DateTime(timezone=True), nullable=False)
    clientname = Column(String(255), nullable=False)

    public_key = Column(Text, nullable=False)
    private_key = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint("LENGTH(name) > 0", name="organization_name_not_empty"),
        CheckConstraint("LENGTH(guid) = 32", name="organization_guid_length"),
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name}, guid={self.guid})>"
