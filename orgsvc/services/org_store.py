"""Organization store: name-keyed persistence for Organization records.

Uniqueness and rename atomicity are delegated to the database. A create is a
single INSERT guarded by the unique index on ``name``; a rename is a single
UPDATE of one row, so no reader can observe both names (or neither)
resolving for the same organization.
"""
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from orgsvc.core.credentials import validator_clientname
from orgsvc.models.organization import Organization


class OrganizationStoreError(Exception):
    """Base class for store failures."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name
        self.message = message


class OrganizationNotFoundError(OrganizationStoreError):
    def __init__(self, name: str):
        super().__init__(name, f"Organization '{name}' not found")


class OrganizationExistsError(OrganizationStoreError):
    def __init__(self, name: str):
        super().__init__(name, "Organization already exists.")


class RenameConflictError(OrganizationStoreError):
    def __init__(self, name: str, new_name: str):
        super().__init__(
            name,
            f"Cannot rename organization '{name}' to '{new_name}': name already in use",
        )
        self.new_name = new_name


class StoreUnavailableError(OrganizationStoreError):
    def __init__(self, name: str, cause: Exception):
        super().__init__(name, "Organization store is unavailable, try again later")
        self.cause = cause


_UNAVAILABLE = (OperationalError, InterfaceError)


class OrganizationStore:
    """Atomic create/get/list/replace/delete keyed by organization name.

    Every mutating call commits its own transaction. On failure the session
    is rolled back before the store error is raised, so callers never see a
    half-applied write.
    """

    def __init__(self, db: AsyncSession):
        """Initialize organization store.

        Args:
            db: Database session
        """
        self.db = db

    async def create_if_absent(self, organization: Organization) -> Organization:
        """Insert ``organization`` unless its name is already taken.

        Raises:
            OrganizationExistsError: name (or guid) already present
            StoreUnavailableError: database unreachable
        """
        name = organization.name
        self.db.add(organization)
        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise OrganizationExistsError(name)
        except _UNAVAILABLE as e:
            await self.db.rollback()
            raise StoreUnavailableError(name, e) from e

        await self.db.refresh(organization)
        return organization

    async def get(self, name: str) -> Organization:
        """Fetch the live organization called ``name``.

        Raises:
            OrganizationNotFoundError: no such organization
        """
        try:
            result = await self.db.execute(
                select(Organization).where(Organization.name == name)
            )
        except _UNAVAILABLE as e:
            raise StoreUnavailableError(name, e) from e

        organization = result.scalar_one_or_none()
        if organization is None:
            raise OrganizationNotFoundError(name)
        return organization

    async def list(self) -> list[str]:
        """Names of all live organizations, ordered by name."""
        try:
            result = await self.db.execute(
                select(Organization.name).order_by(Organization.name)
            )
        except _UNAVAILABLE as e:
            raise StoreUnavailableError("*", e) from e
        return list(result.scalars().all())

    async def replace(
        self,
        old_name: str,
        *,
        name: str | None = None,
        full_name: str | None = None,
        org_type: str | None = None,
    ) -> Organization:
        """Apply mutable field changes to the organization called ``old_name``.

        When ``name`` differs from ``old_name`` the organization is renamed
        and its validator ``clientname`` re-derived, in the same statement.
        Write-once fields (guid, assigned_at, keys) are never touched.

        Raises:
            OrganizationNotFoundError: ``old_name`` does not resolve
            RenameConflictError: ``name`` belongs to another organization
            StoreUnavailableError: database unreachable
        """
        organization = await self.get(old_name)

        if full_name is not None:
            organization.full_name = full_name
        if org_type is not None:
            organization.org_type = org_type
        if name is not None and name != organization.name:
            organization.name = name
            organization.clientname = validator_clientname(name)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise RenameConflictError(old_name, name)
        except _UNAVAILABLE as e:
            await self.db.rollback()
            raise StoreUnavailableError(old_name, e) from e

        await self.db.refresh(organization)
        return organization

    async def delete(self, name: str) -> Organization:
        """Remove the organization called ``name`` and return the removed record.

        Raises:
            OrganizationNotFoundError: no such organization
            StoreUnavailableError: database unreachable
        """
        organization = await self.get(name)
        try:
            await self.db.delete(organization)
            await self.db.flush()
            await self.db.commit()
        except _UNAVAILABLE as e:
            await self.db.rollback()
            raise StoreUnavailableError(name, e) from e
        return organization
