"""Organization service: create/read/update/delete lifecycle."""
import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import Any

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from orgsvc.core.credentials import generate_credentials, new_guid
from orgsvc.core.metrics import KEY_GENERATION_SECONDS, record_organization_operation
from orgsvc.core.structured_logging import log_json
from orgsvc.models.organization import Organization
from orgsvc.schemas.errors import format_validation_errors
from orgsvc.schemas.organization import CreateOrganizationRequest, OrganizationUpdateRequest
from orgsvc.services.org_store import (
    OrganizationExistsError,
    OrganizationNotFoundError,
    OrganizationStore,
    OrganizationStoreError,
    RenameConflictError,
    StoreUnavailableError,
)
from orgsvc.services.projection import CompatibilityProjector

logger = logging.getLogger(__name__)

KEY_UPDATE_GONE_MESSAGE = (
    "Updating the organization's private_key through PUT is no longer supported. "
    "Organization credentials are issued once, at creation."
)

_STORE_ERROR_STATUS = {
    OrganizationNotFoundError: status.HTTP_404_NOT_FOUND,
    OrganizationExistsError: status.HTTP_409_CONFLICT,
    RenameConflictError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _http_error(exc: OrganizationStoreError) -> HTTPException:
    return HTTPException(status_code=_STORE_ERROR_STATUS[type(exc)], detail=exc.message)


class OrganizationResult:
    """Status code, body and optional Location header for a route to return."""

    def __init__(self, status_code: int, body: dict[str, Any] | None, location: str | None = None):
        self.status_code = status_code
        self.body = body
        self.location = location


class OrganizationService:
    """Service for the organizations resource.

    Validation, the key-rotation guard and error translation happen here;
    persistence goes through ``OrganizationStore`` and every response body
    comes from the ``CompatibilityProjector``.
    """

    def __init__(self, db: AsyncSession, projector: CompatibilityProjector):
        """Initialize organization service.

        Args:
            db: Database session
            projector: Response shaper for the configured backend mode
        """
        self.store = OrganizationStore(db)
        self.projector = projector

    async def list(self) -> dict[str, str]:
        """Map every organization name to its URI."""
        try:
            names = await self.store.list()
        except OrganizationStoreError as e:
            raise _http_error(e)
        return self.projector.list_body(names)

    async def get(self, name: str) -> dict[str, Any]:
        """Read shape of the organization called ``name``.

        Raises:
            HTTPException: 404 if organization not found
        """
        try:
            organization = await self.store.get(name)
        except OrganizationStoreError as e:
            raise _http_error(e)
        return self.projector.read_body(organization)

    async def create(self, request: CreateOrganizationRequest) -> OrganizationResult:
        """Create an organization with its validator client and key pair.

        Keys are generated in a worker thread before the store is touched, so
        no transaction is held open while drawing entropy.

        Raises:
            HTTPException: 409 if the name is taken, 503 if the store is down
        """
        started = time.perf_counter()
        credentials = await asyncio.to_thread(generate_credentials, request.name)
        KEY_GENERATION_SECONDS.observe(time.perf_counter() - started)

        organization = Organization(
            name=request.name,
            full_name=request.full_name,
            org_type=request.org_type,
            guid=new_guid(),
            assigned_at=datetime.now(UTC),
            clientname=credentials.clientname,
            public_key=credentials.public_key,
            private_key=credentials.private_key,
        )

        try:
            organization = await self.store.create_if_absent(organization)
        except OrganizationStoreError as e:
            record_organization_operation("create", type(e).__name__)
            log_json(
                logger,
                logging.WARNING,
                "organization_create_failed",
                org=request.name,
                reason=e.message,
            )
            raise _http_error(e)

        record_organization_operation("create", "ok")
        log_json(
            logger,
            logging.INFO,
            "organization_created",
            org=organization.name,
            guid=organization.guid,
            clientname=organization.clientname,
        )

        payload = request.model_dump(exclude_none=True)
        body = self.projector.create_body(organization, credentials.private_key, payload)
        return OrganizationResult(
            status.HTTP_201_CREATED,
            body,
            location=self.projector.uri_for(organization.name),
        )

    async def update(self, name: str, payload: Any) -> OrganizationResult:
        """Apply a PUT body to the organization called ``name``.

        A body carrying ``private_key`` is refused with 410 before anything
        else is looked at, so none of its other fields are applied.

        Raises:
            HTTPException: 410 key update attempt, 400 invalid body,
                404 not found, 409 rename target taken, 503 store down
        """
        if isinstance(payload, dict) and "private_key" in payload:
            record_organization_operation("update", "key_update_forbidden")
            log_json(logger, logging.WARNING, "organization_key_update_rejected", org=name)
            raise HTTPException(status_code=status.HTTP_410_GONE, detail=KEY_UPDATE_GONE_MESSAGE)

        if not isinstance(payload, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Request body must be a JSON object",
            )

        try:
            request = OrganizationUpdateRequest.model_validate(payload)
        except ValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=format_validation_errors(e.errors()),
            )

        try:
            organization = await self.store.replace(
                name,
                name=request.name,
                full_name=request.full_name,
                org_type=request.org_type,
            )
        except OrganizationStoreError as e:
            record_organization_operation("update", type(e).__name__)
            raise _http_error(e)

        renamed = organization.name != name
        record_organization_operation("update", "ok")
        if renamed:
            log_json(
                logger,
                logging.INFO,
                "organization_renamed",
                org=organization.name,
                previous_name=name,
                guid=organization.guid,
            )
        else:
            log_json(logger, logging.INFO, "organization_updated", org=name, fields=sorted(payload))

        status_code, body = self.projector.update_response(organization, payload, renamed)
        location = None
        if renamed and status_code == status.HTTP_201_CREATED:
            location = self.projector.uri_for(organization.name)
        return OrganizationResult(status_code, body, location=location)

    async def delete(self, name: str) -> OrganizationResult:
        """Remove the organization called ``name``.

        Deleting an organization that does not exist is not an error: the
        caller gets 204 with no body.
        """
        try:
            organization = await self.store.delete(name)
        except OrganizationNotFoundError:
            record_organization_operation("delete", "absent")
            return OrganizationResult(status.HTTP_204_NO_CONTENT, None)
        except OrganizationStoreError as e:
            record_organization_operation("delete", type(e).__name__)
            raise _http_error(e)

        record_organization_operation("delete", "ok")
        log_json(logger, logging.INFO, "organization_deleted", org=name, guid=organization.guid)
        return OrganizationResult(status.HTTP_200_OK, self.projector.delete_body(organization))
