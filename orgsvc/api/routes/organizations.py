"""Organization API endpoints.

GET    /organizations           list {name: uri}
GET    /organizations/{name}    read
POST   /organizations           create (superuser)
PUT    /organizations/{name}    update / rename (superuser)
DELETE /organizations/{name}    delete (superuser)
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from orgsvc.api.deps import get_current_principal, get_org_service, require_superuser
from orgsvc.core.security import Principal
from orgsvc.schemas.errors import ErrorResponse
from orgsvc.schemas.organization import CreateOrganizationRequest, OrganizationResponse
from orgsvc.services.org_service import OrganizationResult, OrganizationService

router = APIRouter()


def _to_response(result: OrganizationResult) -> Response:
    headers = {"Location": result.location} if result.location else None
    if result.body is None:
        return Response(status_code=result.status_code, headers=headers)
    return JSONResponse(status_code=result.status_code, content=result.body, headers=headers)


@router.get(
    "",
    response_model=dict[str, str],
    summary="List organizations",
    description="Map of every organization name to its URI.",
)
async def list_organizations(
    service: OrganizationService = Depends(get_org_service),
    principal: Principal = Depends(get_current_principal),
) -> dict[str, str]:
    return await service.list()


@router.get(
    "/{name}",
    response_model=OrganizationResponse,
    summary="Get organization",
    responses={404: {"model": ErrorResponse}},
)
async def get_organization(
    name: str,
    service: OrganizationService = Depends(get_org_service),
    principal: Principal = Depends(get_current_principal),
) -> JSONResponse:
    """Get organization by name.

    Raises:
        HTTPException: 404 if organization not found
        HTTPException: 401 if not authenticated
    """
    return JSONResponse(content=await service.get(name))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create organization (superuser only)",
    description=(
        "Creates the organization, its validator client and key pair. "
        "The private key is returned in this response and never again."
    ),
    responses={409: {"model": ErrorResponse}},
)
async def create_organization(
    request: CreateOrganizationRequest,
    service: OrganizationService = Depends(get_org_service),
    principal: Principal = Depends(require_superuser()),
) -> Response:
    """Create organization.

    Raises:
        HTTPException: 409 if organization already exists
        HTTPException: 400 if validation fails
        HTTPException: 403 if caller is not a superuser
    """
    return _to_response(await service.create(request))


@router.put(
    "/{name}",
    summary="Update organization (superuser only)",
    description=(
        "Updates full_name and/or renames the organization. "
        "Bodies containing private_key are rejected with 410."
    ),
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        410: {"model": ErrorResponse},
    },
)
async def update_organization(
    name: str,
    payload: Any = Body(...),
    service: OrganizationService = Depends(get_org_service),
    principal: Principal = Depends(require_superuser()),
) -> Response:
    return _to_response(await service.update(name, payload))


@router.delete(
    "/{name}",
    summary="Delete organization (superuser only)",
    responses={204: {"description": "Organization was already absent"}},
)
async def delete_organization(
    name: str,
    service: OrganizationService = Depends(get_org_service),
    principal: Principal = Depends(require_superuser()),
) -> Response:
    return _to_response(await service.delete(name))
