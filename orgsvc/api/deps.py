"""FastAPI dependencies for principals and the organization service."""
from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from orgsvc.core.config import get_settings
from orgsvc.core.database import get_db
from orgsvc.core.security import Principal, decode_token, principal_from_claims
from orgsvc.services.org_service import OrganizationService
from orgsvc.services.projection import CompatibilityProjector

# HTTP Bearer token security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Principal:
    """Resolve the authenticated caller from its bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    claims = decode_token(credentials.credentials)
    if not claims:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    principal = principal_from_claims(claims)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )
    return principal


def require_superuser() -> Callable:
    """Dependency factory admitting only superuser principals.

    Example:
        @router.post("")
        async def create(principal: Principal = Depends(require_superuser())):
            ...
    """

    async def check_superuser(
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        if not principal.is_superuser:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"'{principal.name}' is not authorized to manage organizations",
            )
        return principal

    return check_superuser


def get_projector(request: Request) -> CompatibilityProjector:
    """Projector for the configured backend mode.

    URIs are rooted at ``SERVER_URL`` when configured, otherwise at the
    URL the request came in on.
    """
    settings = get_settings()
    base_url = settings.server_url or str(request.base_url)
    return CompatibilityProjector(settings.organizations_backend_mode, base_url)


def get_org_service(
    db: AsyncSession = Depends(get_db),
    projector: CompatibilityProjector = Depends(get_projector),
) -> OrganizationService:
    return OrganizationService(db, projector)
