"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orgsvc.api.middleware import RequestLoggingMiddleware
from orgsvc.api.routes import metrics, organizations
from orgsvc.core.config import get_settings
from orgsvc.core.database import init_models
from orgsvc.schemas.errors import format_validation_errors

settings = get_settings()
docs_enabled = settings.api_docs_enabled
if docs_enabled is None:
    docs_enabled = settings.environment != "production"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.database_create_tables:
        await init_models()
    yield


app = FastAPI(
    title="Organizations API",
    description="Organization management for the multi-tenant platform",
    version="1.0.0",
    docs_url="/docs" if docs_enabled else None,
    redoc_url="/redoc" if docs_enabled else None,
    openapi_url="/openapi.json" if docs_enabled else None,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": format_validation_errors(exc.errors())},
    )


@app.get("/_status")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(organizations.router, prefix="/organizations", tags=["organizations"])
app.include_router(metrics.router, tags=["metrics"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "orgsvc.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
    )
