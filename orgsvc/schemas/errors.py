"""Error response schema."""
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response from this service."""

    error: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Organization already exists.", "Organization 'acme' not found"],
    )


def format_validation_errors(errors) -> str:
    """Flatten pydantic error dicts into one ``field: message`` line."""
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = error.get("msg", "Invalid value")
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return "; ".join(parts) or "Invalid request body"
