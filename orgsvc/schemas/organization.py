"""Pydantic schemas for organization endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from orgsvc.core.validation import validate_org_name


class CreateOrganizationRequest(BaseModel):
    """Request schema for POST /organizations.

    ``org_type`` is accepted and stored but never validated. Unknown keys
    are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Organization short name, used in URLs")
    full_name: str = Field(..., min_length=1, max_length=1023, description="Display name")
    org_type: str | None = Field(None, max_length=255, description="Legacy classification")

    @field_validator("name")
    @classmethod
    def name_is_valid(cls, v: str) -> str:
        return validate_org_name(v)

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Organization full_name cannot be empty")
        return v


class OrganizationUpdateRequest(BaseModel):
    """Validated view of a PUT /organizations/{name} body.

    All fields are optional. The raw payload is kept by the caller for the
    erlang-style echo.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    full_name: str | None = Field(None, min_length=1, max_length=1023)
    org_type: str | None = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def name_is_valid(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_org_name(v)


class OrganizationResponse(BaseModel):
    """Canonical read shape of an organization."""

    name: str
    full_name: str
    guid: str = Field(..., min_length=32, max_length=32)
    assigned_at: str = Field(..., description="YYYY-MM-DD HH:MM:SS +HHMM")
