"""Response shaping for the two organizations backend conventions.

``ruby`` is the minimal, URI-oriented convention. ``erlang`` echoes what the
client submitted and keeps the legacy ``clientname`` field on reads. The
mode is chosen once per deployment; all mode-dependent branching lives here
so the service layer never has to look at it.

Everything in this module is pure: the same record and mode always produce
the same document.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from urllib.parse import quote

from fastapi import status

from orgsvc.core.credentials import format_assigned_at
from orgsvc.models.organization import Organization
from orgsvc.schemas.organization import OrganizationResponse


class BackendMode(str, Enum):
    RUBY = "ruby"
    ERLANG = "erlang"


class CompatibilityProjector:
    """Map Organization records to response bodies for one backend mode."""

    def __init__(self, mode: BackendMode | str, base_url: str):
        self.mode = BackendMode(mode)
        self.base_url = base_url.rstrip("/")

    @property
    def is_ruby(self) -> bool:
        return self.mode is BackendMode.RUBY

    def uri_for(self, name: str) -> str:
        return f"{self.base_url}/organizations/{quote(name, safe='')}"

    def list_body(self, names: list[str]) -> dict[str, str]:
        return {name: self.uri_for(name) for name in names}

    def read_body(self, organization: Organization) -> dict[str, Any]:
        body = OrganizationResponse(
            name=organization.name,
            full_name=organization.full_name,
            guid=organization.guid,
            assigned_at=format_assigned_at(organization.assigned_at),
        ).model_dump()
        if not self.is_ruby:
            body["clientname"] = organization.clientname
        return body

    def create_body(
        self,
        organization: Organization,
        private_key: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Body for a 201 from POST /organizations.

        This is the only response that ever carries the private key.
        """
        body: dict[str, Any] = {} if self.is_ruby else dict(payload)
        body["uri"] = self.uri_for(organization.name)
        body["clientname"] = organization.clientname
        body["private_key"] = private_key
        return body

    def update_response(
        self,
        organization: Organization,
        payload: dict[str, Any],
        renamed: bool,
    ) -> tuple[int, dict[str, Any]]:
        """Status code and body for a successful PUT /organizations/{name}.

        Erlang answers 201 when the organization moved to a new name, since
        the resource now lives at a new location.
        """
        if self.is_ruby:
            return status.HTTP_200_OK, {"uri": self.uri_for(organization.name)}

        status_code = status.HTTP_201_CREATED if renamed else status.HTTP_200_OK
        return status_code, dict(payload)

    def delete_body(self, organization: Organization) -> dict[str, Any]:
        return self.read_body(organization)
