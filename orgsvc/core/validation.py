"""Organization name grammar.

The authoritative grammar belongs to the platform's validation
collaborator. The default here only guarantees what the service itself
depends on: a non-empty token that is safe to place in a URL path segment
without escaping.
"""

import re
from collections.abc import Callable

MAX_NAME_LENGTH = 255

# RFC 3986 "unreserved" characters.
_URL_SAFE_TOKEN = re.compile(r"^[A-Za-z0-9._~-]+$")


class OrganizationNameError(ValueError):
    """Raised when an organization name is rejected."""

    pass


def default_name_validator(name: str) -> None:
    if not name:
        raise OrganizationNameError("Organization name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise OrganizationNameError(
            f"Organization name must be at most {MAX_NAME_LENGTH} characters"
        )
    if name in {".", ".."} or not _URL_SAFE_TOKEN.match(name):
        raise OrganizationNameError(f"Invalid organization name '{name}'")


_name_validator: Callable[[str], None] = default_name_validator


def set_name_validator(validator: Callable[[str], None] | None) -> None:
    """Install the grammar supplied by the validation collaborator.

    Passing None restores the default.
    """
    global _name_validator
    _name_validator = validator or default_name_validator


def validate_org_name(name: str) -> str:
    """Run the active name validator and return ``name`` unchanged."""
    _name_validator(name)
    return name
