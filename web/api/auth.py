"""Admin authorization check."""

import secrets

import settings
from web.api.errors import UnauthorizedError

BEARER = "Bearer "


def verify_admin(authorization: str | None) -> bool:
    """Check an Authorization header against the configured admin token."""
    expected = settings.ADMIN_TOKEN
    if not expected or not authorization or not authorization.startswith(BEARER):
        return False
    return secrets.compare_digest(authorization[len(BEARER) :], expected)


def require_admin(authorization: str | None) -> None:
    """Raise UnauthorizedError unless the header carries the admin token."""
    if not verify_admin(authorization):
        raise UnauthorizedError()
