"""Request gates: token authentication and role checks.

These dependencies only look at the token. They never consult the user
table, so a user blocked or demoted after login keeps the role their token
was issued with until it expires.
"""
from typing import Annotated, Optional

from fastapi import Depends, Header

from errors import AuthError, ForbiddenError
from models import RoleEnum
from security import Identity, decode_access_token


def require_auth(authorization: Optional[str] = Header(default=None)) -> Identity:
    """Verify the Authorization header and return the caller's identity"""
    token = (authorization or "").strip()
    if token[:7].lower() == "bearer ":
        token = token[7:].strip()
    if not token:
        raise AuthError("Unauthorized - Missing token")
    return decode_access_token(token)


def require_role(*allowed_roles):
    """Build a dependency that admits only identities holding one of ``allowed_roles``"""
    allowed = {RoleEnum(role) for role in allowed_roles}

    def role_gate(identity: Identity = Depends(require_auth)) -> Identity:
        if identity.role not in allowed:
            raise ForbiddenError("Forbidden - Insufficient permissions")
        return identity

    return role_gate


CurrentUser = Annotated[Identity, Depends(require_auth)]
AdminUser = Annotated[Identity, Depends(require_role(RoleEnum.admin))]
