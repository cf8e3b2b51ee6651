"""
Authentication dependencies.

The identity provider owns sign-up, login and session refresh. All this
service needs is a stable user id (the token's ``sub``) and the email the
provider attached to it.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.exceptions import UnauthorizedError
from core.security import decode_access_token

# Use auto_error=False to handle missing credentials manually and return 401 (not 403)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Get the current authenticated user from the bearer token.

    Raises UnauthorizedError if the token is missing, invalid or has no subject.
    """
    if not credentials:
        raise UnauthorizedError("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid authentication credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid token payload")

    return CurrentUser(
        user_id=str(user_id),
        email=payload.get("email"),
        display_name=payload.get("name"),
    )
