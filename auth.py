"""
Bearer credential extraction.

Decodes the JWT carried in `Authorization: Bearer <token>` and pulls the
caller's user id out of the first populated claim among user._id, _id,
userId and sub.

The signature is NOT verified; only the payload is read.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import jwt

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# Checked in order; dotted paths walk nested claims
USER_ID_CLAIM_PATHS = ("user._id", "_id", "userId", "sub")


class AuthError(ValueError):
    """Raised when the request does not carry a usable bearer credential"""


@dataclass(frozen=True)
class UserContext:
    """Caller identity derived from one request's bearer token"""
    user_id: str
    claims: dict[str, Any] = field(default_factory=dict)


def _claim(claims: dict[str, Any], path: str) -> Any:
    value: Any = claims
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def decode_token(token: str) -> dict[str, Any]:
    """Decode a JWT payload without verifying its signature"""
    try:
        return jwt.decode(
            token,
            options={
                "verify_signature": False,
                "verify_exp": False,
                "verify_aud": False,
            },
        )
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected undecodable bearer token: {e}")
        raise AuthError("Invalid JWT token format")


def extract_user_context(authorization: Optional[str]) -> UserContext:
    """
    Build a UserContext from an Authorization header value.

    Raises:
        AuthError: header missing, not a Bearer header, token not a JWT,
            or no user id claim present
    """
    if not authorization:
        raise AuthError("Authorization header is required")

    if not authorization.startswith(BEARER_PREFIX):
        raise AuthError("Invalid authorization header format. Expected: Bearer <token>")

    claims = decode_token(authorization[len(BEARER_PREFIX):].strip())

    for path in USER_ID_CLAIM_PATHS:
        value = _claim(claims, path)
        if value not in (None, ""):
            return UserContext(user_id=str(value), claims=claims)

    raise AuthError("User ID not found in token")
