"""
auth/gate.py -- The request authentication / authorization gate.

Two cooperating checks, kept free of FastAPI so they can be called and tested
directly:

  authenticate(header, store) -> User
      Verifies the bearer credential and resolves it to the *current*
      principal record. Raises AuthenticationFailure (caller answers 401).

  authorize(user, required_role) -> bool
      A single equality check -- there are exactly two roles and one
      privileged tier. False means 403 at the HTTP layer.

Per request:  Unauthenticated -> Authenticated -> Authorized.
Any failed edge ends the request; nothing is retried within it.

Role source: the store, never the token. The signed role claim is ignored
after signing; re-resolving the principal makes role changes effective on
the next request rather than at the next login.

Layer rule: no imports from api/ or content/.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from auth.models import Role, User
from auth.tokens import decode_access_token

if TYPE_CHECKING:
    from auth.store import UserStore

logger = logging.getLogger("portfolio.auth.gate")

BEARER_PREFIX = "Bearer "

REASON_TOKEN_MISSING = "token missing"
REASON_TOKEN_INVALID = "token invalid"
REASON_PRINCIPAL_NOT_FOUND = "principal not found"


class AuthenticationFailure(Exception):
    """No usable identity: missing, malformed, forged or expired token, or unknown principal."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def extract_bearer_token(header: str | None) -> str:
    """Return the raw token from an Authorization header value.

    Raises AuthenticationFailure when the header is absent, does not use the
    Bearer scheme, or carries an empty token ("Bearer ").
    """
    if not header or not header.startswith(BEARER_PREFIX):
        raise AuthenticationFailure(REASON_TOKEN_MISSING)
    token = header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationFailure(REASON_TOKEN_MISSING)
    return token


def authenticate(header: str | None, store: UserStore) -> User:
    """Resolve an Authorization header value to the current principal."""
    token = extract_bearer_token(header)
    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationFailure(REASON_TOKEN_INVALID)
    user = store.get_by_id(int(payload["sub"]))
    if user is None:
        logger.info("Rejected token for missing principal id=%s", payload["sub"])
        raise AuthenticationFailure(REASON_PRINCIPAL_NOT_FOUND)
    return user


def authorize(user: User, required_role: Role | str) -> bool:
    """Return True iff the principal holds exactly the required role."""
    required = required_role.value if isinstance(required_role, Role) else required_role
    return user.role == required
