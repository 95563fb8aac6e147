"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Credentials arrive only as an `Authorization: Bearer <token>` header. The
actual checks live in auth/gate.py; this module maps their outcomes to HTTP:

  get_current_user() -- 401 on any AuthenticationFailure.
  require_admin()    -- 401 as above, then 403 if authorize(user, admin) fails.

401 and 403 are never conflated: 401 means "no proven identity", 403 means
"identity proven, privilege insufficient".

Layer rule: may import from fastapi (this module is part of the dependency
injection system). No imports from api/ or content/.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.gate import AuthenticationFailure, authenticate, authorize
from auth.models import Role, User


def get_current_user(request: Request) -> User:
    """Require authentication. Raises HTTP 401 if the request is not authenticated.

    Use as a FastAPI dependency:
        @router.get("/protected")
        async def route(user: User = Depends(get_current_user)): ...
    """
    user_store = request.app.state.user_store
    try:
        return authenticate(request.headers.get("Authorization"), user_store)
    except AuthenticationFailure as exc:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": "Authentication required.", "detail": exc.reason},
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def require_admin(request: Request) -> User:
    """Require admin role. Raises HTTP 401 if unauthenticated, HTTP 403 if not admin.

    Use as a FastAPI dependency:
        @router.post("/admin-only")
        async def route(user: User = Depends(require_admin)): ...
    """
    user = get_current_user(request)
    if not authorize(user, Role.admin):
        raise HTTPException(
            status_code=403,
            detail={"code": "forbidden", "message": "Admin access required."},
        )
    return user
