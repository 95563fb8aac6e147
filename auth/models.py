"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in content/models.py -- dataclasses own domain shape; stores and routes do the
work.

Layer rule: no imports from api/ or content/.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Closed set of principal roles. "admin" is the only privileged tier."""

    admin = "admin"
    user = "user"


@dataclass
class User:
    """An authenticated identity (principal).

    Accounts are created out of band with the main.py CLI -- there is no
    self-registration endpoint. role defaults to admin because every account
    in this deployment is created by the site owner for themselves; pass
    role=Role.user explicitly for guest authors.

    email is stored lowercased and is the login identifier.
    """

    email: str
    name: str
    hashed_password: str
    role: str = Role.admin.value
    id: int | None = None
    created_at: str | None = None
