#!/usr/bin/env python3
"""
Portfolio API -- out-of-band account management.

There is no registration endpoint: accounts are created here, by whoever
has shell access to the server.

Usage:
  python main.py create-user --email me@example.com --name "Jane Doe"
  python main.py create-user --email guest@example.com --name "Guest" --role user
  python main.py set-role --email guest@example.com --role admin

The password for create-user is read interactively (never from argv, so it
does not end up in shell history).

Environment variables:
  DATABASE_URL  Optional SQLAlchemy URL. Defaults to auth/portfolio_auth.db.
"""

import argparse
import getpass
import sys
from typing import Optional

from sqlalchemy.exc import IntegrityError

from auth.models import Role, User
from auth.store import UserStore
from auth.tokens import hash_password
from core.config import get_settings

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72  # bcrypt limit

_ROLES = [r.value for r in Role]


def create_user(store: UserStore, email: str, name: str, password: str, role: str = Role.admin.value) -> int:
    """Create an account and return its id.

    Raises ValueError for a bad password length or an email already in use.
    """
    if not MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password must be {MIN_PASSWORD_LENGTH}-{MAX_PASSWORD_LENGTH} characters.")
    try:
        return store.create_user(User(email=email, name=name, hashed_password=hash_password(password), role=role))
    except IntegrityError as exc:
        raise ValueError(f"An account for {email} already exists.") from exc


def set_role(store: UserStore, email: str, role: str) -> bool:
    """Change an account's role. Returns False if no account has that email.

    Takes effect on the account's next request; existing tokens need not be reissued.
    """
    user = store.get_by_email(email)
    if user is None:
        return False
    return store.update_user(user.id, role=role)


def _open_store() -> UserStore:
    database_url = get_settings().database_url
    return UserStore(database_url) if database_url else UserStore()


def _prompt_password() -> str:
    password = getpass.getpass("  Password: ")
    if getpass.getpass("  Confirm password: ") != password:
        raise ValueError("Passwords do not match.")
    return password


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="portfolio-admin",
        description="Manage portfolio API accounts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py create-user --email me@example.com --name "Jane Doe"
  python main.py set-role --email guest@example.com --role user
        """,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    create = sub.add_parser("create-user", help="Create an account (password is prompted)")
    create.add_argument("--email", required=True, help="Login email (stored lowercased)")
    create.add_argument("--name", required=True, help="Display name")
    create.add_argument(
        "--role",
        choices=_ROLES,
        default=Role.admin.value,
        help="Account role (default: admin)",
    )

    promote = sub.add_parser("set-role", help="Change the role of an existing account")
    promote.add_argument("--email", required=True, help="Email of the account to change")
    promote.add_argument("--role", choices=_ROLES, required=True, help="New role")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    store = _open_store()
    try:
        if args.command == "create-user":
            try:
                user_id = create_user(store, args.email, args.name, _prompt_password(), args.role)
            except ValueError as exc:
                print(f"  [!] {exc}")
                return 1
            print(f"  Created {args.role} account {args.email.lower()} (id {user_id}).")
            return 0

        if not set_role(store, args.email, args.role):
            print(f"  [!] No account found for {args.email}.")
            return 1
        print(f"  {args.email.lower()} is now {args.role}.")
        return 0
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
