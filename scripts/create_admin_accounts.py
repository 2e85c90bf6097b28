"""
Create per-state admin accounts in the configured store.

Usage:
  - Dry run (default): python scripts/create_admin_accounts.py
  - Apply to configured store: python scripts/create_admin_accounts.py --apply
  - Only some states: python scripts/create_admin_accounts.py --apply --state GA --state FL
  - Print a password hash and exit: python scripts/create_admin_accounts.py --hash urban123

Behavior:
  - One account per state in the city list: username "admin_<state>",
    password "<state>123" (lower-case state code).
  - Existing usernames are skipped, never overwritten.
  - Uses `build_store()`, so STORE_BACKEND decides memory vs Firestore.
    With the memory backend nothing outlives this process; use it to test
    the script only.
"""

import argparse
from typing import Iterable, List, Optional

from app.core.errors import ConflictError
from app.models.city import STATES
from app.services.auth_service import AuthService
from app.services.storage import BaseStore, build_store
from app.utils.security import hash_password


def account_for_state(state: str):
    code = state.lower()
    return f"admin_{code}", f"{code}123"


def create_accounts(store: BaseStore, states: Iterable[str], apply: bool = False) -> List[str]:
    """Returns the usernames created (or that would be created on a dry run)."""
    auth = AuthService(store)
    created = []
    for state in states:
        username, password = account_for_state(state)
        if store.get_user_by_username(username) is not None:
            print(f"User {username} already exists, skipping...")
            continue
        if not apply:
            print(f"Would create: {username}")
            created.append(username)
            continue
        try:
            auth.create_user(username, password)
        except ConflictError:
            print(f"User {username} already exists, skipping...")
            continue
        print(f"Created admin account for {state}:")
        print(f"  Username: {username}")
        print(f"  Password: {password}")
        created.append(username)
    return created


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write accounts to the store instead of dry-run")
    parser.add_argument("--state", action="append", help="State code to create (repeatable); default all")
    parser.add_argument("--hash", metavar="PASSWORD", help="Print the stored hash for PASSWORD and exit")
    args = parser.parse_args(argv)

    if args.hash:
        print(f"Hashed password: {hash_password(args.hash)}")
        return

    states = [s.upper() for s in args.state] if args.state else STATES
    unknown = [s for s in states if s not in STATES]
    if unknown:
        parser.error(f"unknown state(s): {', '.join(unknown)}")

    create_accounts(build_store(), states, apply=args.apply)

    if args.apply:
        print("Admin account creation complete!")
    else:
        print("Dry run complete. Re-run with --apply to write to the store.")


if __name__ == "__main__":
    main()
