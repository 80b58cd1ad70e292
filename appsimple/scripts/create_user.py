"""
Create a user without going through the API. Run from project root:
  python -m appsimple.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m appsimple.scripts.create_user dave dave@example.com your-secure-password User
"""
import argparse
import sys

from appsimple.api.deps import get_bootstrap, get_password_hasher
from appsimple.core.database import get_session_factory
from appsimple.core.errors import DuplicateEntityError
from appsimple.core.permissions import UserRole
from appsimple.services.user_service import UserService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an AppSimple user.")
    parser.add_argument("username", help="Username (3-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "role", nargs="?", default=UserRole.USER.value, choices=[r.value for r in UserRole]
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if len(username) < 3 or len(username) > 50:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < 8 or len(args.password) > 128:
        print("Password must be 8-128 characters.", file=sys.stderr)
        return 1

    # Schema and protected admin first; an operator-made Admin must not stand in for it.
    get_bootstrap().bootstrap()
    db = get_session_factory()()
    try:
        user = UserService(db, get_password_hasher()).create(
            username, args.email, args.password, role=UserRole(args.role)
        )
    except DuplicateEntityError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
