"""
Console client for the AppSimple API. Every invocation logs in, runs one
command and logs out; the session never outlives the process.

  python -m appsimple.cli -u admin -p 'Admin123!' users
  python -m appsimple.cli -u admin -p 'Admin123!' create-user dave dave@example.com 'Secret123!'
  python -m appsimple.cli health
"""

import argparse
import sys

import httpx

from appsimple.client import ApiClient, ApiClientError
from appsimple.core.config import get_client_settings
from appsimple.core.errors import PermissionDeniedError
from appsimple.core.logs import configure_logging
from appsimple.core.permissions import UserRole


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AppSimple console client.")
    parser.add_argument("-u", "--username", help="Login username")
    parser.add_argument("-p", "--password", help="Login password")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("health", help="Query the API health endpoint (no login)")
    sub.add_parser("whoami", help="Show the logged-in profile")
    sub.add_parser("users", help="List users (admin)")

    create = sub.add_parser("create-user", help="Create a user (admin)")
    create.add_argument("new_username")
    create.add_argument("email")
    create.add_argument("new_password")

    role = sub.add_parser("set-role", help="Change a user's role (admin)")
    role.add_argument("uid")
    role.add_argument("role", choices=[r.value for r in UserRole])

    delete = sub.add_parser("delete-user", help="Delete a user (admin)")
    delete.add_argument("uid")
    return parser


def run(args: argparse.Namespace, client: ApiClient) -> int:
    if args.command == "health":
        health = client.get_health()
        if health is None:
            print("API is unreachable or returned an error.", file=sys.stderr)
            return 1
        print(f"status={health.status} environment={health.environment} database={health.database}")
        return 0

    if not args.username or not args.password:
        print("This command requires --username and --password.", file=sys.stderr)
        return 2
    if not client.login(args.username, args.password):
        print("Invalid username or password.", file=sys.stderr)
        return 1

    try:
        if args.command == "whoami":
            me = client.get_me()
            if me is None:
                return 1
            print(f"{me.username} <{me.email}> role={me.role.value} uid={me.uid}")
        elif args.command == "users":
            for u in client.list_users():
                flags = " [system]" if u.is_system else ""
                active = "" if u.is_active else " (inactive)"
                print(f"{u.uid}  {u.username:<20} {u.role.value:<6}{flags}{active}")
        elif args.command == "create-user":
            created = client.create_user(args.new_username, args.email, args.new_password)
            if created is None:
                print(f"Could not create '{args.new_username}'.", file=sys.stderr)
                return 1
            print(f"Created '{created.username}' ({created.uid}).")
        elif args.command == "set-role":
            if not client.set_role(args.uid, UserRole(args.role)):
                print("Role change failed.", file=sys.stderr)
                return 1
        elif args.command == "delete-user":
            if not client.delete_user(args.uid):
                print("Delete failed (not found or protected).", file=sys.stderr)
                return 1
    except PermissionDeniedError as e:
        print(e.message, file=sys.stderr)
        return 1
    except ApiClientError as e:
        print(f"API error: {e.message}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"API unreachable: {e}", file=sys.stderr)
        return 1
    finally:
        client.logout()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_client_settings()
    configure_logging("WARNING")
    with ApiClient.from_settings(settings) as client:
        return run(args, client)


if __name__ == "__main__":
    sys.exit(main())
