"""Tests for the console client (appsimple.cli) and the operator scripts."""

import argparse
import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock, patch

from appsimple import cli
from appsimple.core.errors import PermissionDeniedError
from appsimple.core.permissions import Permission, UserRole
from appsimple.models import User
from appsimple.scripts import create_user, reset_db
from tests.support import fast_hasher, make_bootstrap, memory_database


def _args(command: str, **kwargs: object) -> argparse.Namespace:
    return argparse.Namespace(command=command, username="alice", password="pw", **kwargs)


class TestRun(unittest.TestCase):
    def test_requires_credentials(self) -> None:
        client = MagicMock()
        args = argparse.Namespace(command="users", username=None, password=None)
        with redirect_stderr(io.StringIO()):
            self.assertEqual(cli.run(args, client), 2)
        client.login.assert_not_called()

    def test_failed_login(self) -> None:
        client = MagicMock()
        client.login.return_value = False
        with redirect_stderr(io.StringIO()):
            self.assertEqual(cli.run(_args("users"), client), 1)

    def test_permission_denied_is_reported_and_session_closed(self) -> None:
        client = MagicMock()
        client.login.return_value = True
        client.list_users.side_effect = PermissionDeniedError(Permission.VIEW_USERS)
        err = io.StringIO()
        with redirect_stderr(err):
            self.assertEqual(cli.run(_args("users"), client), 1)
        self.assertIn("VIEW_USERS", err.getvalue())
        client.logout.assert_called_once()

    def test_delete_user(self) -> None:
        client = MagicMock()
        client.login.return_value = True
        client.delete_user.return_value = True
        self.assertEqual(cli.run(_args("delete-user", uid="uid-bob"), client), 0)
        client.delete_user.assert_called_once_with("uid-bob")

    def test_health_needs_no_login(self) -> None:
        client = MagicMock()
        client.get_health.return_value = MagicMock(status="ok", environment="dev", database="connected")
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(cli.run(argparse.Namespace(command="health"), client), 0)
        self.assertIn("status=ok", out.getvalue())
        client.login.assert_not_called()


class TestResetScript(unittest.TestCase):
    def test_refuses_without_confirmation(self) -> None:
        with patch.object(reset_db, "get_bootstrap") as get_bootstrap, redirect_stderr(io.StringIO()):
            self.assertEqual(reset_db.main([]), 2)
        get_bootstrap.assert_not_called()

    def test_resets_with_confirmation(self) -> None:
        with patch.object(reset_db, "get_bootstrap") as get_bootstrap, redirect_stdout(io.StringIO()):
            get_bootstrap.return_value.reset_and_reseed.return_value = 4
            self.assertEqual(reset_db.main(["--yes"]), 0)
        get_bootstrap.return_value.reset_and_reseed.assert_called_once()


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.engine, self.factory = memory_database()
        self.hasher = fast_hasher()
        bootstrap = make_bootstrap(self.engine, self.factory, self.hasher)
        self.patches = [
            patch.object(create_user, "get_bootstrap", return_value=bootstrap),
            patch.object(create_user, "get_session_factory", return_value=self.factory),
            patch.object(create_user, "get_password_hasher", return_value=self.hasher),
        ]
        for p in self.patches:
            p.start()
            self.addCleanup(p.stop)

    def _system_admins(self) -> int:
        with self.factory() as db:
            return db.query(User).filter(User.role == UserRole.ADMIN, User.is_system.is_(True)).count()

    def test_admin_on_fresh_store_keeps_protected_admin(self) -> None:
        with redirect_stdout(io.StringIO()):
            self.assertEqual(create_user.main(["dave", "dave@appsimple.dev", "Secret123!", "Admin"]), 0)
        self.assertEqual(self._system_admins(), 1)
        make_bootstrap(self.engine, self.factory, self.hasher).bootstrap()
        self.assertEqual(self._system_admins(), 1)
        with self.factory() as db:
            dave = db.query(User).filter(User.username == "dave").one()
            self.assertEqual(dave.role, UserRole.ADMIN)
            self.assertFalse(dave.is_system)

    def test_duplicate_is_reported(self) -> None:
        with redirect_stdout(io.StringIO()):
            create_user.main(["dave", "dave@appsimple.dev", "Secret123!"])
        with redirect_stderr(io.StringIO()):
            self.assertEqual(create_user.main(["DAVE", "x@appsimple.dev", "Secret123!"]), 1)


if __name__ == "__main__":
    unittest.main()
