"""Unit tests for appsimple.session.UserSession."""

import unittest

from appsimple.core.permissions import Permission, UserRole
from appsimple.schemas.auth import CurrentUser
from appsimple.session import UserSession


def _user(role: UserRole) -> CurrentUser:
    return CurrentUser(uid="uid-1", username="alice", role=role)


class TestUserSession(unittest.TestCase):
    def test_starts_logged_out(self) -> None:
        session = UserSession()
        self.assertFalse(session.is_logged_in)
        self.assertIsNone(session.role)
        self.assertFalse(session.has_permission(Permission.VIEW_PROFILE))
        self.assertEqual(session.auth_header(), {})

    def test_login_populates_user_and_token(self) -> None:
        session = UserSession()
        session.login(_user(UserRole.USER), "tok")
        self.assertTrue(session.is_logged_in)
        self.assertEqual(session.token, "tok")
        self.assertEqual(session.role, UserRole.USER)
        self.assertEqual(session.auth_header(), {"Authorization": "Bearer tok"})

    def test_permissions_follow_the_role_table(self) -> None:
        session = UserSession()
        session.login(_user(UserRole.USER), "tok")
        self.assertTrue(session.has_permission(Permission.EDIT_PROFILE))
        self.assertFalse(session.has_permission(Permission.DELETE_USER))

        session.login(_user(UserRole.ADMIN), "tok2")
        self.assertTrue(session.has_permission(Permission.DELETE_USER))
        self.assertFalse(session.has_permission(999))

    def test_logout_clears_everything(self) -> None:
        session = UserSession()
        session.login(_user(UserRole.ADMIN), "tok")
        session.logout()
        self.assertIsNone(session.current_user)
        self.assertIsNone(session.token)
        self.assertFalse(session.has_permission(Permission.VIEW_PROFILE))

    def test_login_requires_user_and_token(self) -> None:
        session = UserSession()
        with self.assertRaises(ValueError):
            session.login(None, "tok")
        with self.assertRaises(ValueError):
            session.login(_user(UserRole.USER), "")
        self.assertFalse(session.is_logged_in)


if __name__ == "__main__":
    unittest.main()
