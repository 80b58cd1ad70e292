"""Unit tests for the role -> permission table in appsimple.core.permissions."""

import unittest

from appsimple.core.permissions import (
    Permission,
    UserRole,
    grants,
    permissions_for,
)

ADMIN_ONLY = (
    Permission.VIEW_USERS,
    Permission.CREATE_USER,
    Permission.EDIT_USER,
    Permission.DELETE_USER,
)


class TestGrants(unittest.TestCase):
    def test_admin_holds_every_permission(self) -> None:
        for permission in Permission:
            self.assertTrue(grants(UserRole.ADMIN, permission), permission)

    def test_user_holds_only_self_service(self) -> None:
        self.assertTrue(grants(UserRole.USER, Permission.VIEW_PROFILE))
        self.assertTrue(grants(UserRole.USER, Permission.EDIT_PROFILE))
        for permission in ADMIN_ONLY:
            self.assertFalse(grants(UserRole.USER, permission), permission)

    def test_codes_are_stable(self) -> None:
        self.assertEqual(
            [int(p) for p in Permission],
            [10, 11, 20, 21, 22, 23],
        )

    def test_plain_values_are_accepted(self) -> None:
        self.assertTrue(grants("Admin", 23))
        self.assertFalse(grants("User", 23))

    def test_unknown_permission_code_is_denied(self) -> None:
        self.assertFalse(grants(UserRole.ADMIN, 999))
        self.assertFalse(grants(UserRole.ADMIN, True))

    def test_unknown_role_is_denied(self) -> None:
        self.assertFalse(grants("Superuser", Permission.VIEW_PROFILE))
        self.assertEqual(permissions_for("Superuser"), frozenset())


class TestPermissionsFor(unittest.TestCase):
    def test_user_set(self) -> None:
        self.assertEqual(
            permissions_for(UserRole.USER),
            {Permission.VIEW_PROFILE, Permission.EDIT_PROFILE},
        )

    def test_admin_set(self) -> None:
        self.assertEqual(permissions_for(UserRole.ADMIN), frozenset(Permission))


if __name__ == "__main__":
    unittest.main()
