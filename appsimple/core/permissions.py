"""Roles, permissions and the single role -> permission decision table.

Every consumer (API dependencies, client sessions, scripts) must call
`grants`; nothing else in the code base decides what a role may do.
"""

import enum
from collections.abc import Mapping
from types import MappingProxyType


class UserRole(str, enum.Enum):
    """Roles a user account can hold. The value is the wire/storage form."""

    USER = "User"
    ADMIN = "Admin"


class Permission(enum.IntEnum):
    """Discrete capabilities. Codes are stable identities, not an ordering."""

    VIEW_PROFILE = 10
    EDIT_PROFILE = 11
    VIEW_USERS = 20
    CREATE_USER = 21
    EDIT_USER = 22
    DELETE_USER = 23


_SELF_SERVICE = frozenset({Permission.VIEW_PROFILE, Permission.EDIT_PROFILE})

ROLE_PERMISSIONS: Mapping[UserRole, frozenset[Permission]] = MappingProxyType(
    {
        UserRole.USER: _SELF_SERVICE,
        UserRole.ADMIN: frozenset(Permission),
    }
)


def _coerce_role(role: UserRole | str) -> UserRole | None:
    if isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except ValueError:
        return None


def _coerce_permission(permission: Permission | int) -> Permission | None:
    if isinstance(permission, Permission):
        return permission
    # bool is an int subclass; True must not alias a permission code
    if isinstance(permission, bool) or not isinstance(permission, int):
        return None
    try:
        return Permission(permission)
    except ValueError:
        return None


def grants(role: UserRole | str, permission: Permission | int) -> bool:
    """
    Return True if `role` is granted `permission`.

    Total and side-effect free: unknown roles and permission codes outside
    the enumeration are denied.
    """
    resolved_role = _coerce_role(role)
    resolved_permission = _coerce_permission(permission)
    if resolved_role is None or resolved_permission is None:
        return False
    return resolved_permission in ROLE_PERMISSIONS.get(resolved_role, frozenset())


def permissions_for(role: UserRole | str) -> frozenset[Permission]:
    """Return every permission granted to `role` (empty for unknown roles)."""
    resolved_role = _coerce_role(role)
    if resolved_role is None:
        return frozenset()
    return ROLE_PERMISSIONS.get(resolved_role, frozenset())
