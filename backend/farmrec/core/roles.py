# backend/farmrec/core/roles.py

from typing import List

from farmrec.core.errors import PermissionDeniedError


ADMIN = "admin"
USER = "user"

DEFAULT_ROLES = [
    (ADMIN, "System admin"),
    (USER, "Field encoder"),
]

# Map which roles get which permissions
ROLE_PERMISSION_MAP = {
    ADMIN: ["manage_users", "manage_farmers", "view_reports"],
    USER: ["manage_farmers", "view_reports"],
}

VALID_ROLES = tuple(name for name, _ in DEFAULT_ROLES)


def get_permissions_for_role(role_name: str) -> List[str]:
    """Return list of permission names for a given role."""
    return list(ROLE_PERMISSION_MAP.get(role_name, []))


def has_permission(role_name: str, permission: str) -> bool:
    return permission in get_permissions_for_role(role_name)


def ensure_permission(role_name: str, permission: str) -> None:
    if not has_permission(role_name, permission):
        raise PermissionDeniedError(role_name, permission)
