"""Role-based access control. No FastAPI."""

from app.domain.models.actor import UserRole
from app.security.exceptions import AuthorizationError

# Permission matrix:
# Role      Create  View  View All  Update Status
# STUDENT   ✓       ✓     ✗         ✗
# ADMIN     ✓       ✓     ✓         ✓

_ACTION_PERMISSIONS: dict[tuple[UserRole, str], bool] = {
    (UserRole.STUDENT, "create"): True,
    (UserRole.STUDENT, "view"): True,
    (UserRole.STUDENT, "view_all"): False,
    (UserRole.STUDENT, "update_status"): False,
    (UserRole.ADMIN, "create"): True,
    (UserRole.ADMIN, "view"): True,
    (UserRole.ADMIN, "view_all"): True,
    (UserRole.ADMIN, "update_status"): True,
}


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def has_permission(self, role: UserRole, action: str) -> bool:
        return _ACTION_PERMISSIONS.get((role, action), False)

    def check_permission(self, role: UserRole, action: str) -> None:
        """Raises AuthorizationError if role does not have permission for action."""
        if not self.has_permission(role, action):
            raise AuthorizationError(
                f"Role {role.value} does not have permission for action '{action}'"
            )
