"""
Shared permission engine for project role-based access control.

This package resolves the actor for a project and answers matrix questions
for the effective role. Object-aware guards live with their domains, and
the FastAPI dependencies in .dependencies.

Usage:
    from tracker.shared.permissions import Entity, has_permission
    from tracker.shared.permissions.dependencies import require_permission

    @router.get("/{project_id}/expenses")
    async def list_expenses(
        actor: ActorContext = Depends(
            require_permission(Entity.EXPENSES, "view")
        )
    ):
        pass
"""

from .actor import ActorContext, IdentityContext, resolve_actor
from .models import ORG_PERMISSION_MATRIX, PERMISSION_MATRIX, Entity, OrgEntity
from .predicates import PermissionSummary, get_permission_summary
from .roles import OrgRole, Role
from .services import (
    generate_permission_summary,
    get_permissions_for_role,
    get_roles_for_permission,
    has_org_permission,
    has_permission,
)

__all__ = [
    "ActorContext",
    "Entity",
    "IdentityContext",
    "ORG_PERMISSION_MATRIX",
    "OrgEntity",
    "OrgRole",
    "PERMISSION_MATRIX",
    "PermissionSummary",
    "Role",
    "generate_permission_summary",
    "get_permission_summary",
    "get_permissions_for_role",
    "get_roles_for_permission",
    "has_org_permission",
    "has_permission",
    "resolve_actor",
]
