import logging
from typing import Optional

from tracker.core.settings import settings

from .models import (
    ORG_PERMISSION_MATRIX,
    PERMISSION_MATRIX,
    Entity,
    OrgEntity,
)
from .roles import ROLE_LABELS, OrgRole, Role, coerce_org_role, coerce_role

logger = logging.getLogger(__name__)


def _log_unknown_key(message: str) -> None:
    if settings.WARN_ON_UNKNOWN_PERMISSION_KEYS:
        logger.warning(message)
    else:
        logger.debug(message)


def has_permission(
    role: Role | str | None, entity: Entity | str, action: str
) -> bool:
    """
    Check if a project role may perform an action on an entity.

    Args:
        role: The effective project role to check
        entity: Matrix entity, e.g. Entity.EXPENSES or "expenses"
        action: Matrix action, e.g. "create"

    Returns:
        True if the role is listed for the (entity, action) pair. Unknown
        roles, entities and actions all return False.
    """
    entity_permissions = PERMISSION_MATRIX.get(entity)
    if entity_permissions is None:
        _log_unknown_key(f"Permission matrix: unknown entity {entity!r}")
        return False

    allowed_roles = entity_permissions.get(action)
    if allowed_roles is None:
        _log_unknown_key(
            f"Permission matrix: unknown action {action!r} for entity {entity!r}"
        )
        return False

    resolved = coerce_role(role)
    return resolved is not None and resolved in allowed_roles


def has_org_permission(
    org_role: OrgRole | str | None, entity: OrgEntity | str, action: str
) -> bool:
    """
    Check if an organisation role may perform an action.

    Args:
        org_role: The member's organisation role
        entity: Organisation entity, e.g. "orgMembers"
        action: Action name, e.g. "invite"

    Returns:
        True if permitted, False for unknown roles, entities or actions
    """
    entity_permissions = ORG_PERMISSION_MATRIX.get(entity)
    if entity_permissions is None:
        _log_unknown_key(f"Org permission matrix: unknown entity {entity!r}")
        return False

    allowed_roles = entity_permissions.get(action)
    if allowed_roles is None:
        _log_unknown_key(
            f"Org permission matrix: unknown action {action!r} for entity {entity!r}"
        )
        return False

    resolved = coerce_org_role(org_role)
    return resolved is not None and resolved in allowed_roles


def get_permissions_for_role(role: Role | str | None) -> dict[str, dict[str, bool]]:
    """Expand the matrix into entity -> action -> allowed for one role."""
    resolved: Optional[Role] = coerce_role(role)
    return {
        entity: {
            action: resolved is not None and resolved in allowed_roles
            for action, allowed_roles in actions.items()
        }
        for entity, actions in PERMISSION_MATRIX.items()
    }


def get_org_permissions_for_role(
    org_role: OrgRole | str | None,
) -> dict[str, dict[str, bool]]:
    resolved: Optional[OrgRole] = coerce_org_role(org_role)
    return {
        entity: {
            action: resolved is not None and resolved in allowed_roles
            for action, allowed_roles in actions.items()
        }
        for entity, actions in ORG_PERMISSION_MATRIX.items()
    }


def get_roles_for_permission(entity: Entity | str, action: str) -> frozenset[Role]:
    """All project roles allowed to perform an action; empty when unknown."""
    return PERMISSION_MATRIX.get(entity, {}).get(action, frozenset())


def get_org_roles_for_permission(
    entity: OrgEntity | str, action: str
) -> frozenset[OrgRole]:
    return ORG_PERMISSION_MATRIX.get(entity, {}).get(action, frozenset())


def generate_permission_summary() -> str:
    """Render the project matrix as a human-readable markdown summary."""
    lines: list[str] = []
    for entity, actions in PERMISSION_MATRIX.items():
        lines.append(f"\n## {entity[0].upper()}{entity[1:]}")
        for action, roles in actions.items():
            # Stable order follows the Role declaration order
            role_names = ", ".join(ROLE_LABELS[r] for r in Role if r in roles)
            lines.append(f"- {action}: {role_names}")
    return "\n".join(lines)
