"""
Project and organisation roles plus the named role groups used by the
permission matrix and the approval-authority rules.
"""

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Project-scoped roles. Closed set; variation is expressed by role groups."""

    VIEWER = "viewer"
    CONTRIBUTOR = "contributor"
    CUSTOMER_PM = "customer_pm"
    CUSTOMER_FINANCE = "customer_finance"
    SUPPLIER_PM = "supplier_pm"
    SUPPLIER_FINANCE = "supplier_finance"
    ADMIN = "admin"


class OrgRole(str, Enum):
    """Organisation-scoped roles."""

    ORG_OWNER = "org_owner"
    ORG_ADMIN = "org_admin"
    ORG_MEMBER = "org_member"


ALL_ROLES: frozenset[Role] = frozenset(Role)
MANAGERS: frozenset[Role] = frozenset({Role.ADMIN, Role.SUPPLIER_PM, Role.CUSTOMER_PM})
ADMIN_ONLY: frozenset[Role] = frozenset({Role.ADMIN})
WORKERS: frozenset[Role] = frozenset(
    {
        Role.ADMIN,
        Role.SUPPLIER_PM,
        Role.SUPPLIER_FINANCE,
        Role.CUSTOMER_FINANCE,
        Role.CONTRIBUTOR,
    }
)

# Side-of-house classification used for approval authority
SUPPLIER_SIDE: frozenset[Role] = frozenset(
    {Role.ADMIN, Role.SUPPLIER_PM, Role.SUPPLIER_FINANCE}
)
CUSTOMER_SIDE: frozenset[Role] = frozenset({Role.CUSTOMER_PM, Role.CUSTOMER_FINANCE})

# Project roles that may act on any record regardless of ownership
ELEVATED_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.SUPPLIER_PM})

ALL_ORG_ROLES: frozenset[OrgRole] = frozenset(OrgRole)
ORG_ADMINS: frozenset[OrgRole] = frozenset({OrgRole.ORG_OWNER, OrgRole.ORG_ADMIN})
ORG_OWNER_ONLY: frozenset[OrgRole] = frozenset({OrgRole.ORG_OWNER})


ROLE_LABELS: dict[Role, str] = {
    Role.ADMIN: "Admin",
    Role.SUPPLIER_PM: "Supplier PM",
    Role.SUPPLIER_FINANCE: "Supplier Finance",
    Role.CUSTOMER_PM: "Customer PM",
    Role.CUSTOMER_FINANCE: "Customer Finance",
    Role.CONTRIBUTOR: "Contributor",
    Role.VIEWER: "Viewer",
}

ORG_ROLE_LABELS: dict[OrgRole, str] = {
    OrgRole.ORG_OWNER: "Owner",
    OrgRole.ORG_ADMIN: "Admin",
    OrgRole.ORG_MEMBER: "Member",
}


def coerce_role(value: Role | str | None) -> Optional[Role]:
    """
    Convert a raw role value into a Role.

    Args:
        value: Role member, role string or None

    Returns:
        The matching Role, or None when the value is missing or unknown
    """
    if value is None or isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        logger.warning(f"Unknown project role: {value!r}")
        return None


def coerce_org_role(value: OrgRole | str | None) -> Optional[OrgRole]:
    if value is None or isinstance(value, OrgRole):
        return value
    try:
        return OrgRole(value)
    except ValueError:
        logger.warning(f"Unknown organisation role: {value!r}")
        return None


def is_one_of(role: Role | str | None, roles: frozenset[Role]) -> bool:
    """Check whether a role belongs to a role group."""
    resolved = coerce_role(role)
    return resolved is not None and resolved in roles


def is_supplier_side(role: Role | str | None) -> bool:
    return is_one_of(role, SUPPLIER_SIDE)


def is_customer_side(role: Role | str | None) -> bool:
    return is_one_of(role, CUSTOMER_SIDE)


def is_elevated_project_role(role: Role | str | None) -> bool:
    """Project-level elevation (admin, supplier PM); distinct from org-level admin."""
    return is_one_of(role, ELEVATED_ROLES)


def is_org_admin_role(org_role: OrgRole | str | None) -> bool:
    resolved = coerce_org_role(org_role)
    return resolved is not None and resolved in ORG_ADMINS


def is_org_owner_role(org_role: OrgRole | str | None) -> bool:
    return coerce_org_role(org_role) == OrgRole.ORG_OWNER


def get_role_label(role: Role | str | None) -> str:
    resolved = coerce_role(role)
    return ROLE_LABELS[resolved or Role.VIEWER]
