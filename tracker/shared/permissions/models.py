from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .roles import (
    ADMIN_ONLY,
    ALL_ORG_ROLES,
    ALL_ROLES,
    CUSTOMER_SIDE,
    ELEVATED_ROLES,
    MANAGERS,
    ORG_ADMINS,
    ORG_OWNER_ONLY,
    SUPPLIER_SIDE,
    WORKERS,
    OrgRole,
    Role,
)


class Entity(str, Enum):
    """
    Entities governed by the project permission matrix.

    Actions are entity specific and kept as plain strings in the matrix,
    e.g. ("expenses", "validateChargeable").
    """

    TIMESHEETS = "timesheets"
    EXPENSES = "expenses"
    MILESTONES = "milestones"
    DELIVERABLES = "deliverables"
    KPIS = "kpis"
    QUALITY_STANDARDS = "qualityStandards"
    RAID = "raid"
    RESOURCES = "resources"
    PARTNERS = "partners"
    VARIATIONS = "variations"
    CERTIFICATES = "certificates"
    INVOICES = "invoices"
    SETTINGS = "settings"
    USERS = "users"
    REPORTS = "reports"


class OrgEntity(str, Enum):
    """Entities governed by the organisation permission matrix."""

    ORGANISATION = "organisation"
    ORG_MEMBERS = "orgMembers"
    ORG_PROJECTS = "orgProjects"
    ORG_SETTINGS = "orgSettings"


AUTHENTICATED = ALL_ROLES
CUSTOMER_SIDE_AND_ADMIN: frozenset[Role] = CUSTOMER_SIDE | ADMIN_ONLY
DELIVERY_TEAM: frozenset[Role] = frozenset(
    {Role.ADMIN, Role.SUPPLIER_PM, Role.CONTRIBUTOR}
)

PermissionMatrix = Mapping[str, Mapping[str, frozenset[Role]]]
OrgPermissionMatrix = Mapping[str, Mapping[str, frozenset[OrgRole]]]


def _freeze(matrix: dict[str, dict[str, frozenset]]) -> Mapping:
    return MappingProxyType(
        {entity: MappingProxyType(dict(actions)) for entity, actions in matrix.items()}
    )


PERMISSION_MATRIX: PermissionMatrix = _freeze(
    {
        Entity.TIMESHEETS.value: {
            "view": AUTHENTICATED,
            "create": WORKERS,
            "createForOthers": SUPPLIER_SIDE,
            "edit": WORKERS,
            "delete": SUPPLIER_SIDE,
            "submit": WORKERS,
            "approve": CUSTOMER_SIDE_AND_ADMIN,
        },
        Entity.EXPENSES.value: {
            "view": AUTHENTICATED,
            "create": WORKERS,
            "createForOthers": SUPPLIER_SIDE,
            "edit": WORKERS,
            "delete": SUPPLIER_SIDE,
            "submit": WORKERS,
            "validateChargeable": CUSTOMER_SIDE_AND_ADMIN,
            "validateNonChargeable": SUPPLIER_SIDE,
        },
        Entity.MILESTONES.value: {
            "view": AUTHENTICATED,
            "create": SUPPLIER_SIDE,
            "edit": SUPPLIER_SIDE,
            "delete": ADMIN_ONLY,
            "useGantt": SUPPLIER_SIDE,
            "editBilling": SUPPLIER_SIDE,
        },
        Entity.DELIVERABLES.value: {
            "view": AUTHENTICATED,
            "create": DELIVERY_TEAM,
            "edit": DELIVERY_TEAM,
            "delete": SUPPLIER_SIDE,
            "submit": DELIVERY_TEAM,
            "review": CUSTOMER_SIDE_AND_ADMIN,
            "markDelivered": CUSTOMER_SIDE_AND_ADMIN,
        },
        Entity.KPIS.value: {
            "view": AUTHENTICATED,
            "create": SUPPLIER_SIDE,
            "edit": SUPPLIER_SIDE,
            "delete": SUPPLIER_SIDE,
            "manage": SUPPLIER_SIDE,
        },
        Entity.QUALITY_STANDARDS.value: {
            "view": AUTHENTICATED,
            "create": SUPPLIER_SIDE,
            "edit": SUPPLIER_SIDE,
            "delete": SUPPLIER_SIDE,
            "manage": SUPPLIER_SIDE,
        },
        Entity.RAID.value: {
            "view": AUTHENTICATED,
            "create": MANAGERS,
            "edit": MANAGERS,
            "delete": SUPPLIER_SIDE,
            "manage": MANAGERS,
            "updateStatus": MANAGERS,
            "assignOwner": MANAGERS,
        },
        Entity.RESOURCES.value: {
            "view": AUTHENTICATED,
            "create": SUPPLIER_SIDE,
            "edit": SUPPLIER_SIDE,
            "delete": ADMIN_ONLY,
            "manage": SUPPLIER_SIDE,
            "seeSellPrice": AUTHENTICATED,
            "seeCostPrice": ELEVATED_ROLES,
            "seeResourceType": ELEVATED_ROLES,
            "seeMargins": ELEVATED_ROLES,
        },
        Entity.PARTNERS.value: {
            "view": SUPPLIER_SIDE,
            "create": SUPPLIER_SIDE,
            "edit": SUPPLIER_SIDE,
            "delete": SUPPLIER_SIDE,
            "manage": SUPPLIER_SIDE,
        },
        Entity.VARIATIONS.value: {
            "view": AUTHENTICATED,
            "create": SUPPLIER_SIDE,
            "edit": SUPPLIER_SIDE,
            "delete": SUPPLIER_SIDE,
            "submit": SUPPLIER_SIDE,
            "signAsSupplier": SUPPLIER_SIDE,
            "signAsCustomer": CUSTOMER_SIDE_AND_ADMIN,
            "reject": MANAGERS,
            "apply": SUPPLIER_SIDE,
        },
        Entity.CERTIFICATES.value: {
            "view": MANAGERS,
            "create": MANAGERS,
            "signAsSupplier": SUPPLIER_SIDE,
            "signAsCustomer": CUSTOMER_SIDE_AND_ADMIN,
        },
        Entity.INVOICES.value: {
            "view": MANAGERS,
            "generateCustomer": MANAGERS,
            "generateThirdParty": SUPPLIER_SIDE,
            "viewMargins": SUPPLIER_SIDE,
        },
        Entity.SETTINGS.value: {
            "access": SUPPLIER_SIDE,
            "edit": SUPPLIER_SIDE,
        },
        Entity.USERS.value: {
            "view": SUPPLIER_SIDE,
            "manage": ADMIN_ONLY,
        },
        Entity.REPORTS.value: {
            "access": MANAGERS,
            "viewWorkflowSummary": MANAGERS,
        },
    }
)


ORG_PERMISSION_MATRIX: OrgPermissionMatrix = _freeze(
    {
        OrgEntity.ORGANISATION.value: {
            "view": ALL_ORG_ROLES,
            "edit": ORG_ADMINS,
            "delete": ORG_OWNER_ONLY,
            "manageBilling": ORG_OWNER_ONLY,
            "viewBilling": ORG_ADMINS,
        },
        OrgEntity.ORG_MEMBERS.value: {
            "view": ALL_ORG_ROLES,
            "invite": ORG_ADMINS,
            "remove": ORG_ADMINS,
            "changeRole": ORG_ADMINS,
            "promoteToOwner": ORG_OWNER_ONLY,
        },
        OrgEntity.ORG_PROJECTS.value: {
            "view": ALL_ORG_ROLES,
            "create": ORG_ADMINS,
            "delete": ORG_ADMINS,
            "assignMembers": ORG_ADMINS,
        },
        OrgEntity.ORG_SETTINGS.value: {
            "view": ORG_ADMINS,
            "edit": ORG_ADMINS,
            "manageFeatures": ORG_OWNER_ONLY,
            "manageBranding": ORG_ADMINS,
        },
    }
)
