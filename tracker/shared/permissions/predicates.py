"""
Role-only permission shortcuts.

Every function here is a pure function of the effective role and reads the
permission matrix only, so results are stable for a stable role and can be
evaluated once per render or request.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from .models import Entity
from .roles import Role, coerce_role, get_role_label
from .services import has_permission

RoleLike = Role | str | None


# Timesheets
def can_add_timesheet(role: RoleLike) -> bool:
    return has_permission(role, Entity.TIMESHEETS, "create")


def can_add_timesheet_for_others(role: RoleLike) -> bool:
    return has_permission(role, Entity.TIMESHEETS, "createForOthers")


def can_approve_timesheets(role: RoleLike) -> bool:
    return has_permission(role, Entity.TIMESHEETS, "approve")


def can_submit_timesheets(role: RoleLike) -> bool:
    return has_permission(role, Entity.TIMESHEETS, "submit")


def can_submit_timesheets_for_anyone(role: RoleLike) -> bool:
    return has_permission(role, Entity.TIMESHEETS, "createForOthers")


# Expenses
def can_add_expense(role: RoleLike) -> bool:
    return has_permission(role, Entity.EXPENSES, "create")


def can_add_expense_for_others(role: RoleLike) -> bool:
    return has_permission(role, Entity.EXPENSES, "createForOthers")


def can_validate_chargeable_expenses(role: RoleLike) -> bool:
    return has_permission(role, Entity.EXPENSES, "validateChargeable")


def can_validate_non_chargeable_expenses(role: RoleLike) -> bool:
    return has_permission(role, Entity.EXPENSES, "validateNonChargeable")


# Milestones
def can_create_milestone(role: RoleLike) -> bool:
    return has_permission(role, Entity.MILESTONES, "create")


def can_edit_milestone(role: RoleLike) -> bool:
    return has_permission(role, Entity.MILESTONES, "edit")


def can_delete_milestone(role: RoleLike) -> bool:
    return has_permission(role, Entity.MILESTONES, "delete")


def can_use_gantt(role: RoleLike) -> bool:
    return has_permission(role, Entity.MILESTONES, "useGantt")


def can_edit_billing(role: RoleLike) -> bool:
    return has_permission(role, Entity.MILESTONES, "editBilling")


# Deliverables
def can_create_deliverable(role: RoleLike) -> bool:
    return has_permission(role, Entity.DELIVERABLES, "create")


def can_edit_deliverable(role: RoleLike) -> bool:
    return has_permission(role, Entity.DELIVERABLES, "edit")


def can_delete_deliverable(role: RoleLike) -> bool:
    return has_permission(role, Entity.DELIVERABLES, "delete")


def can_submit_deliverable(role: RoleLike) -> bool:
    return has_permission(role, Entity.DELIVERABLES, "submit")


def can_review_deliverable(role: RoleLike) -> bool:
    return has_permission(role, Entity.DELIVERABLES, "review")


def can_mark_deliverable_delivered(role: RoleLike) -> bool:
    return has_permission(role, Entity.DELIVERABLES, "markDelivered")


# KPIs
def can_manage_kpis(role: RoleLike) -> bool:
    return has_permission(role, Entity.KPIS, "manage")


def can_add_kpi(role: RoleLike) -> bool:
    return has_permission(role, Entity.KPIS, "create")


def can_edit_kpi(role: RoleLike) -> bool:
    return has_permission(role, Entity.KPIS, "edit")


def can_delete_kpi(role: RoleLike) -> bool:
    return has_permission(role, Entity.KPIS, "delete")


# Quality standards
def can_manage_quality_standards(role: RoleLike) -> bool:
    return has_permission(role, Entity.QUALITY_STANDARDS, "manage")


def can_add_quality_standard(role: RoleLike) -> bool:
    return has_permission(role, Entity.QUALITY_STANDARDS, "create")


def can_edit_quality_standard(role: RoleLike) -> bool:
    return has_permission(role, Entity.QUALITY_STANDARDS, "edit")


def can_delete_quality_standard(role: RoleLike) -> bool:
    return has_permission(role, Entity.QUALITY_STANDARDS, "delete")


# Resources
def can_manage_resources(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "manage")


def can_add_resource(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "create")


def can_edit_resource(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "edit")


def can_delete_resource(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "delete")


def can_see_sell_price(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "seeSellPrice")


def can_see_cost_price(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "seeCostPrice")


def can_see_resource_type(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "seeResourceType")


def can_see_margins(role: RoleLike) -> bool:
    return has_permission(role, Entity.RESOURCES, "seeMargins")


# Partners
def can_view_partners(role: RoleLike) -> bool:
    return has_permission(role, Entity.PARTNERS, "view")


def can_manage_partners(role: RoleLike) -> bool:
    return has_permission(role, Entity.PARTNERS, "manage")


def can_add_partner(role: RoleLike) -> bool:
    return has_permission(role, Entity.PARTNERS, "create")


def can_edit_partner(role: RoleLike) -> bool:
    return has_permission(role, Entity.PARTNERS, "edit")


def can_delete_partner(role: RoleLike) -> bool:
    return has_permission(role, Entity.PARTNERS, "delete")


# Variations
def can_create_variation(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "create")


def can_edit_variation(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "edit")


def can_delete_variation(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "delete")


def can_submit_variation(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "submit")


def can_sign_variation_as_supplier(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "signAsSupplier")


def can_sign_variation_as_customer(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "signAsCustomer")


def can_reject_variation(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "reject")


def can_apply_variation(role: RoleLike) -> bool:
    return has_permission(role, Entity.VARIATIONS, "apply")


# Certificates
def can_view_certificates(role: RoleLike) -> bool:
    return has_permission(role, Entity.CERTIFICATES, "view")


def can_create_certificate(role: RoleLike) -> bool:
    return has_permission(role, Entity.CERTIFICATES, "create")


def can_sign_certificate_as_supplier(role: RoleLike) -> bool:
    return has_permission(role, Entity.CERTIFICATES, "signAsSupplier")


def can_sign_certificate_as_customer(role: RoleLike) -> bool:
    return has_permission(role, Entity.CERTIFICATES, "signAsCustomer")


# Invoices and reports
def can_view_invoices(role: RoleLike) -> bool:
    return has_permission(role, Entity.INVOICES, "view")


def can_generate_customer_invoice(role: RoleLike) -> bool:
    return has_permission(role, Entity.INVOICES, "generateCustomer")


def can_generate_third_party_invoice(role: RoleLike) -> bool:
    return has_permission(role, Entity.INVOICES, "generateThirdParty")


def can_view_margin_reports(role: RoleLike) -> bool:
    return has_permission(role, Entity.INVOICES, "viewMargins")


def can_access_reports(role: RoleLike) -> bool:
    return has_permission(role, Entity.REPORTS, "access")


def can_view_workflow_summary(role: RoleLike) -> bool:
    return has_permission(role, Entity.REPORTS, "viewWorkflowSummary")


# Settings and users
def can_access_settings(role: RoleLike) -> bool:
    return has_permission(role, Entity.SETTINGS, "access")


def can_edit_settings(role: RoleLike) -> bool:
    return has_permission(role, Entity.SETTINGS, "edit")


def can_view_users(role: RoleLike) -> bool:
    return has_permission(role, Entity.USERS, "view")


def can_manage_users(role: RoleLike) -> bool:
    return has_permission(role, Entity.USERS, "manage")


class PermissionSummary(BaseModel):
    """Grouped role-only permissions for a single role."""

    model_config = ConfigDict(frozen=True)

    role: Role
    role_label: str
    timesheets: dict[str, bool]
    expenses: dict[str, bool]
    milestones: dict[str, bool]
    deliverables: dict[str, bool]
    kpis: dict[str, bool]
    quality_standards: dict[str, bool]
    raid: dict[str, bool]
    resources: dict[str, bool]
    partners: dict[str, bool]
    variations: dict[str, bool]
    certificates: dict[str, bool]
    invoicing: dict[str, bool]
    admin: dict[str, bool]


@lru_cache(maxsize=None)
def _summary_for(role: Role) -> PermissionSummary:
    return PermissionSummary(
        role=role,
        role_label=get_role_label(role),
        timesheets={
            "can_add": can_add_timesheet(role),
            "can_add_for_others": can_add_timesheet_for_others(role),
            "can_approve": can_approve_timesheets(role),
        },
        expenses={
            "can_add": can_add_expense(role),
            "can_add_for_others": can_add_expense_for_others(role),
            "can_validate_chargeable": can_validate_chargeable_expenses(role),
            "can_validate_non_chargeable": can_validate_non_chargeable_expenses(role),
        },
        milestones={
            "can_create": can_create_milestone(role),
            "can_edit": can_edit_milestone(role),
            "can_delete": can_delete_milestone(role),
            "can_use_gantt": can_use_gantt(role),
            "can_edit_billing": can_edit_billing(role),
        },
        deliverables={
            "can_create": can_create_deliverable(role),
            "can_edit": can_edit_deliverable(role),
            "can_delete": can_delete_deliverable(role),
            "can_submit": can_submit_deliverable(role),
            "can_review": can_review_deliverable(role),
            "can_mark_delivered": can_mark_deliverable_delivered(role),
        },
        kpis={"can_manage": can_manage_kpis(role)},
        quality_standards={"can_manage": can_manage_quality_standards(role)},
        raid={
            "can_add": has_permission(role, Entity.RAID, "create"),
            "can_manage": has_permission(role, Entity.RAID, "manage"),
            "can_delete": has_permission(role, Entity.RAID, "delete"),
        },
        resources={
            "can_manage": can_manage_resources(role),
            "can_delete": can_delete_resource(role),
            "can_see_cost_price": can_see_cost_price(role),
            "can_see_margins": can_see_margins(role),
            "can_see_resource_type": can_see_resource_type(role),
        },
        partners={
            "can_view": can_view_partners(role),
            "can_manage": can_manage_partners(role),
        },
        variations={
            "can_create": can_create_variation(role),
            "can_sign_as_supplier": can_sign_variation_as_supplier(role),
            "can_sign_as_customer": can_sign_variation_as_customer(role),
            "can_reject": can_reject_variation(role),
        },
        certificates={
            "can_sign_as_supplier": can_sign_certificate_as_supplier(role),
            "can_sign_as_customer": can_sign_certificate_as_customer(role),
        },
        invoicing={
            "can_generate_customer_invoice": can_generate_customer_invoice(role),
            "can_generate_third_party_invoice": can_generate_third_party_invoice(role),
        },
        admin={
            "can_access_settings": can_access_settings(role),
            "can_manage_users": can_manage_users(role),
            "can_view_workflow_summary": can_view_workflow_summary(role),
        },
    )


def get_permission_summary(role: RoleLike) -> PermissionSummary:
    """
    Summarise every role-only permission for a role.

    Unknown or missing roles are summarised as viewer. Summaries are built
    once per role and handed out as copies.
    """
    return _summary_for(coerce_role(role) or Role.VIEWER).model_copy(deep=True)
