"""
Object-aware expense guards.

Combine the permission matrix with the expense's status, ownership and
chargeable flag. Approval routing is delegated to the workflow settings
resolver; an expense with a missing or unrecognised status permits nothing.
"""

from typing import Optional

from tracker.domains.project_settings.service import (
    SettingsLike,
    can_approve,
    can_complete_without_approval,
    is_approval_required,
    is_feature_enabled,
)
from tracker.domains.project_settings.types import Feature, GovernedEntity
from tracker.shared.permissions.actor import ActorContext
from tracker.shared.permissions.models import Entity
from tracker.shared.permissions.predicates import can_add_expense
from tracker.shared.permissions.roles import Role
from tracker.shared.permissions.services import has_permission
from tracker.shared.status import coerce_status

from .types import (
    COMPLETE_STATUSES,
    EDITABLE_STATUSES,
    SUBMITTABLE_STATUSES,
    ExpenseActions,
    ExpenseRecord,
    ExpenseStatus,
)


def _status(expense: ExpenseRecord) -> Optional[ExpenseStatus]:
    return coerce_status(ExpenseStatus, expense.status)


def is_owner(expense: ExpenseRecord, actor: ActorContext) -> bool:
    return actor.owns(
        created_by=expense.created_by,
        user_id=expense.user_id,
        resource_id=expense.resource_id,
    )


def is_editable(expense: ExpenseRecord) -> bool:
    return _status(expense) in EDITABLE_STATUSES


def is_complete(expense: ExpenseRecord) -> bool:
    return _status(expense) in COMPLETE_STATUSES


def can_edit(expense: ExpenseRecord, actor: ActorContext) -> bool:
    """
    Check if the actor may edit this expense.

    Admin and supplier PM may edit in any known status, which lets them
    correct approved or paid records. Owners may edit only while the expense
    is Draft or Rejected.
    """
    status = _status(expense)
    if status is None:
        return False

    role = actor.effective_role
    if not has_permission(role, Entity.EXPENSES, "edit"):
        return False
    if actor.is_elevated_project_role:
        return True
    return status in EDITABLE_STATUSES and is_owner(expense, actor)


def can_delete(expense: ExpenseRecord, actor: ActorContext) -> bool:
    """
    Check if the actor may delete this expense.

    Requires the expenses.delete permission. Admin may delete any expense.
    Otherwise only Draft expenses can be deleted, by the supplier PM or by
    an owner who may add expenses.
    """
    status = _status(expense)
    if status is None:
        return False

    role = actor.effective_role
    if not has_permission(role, Entity.EXPENSES, "delete"):
        return False
    if role == Role.ADMIN:
        return True
    if status != ExpenseStatus.DRAFT:
        return False
    if role == Role.SUPPLIER_PM:
        return True
    return is_owner(expense, actor) and can_add_expense(role)


def can_submit(expense: ExpenseRecord, actor: ActorContext) -> bool:
    """
    Check if the actor may submit this expense for validation.

    Ownership covers the creator, the user the expense is recorded against
    and the user whose linked resource it is booked to.
    """
    if _status(expense) not in SUBMITTABLE_STATUSES:
        return False
    if actor.is_elevated_project_role:
        return True
    return is_owner(expense, actor) and can_add_expense(actor.effective_role)


def can_validate(
    expense: ExpenseRecord, actor: ActorContext, settings: SettingsLike
) -> bool:
    """
    Check if the actor may approve or reject this expense.

    Args:
        expense: The expense being validated
        actor: Resolved actor for the expense's project
        settings: The project's workflow settings

    Returns:
        True only while the expense is Submitted and the project's expense
        approval authority admits the actor's role. Chargeable expenses are
        routed to the customer side under the conditional mode.
    """
    if _status(expense) != ExpenseStatus.SUBMITTED:
        return False

    role = actor.effective_role
    if not is_approval_required(settings, GovernedEntity.EXPENSE):
        return can_complete_without_approval(role, GovernedEntity.EXPENSE)

    return can_approve(
        settings,
        GovernedEntity.EXPENSE,
        role,
        {"is_chargeable": expense.chargeable_to_customer},
    )


def can_reject(
    expense: ExpenseRecord, actor: ActorContext, settings: SettingsLike
) -> bool:
    return can_validate(expense, actor, settings)


def can_edit_chargeable(
    actor: ActorContext, expense: Optional[ExpenseRecord] = None
) -> bool:
    """Only admin and supplier PM may change chargeability, and only while editable."""
    if not actor.is_elevated_project_role:
        return False
    return expense is None or is_editable(expense)


def can_see_procurement(actor: ActorContext) -> bool:
    return actor.is_elevated_project_role


def can_edit_procurement(actor: ActorContext) -> bool:
    return actor.is_elevated_project_role


def get_expense_actions(
    expense: ExpenseRecord, actor: ActorContext, settings: SettingsLike
) -> ExpenseActions:
    """Evaluate every expense guard for one actor."""
    can_validate_expense = can_validate(expense, actor, settings)
    return ExpenseActions(
        is_owner=is_owner(expense, actor),
        is_chargeable=expense.chargeable_to_customer,
        expenses_enabled=is_feature_enabled(settings, Feature.EXPENSES),
        approval_required=is_approval_required(settings, GovernedEntity.EXPENSE),
        can_view=has_permission(actor.effective_role, Entity.EXPENSES, "view"),
        can_edit=can_edit(expense, actor),
        can_delete=can_delete(expense, actor),
        can_submit=can_submit(expense, actor),
        can_validate=can_validate_expense,
        can_reject=can_validate_expense,
        can_edit_chargeable=can_edit_chargeable(actor, expense),
        can_edit_procurement=can_edit_procurement(actor),
        can_see_procurement=can_see_procurement(actor),
        is_editable=is_editable(expense),
        is_complete=is_complete(expense),
    )
