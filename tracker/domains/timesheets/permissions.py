"""
Object-aware timesheet guards.

Timesheets follow the expense rules without the chargeable branch:
approval authority depends on the role and the project's settings only.
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
from tracker.shared.permissions.predicates import can_add_timesheet
from tracker.shared.permissions.roles import Role
from tracker.shared.permissions.services import has_permission
from tracker.shared.status import coerce_status

from .types import (
    EDITABLE_STATUSES,
    STATUS_DISPLAY,
    SUBMITTABLE_STATUSES,
    TimesheetActions,
    TimesheetRecord,
    TimesheetStatus,
)


def _status(timesheet: TimesheetRecord) -> Optional[TimesheetStatus]:
    return coerce_status(TimesheetStatus, timesheet.status)


def get_status_display(status: Optional[str]) -> str:
    resolved = coerce_status(TimesheetStatus, status)
    if resolved is None:
        return status or "Unknown"
    return STATUS_DISPLAY[resolved]


def is_owner(timesheet: TimesheetRecord, actor: ActorContext) -> bool:
    return actor.owns(
        created_by=timesheet.created_by,
        user_id=timesheet.user_id,
        resource_id=timesheet.resource_id,
    )


def is_editable(timesheet: TimesheetRecord) -> bool:
    return _status(timesheet) in EDITABLE_STATUSES


def is_complete(timesheet: TimesheetRecord) -> bool:
    return _status(timesheet) == TimesheetStatus.APPROVED


def can_edit(timesheet: TimesheetRecord, actor: ActorContext) -> bool:
    status = _status(timesheet)
    if status is None:
        return False
    if not has_permission(actor.effective_role, Entity.TIMESHEETS, "edit"):
        return False
    if actor.is_elevated_project_role:
        return True
    return status in EDITABLE_STATUSES and is_owner(timesheet, actor)


def can_delete(timesheet: TimesheetRecord, actor: ActorContext) -> bool:
    status = _status(timesheet)
    if status is None:
        return False

    role = actor.effective_role
    if not has_permission(role, Entity.TIMESHEETS, "delete"):
        return False
    if role == Role.ADMIN:
        return True
    if status != TimesheetStatus.DRAFT:
        return False
    if role == Role.SUPPLIER_PM:
        return True
    return is_owner(timesheet, actor) and can_add_timesheet(role)


def can_submit(timesheet: TimesheetRecord, actor: ActorContext) -> bool:
    """
    Check if the actor may submit this timesheet.

    Owners are matched by creator, by the user the timesheet is recorded
    against, or by the linked resource it is booked to.
    """
    if _status(timesheet) not in SUBMITTABLE_STATUSES:
        return False
    if actor.is_elevated_project_role:
        return True
    return is_owner(timesheet, actor) and can_add_timesheet(actor.effective_role)


def can_validate(
    timesheet: TimesheetRecord, actor: ActorContext, settings: SettingsLike
) -> bool:
    """
    Check if the actor may validate or reject this timesheet.

    Only Submitted timesheets can be validated. When the project switches
    timesheet approval off, completion falls back to the base edit
    permission.
    """
    if _status(timesheet) != TimesheetStatus.SUBMITTED:
        return False

    role = actor.effective_role
    if not is_approval_required(settings, GovernedEntity.TIMESHEET):
        return can_complete_without_approval(role, GovernedEntity.TIMESHEET)
    return can_approve(settings, GovernedEntity.TIMESHEET, role)


def can_validate_any(actor: ActorContext, settings: SettingsLike) -> bool:
    """Whether the actor could validate some Submitted timesheet in this project."""
    role = actor.effective_role
    if not is_approval_required(settings, GovernedEntity.TIMESHEET):
        return can_complete_without_approval(role, GovernedEntity.TIMESHEET)
    return can_approve(settings, GovernedEntity.TIMESHEET, role)


def get_timesheet_actions(
    timesheet: TimesheetRecord, actor: ActorContext, settings: SettingsLike
) -> TimesheetActions:
    can_validate_timesheet = can_validate(timesheet, actor, settings)
    return TimesheetActions(
        is_owner=is_owner(timesheet, actor),
        timesheets_enabled=is_feature_enabled(settings, Feature.TIMESHEETS),
        approval_required=is_approval_required(settings, GovernedEntity.TIMESHEET),
        can_view=has_permission(actor.effective_role, Entity.TIMESHEETS, "view"),
        can_edit=can_edit(timesheet, actor),
        can_delete=can_delete(timesheet, actor),
        can_submit=can_submit(timesheet, actor),
        can_validate=can_validate_timesheet,
        can_reject=can_validate_timesheet,
        is_editable=is_editable(timesheet),
        is_complete=is_complete(timesheet),
    )
