from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TimesheetStatus(str, Enum):
    """
    Timesheet workflow: Draft -> Submitted -> Approved/Rejected.

    Approved is displayed as "Validated"; the stored value stays "Approved".
    """

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"


STATUS_DISPLAY: dict[TimesheetStatus, str] = {
    TimesheetStatus.DRAFT: "Draft",
    TimesheetStatus.SUBMITTED: "Submitted",
    TimesheetStatus.APPROVED: "Validated",
    TimesheetStatus.REJECTED: "Rejected",
}

EDITABLE_STATUSES = frozenset({TimesheetStatus.DRAFT, TimesheetStatus.REJECTED})
SUBMITTABLE_STATUSES = frozenset({TimesheetStatus.DRAFT, TimesheetStatus.REJECTED})


class TimesheetRecord(BaseModel):
    """The parts of a timesheet the permission guards read."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    status: Optional[str] = None
    created_by: Optional[str] = None
    user_id: Optional[str] = None
    resource_id: Optional[str] = None


class TimesheetActions(BaseModel):
    """Guard results for one timesheet and one actor."""

    is_owner: bool
    timesheets_enabled: bool
    approval_required: bool
    can_view: bool
    can_edit: bool
    can_delete: bool
    can_submit: bool
    can_validate: bool
    can_reject: bool
    is_editable: bool
    is_complete: bool
