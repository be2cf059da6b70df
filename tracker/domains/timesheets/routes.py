from typing import Optional

from fastapi import APIRouter, Depends

from tracker.domains.project_settings.types import Feature, WorkflowSettings
from tracker.domains.timesheets.permissions import get_timesheet_actions
from tracker.domains.timesheets.types import TimesheetActions, TimesheetRecord
from tracker.shared.permissions import ActorContext, Entity
from tracker.shared.permissions.dependencies import (
    require_feature,
    require_permission,
)

router = APIRouter(prefix="/projects", tags=["Timesheets"])


@router.post(
    "/{project_id}/timesheets/permissions",
    response_model=TimesheetActions,
    operation_id="getTimesheetPermissions",
)
async def get_timesheet_permissions(
    project_id: str,
    timesheet: TimesheetRecord,
    actor: ActorContext = Depends(require_permission(Entity.TIMESHEETS, "view")),
    settings: Optional[WorkflowSettings] = Depends(
        require_feature(Feature.TIMESHEETS)
    ),
) -> TimesheetActions:
    """
    Evaluate the timesheet guards for the caller

    Requires timesheets.view permission and the timesheets feature.
    """
    return get_timesheet_actions(timesheet, actor, settings)
