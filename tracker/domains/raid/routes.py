from typing import Optional

from fastapi import APIRouter, Depends

from tracker.domains.project_settings.types import Feature, WorkflowSettings
from tracker.domains.raid.permissions import get_raid_actions
from tracker.domains.raid.types import RaidActions, RaidItem
from tracker.shared.permissions import ActorContext, Entity
from tracker.shared.permissions.dependencies import (
    require_feature,
    require_permission,
)

router = APIRouter(prefix="/projects", tags=["RAID"])


@router.post(
    "/{project_id}/raid/permissions",
    response_model=RaidActions,
    operation_id="getRaidPermissions",
)
async def get_raid_permissions(
    project_id: str,
    item: RaidItem,
    actor: ActorContext = Depends(require_permission(Entity.RAID, "view")),
    settings: Optional[WorkflowSettings] = Depends(require_feature(Feature.RAID)),
) -> RaidActions:
    """
    Evaluate the RAID facade for the caller

    Requires raid.view permission and the raid feature.
    Deletion stays supplier-side whoever owns the item.
    """
    return get_raid_actions(item, actor, settings)
