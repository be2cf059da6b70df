from typing import List

from fastapi import APIRouter, Depends

from tracker.domains.resources.permissions import get_visible_resources
from tracker.domains.resources.types import Resource, VisibleResources
from tracker.shared.permissions import ActorContext, Entity
from tracker.shared.permissions.dependencies import require_permission

router = APIRouter(prefix="/projects", tags=["Resources"])


@router.post(
    "/{project_id}/resources/visible",
    response_model=VisibleResources,
    operation_id="getVisibleResources",
)
async def get_resources_for_actor(
    project_id: str,
    resources: List[Resource],
    actor: ActorContext = Depends(require_permission(Entity.RESOURCES, "view")),
) -> VisibleResources:
    """
    Redact resources for the caller's role

    Requires resources.view permission.
    Cost price, margin and resource type are removed unless the caller is
    admin or supplier PM.
    """
    return get_visible_resources(resources, actor)
