from typing import Optional

from fastapi import APIRouter, Depends

from tracker.domains.access.types import ProjectAccess
from tracker.domains.project_settings.service import (
    get_authority_modes,
    get_feature_flags,
    requires_dual_signature,
)
from tracker.domains.project_settings.types import GovernedEntity, WorkflowSettings
from tracker.shared.permissions import ActorContext, get_permission_summary
from tracker.shared.permissions.dependencies import (
    get_actor_context,
    get_workflow_settings,
)

router = APIRouter(prefix="/projects", tags=["Access"])


@router.get(
    "/{project_id}/access",
    response_model=ProjectAccess,
    operation_id="getProjectAccess",
)
async def get_project_access(
    project_id: str,
    actor: ActorContext = Depends(get_actor_context),
    settings: Optional[WorkflowSettings] = Depends(get_workflow_settings),
) -> ProjectAccess:
    """
    Get the caller's resolved access for a project

    Any authenticated caller may read their own access. Callers without a
    role on the project are reported as viewers.
    """
    return ProjectAccess(
        project_id=project_id,
        actor=actor,
        is_org_level_admin=actor.is_org_level_admin,
        is_elevated_project_role=actor.is_elevated_project_role,
        permissions=get_permission_summary(actor.effective_role),
        features=get_feature_flags(settings),
        approval_authority=get_authority_modes(settings),
        dual_signature={
            entity.value: requires_dual_signature(settings, entity)
            for entity in GovernedEntity
        },
    )
