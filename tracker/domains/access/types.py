from pydantic import BaseModel

from tracker.domains.project_settings.types import ApprovalAuthority
from tracker.shared.permissions.actor import ActorContext
from tracker.shared.permissions.predicates import PermissionSummary


class ProjectAccess(BaseModel):
    """Everything a client needs to render permission-aware controls."""

    project_id: str
    actor: ActorContext
    is_org_level_admin: bool
    is_elevated_project_role: bool
    permissions: PermissionSummary
    features: dict[str, bool]
    approval_authority: dict[str, ApprovalAuthority]
    dual_signature: dict[str, bool]
