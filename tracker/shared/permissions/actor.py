"""
Actor resolution: turns the identity, organisation membership, project role
assignment and impersonation state supplied by external collaborators into
the ActorContext used for every permission check.

Resolution order for the actual role (first match wins):
1. System admin               -> admin
2. Org admin of the project's -> admin
   organisation
3. Project role assignment    -> assigned role
4. Nothing matched            -> viewer

Any missing input degrades towards viewer; resolution never raises.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tracker.core.settings import settings

from .roles import (
    OrgRole,
    Role,
    coerce_role,
    is_elevated_project_role,
    is_org_admin_role,
)

logger = logging.getLogger(__name__)


class IdentityContext(BaseModel):
    """Identity supplied by the session provider."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    is_system_admin: bool = False
    linked_resource_id: Optional[str] = None
    display_name: Optional[str] = None


class OrgMembership(BaseModel):
    """Membership of the user in the active organisation."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    organisation_id: str
    org_role: OrgRole | str | None = None


class ProjectRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    organisation_id: Optional[str] = None


class ProjectRoleAssignment(BaseModel):
    """Project-scoped role for (user, project)."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    project_id: str
    role: Role | str | None = None


class ImpersonationContext(BaseModel):
    """View-as state; only honoured when the user may impersonate."""

    model_config = ConfigDict(frozen=True)

    is_impersonating: bool = False
    impersonated_role: Role | str | None = None
    may_impersonate: bool = False


class ActorContext(BaseModel):
    """
    Resolved actor for a single project.

    actual_role never changes during impersonation; effective_role is the
    role used for every check. user_id is always the real user's id.
    """

    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    actual_role: Role = Role.VIEWER
    effective_role: Role = Role.VIEWER
    is_impersonating: bool = False
    is_system_admin: bool = False
    is_org_admin: bool = False
    linked_resource_id: Optional[str] = Field(
        None, description="Resource linked to the real user, for own-resource checks"
    )

    @property
    def is_org_level_admin(self) -> bool:
        """System admin or org admin; an organisation-level capability."""
        return self.is_system_admin or self.is_org_admin

    @property
    def is_elevated_project_role(self) -> bool:
        """Effective project role is admin or supplier PM."""
        return is_elevated_project_role(self.effective_role)

    def owns(
        self,
        created_by: Optional[str] = None,
        user_id: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> bool:
        """
        Whether a record belongs to the real user.

        A record is owned when it was created by the user, is recorded against
        the user, or is booked to the user's linked resource.
        """
        if self.user_id is None:
            return False
        if created_by is not None and created_by == self.user_id:
            return True
        if user_id is not None and user_id == self.user_id:
            return True
        return resource_id is not None and resource_id == self.linked_resource_id


VIEWER_ACTOR = ActorContext()


def _is_org_admin(
    identity: IdentityContext,
    org_membership: Optional[OrgMembership],
    project: Optional[ProjectRef],
) -> bool:
    if org_membership is None or org_membership.user_id != identity.user_id:
        return False
    if (
        project is not None
        and project.organisation_id != org_membership.organisation_id
    ):
        # Org admin rights are scoped to that organisation's projects
        return False
    return is_org_admin_role(org_membership.org_role)


def _assigned_role(
    identity: IdentityContext,
    project_role: Optional[ProjectRoleAssignment],
    project: Optional[ProjectRef],
) -> Optional[Role]:
    if project_role is None or project_role.user_id != identity.user_id:
        return None
    if project is not None and project_role.project_id != project.id:
        return None
    return coerce_role(project_role.role)


def resolve_actor(
    identity: Optional[IdentityContext],
    org_membership: Optional[OrgMembership] = None,
    project_role: Optional[ProjectRoleAssignment] = None,
    impersonation: Optional[ImpersonationContext] = None,
    project: Optional[ProjectRef] = None,
) -> ActorContext:
    """
    Resolve the actor for the active project.

    Args:
        identity: Session identity, or None when unavailable
        org_membership: Membership in the active organisation, if any
        project_role: Role assignment for (user, project), if any
        impersonation: View-as state, if any
        project: Active project; scopes org admin and role assignment checks

    Returns:
        ActorContext. Identical inputs always yield an equal context.
    """
    if identity is None:
        return VIEWER_ACTOR

    is_system_admin = identity.is_system_admin
    is_org_admin = _is_org_admin(identity, org_membership, project)

    if is_system_admin or is_org_admin:
        actual_role = Role.ADMIN
    else:
        actual_role = _assigned_role(identity, project_role, project) or Role.VIEWER

    effective_role = actual_role
    is_impersonating = False
    if (
        settings.IMPERSONATION_ENABLED
        and impersonation is not None
        and impersonation.is_impersonating
        and impersonation.may_impersonate
    ):
        impersonated = coerce_role(impersonation.impersonated_role)
        if impersonated is not None:
            effective_role = impersonated
            is_impersonating = True
        else:
            logger.warning(
                f"Ignoring impersonation for user {identity.user_id}: "
                f"unknown role {impersonation.impersonated_role!r}"
            )

    return ActorContext(
        user_id=identity.user_id,
        actual_role=actual_role,
        effective_role=effective_role,
        is_impersonating=is_impersonating,
        is_system_admin=is_system_admin,
        is_org_admin=is_org_admin,
        linked_resource_id=identity.linked_resource_id,
    )
