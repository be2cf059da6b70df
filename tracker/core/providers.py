"""
Contracts for the external collaborators that supply permission context.

The engine never fetches anything itself: the dependency layer asks these
providers for identity, membership, role assignment, impersonation state
and workflow settings, then hands the results to the engine.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol

from tracker.domains.project_settings.types import WorkflowSettings
from tracker.shared.permissions.actor import (
    IdentityContext,
    ImpersonationContext,
    OrgMembership,
    ProjectRef,
    ProjectRoleAssignment,
)


class IdentityProvider(Protocol):
    async def get_identity(self, token: str) -> Optional[IdentityContext]: ...


class OrganisationMembershipProvider(Protocol):
    async def get_membership(
        self, user_id: str, organisation_id: str
    ) -> Optional[OrgMembership]: ...


class ProjectRoleStore(Protocol):
    async def get_project(self, project_id: str) -> Optional[ProjectRef]: ...

    async def get_assignment(
        self, user_id: str, project_id: str
    ) -> Optional[ProjectRoleAssignment]: ...


class ImpersonationStore(Protocol):
    async def get_impersonation(
        self, user_id: str, project_id: str
    ) -> Optional[ImpersonationContext]: ...


class WorkflowSettingsStore(Protocol):
    async def get_settings(self, project_id: str) -> Optional[WorkflowSettings]: ...


class InMemoryIdentityProvider:
    """Token -> identity lookup for development and tests."""

    def __init__(self, identities: Optional[dict[str, IdentityContext]] = None):
        self.identities = dict(identities or {})

    async def get_identity(self, token: str) -> Optional[IdentityContext]:
        return self.identities.get(token)


class InMemoryOrganisationMembershipProvider:
    def __init__(self, memberships: Optional[list[OrgMembership]] = None):
        self.memberships = {
            (m.user_id, m.organisation_id): m for m in memberships or []
        }

    async def get_membership(
        self, user_id: str, organisation_id: str
    ) -> Optional[OrgMembership]:
        return self.memberships.get((user_id, organisation_id))


class InMemoryProjectRoleStore:
    def __init__(
        self,
        projects: Optional[list[ProjectRef]] = None,
        assignments: Optional[list[ProjectRoleAssignment]] = None,
    ):
        self.projects = {p.id: p for p in projects or []}
        self.assignments = {(a.user_id, a.project_id): a for a in assignments or []}

    async def get_project(self, project_id: str) -> Optional[ProjectRef]:
        return self.projects.get(project_id)

    async def get_assignment(
        self, user_id: str, project_id: str
    ) -> Optional[ProjectRoleAssignment]:
        return self.assignments.get((user_id, project_id))


class InMemoryImpersonationStore:
    def __init__(
        self, sessions: Optional[dict[tuple[str, str], ImpersonationContext]] = None
    ):
        self.sessions = dict(sessions or {})

    async def get_impersonation(
        self, user_id: str, project_id: str
    ) -> Optional[ImpersonationContext]:
        return self.sessions.get((user_id, project_id))


class InMemoryWorkflowSettingsStore:
    def __init__(self, settings: Optional[dict[str, WorkflowSettings]] = None):
        self.settings = dict(settings or {})

    async def get_settings(self, project_id: str) -> Optional[WorkflowSettings]:
        return self.settings.get(project_id)


@dataclass
class ContextProviders:
    """The collaborators consulted while building a request's permission context."""

    identity: IdentityProvider = field(default_factory=InMemoryIdentityProvider)
    memberships: OrganisationMembershipProvider = field(
        default_factory=InMemoryOrganisationMembershipProvider
    )
    project_roles: ProjectRoleStore = field(default_factory=InMemoryProjectRoleStore)
    impersonation: ImpersonationStore = field(
        default_factory=InMemoryImpersonationStore
    )
    workflow_settings: WorkflowSettingsStore = field(
        default_factory=InMemoryWorkflowSettingsStore
    )


# Global provider registry
_providers = ContextProviders()


def configure_providers(providers: ContextProviders) -> None:
    """Install the collaborators used by every request from now on."""
    global _providers
    _providers = providers


async def get_providers() -> ContextProviders:
    """Provider dependency for FastAPI dependency injection."""
    return _providers
