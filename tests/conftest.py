"""
Global pytest configuration and fixtures for the Project Tracker API test suite.
"""

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient

from tracker.core.providers import (
    ContextProviders,
    InMemoryIdentityProvider,
    InMemoryImpersonationStore,
    InMemoryOrganisationMembershipProvider,
    InMemoryProjectRoleStore,
    InMemoryWorkflowSettingsStore,
    configure_providers,
)
from tracker.main import app
from tracker.shared.permissions.actor import (
    IdentityContext,
    OrgMembership,
    ProjectRef,
    ProjectRoleAssignment,
)
from tracker.shared.permissions.roles import OrgRole, Role

# Import fixtures from fixture modules
from tests.fixtures.actor_fixtures import *  # noqa: F403, F401
from tests.fixtures.actor_fixtures import (
    TEST_ORGANISATION_ID,
    TEST_PROJECT_ID,
    token_for,
    user_for,
)


@pytest.fixture
def in_memory_providers() -> Generator[ContextProviders, None, None]:
    """
    In-memory collaborators with one user per project role.

    Each role's user authenticates with token_for(role). "token-sysadmin"
    is a system admin and "token-orgadmin" an admin of the project's
    organisation; neither holds a project role.
    """
    identities = {
        token_for(role): IdentityContext(user_id=user_for(role)) for role in Role
    }
    identities["token-sysadmin"] = IdentityContext(
        user_id="user-sysadmin", is_system_admin=True
    )
    identities["token-orgadmin"] = IdentityContext(user_id="user-orgadmin")

    providers = ContextProviders(
        identity=InMemoryIdentityProvider(identities),
        memberships=InMemoryOrganisationMembershipProvider(
            [
                OrgMembership(
                    user_id="user-orgadmin",
                    organisation_id=TEST_ORGANISATION_ID,
                    org_role=OrgRole.ORG_ADMIN,
                )
            ]
        ),
        project_roles=InMemoryProjectRoleStore(
            projects=[
                ProjectRef(id=TEST_PROJECT_ID, organisation_id=TEST_ORGANISATION_ID)
            ],
            assignments=[
                ProjectRoleAssignment(
                    user_id=user_for(role), project_id=TEST_PROJECT_ID, role=role
                )
                for role in Role
            ],
        ),
        impersonation=InMemoryImpersonationStore(),
        workflow_settings=InMemoryWorkflowSettingsStore(),
    )
    configure_providers(providers)
    yield providers
    configure_providers(ContextProviders())


@pytest.fixture
def client(in_memory_providers: ContextProviders) -> TestClient:
    """FastAPI test client backed by the in-memory providers."""
    return TestClient(app)


@pytest.fixture
def auth_headers_for() -> Callable[[Role], Dict[str, str]]:
    """Authorization headers for the test user holding a project role."""

    def _headers(role: Role) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token_for(role)}"}

    return _headers


@pytest.fixture
def project_url() -> str:
    return f"/api/v1/projects/{TEST_PROJECT_ID}"
