"""
Tests for shared permissions dependencies (identity, actor context,
require_permission and require_feature).
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import HTTPException

from tests.fixtures.actor_fixtures import (
    TEST_ORGANISATION_ID,
    TEST_PROJECT_ID,
    TEST_USER_ID,
    make_actor,
)
from tracker.core.providers import ContextProviders
from tracker.domains.project_settings.types import Feature, WorkflowSettings
from tracker.shared.permissions.actor import (
    ImpersonationContext,
    OrgMembership,
    ProjectRef,
    ProjectRoleAssignment,
)
from tracker.shared.permissions.dependencies import (
    get_actor_context,
    get_identity,
    get_workflow_settings,
    require_feature,
    require_permission,
)
from tracker.shared.permissions.models import Entity
from tracker.shared.permissions.roles import OrgRole, Role


@pytest.fixture
def mock_providers() -> Mock:
    """Mock collaborators; every lookup finds nothing unless a test says so."""
    providers = Mock(spec=ContextProviders)
    providers.identity = Mock()
    providers.identity.get_identity = AsyncMock(return_value=None)
    providers.memberships = Mock()
    providers.memberships.get_membership = AsyncMock(return_value=None)
    providers.project_roles = Mock()
    providers.project_roles.get_project = AsyncMock(
        return_value=ProjectRef(
            id=TEST_PROJECT_ID, organisation_id=TEST_ORGANISATION_ID
        )
    )
    providers.project_roles.get_assignment = AsyncMock(return_value=None)
    providers.impersonation = Mock()
    providers.impersonation.get_impersonation = AsyncMock(return_value=None)
    providers.workflow_settings = Mock()
    providers.workflow_settings.get_settings = AsyncMock(return_value=None)
    return providers


class TestGetIdentity:
    @pytest.mark.asyncio
    async def test_missing_header_is_401(self, mock_providers):
        with pytest.raises(HTTPException) as exc_info:
            await get_identity(authorization=None, providers=mock_providers)

        assert exc_info.value.status_code == 401
        mock_providers.identity.get_identity.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_bearer_header_is_401(self, mock_providers):
        with pytest.raises(HTTPException) as exc_info:
            await get_identity(authorization="Basic abc", providers=mock_providers)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_token_is_401(self, mock_providers):
        with pytest.raises(HTTPException) as exc_info:
            await get_identity(authorization="Bearer nope", providers=mock_providers)

        assert exc_info.value.status_code == 401
        mock_providers.identity.get_identity.assert_called_once_with("nope")

    @pytest.mark.asyncio
    async def test_identity_provider_failure_is_401(self, mock_providers):
        mock_providers.identity.get_identity.side_effect = RuntimeError("down")

        with pytest.raises(HTTPException) as exc_info:
            await get_identity(authorization="Bearer abc", providers=mock_providers)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_known_token_returns_identity(self, mock_providers, test_identity):
        mock_providers.identity.get_identity.return_value = test_identity

        result = await get_identity(
            authorization="Bearer abc", providers=mock_providers
        )

        assert result == test_identity


class TestGetActorContext:
    @pytest.mark.asyncio
    async def test_resolves_project_role(self, mock_providers, test_identity):
        assignment = ProjectRoleAssignment(
            user_id=TEST_USER_ID, project_id=TEST_PROJECT_ID, role=Role.CUSTOMER_PM
        )
        mock_providers.project_roles.get_assignment.return_value = assignment

        actor = await get_actor_context(
            project_id=TEST_PROJECT_ID, identity=test_identity, providers=mock_providers
        )

        assert actor.effective_role is Role.CUSTOMER_PM
        mock_providers.project_roles.get_assignment.assert_called_once_with(
            TEST_USER_ID, TEST_PROJECT_ID
        )

    @pytest.mark.asyncio
    async def test_org_admin_of_project_organisation(
        self, mock_providers, test_identity
    ):
        mock_providers.memberships.get_membership.return_value = OrgMembership(
            user_id=TEST_USER_ID,
            organisation_id=TEST_ORGANISATION_ID,
            org_role=OrgRole.ORG_ADMIN,
        )

        actor = await get_actor_context(
            project_id=TEST_PROJECT_ID, identity=test_identity, providers=mock_providers
        )

        assert actor.actual_role is Role.ADMIN
        assert actor.is_org_admin is True
        mock_providers.memberships.get_membership.assert_called_once_with(
            TEST_USER_ID, TEST_ORGANISATION_ID
        )

    @pytest.mark.asyncio
    async def test_applies_impersonation(self, mock_providers, system_admin_identity):
        mock_providers.impersonation.get_impersonation.return_value = (
            ImpersonationContext(
                is_impersonating=True,
                impersonated_role=Role.CONTRIBUTOR,
                may_impersonate=True,
            )
        )

        actor = await get_actor_context(
            project_id=TEST_PROJECT_ID,
            identity=system_admin_identity,
            providers=mock_providers,
        )

        assert actor.actual_role is Role.ADMIN
        assert actor.effective_role is Role.CONTRIBUTOR

    @pytest.mark.asyncio
    async def test_collaborator_failures_degrade_to_viewer(
        self, mock_providers, test_identity, caplog
    ):
        project_roles = mock_providers.project_roles
        project_roles.get_project.side_effect = RuntimeError("db down")
        project_roles.get_assignment.side_effect = RuntimeError("db down")
        mock_providers.impersonation.get_impersonation.side_effect = TimeoutError()

        actor = await get_actor_context(
            project_id=TEST_PROJECT_ID, identity=test_identity, providers=mock_providers
        )

        assert actor.effective_role is Role.VIEWER
        assert actor.user_id == TEST_USER_ID
        assert "Could not load" in caplog.text

    @pytest.mark.asyncio
    async def test_unknown_project_skips_membership_lookup(
        self, mock_providers, test_identity
    ):
        mock_providers.project_roles.get_project.return_value = None

        actor = await get_actor_context(
            project_id="missing", identity=test_identity, providers=mock_providers
        )

        assert actor.effective_role is Role.VIEWER
        mock_providers.memberships.get_membership.assert_not_called()


class TestGetWorkflowSettings:
    @pytest.mark.asyncio
    async def test_returns_store_settings(self, mock_providers):
        stored = WorkflowSettings(raid_enabled=False)
        mock_providers.workflow_settings.get_settings.return_value = stored

        result = await get_workflow_settings(TEST_PROJECT_ID, providers=mock_providers)

        assert result == stored

    @pytest.mark.asyncio
    async def test_store_failure_returns_none(self, mock_providers):
        mock_providers.workflow_settings.get_settings.side_effect = RuntimeError()

        result = await get_workflow_settings(TEST_PROJECT_ID, providers=mock_providers)

        assert result is None


class TestRequirePermission:
    """Test the require_permission dependency factory."""

    @pytest.mark.asyncio
    async def test_permitted_role_returns_actor(self):
        actor = make_actor(Role.CUSTOMER_PM)
        dependency = require_permission(Entity.RAID, "edit")

        result = await dependency(actor=actor)

        assert result is actor

    @pytest.mark.asyncio
    async def test_forbidden_role_is_403(self):
        dependency = require_permission(Entity.RAID, "delete")

        with pytest.raises(HTTPException) as exc_info:
            await dependency(actor=make_actor(Role.CUSTOMER_PM))

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Insufficient permissions: raid.delete required"

    @pytest.mark.asyncio
    async def test_unknown_action_is_403_for_admin(self):
        dependency = require_permission("expenses", "teleport")

        with pytest.raises(HTTPException) as exc_info:
            await dependency(actor=make_actor(Role.ADMIN))

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_impersonated_role_is_checked(self):
        actor = make_actor(Role.ADMIN).model_copy(
            update={"effective_role": Role.VIEWER, "is_impersonating": True}
        )
        dependency = require_permission(Entity.SETTINGS, "access")

        with pytest.raises(HTTPException):
            await dependency(actor=actor)


class TestRequireFeature:
    @pytest.mark.asyncio
    async def test_enabled_feature_returns_settings(self):
        settings = WorkflowSettings(raid_enabled=True)
        dependency = require_feature(Feature.RAID)

        assert await dependency(settings=settings) is settings

    @pytest.mark.asyncio
    async def test_missing_settings_leave_feature_enabled(self):
        dependency = require_feature(Feature.RAID)

        assert await dependency(settings=None) is None

    @pytest.mark.asyncio
    async def test_disabled_feature_is_403(self):
        dependency = require_feature(Feature.TIMESHEETS)

        with pytest.raises(HTTPException) as exc_info:
            await dependency(settings=WorkflowSettings(timesheets_enabled=False))

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Feature disabled for this project: timesheets"
