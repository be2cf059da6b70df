"""
Tests for actor resolution (actual role, effective role, impersonation).
"""

from unittest.mock import patch

import pytest

from tests.fixtures.actor_fixtures import (
    OTHER_USER_ID,
    TEST_ORGANISATION_ID,
    TEST_PROJECT_ID,
    TEST_RESOURCE_ID,
    TEST_USER_ID,
)
from tracker.shared.permissions.actor import (
    VIEWER_ACTOR,
    ActorContext,
    ImpersonationContext,
    OrgMembership,
    ProjectRef,
    ProjectRoleAssignment,
    resolve_actor,
)
from tracker.shared.permissions.roles import OrgRole, Role


def _view_as(role, may_impersonate=True) -> ImpersonationContext:
    return ImpersonationContext(
        is_impersonating=True,
        impersonated_role=role,
        may_impersonate=may_impersonate,
    )


class TestResolutionOrder:
    def test_system_admin_becomes_admin(
        self, system_admin_identity, contributor_assignment
    ):
        actor = resolve_actor(
            system_admin_identity, project_role=contributor_assignment
        )

        assert actor.actual_role is Role.ADMIN
        assert actor.effective_role is Role.ADMIN
        assert actor.is_system_admin is True

    def test_org_admin_of_project_organisation_becomes_admin(
        self, test_identity, org_admin_membership, contributor_assignment, test_project
    ):
        actor = resolve_actor(
            test_identity,
            org_membership=org_admin_membership,
            project_role=contributor_assignment,
            project=test_project,
        )

        assert actor.actual_role is Role.ADMIN
        assert actor.is_org_admin is True
        assert actor.is_system_admin is False

    def test_org_admin_of_another_organisation_is_not_admin(
        self, test_identity, contributor_assignment
    ):
        membership = OrgMembership(
            user_id=TEST_USER_ID,
            organisation_id="other-org",
            org_role=OrgRole.ORG_OWNER,
        )
        project = ProjectRef(id=TEST_PROJECT_ID, organisation_id=TEST_ORGANISATION_ID)

        actor = resolve_actor(
            test_identity,
            org_membership=membership,
            project_role=contributor_assignment,
            project=project,
        )

        assert actor.is_org_admin is False
        assert actor.actual_role is Role.CONTRIBUTOR

    def test_org_member_falls_through_to_project_role(
        self, test_identity, org_member_membership, contributor_assignment, test_project
    ):
        actor = resolve_actor(
            test_identity,
            org_membership=org_member_membership,
            project_role=contributor_assignment,
            project=test_project,
        )

        assert actor.actual_role is Role.CONTRIBUTOR

    def test_assignment_for_another_project_is_ignored(
        self, test_identity, test_project
    ):
        assignment = ProjectRoleAssignment(
            user_id=TEST_USER_ID, project_id="other-project", role=Role.SUPPLIER_PM
        )

        actor = resolve_actor(
            test_identity, project_role=assignment, project=test_project
        )

        assert actor.actual_role is Role.VIEWER

    def test_assignment_for_another_user_is_ignored(self, test_identity):
        assignment = ProjectRoleAssignment(
            user_id=OTHER_USER_ID, project_id=TEST_PROJECT_ID, role=Role.ADMIN
        )

        actor = resolve_actor(test_identity, project_role=assignment)

        assert actor.actual_role is Role.VIEWER

    def test_unknown_assigned_role_degrades_to_viewer(self, test_identity):
        assignment = ProjectRoleAssignment(
            user_id=TEST_USER_ID, project_id=TEST_PROJECT_ID, role="owner"
        )

        actor = resolve_actor(test_identity, project_role=assignment)

        assert actor.actual_role is Role.VIEWER

    def test_no_context_is_viewer(self, test_identity):
        actor = resolve_actor(test_identity)

        assert actor.actual_role is Role.VIEWER
        assert actor.effective_role is Role.VIEWER
        assert actor.user_id == TEST_USER_ID
        assert actor.linked_resource_id == TEST_RESOURCE_ID

    def test_missing_identity_is_anonymous_viewer(self, org_admin_membership):
        actor = resolve_actor(None, org_membership=org_admin_membership)

        assert actor == VIEWER_ACTOR
        assert actor.user_id is None
        assert actor.effective_role is Role.VIEWER

    def test_resolution_is_idempotent(
        self, test_identity, org_member_membership, contributor_assignment, test_project
    ):
        inputs = dict(
            identity=test_identity,
            org_membership=org_member_membership,
            project_role=contributor_assignment,
            impersonation=_view_as(Role.CUSTOMER_PM),
            project=test_project,
        )

        assert resolve_actor(**inputs) == resolve_actor(**inputs)


class TestImpersonation:
    def test_impersonation_changes_effective_role_only(self, system_admin_identity):
        actor = resolve_actor(
            system_admin_identity, impersonation=_view_as("customer_pm")
        )

        assert actor.actual_role is Role.ADMIN
        assert actor.effective_role is Role.CUSTOMER_PM
        assert actor.is_impersonating is True

    def test_impersonation_never_changes_identity(
        self, test_identity, contributor_assignment
    ):
        actor = resolve_actor(
            test_identity,
            project_role=contributor_assignment,
            impersonation=_view_as(Role.ADMIN),
        )

        assert actor.user_id == TEST_USER_ID
        assert actor.linked_resource_id == TEST_RESOURCE_ID

    def test_impersonation_requires_capability(self, system_admin_identity):
        actor = resolve_actor(
            system_admin_identity,
            impersonation=_view_as(Role.VIEWER, may_impersonate=False),
        )

        assert actor.effective_role is Role.ADMIN
        assert actor.is_impersonating is False

    def test_inactive_impersonation_is_ignored(self, system_admin_identity):
        impersonation = ImpersonationContext(
            is_impersonating=False, impersonated_role=Role.VIEWER, may_impersonate=True
        )

        actor = resolve_actor(system_admin_identity, impersonation=impersonation)

        assert actor.effective_role is Role.ADMIN

    def test_unknown_impersonated_role_is_ignored(self, system_admin_identity, caplog):
        actor = resolve_actor(system_admin_identity, impersonation=_view_as("root"))

        assert actor.effective_role is Role.ADMIN
        assert actor.is_impersonating is False
        assert "Ignoring impersonation" in caplog.text

    def test_impersonation_switched_off_globally(self, system_admin_identity):
        with patch("tracker.shared.permissions.actor.settings") as mock_settings:
            mock_settings.IMPERSONATION_ENABLED = False
            actor = resolve_actor(
                system_admin_identity, impersonation=_view_as(Role.VIEWER)
            )

        assert actor.effective_role is actor.actual_role is Role.ADMIN


class TestActorCapabilities:
    @pytest.mark.parametrize(
        "is_system_admin,is_org_admin,expected",
        [(True, False, True), (False, True, True), (False, False, False)],
    )
    def test_org_level_admin(self, is_system_admin, is_org_admin, expected):
        actor = ActorContext(
            user_id=TEST_USER_ID,
            is_system_admin=is_system_admin,
            is_org_admin=is_org_admin,
        )
        assert actor.is_org_level_admin is expected

    def test_supplier_pm_is_elevated_but_not_org_level_admin(self):
        actor = ActorContext(
            user_id=TEST_USER_ID,
            actual_role=Role.SUPPLIER_PM,
            effective_role=Role.SUPPLIER_PM,
        )
        assert actor.is_elevated_project_role is True
        assert actor.is_org_level_admin is False

    def test_elevation_follows_effective_role(self):
        actor = ActorContext(
            user_id=TEST_USER_ID,
            actual_role=Role.ADMIN,
            effective_role=Role.CONTRIBUTOR,
            is_impersonating=True,
        )
        assert actor.is_elevated_project_role is False

    def test_owns_records(self):
        actor = ActorContext(user_id=TEST_USER_ID, linked_resource_id=TEST_RESOURCE_ID)

        assert actor.owns(created_by=TEST_USER_ID) is True
        assert actor.owns(user_id=TEST_USER_ID) is True
        assert actor.owns(resource_id=TEST_RESOURCE_ID) is True
        assert (
            actor.owns(created_by=OTHER_USER_ID, resource_id="other-resource")
            is False
        )

    def test_missing_values_never_match(self):
        actor = ActorContext(user_id=TEST_USER_ID)

        assert actor.owns() is False
        assert actor.owns(resource_id=None) is False
        assert VIEWER_ACTOR.owns(created_by=None, user_id=None) is False
