"""
Tests for the RAID permission endpoint.
"""

from tests.fixtures.actor_fixtures import TEST_PROJECT_ID
from tracker.domains.project_settings.types import WorkflowSettings
from tracker.main import app
from tracker.shared.permissions.dependencies import get_workflow_settings
from tracker.shared.permissions.roles import Role

ITEM = {"id": "raid-1", "category": "Issue", "owner_user_id": "someone-else"}


class TestRaidPermissionsEndpoint:
    def test_customer_pm_actions(self, client, project_url, auth_headers_for):
        response = client.post(
            f"{project_url}/raid/permissions",
            json=ITEM,
            headers=auth_headers_for(Role.CUSTOMER_PM),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["can_edit"] is True
        assert data["can_delete"] is False

    def test_disabled_raid_is_forbidden(
        self, client, project_url, auth_headers_for, in_memory_providers
    ):
        in_memory_providers.workflow_settings.settings[TEST_PROJECT_ID] = (
            WorkflowSettings(raid_enabled=False)
        )

        response = client.post(
            f"{project_url}/raid/permissions",
            json=ITEM,
            headers=auth_headers_for(Role.ADMIN),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Feature disabled for this project: raid"

    def test_unknown_category_is_rejected(
        self, client, project_url, auth_headers_for
    ):
        response = client.post(
            f"{project_url}/raid/permissions",
            json={"category": "Rumour"},
            headers=auth_headers_for(Role.ADMIN),
        )

        assert response.status_code == 422


class TestRaidSettingsOverride:
    def test_settings_dependency_can_be_overridden(
        self, client, project_url, auth_headers_for
    ):
        app.dependency_overrides[get_workflow_settings] = lambda: WorkflowSettings(
            raid_enabled=False
        )
        try:
            response = client.post(
                f"{project_url}/raid/permissions",
                json=ITEM,
                headers=auth_headers_for(Role.SUPPLIER_PM),
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 403
