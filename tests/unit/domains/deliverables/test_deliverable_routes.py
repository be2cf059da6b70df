"""
Tests for the deliverable permission and delivery-check endpoints.
"""

from tracker.shared.permissions.roles import Role

SIGNED_AT = "2024-03-01T10:00:00Z"


def review_complete(**overrides):
    body = {
        "id": "deliverable-1",
        "status": "Review Complete",
        "supplier_pm_signed_at": SIGNED_AT,
        "customer_pm_signed_at": SIGNED_AT,
        "kpi_assessments": [{"id": "kpi-1", "criteria_met": True}],
        "quality_standard_assessments": [],
    }
    body.update(overrides)
    return body


class TestDeliverablePermissionsEndpoint:
    def test_returns_actions(self, client, project_url, auth_headers_for):
        response = client.post(
            f"{project_url}/deliverables/permissions",
            json={"status": "Submitted for Review"},
            headers=auth_headers_for(Role.CUSTOMER_PM),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["can_review"] is True
        assert data["can_edit"] is False
        assert data["allowed_transitions"] == [
            "Returned for More Work",
            "Review Complete",
        ]


class TestDeliveryCheckEndpoint:
    def test_ready_deliverable(self, client, project_url, auth_headers_for):
        response = client.post(
            f"{project_url}/deliverables/delivery-check",
            json=review_complete(),
            headers=auth_headers_for(Role.CUSTOMER_PM),
        )

        assert response.status_code == 200
        assert response.json()["can_deliver"] is True

    def test_pending_kpis_are_listed(self, client, project_url, auth_headers_for):
        response = client.post(
            f"{project_url}/deliverables/delivery-check",
            json=review_complete(
                kpi_assessments=[
                    {"id": "kpi-1", "criteria_met": True},
                    {"id": "kpi-2", "criteria_met": None},
                ]
            ),
            headers=auth_headers_for(Role.CUSTOMER_PM),
        )

        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["pending_kpis"] == ["kpi-2"]
        assert detail["pending_quality_standards"] == []

    def test_wrong_status_is_conflict(self, client, project_url, auth_headers_for):
        response = client.post(
            f"{project_url}/deliverables/delivery-check",
            json=review_complete(status="In Progress"),
            headers=auth_headers_for(Role.ADMIN),
        )

        assert response.status_code == 409
        assert "Review Complete" in response.json()["detail"]

    def test_missing_sign_off_is_forbidden(
        self, client, project_url, auth_headers_for
    ):
        response = client.post(
            f"{project_url}/deliverables/delivery-check",
            json=review_complete(customer_pm_signed_at=None),
            headers=auth_headers_for(Role.ADMIN),
        )

        assert response.status_code == 403

    def test_viewer_cannot_deliver(self, client, project_url, auth_headers_for):
        response = client.post(
            f"{project_url}/deliverables/delivery-check",
            json=review_complete(),
            headers=auth_headers_for(Role.VIEWER),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == (
            "Insufficient permissions: deliverables.markDelivered required"
        )
