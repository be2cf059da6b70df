from typing import Optional

from fastapi import APIRouter, Depends

from tracker.domains.deliverables.permissions import (
    can_mark_delivered,
    check_delivery_criteria,
    get_deliverable_actions,
)
from tracker.domains.deliverables.types import (
    DeliverableActions,
    DeliverableRecord,
    DeliverableStatus,
    DeliveryReadiness,
)
from tracker.domains.project_settings.types import WorkflowSettings
from tracker.shared.exceptions import (
    DeliveryCriteriaNotMetError,
    InsufficientPermissionError,
    InvalidObjectStateError,
)
from tracker.shared.permissions import ActorContext, Entity
from tracker.shared.permissions.dependencies import (
    get_workflow_settings,
    require_permission,
)

router = APIRouter(prefix="/projects", tags=["Deliverables"])


@router.post(
    "/{project_id}/deliverables/permissions",
    response_model=DeliverableActions,
    operation_id="getDeliverablePermissions",
)
async def get_deliverable_permissions(
    project_id: str,
    deliverable: DeliverableRecord,
    actor: ActorContext = Depends(require_permission(Entity.DELIVERABLES, "view")),
    settings: Optional[WorkflowSettings] = Depends(get_workflow_settings),
) -> DeliverableActions:
    """
    Evaluate the deliverable guards for the caller

    Requires deliverables.view permission.
    """
    return get_deliverable_actions(deliverable, actor, settings)


@router.post(
    "/{project_id}/deliverables/delivery-check",
    response_model=DeliveryReadiness,
    operation_id="checkDeliverableDelivery",
)
async def check_deliverable_delivery(
    project_id: str,
    deliverable: DeliverableRecord,
    actor: ActorContext = Depends(require_permission(Entity.DELIVERABLES, "view")),
    settings: Optional[WorkflowSettings] = Depends(get_workflow_settings),
) -> DeliveryReadiness:
    """
    Check that the caller may mark a deliverable Delivered now

    Returns 409 while the deliverable is not at Review Complete or while any
    linked KPI or quality standard is unassessed, and 403 when sign-off
    rules do not let the caller complete delivery.
    """
    if deliverable.status != DeliverableStatus.REVIEW_COMPLETE.value:
        raise InvalidObjectStateError(
            f"Deliverable must be {DeliverableStatus.REVIEW_COMPLETE.value} "
            f"to be delivered"
        )

    readiness = check_delivery_criteria(deliverable, settings)
    if not readiness.can_deliver:
        raise DeliveryCriteriaNotMetError(
            readiness.pending_kpis, readiness.pending_quality_standards
        )

    if not can_mark_delivered(deliverable, actor, settings):
        raise InsufficientPermissionError(Entity.DELIVERABLES.value, "markDelivered")

    return readiness
