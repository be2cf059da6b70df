"""
Object-aware deliverable guards.

Workflow:
    Not Started -> In Progress -> Submitted for Review
    Submitted for Review -> Review Complete | Returned for More Work
    Returned for More Work -> In Progress
    Review Complete -> Delivered

Review is gated by the deliverable_review authority, delivery sign-off by
the deliverable authority. Delivery is blocked until every linked KPI and
quality standard has a recorded assessment.
"""

from typing import Optional

from tracker.domains.project_settings.service import (
    SettingsLike,
    can_approve,
    can_complete_without_approval,
    get_approval_status,
    is_approval_required,
    is_customer_approver,
    is_feature_enabled,
    is_supplier_approver,
)
from tracker.domains.project_settings.types import (
    ApprovalStatus,
    Feature,
    GovernedEntity,
)
from tracker.shared.permissions.actor import ActorContext
from tracker.shared.permissions.models import Entity
from tracker.shared.permissions.predicates import (
    can_delete_deliverable,
    can_edit_deliverable,
    can_review_deliverable,
    can_submit_deliverable,
)
from tracker.shared.permissions.roles import Role
from tracker.shared.permissions.services import has_permission
from tracker.shared.status import coerce_status

from .types import (
    ALLOWED_TRANSITIONS,
    LOCKED_STATUSES,
    REVIEWABLE_FROM,
    CriteriaAssessment,
    DeliverableActions,
    DeliverableRecord,
    DeliverableStatus,
    DeliveryReadiness,
    SignOffStatus,
)


def _status(deliverable: DeliverableRecord) -> Optional[DeliverableStatus]:
    return coerce_status(DeliverableStatus, deliverable.status)


def get_allowed_transitions(status: Optional[str]) -> list[DeliverableStatus]:
    """Statuses reachable from the given one, in workflow order."""
    resolved = coerce_status(DeliverableStatus, status)
    if resolved is None:
        return []
    targets = ALLOWED_TRANSITIONS[resolved]
    return [candidate for candidate in DeliverableStatus if candidate in targets]


def can_transition(from_status: Optional[str], to_status: Optional[str]) -> bool:
    target = coerce_status(DeliverableStatus, to_status)
    return target is not None and target in get_allowed_transitions(from_status)


def is_editable(deliverable: DeliverableRecord) -> bool:
    status = _status(deliverable)
    return status is not None and status not in LOCKED_STATUSES


def is_delivered(deliverable: DeliverableRecord) -> bool:
    return _status(deliverable) == DeliverableStatus.DELIVERED


def get_sign_off_status(deliverable: DeliverableRecord) -> SignOffStatus:
    supplier_signed = deliverable.supplier_pm_signed_at is not None
    customer_signed = deliverable.customer_pm_signed_at is not None
    if supplier_signed and customer_signed:
        return SignOffStatus.SIGNED
    if supplier_signed:
        return SignOffStatus.AWAITING_CUSTOMER
    if customer_signed:
        return SignOffStatus.AWAITING_SUPPLIER
    return SignOffStatus.NOT_SIGNED


def is_assignee(deliverable: DeliverableRecord, actor: ActorContext) -> bool:
    if actor.user_id is None:
        return False
    return actor.user_id in (deliverable.assigned_to, deliverable.resource_user_id)


def _pending(assessments: tuple[CriteriaAssessment, ...]) -> list[str]:
    return [item.id for item in assessments if item.criteria_met is None]


def check_delivery_criteria(
    deliverable: DeliverableRecord, settings: SettingsLike
) -> DeliveryReadiness:
    """
    List the linked assessments that still block delivery.

    Args:
        deliverable: Deliverable with its linked KPI and quality standard
            assessments
        settings: The project's workflow settings

    Returns:
        DeliveryReadiness. KPI assessments are waived only when the kpis
        feature is disabled for the project, quality standard assessments
        only when quality_standards is disabled.
    """
    pending_kpis = (
        _pending(deliverable.kpi_assessments)
        if is_feature_enabled(settings, Feature.KPIS)
        else []
    )
    pending_quality_standards = (
        _pending(deliverable.quality_standard_assessments)
        if is_feature_enabled(settings, Feature.QUALITY_STANDARDS)
        else []
    )
    return DeliveryReadiness(
        can_deliver=not pending_kpis and not pending_quality_standards,
        pending_kpis=pending_kpis,
        pending_quality_standards=pending_quality_standards,
    )


def can_edit(deliverable: DeliverableRecord, actor: ActorContext) -> bool:
    return is_editable(deliverable) and can_edit_deliverable(actor.effective_role)


def can_delete(deliverable: DeliverableRecord, actor: ActorContext) -> bool:
    return _status(deliverable) is not None and can_delete_deliverable(
        actor.effective_role
    )


def can_update_status(deliverable: DeliverableRecord, actor: ActorContext) -> bool:
    """Editors may update any deliverable; contributors only those assigned to them."""
    if _status(deliverable) is None:
        return False
    role = actor.effective_role
    if can_edit_deliverable(role):
        return True
    return role == Role.CONTRIBUTOR and is_assignee(deliverable, actor)


def can_submit_for_review(deliverable: DeliverableRecord, actor: ActorContext) -> bool:
    if _status(deliverable) not in REVIEWABLE_FROM:
        return False
    return can_submit_deliverable(actor.effective_role)


def can_review(
    deliverable: DeliverableRecord, actor: ActorContext, settings: SettingsLike
) -> bool:
    """
    Check if the actor may complete or return a deliverable under review.

    Review applies only at Submitted for Review. When the project switches
    the review step off, the base edit permission completes it.
    """
    if _status(deliverable) != DeliverableStatus.SUBMITTED_FOR_REVIEW:
        return False

    role = actor.effective_role
    if not is_approval_required(settings, GovernedEntity.DELIVERABLE_REVIEW):
        return can_complete_without_approval(role, GovernedEntity.DELIVERABLE_REVIEW)
    return can_review_deliverable(role) and can_approve(
        settings, GovernedEntity.DELIVERABLE_REVIEW, role
    )


def _sign_off_progress(
    deliverable: DeliverableRecord, actor: ActorContext, settings: SettingsLike
) -> ApprovalStatus:
    return get_approval_status(
        settings,
        GovernedEntity.DELIVERABLE,
        actor.effective_role,
        supplier_signed=deliverable.supplier_pm_signed_at is not None,
        customer_signed=deliverable.customer_pm_signed_at is not None,
    )


def can_sign_as_supplier(
    deliverable: DeliverableRecord, actor: ActorContext, settings: SettingsLike
) -> bool:
    if _status(deliverable) != DeliverableStatus.REVIEW_COMPLETE:
        return False
    if not is_approval_required(settings, GovernedEntity.DELIVERABLE):
        return False
    status = _sign_off_progress(deliverable, actor, settings)
    return status.needs_supplier and is_supplier_approver(actor.effective_role)


def can_sign_as_customer(
    deliverable: DeliverableRecord, actor: ActorContext, settings: SettingsLike
) -> bool:
    if _status(deliverable) != DeliverableStatus.REVIEW_COMPLETE:
        return False
    if not is_approval_required(settings, GovernedEntity.DELIVERABLE):
        return False
    status = _sign_off_progress(deliverable, actor, settings)
    return status.needs_customer and is_customer_approver(actor.effective_role)


def can_mark_delivered(
    deliverable: DeliverableRecord, actor: ActorContext, settings: SettingsLike
) -> bool:
    """
    Check if the actor may move a deliverable to Delivered now.

    Requires Review Complete, every required assessment recorded and the
    sign-off the project's deliverable authority asks for.
    """
    if _status(deliverable) != DeliverableStatus.REVIEW_COMPLETE:
        return False
    if not check_delivery_criteria(deliverable, settings).can_deliver:
        return False

    role = actor.effective_role
    if not is_approval_required(settings, GovernedEntity.DELIVERABLE):
        return can_complete_without_approval(role, GovernedEntity.DELIVERABLE)
    if not _sign_off_progress(deliverable, actor, settings).is_complete:
        return False
    return can_approve(settings, GovernedEntity.DELIVERABLE, role)


def get_deliverable_actions(
    deliverable: DeliverableRecord, actor: ActorContext, settings: SettingsLike
) -> DeliverableActions:
    return DeliverableActions(
        is_assignee=is_assignee(deliverable, actor),
        sign_off_status=get_sign_off_status(deliverable),
        allowed_transitions=get_allowed_transitions(deliverable.status),
        can_view=has_permission(actor.effective_role, Entity.DELIVERABLES, "view"),
        can_edit=can_edit(deliverable, actor),
        can_delete=can_delete(deliverable, actor),
        can_update_status=can_update_status(deliverable, actor),
        can_submit_for_review=can_submit_for_review(deliverable, actor),
        can_review=can_review(deliverable, actor, settings),
        can_sign_as_supplier=can_sign_as_supplier(deliverable, actor, settings),
        can_sign_as_customer=can_sign_as_customer(deliverable, actor, settings),
        can_mark_delivered=can_mark_delivered(deliverable, actor, settings),
        readiness=check_delivery_criteria(deliverable, settings),
    )
