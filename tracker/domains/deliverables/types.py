from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeliverableStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    SUBMITTED_FOR_REVIEW = "Submitted for Review"
    RETURNED_FOR_MORE_WORK = "Returned for More Work"
    REVIEW_COMPLETE = "Review Complete"
    DELIVERED = "Delivered"


class SignOffStatus(str, Enum):
    NOT_SIGNED = "Not Signed"
    AWAITING_SUPPLIER = "Awaiting Supplier"
    AWAITING_CUSTOMER = "Awaiting Customer"
    SIGNED = "Signed"


# Moving back to Not Started happens when progress is reset to zero
ALLOWED_TRANSITIONS: dict[DeliverableStatus, frozenset[DeliverableStatus]] = {
    DeliverableStatus.NOT_STARTED: frozenset({DeliverableStatus.IN_PROGRESS}),
    DeliverableStatus.IN_PROGRESS: frozenset(
        {DeliverableStatus.SUBMITTED_FOR_REVIEW, DeliverableStatus.NOT_STARTED}
    ),
    DeliverableStatus.SUBMITTED_FOR_REVIEW: frozenset(
        {DeliverableStatus.REVIEW_COMPLETE, DeliverableStatus.RETURNED_FOR_MORE_WORK}
    ),
    DeliverableStatus.RETURNED_FOR_MORE_WORK: frozenset(
        {DeliverableStatus.IN_PROGRESS, DeliverableStatus.SUBMITTED_FOR_REVIEW}
    ),
    DeliverableStatus.REVIEW_COMPLETE: frozenset({DeliverableStatus.DELIVERED}),
    DeliverableStatus.DELIVERED: frozenset(),
}

LOCKED_STATUSES = frozenset(
    {
        DeliverableStatus.SUBMITTED_FOR_REVIEW,
        DeliverableStatus.REVIEW_COMPLETE,
        DeliverableStatus.DELIVERED,
    }
)

REVIEWABLE_FROM = frozenset(
    {DeliverableStatus.IN_PROGRESS, DeliverableStatus.RETURNED_FOR_MORE_WORK}
)


class CriteriaAssessment(BaseModel):
    """
    Assessment of one KPI or quality standard linked to a deliverable.

    criteria_met is None until the assessment has been recorded.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    criteria_met: Optional[bool] = None


class DeliverableRecord(BaseModel):
    """The parts of a deliverable the permission guards read."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    status: Optional[str] = None
    created_by: Optional[str] = None
    assigned_to: Optional[str] = None
    resource_user_id: Optional[str] = Field(
        None, description="user_id of the resource the deliverable is assigned to"
    )
    supplier_pm_signed_at: Optional[datetime] = None
    customer_pm_signed_at: Optional[datetime] = None
    kpi_assessments: tuple[CriteriaAssessment, ...] = ()
    quality_standard_assessments: tuple[CriteriaAssessment, ...] = ()


class DeliveryReadiness(BaseModel):
    """Whether every required assessment has been recorded."""

    can_deliver: bool
    pending_kpis: list[str]
    pending_quality_standards: list[str]


class DeliverableActions(BaseModel):
    """Guard results for one deliverable and one actor."""

    is_assignee: bool
    sign_off_status: SignOffStatus
    allowed_transitions: list[DeliverableStatus]
    can_view: bool
    can_edit: bool
    can_delete: bool
    can_update_status: bool
    can_submit_for_review: bool
    can_review: bool
    can_sign_as_supplier: bool
    can_sign_as_customer: bool
    can_mark_delivered: bool
    readiness: DeliveryReadiness
