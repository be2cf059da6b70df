from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ExpenseStatus(str, Enum):
    """Expense workflow: Draft -> Submitted -> Approved/Rejected -> Paid."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    PAID = "Paid"


EDITABLE_STATUSES = frozenset({ExpenseStatus.DRAFT, ExpenseStatus.REJECTED})
SUBMITTABLE_STATUSES = frozenset({ExpenseStatus.DRAFT, ExpenseStatus.REJECTED})
COMPLETE_STATUSES = frozenset({ExpenseStatus.APPROVED, ExpenseStatus.PAID})


class ExpenseRecord(BaseModel):
    """The parts of an expense the permission guards read."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    status: Optional[str] = None
    created_by: Optional[str] = None
    user_id: Optional[str] = None
    resource_id: Optional[str] = None
    chargeable_to_customer: bool = True


class ExpenseActions(BaseModel):
    """Guard results for one expense and one actor."""

    is_owner: bool
    is_chargeable: bool
    expenses_enabled: bool
    approval_required: bool
    can_view: bool
    can_edit: bool
    can_delete: bool
    can_submit: bool
    can_validate: bool
    can_reject: bool
    can_edit_chargeable: bool
    can_edit_procurement: bool
    can_see_procurement: bool
    is_editable: bool
    is_complete: bool
