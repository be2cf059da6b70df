from typing import Optional

from fastapi import APIRouter, Depends

from tracker.domains.expenses.permissions import get_expense_actions
from tracker.domains.expenses.types import ExpenseActions, ExpenseRecord
from tracker.domains.project_settings.types import Feature, WorkflowSettings
from tracker.shared.permissions import ActorContext, Entity
from tracker.shared.permissions.dependencies import (
    require_feature,
    require_permission,
)

router = APIRouter(prefix="/projects", tags=["Expenses"])


@router.post(
    "/{project_id}/expenses/permissions",
    response_model=ExpenseActions,
    operation_id="getExpensePermissions",
)
async def get_expense_permissions(
    project_id: str,
    expense: ExpenseRecord,
    actor: ActorContext = Depends(require_permission(Entity.EXPENSES, "view")),
    settings: Optional[WorkflowSettings] = Depends(require_feature(Feature.EXPENSES)),
) -> ExpenseActions:
    """
    Evaluate the expense guards for the caller

    Requires expenses.view permission and the expenses feature.
    Validation routing follows the project's expense approval authority.
    """
    return get_expense_actions(expense, actor, settings)
