from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RaidCategory(str, Enum):
    RISK = "Risk"
    ASSUMPTION = "Assumption"
    ISSUE = "Issue"
    DEPENDENCY = "Dependency"


class RaidItem(BaseModel):
    """A RAID log entry as read by the permission facade."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    category: Optional[RaidCategory] = None
    status: Optional[str] = None
    owner_user_id: Optional[str] = None
    created_by: Optional[str] = None


class RaidActions(BaseModel):
    """Facade results for one RAID item and one actor."""

    raid_enabled: bool
    is_owner: bool
    can_view: bool
    can_add: bool
    can_manage: bool
    can_edit: bool
    can_delete: bool
    can_update_status: bool
    can_assign_owner: bool
