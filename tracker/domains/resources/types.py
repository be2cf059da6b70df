from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ResourceType(str, Enum):
    INTERNAL = "internal"
    THIRD_PARTY = "third_party"


class Resource(BaseModel):
    """
    A project resource (person booked to the project).

    Financial fields are None once redacted for a role that may not see them.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    user_id: Optional[str] = None
    sell_price: Optional[Decimal] = None
    cost_price: Optional[Decimal] = None
    margin_percent: Optional[Decimal] = None
    resource_type: Optional[ResourceType] = None


class ResourceFieldAccess(BaseModel):
    """Which resource fields an actor may see."""

    model_config = ConfigDict(frozen=True)

    sell_price: bool
    cost_price: bool
    margin: bool
    resource_type: bool


class VisibleResources(BaseModel):
    fields: ResourceFieldAccess
    resources: list[Resource]
    default_resource_id: Optional[str] = None
