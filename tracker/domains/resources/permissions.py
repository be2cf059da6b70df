"""
Resource permission facade.

Cost price, margin and resource type are visible to admin and supplier PM
only, whoever the resource belongs to; sell price is visible to every role.
"Own resource" matching feeds the default-selection helpers and never
widens edit or delete rights.
"""

from typing import Iterable, Optional

from tracker.shared.permissions.actor import ActorContext
from tracker.shared.permissions.predicates import (
    can_add_resource,
    can_add_timesheet_for_others,
    can_delete_resource,
    can_edit_resource,
    can_manage_resources,
    can_see_cost_price,
    can_see_margins,
    can_see_resource_type,
    can_see_sell_price,
)

from .types import Resource, ResourceFieldAccess, VisibleResources


def get_field_access(actor: ActorContext) -> ResourceFieldAccess:
    role = actor.effective_role
    return ResourceFieldAccess(
        sell_price=can_see_sell_price(role),
        cost_price=can_see_cost_price(role),
        margin=can_see_margins(role),
        resource_type=can_see_resource_type(role),
    )


def redact_resource(resource: Resource, actor: ActorContext) -> Resource:
    """Return a copy of the resource without the fields the actor may not see."""
    access = get_field_access(actor)
    hidden: dict[str, None] = {}
    if not access.sell_price:
        hidden["sell_price"] = None
    if not access.cost_price:
        hidden["cost_price"] = None
    if not access.margin:
        hidden["margin_percent"] = None
    if not access.resource_type:
        hidden["resource_type"] = None
    return resource.model_copy(update=hidden)


def redact_resources(
    resources: Iterable[Resource], actor: ActorContext
) -> list[Resource]:
    return [redact_resource(resource, actor) for resource in resources]


def can_add(actor: ActorContext) -> bool:
    return can_add_resource(actor.effective_role)


def can_edit(actor: ActorContext) -> bool:
    return can_edit_resource(actor.effective_role)


def can_delete(actor: ActorContext) -> bool:
    return can_delete_resource(actor.effective_role)


def can_manage(actor: ActorContext) -> bool:
    return can_manage_resources(actor.effective_role)


def is_own_resource(resource: Resource, actor: ActorContext) -> bool:
    if actor.user_id is not None and resource.user_id == actor.user_id:
        return True
    return (
        actor.linked_resource_id is not None
        and resource.id == actor.linked_resource_id
    )


def get_available_resources(
    resources: Optional[Iterable[Resource]], actor: ActorContext
) -> list[Resource]:
    """
    Resources the actor may book time or expenses against.

    Roles that may enter records for others see every resource; everyone
    else sees only their own.
    """
    if resources is None:
        return []
    if can_add_timesheet_for_others(actor.effective_role):
        return list(resources)
    return [resource for resource in resources if is_own_resource(resource, actor)]


def get_current_user_resource(
    resources: Optional[Iterable[Resource]], actor: ActorContext
) -> Optional[Resource]:
    if resources is None:
        return None
    return next(
        (resource for resource in resources if is_own_resource(resource, actor)),
        None,
    )


def get_default_resource(
    resources: Optional[Iterable[Resource]], actor: ActorContext
) -> Optional[Resource]:
    """The actor's own resource when available, else the first available one."""
    available = get_available_resources(resources, actor)
    if not available:
        return None
    return get_current_user_resource(available, actor) or available[0]


def get_default_resource_id(
    resources: Optional[Iterable[Resource]], actor: ActorContext
) -> Optional[str]:
    resource = get_default_resource(resources, actor)
    return resource.id if resource else None


def get_visible_resources(
    resources: Iterable[Resource], actor: ActorContext
) -> VisibleResources:
    resources = list(resources)
    return VisibleResources(
        fields=get_field_access(actor),
        resources=redact_resources(resources, actor),
        default_resource_id=get_default_resource_id(resources, actor),
    )
