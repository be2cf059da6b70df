"""
RAID (risks, assumptions, issues, dependencies) permission facade.

Adding, editing and managing items are manager-level capabilities. Deletion
is a supplier-side privilege: it never depends on who owns the item, so a
customer PM may edit an item but not delete it. Every action is off while
the raid feature is disabled for the project.
"""

from typing import Optional

from tracker.domains.project_settings.service import SettingsLike, is_feature_enabled
from tracker.domains.project_settings.types import Feature
from tracker.shared.permissions.actor import ActorContext
from tracker.shared.permissions.models import Entity
from tracker.shared.permissions.services import has_permission

from .types import RaidActions, RaidItem


def _allowed(actor: ActorContext, action: str, settings: SettingsLike) -> bool:
    if not is_feature_enabled(settings, Feature.RAID):
        return False
    return has_permission(actor.effective_role, Entity.RAID, action)


def is_owner(item: RaidItem, actor: ActorContext) -> bool:
    return actor.owns(created_by=item.created_by, user_id=item.owner_user_id)


def can_view(actor: ActorContext, settings: SettingsLike = None) -> bool:
    return _allowed(actor, "view", settings)


def can_add(actor: ActorContext, settings: SettingsLike = None) -> bool:
    return _allowed(actor, "create", settings)


def can_manage(actor: ActorContext, settings: SettingsLike = None) -> bool:
    return _allowed(actor, "manage", settings)


def can_edit(
    item: Optional[RaidItem], actor: ActorContext, settings: SettingsLike = None
) -> bool:
    return _allowed(actor, "edit", settings)


def can_delete(
    item: Optional[RaidItem], actor: ActorContext, settings: SettingsLike = None
) -> bool:
    # Ownership is not consulted
    return _allowed(actor, "delete", settings)


def can_update_status(
    item: Optional[RaidItem], actor: ActorContext, settings: SettingsLike = None
) -> bool:
    return _allowed(actor, "updateStatus", settings)


def can_assign_owner(
    item: Optional[RaidItem], actor: ActorContext, settings: SettingsLike = None
) -> bool:
    return _allowed(actor, "assignOwner", settings)


def get_raid_actions(
    item: RaidItem, actor: ActorContext, settings: SettingsLike
) -> RaidActions:
    return RaidActions(
        raid_enabled=is_feature_enabled(settings, Feature.RAID),
        is_owner=is_owner(item, actor),
        can_view=can_view(actor, settings),
        can_add=can_add(actor, settings),
        can_manage=can_manage(actor, settings),
        can_edit=can_edit(item, actor, settings),
        can_delete=can_delete(item, actor, settings),
        can_update_status=can_update_status(item, actor, settings),
        can_assign_owner=can_assign_owner(item, actor, settings),
    )
