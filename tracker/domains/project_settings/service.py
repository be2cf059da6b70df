"""
Workflow settings resolver.

All "missing key" policy lives here: absent settings enable features and
resolve approval authority to "both", so governance is never silently
switched off by incomplete configuration.
"""

import logging
from typing import Any, Mapping, Optional

from tracker.shared.permissions.roles import (
    Role,
    coerce_role,
    is_customer_side,
    is_supplier_side,
)
from tracker.shared.permissions.services import has_permission

from .types import (
    APPROVAL_FEATURES,
    AUTHORITY_SETTING_KEYS,
    FEATURE_SETTING_KEYS,
    LEGACY_AUTHORITY_VALUES,
    MATRIX_ENTITIES,
    ApprovalAuthority,
    ApprovalStatus,
    Feature,
    GovernedEntity,
    WorkflowSettings,
)

logger = logging.getLogger(__name__)

SettingsLike = WorkflowSettings | Mapping[str, Any] | None


def _read_setting(settings: SettingsLike, key: str) -> Any:
    if settings is None:
        return None
    if isinstance(settings, Mapping):
        return settings.get(key)
    return getattr(settings, key, None)


def is_feature_enabled(settings: SettingsLike, feature: Feature | str) -> bool:
    """
    Check if a feature is enabled for the project.

    Args:
        settings: Project workflow settings, or None when unavailable
        feature: Feature name, e.g. "raid" or Feature.TIMESHEETS

    Returns:
        False only when the feature's setting is explicitly False. Missing
        settings, unset keys and unknown features are enabled.
    """
    setting_key = FEATURE_SETTING_KEYS.get(feature)
    if setting_key is None:
        return True
    return _read_setting(settings, setting_key) is not False


def get_approval_authority(
    settings: SettingsLike, entity_type: GovernedEntity | str
) -> ApprovalAuthority:
    """
    Get the configured approval authority for an entity type.

    Args:
        settings: Project workflow settings, or None when unavailable
        entity_type: Governed entity type, e.g. "expense"

    Returns:
        The configured mode. Missing settings, unknown entity types and
        unrecognised stored values all resolve to BOTH.
    """
    setting_key = AUTHORITY_SETTING_KEYS.get(entity_type)
    if setting_key is None:
        return ApprovalAuthority.BOTH

    raw_value = _read_setting(settings, setting_key)
    if raw_value is None:
        return ApprovalAuthority.BOTH
    if isinstance(raw_value, ApprovalAuthority):
        return raw_value
    if isinstance(raw_value, str):
        try:
            return ApprovalAuthority(raw_value)
        except ValueError:
            legacy = LEGACY_AUTHORITY_VALUES.get(raw_value)
            if legacy is not None:
                return legacy

    logger.warning(
        f"Unrecognised approval authority {raw_value!r} for {setting_key}; "
        f"using {ApprovalAuthority.BOTH.value}"
    )
    return ApprovalAuthority.BOTH


def is_approval_required(
    settings: SettingsLike, entity_type: GovernedEntity | str
) -> bool:
    """Whether the approval gate of an entity type is switched on."""
    feature = APPROVAL_FEATURES.get(entity_type)
    if feature is None:
        return True
    return is_feature_enabled(settings, feature)


def requires_dual_signature(
    settings: SettingsLike, entity_type: GovernedEntity | str
) -> bool:
    return get_approval_authority(settings, entity_type) == ApprovalAuthority.BOTH


def is_supplier_approver(role: Role | str | None) -> bool:
    return is_supplier_side(role)


def is_customer_approver(role: Role | str | None) -> bool:
    return is_customer_side(role)


def can_complete_without_approval(
    role: Role | str | None, entity_type: GovernedEntity | str
) -> bool:
    """
    Whether a role may complete an entity when no approval gate applies.

    Requires the base edit permission on the entity and a seat on either
    side of the project relationship.
    """
    matrix_entity = MATRIX_ENTITIES.get(entity_type)
    if matrix_entity is None:
        return False
    if not (is_supplier_approver(role) or is_customer_approver(role)):
        return False
    return has_permission(role, matrix_entity, "edit")


def can_approve(
    settings: SettingsLike,
    entity_type: GovernedEntity | str,
    role: Role | str | None,
    context: Optional[Mapping[str, Any]] = None,
) -> bool:
    """
    Check if a role may approve an entity under the project's authority mode.

    Args:
        settings: Project workflow settings, or None when unavailable
        entity_type: Governed entity type, e.g. "expense"
        role: Effective role of the actor
        context: Object attributes used by the conditional mode; expenses
            need {"is_chargeable": bool}

    Returns:
        True if the role may approve. Unknown roles never may.
    """
    if coerce_role(role) is None:
        return False

    authority = get_approval_authority(settings, entity_type)
    is_supplier = is_supplier_approver(role)
    is_customer = is_customer_approver(role)

    if authority in (ApprovalAuthority.BOTH, ApprovalAuthority.EITHER):
        # Under BOTH each side signs its own part
        return is_supplier or is_customer
    if authority == ApprovalAuthority.SUPPLIER_ONLY:
        return is_supplier
    if authority == ApprovalAuthority.CUSTOMER_ONLY:
        return is_customer
    if authority == ApprovalAuthority.NONE:
        return can_complete_without_approval(role, entity_type)
    if authority == ApprovalAuthority.CONDITIONAL:
        if entity_type == GovernedEntity.EXPENSE:
            is_chargeable = (context or {}).get("is_chargeable")
            if is_chargeable is None:
                return False
            return is_customer if is_chargeable else is_supplier
        return is_supplier or is_customer
    return False


def get_approval_status(
    settings: SettingsLike,
    entity_type: GovernedEntity | str,
    role: Role | str | None,
    supplier_signed: bool,
    customer_signed: bool,
) -> ApprovalStatus:
    """
    Work out which signatures a dual-signable entity still needs.

    Args:
        settings: Project workflow settings
        entity_type: Governed entity type, e.g. "certificate"
        role: Effective role of the actor
        supplier_signed: Whether the supplier side has signed
        customer_signed: Whether the customer side has signed

    Returns:
        ApprovalStatus with can_sign for the given role
    """
    authority = get_approval_authority(settings, entity_type)

    if authority == ApprovalAuthority.SUPPLIER_ONLY:
        needs_supplier, needs_customer = not supplier_signed, False
        is_complete = supplier_signed
    elif authority == ApprovalAuthority.CUSTOMER_ONLY:
        needs_supplier, needs_customer = False, not customer_signed
        is_complete = customer_signed
    elif authority == ApprovalAuthority.EITHER:
        unsigned = not supplier_signed and not customer_signed
        needs_supplier, needs_customer = unsigned, unsigned
        is_complete = supplier_signed or customer_signed
    elif authority == ApprovalAuthority.NONE:
        needs_supplier, needs_customer = False, False
        is_complete = True
    else:
        # BOTH, and CONDITIONAL for signed entities, need both signatures
        needs_supplier, needs_customer = not supplier_signed, not customer_signed
        is_complete = supplier_signed and customer_signed

    can_sign = (needs_supplier and is_supplier_approver(role)) or (
        needs_customer and is_customer_approver(role)
    )
    return ApprovalStatus(
        can_sign=can_sign,
        needs_supplier=needs_supplier,
        needs_customer=needs_customer,
        is_complete=is_complete,
    )


def get_feature_flags(settings: SettingsLike) -> dict[str, bool]:
    return {feature.value: is_feature_enabled(settings, feature) for feature in Feature}


def get_authority_modes(settings: SettingsLike) -> dict[str, ApprovalAuthority]:
    return {
        entity.value: get_approval_authority(settings, entity)
        for entity in GovernedEntity
    }
