import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar

from fastapi import Depends, Header

from tracker.core.providers import ContextProviders, get_providers
from tracker.domains.project_settings.service import is_feature_enabled
from tracker.domains.project_settings.types import Feature, WorkflowSettings
from tracker.shared.exceptions import (
    FeatureDisabledError,
    InsufficientPermissionError,
    InvalidTokenError,
)

from .actor import ActorContext, IdentityContext, ProjectRef, resolve_actor
from .models import Entity
from .services import has_permission

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _key(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value


async def _fetch_or_none(
    description: str, fetch: Callable[..., Awaitable[T]], *args: Any
) -> Optional[T]:
    """Call a collaborator; a failure degrades to None so checks fail closed."""
    try:
        return await fetch(*args)
    except Exception as e:
        logger.warning(f"Could not load {description}: {e}")
        return None


async def get_identity(
    authorization: Optional[str] = Header(None),
    providers: ContextProviders = Depends(get_providers),
) -> IdentityContext:
    """
    Resolve the caller's identity from the Authorization bearer token.

    Raises:
        InvalidTokenError: If the header is missing or the identity provider
            does not recognise the token
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError()

    token = authorization.split(" ", 1)[1].strip()
    identity = await _fetch_or_none("identity", providers.identity.get_identity, token)
    if identity is None:
        raise InvalidTokenError()
    return identity


async def get_actor_context(
    project_id: str,
    identity: IdentityContext = Depends(get_identity),
    providers: ContextProviders = Depends(get_providers),
) -> ActorContext:
    """
    Build the ActorContext for the caller on a project.

    Every collaborator is consulted afresh for each request. Anything that
    cannot be loaded counts as absent, which resolves towards viewer.
    """
    project = await _fetch_or_none(
        f"project {project_id}", providers.project_roles.get_project, project_id
    )

    membership = None
    if project is not None and project.organisation_id:
        membership = await _fetch_or_none(
            f"organisation membership for {identity.user_id}",
            providers.memberships.get_membership,
            identity.user_id,
            project.organisation_id,
        )

    assignment = await _fetch_or_none(
        f"role assignment for {identity.user_id} on {project_id}",
        providers.project_roles.get_assignment,
        identity.user_id,
        project_id,
    )
    impersonation = await _fetch_or_none(
        f"impersonation state for {identity.user_id}",
        providers.impersonation.get_impersonation,
        identity.user_id,
        project_id,
    )

    return resolve_actor(
        identity,
        org_membership=membership,
        project_role=assignment,
        impersonation=impersonation,
        project=project or ProjectRef(id=project_id),
    )


async def get_workflow_settings(
    project_id: str, providers: ContextProviders = Depends(get_providers)
) -> Optional[WorkflowSettings]:
    return await _fetch_or_none(
        f"workflow settings for {project_id}",
        providers.workflow_settings.get_settings,
        project_id,
    )


def require_permission(
    entity: Entity | str, action: str
) -> Callable[..., Awaitable[ActorContext]]:
    """
    Dependency factory for matrix-based authorization.

    Creates a dependency that validates the caller's effective role on the
    project holds the given (entity, action) permission.

    Args:
        entity: Matrix entity, e.g. Entity.EXPENSES
        action: Matrix action, e.g. "view"

    Returns:
        Async dependency function that validates permission and returns the
        resolved ActorContext
    """

    async def check_permission(
        actor: ActorContext = Depends(get_actor_context),
    ) -> ActorContext:
        if not has_permission(actor.effective_role, entity, action):
            raise InsufficientPermissionError(_key(entity), action)
        return actor

    return check_permission


def require_feature(
    feature: Feature | str,
) -> Callable[..., Awaitable[Optional[WorkflowSettings]]]:
    """
    Dependency factory that rejects requests for features the project disabled.

    Returns:
        Async dependency function that returns the project's workflow
        settings when the feature is enabled
    """

    async def check_feature(
        settings: Optional[WorkflowSettings] = Depends(get_workflow_settings),
    ) -> Optional[WorkflowSettings]:
        if not is_feature_enabled(settings, feature):
            raise FeatureDisabledError(_key(feature))
        return settings

    return check_feature
