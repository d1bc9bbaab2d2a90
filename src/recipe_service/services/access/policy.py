"""Visibility and ownership rules.

Every function here is pure: it takes a freshly loaded document and the
requester's user id (``None`` for anonymous callers) and returns a
``Decision``. Existence is checked by the caller before asking; the only
reference allowed to be missing is a review's recipe.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from recipe_service.core.exceptions import ForbiddenError, UnauthorizedError


if TYPE_CHECKING:
    from recipe_service.domain.models import Cookbook, Recipe, Review


class Action(StrEnum):
    """Operations a requester can attempt on a resource."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Decision(StrEnum):
    """Outcome of a policy check."""

    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


def _owner_only(owner_id: str, requester_id: str | None) -> Decision:
    if requester_id is None:
        return Decision.UNAUTHENTICATED
    if requester_id != owner_id:
        return Decision.FORBIDDEN
    return Decision.ALLOW


def can_create(requester_id: str | None) -> Decision:
    """Any authenticated user may create a recipe, cookbook or their profile."""
    return Decision.ALLOW if requester_id is not None else Decision.UNAUTHENTICATED


def recipe_decision(
    action: Action,
    recipe: Recipe,
    requester_id: str | None,
) -> Decision:
    """Decide access to a single recipe.

    Public recipes are readable by anyone. Private recipes are readable only
    by their creator; anonymous readers are refused with FORBIDDEN rather
    than UNAUTHENTICATED. Updates and deletes are creator-only.
    """
    if action == Action.READ:
        if recipe.is_public or requester_id == recipe.creator_id:
            return Decision.ALLOW
        return Decision.FORBIDDEN
    if action == Action.CREATE:
        return can_create(requester_id)
    return _owner_only(recipe.creator_id, requester_id)


def cookbook_decision(
    action: Action,
    cookbook: Cookbook,
    requester_id: str | None,
    *,
    public_read: bool = False,
) -> Decision:
    """Decide access to a single cookbook.

    Cookbooks are owner-only for every action. ``public_read`` opens READ to
    everyone, including anonymous callers; writes are unaffected.
    """
    if action == Action.READ and public_read:
        return Decision.ALLOW
    if action == Action.CREATE:
        return can_create(requester_id)
    return _owner_only(cookbook.owner_id, requester_id)


def review_create_decision(recipe: Recipe, requester_id: str | None) -> Decision:
    """Only public recipes can be reviewed, by any authenticated user."""
    if requester_id is None:
        return Decision.UNAUTHENTICATED
    return Decision.ALLOW if recipe.is_public else Decision.FORBIDDEN


def review_list_decision(recipe: Recipe, requester_id: str | None) -> Decision:
    """Reviews on a recipe are visible wherever the recipe itself is."""
    return recipe_decision(Action.READ, recipe, requester_id)


def review_decision(
    action: Action,
    review: Review,
    recipe: Recipe | None,
    requester_id: str | None,
) -> Decision:
    """Decide access to a single review.

    A review is readable when its recipe is public, or by the recipe's
    creator, or by the review's author. A review whose recipe is gone is
    readable only by its author. Updates and deletes are author-only.
    """
    if action == Action.READ:
        if requester_id is not None and requester_id == review.reviewer_id:
            return Decision.ALLOW
        if recipe is not None and (
            recipe.is_public or requester_id == recipe.creator_id
        ):
            return Decision.ALLOW
        return Decision.FORBIDDEN
    if action == Action.CREATE:
        if recipe is None:
            return Decision.FORBIDDEN
        return review_create_decision(recipe, requester_id)
    return _owner_only(review.reviewer_id, requester_id)


def enforce(
    decision: Decision,
    *,
    forbidden: str = "Access denied",
    unauthenticated: str = "Authentication required",
) -> None:
    """Raise the HTTP error matching a non-ALLOW decision.

    Raises:
        UnauthorizedError: For UNAUTHENTICATED.
        ForbiddenError: For FORBIDDEN.
    """
    if decision == Decision.UNAUTHENTICATED:
        raise UnauthorizedError(unauthenticated)
    if decision == Decision.FORBIDDEN:
        raise ForbiddenError(forbidden)


def require_requester(requester_id: str | None) -> str:
    """Return the requester's id, raising 401 for anonymous callers."""
    if requester_id is None:
        raise UnauthorizedError("Authentication required")
    return requester_id
