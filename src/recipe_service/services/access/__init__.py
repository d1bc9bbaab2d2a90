"""Access control: visibility policy and ownership-scoped queries."""

from recipe_service.services.access import queries
from recipe_service.services.access.policy import (
    Action,
    Decision,
    can_create,
    cookbook_decision,
    enforce,
    recipe_decision,
    review_create_decision,
    review_decision,
    review_list_decision,
    require_requester,
)
from recipe_service.services.access.queries import Query


__all__ = [
    "Action",
    "Decision",
    "Query",
    "can_create",
    "cookbook_decision",
    "enforce",
    "queries",
    "recipe_decision",
    "review_create_decision",
    "review_decision",
    "review_list_decision",
    "require_requester",
]
