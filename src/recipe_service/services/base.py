"""Helpers shared by the resource services."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from recipe_service.core.exceptions import (
    InternalError,
    NotFoundError,
    ValidationFailedError,
)
from recipe_service.database.exceptions import DocumentNotFoundError, StoreError
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")
M = TypeVar("M", bound=BaseModel)


def store_operation(
    resource: str,
    failure_message: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Translate entity store failures raised by a service method.

    A document vanishing mid-operation becomes a 404. Any other store error
    is logged with its detail and surfaces as a 500 carrying only
    ``failure_message``.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except DocumentNotFoundError as e:
                raise NotFoundError(resource, e.document_id) from e
            except StoreError as e:
                logger.opt(exception=e).error(
                    "Entity store operation failed",
                    resource=resource,
                    operation=func.__name__,
                )
                raise InternalError(failure_message) from e

        return wrapper

    return decorator


def validate_document(model: type[M], document: dict[str, Any]) -> M:
    """Validate a full document, reporting failures as a 400."""
    try:
        return model.model_validate(document)
    except ValidationError as e:
        raise ValidationFailedError.from_pydantic(e) from e


def changed_fields(payload: BaseModel) -> dict[str, Any]:
    """Fields the client actually sent, camelCased and JSON-compatible."""
    return payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
