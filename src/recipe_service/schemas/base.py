"""Base schema configuration for all Pydantic models.

All models serialize to camelCase and accept either camelCase or
snake_case on input.

Usage:
    - APIRequest: incoming request bodies
    - APIResponse: outgoing response bodies
    - StoredDocument: documents read from and written to the entity store
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Unknown fields are ignored, which is also how owner fields such as
    ``creatorId`` sent by a client get dropped.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas.

    Configured to forbid extra fields - we should only return
    properties that are explicitly defined in the schema.
    """

    model_config = ConfigDict(
        extra="forbid",
    )


class StoredDocument(_BaseSchema):
    """Base class for documents kept in the entity store.

    Extra keys are ignored so documents written by older versions still load.
    """

    model_config = ConfigDict(
        extra="ignore",
    )
