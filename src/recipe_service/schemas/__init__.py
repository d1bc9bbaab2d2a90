"""Pydantic schemas for request/response validation.

Import from the submodules (``schemas.recipe``, ``schemas.user`` ...).
The package itself re-exports nothing because ``domain.models`` builds on
``schemas.base`` while the response schemas build on ``domain.models``.
"""
