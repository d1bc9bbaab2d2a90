"""Unit tests for stored document models and request schemas."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from recipe_service.domain.models import Recipe, Review, User, to_document
from recipe_service.schemas.recipe import RecipeCreate
from recipe_service.schemas.review import ReviewCreate
from recipe_service.schemas.user import UserProfile
from tests.factories.payloads import RecipeCreateFactory


pytestmark = pytest.mark.unit

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class TestRecipeCreate:
    """Tests for RecipeCreate validation."""

    def test_accepts_camel_case(self) -> None:
        """Should parse camelCase bodies."""
        body = RecipeCreateFactory.payload(prepTimeMinutes=10)

        recipe = RecipeCreate.model_validate(body)

        assert recipe.prep_time_minutes == 10
        assert recipe.is_public is True

    @pytest.mark.parametrize(
        "override",
        [
            {"title": ""},
            {"title": "   "},
            {"title": "x" * 101},
            {"description": "x" * 501},
            {"ingredients": []},
            {"ingredients": [{"name": "salt", "quantity": " "}]},
            {"instructions": []},
            {"servings": -1},
            {"tags": ["x" * 51]},
        ],
    )
    def test_rejects_invalid_fields(self, override: dict) -> None:
        """Should reject out-of-range or blank values."""
        with pytest.raises(ValidationError):
            RecipeCreate.model_validate(RecipeCreateFactory.payload() | override)

    def test_dedupes_tags(self) -> None:
        """Should drop repeated tags, keeping first occurrences."""
        body = RecipeCreateFactory.payload(tags=["soup", "quick", "soup"])

        assert RecipeCreate.model_validate(body).tags == ["soup", "quick"]

    def test_servings_zero_allowed(self) -> None:
        """Should accept zero servings."""
        body = RecipeCreateFactory.payload(servings=0)

        assert RecipeCreate.model_validate(body).servings == 0


class TestReviewCreate:
    """Tests for ReviewCreate validation."""

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_range(self, rating: int) -> None:
        """Should accept only ratings from 1 to 5."""
        with pytest.raises(ValidationError):
            ReviewCreate(rating=rating, comment="ok")

    def test_comment_length(self) -> None:
        """Should reject empty and overlong comments."""
        with pytest.raises(ValidationError):
            ReviewCreate(rating=3, comment="")
        with pytest.raises(ValidationError):
            ReviewCreate(rating=3, comment="x" * 1001)


class TestStoredDocuments:
    """Tests for document dumping and loading."""

    def test_to_document_is_camel_case_json(self) -> None:
        """Should dump camelCase keys with JSON-compatible values."""
        review = Review(
            id="r1",
            reviewer_id="u1",
            recipe_id="p1",
            rating=5,
            comment="Great",
            created_at=NOW,
            updated_at=NOW,
        )

        doc = to_document(review)

        assert doc["reviewerId"] == "u1"
        assert doc["createdAt"] == "2024-05-01T12:00:00Z"

    def test_ignores_unknown_stored_keys(self) -> None:
        """Should load documents carrying keys from older versions."""
        recipe = Recipe.model_validate(
            {
                "id": "p1",
                "creatorId": "u1",
                "title": "Soup",
                "ingredients": [{"name": "water", "quantity": "1 l"}],
                "instructions": ["Boil"],
                "createdAt": NOW,
                "updatedAt": NOW,
                "legacyField": True,
            }
        )

        assert recipe.is_public is False
        assert recipe.tags == []

    def test_user_profile_hides_oauth_id(self) -> None:
        """Should not expose the provider subject in profiles."""
        user = User(
            id="u1",
            oauth_id="google-123",
            display_name="Ada",
            created_at=NOW,
            updated_at=NOW,
        )

        dumped = UserProfile.from_user(user).model_dump()

        assert "oauthId" not in dumped
        assert dumped["displayName"] == "Ada"
