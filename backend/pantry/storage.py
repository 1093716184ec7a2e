"""
Saved Recipes
Persistence boundary for recipes a user chose to keep
"""

import uuid
from datetime import datetime, timezone
from typing import Protocol

from pantry.models import Recipe, SavedRecipe


class SavedRecipeStore(Protocol):
    def save(self, user_id: str, recipe: Recipe) -> SavedRecipe:
        ...

    def list_saved(self, user_id: str) -> list[SavedRecipe]:
        ...


class InMemoryRecipeStore:
    """Process-local store, newest first"""

    def __init__(self):
        self._saved: dict[str, list[SavedRecipe]] = {}

    def save(self, user_id: str, recipe: Recipe) -> SavedRecipe:
        saved = SavedRecipe(
            id=uuid.uuid4().hex,
            user_id=user_id,
            recipe=recipe,
            saved_at=datetime.now(timezone.utc)
        )
        self._saved.setdefault(user_id, []).append(saved)
        return saved

    def list_saved(self, user_id: str) -> list[SavedRecipe]:
        return list(reversed(self._saved.get(user_id, [])))
