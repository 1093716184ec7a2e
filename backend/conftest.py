"""Shared fixtures: an in-memory recipe provider"""

import asyncio
from typing import Optional

import pytest

from pantry.errors import ProviderError
from pantry.models import CandidateRef, Ingredient, Recipe


def make_recipe(recipe_id: str, *ingredients: str, title: str = "") -> Recipe:
    return Recipe(
        id=recipe_id,
        title=title or f"Recipe {recipe_id}",
        ingredients=[Ingredient(name=name) for name in ingredients],
        instructions=["Cook it"]
    )


class FakeProvider:
    """
    lookups: ingredient -> list of recipe ids (or an Exception to raise)
    recipes: recipe id -> Recipe (missing ids fetch as None)
    failing_details: ids whose detail fetch raises
    """

    def __init__(
        self,
        lookups: dict,
        recipes: dict[str, Recipe],
        failing_details: set = None,
        healthy: bool = True,
        delay: float = 0
    ):
        self.lookups = lookups
        self.recipes = recipes
        self.failing_details = failing_details or set()
        self.healthy = healthy
        self.delay = delay
        self.lookup_calls: list[str] = []
        self.detail_calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def lookup_by_ingredient(self, ingredient: str) -> list[CandidateRef]:
        self.lookup_calls.append(ingredient)
        if self.delay:
            await asyncio.sleep(self.delay)
        ids = self.lookups.get(ingredient, [])
        if isinstance(ids, Exception):
            raise ids
        return [CandidateRef(id=recipe_id) for recipe_id in ids]

    async def fetch_details(self, recipe_id: str) -> Optional[Recipe]:
        self.detail_calls.append(recipe_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0.01)
            if recipe_id in self.failing_details:
                raise ProviderError(f"boom {recipe_id}")
            return self.recipes.get(recipe_id)
        finally:
            self.in_flight -= 1

    async def check_health(self) -> bool:
        return self.healthy


@pytest.fixture
def chicken_provider():
    recipes = {
        "1": make_recipe("1", "Chicken Breast", "salt", title="Salted Chicken"),
        "2": make_recipe("2", "rice", "chicken", "onion", title="Chicken Rice"),
        "3": make_recipe("3", "rice", title="Plain Rice"),
    }
    return FakeProvider(
        lookups={"chicken": ["1", "2"], "rice": ["2", "3"]},
        recipes=recipes
    )
