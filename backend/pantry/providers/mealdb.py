"""
TheMealDB Integration
Ingredient lookups and recipe details via TheMealDB public API
"""

import logging
import re
from typing import Optional

import httpx

from config import MEALDB_API_URL, MEALDB_AREA
from pantry.models import CandidateRef, Ingredient, Recipe
from pantry.providers.base import HTTPRecipeProvider

logger = logging.getLogger(__name__)

MAX_INGREDIENT_SLOTS = 20


def split_instructions(raw: str) -> list[str]:
    """Break a free-text instruction blob into steps"""
    if not raw:
        return []
    steps = re.split(r"\r?\n+", raw)
    cleaned = []
    for step in steps:
        # Drop "STEP 1" style headers and leading numbering
        step = re.sub(r"^\s*(?:step\s*\d+[\.\):]?|\d+[\.\)])\s*", "", step, flags=re.IGNORECASE).strip()
        if step:
            cleaned.append(step)
    return cleaned


def format_meal(meal: dict) -> Recipe:
    """Convert a TheMealDB meal record to a Recipe"""
    ingredients = []
    for i in range(1, MAX_INGREDIENT_SLOTS + 1):
        name = meal.get(f"strIngredient{i}")
        measure = meal.get(f"strMeasure{i}")
        if name and name.strip():
            ingredients.append(Ingredient(
                name=name.strip(),
                measure=(measure or "").strip()
            ))

    tags = meal.get("strTags") or ""

    return Recipe(
        id=f"mealdb_{meal.get('idMeal', '')}",
        title=meal.get("strMeal") or "",
        ingredients=ingredients,
        instructions=split_instructions(meal.get("strInstructions") or ""),
        cuisine=meal.get("strArea") or "",
        category=meal.get("strCategory") or "",
        tags=[t.strip() for t in tags.split(",") if t.strip()],
        image_url=meal.get("strMealThumb") or "",
        youtube_url=meal.get("strYoutube") or "",
        source_url=meal.get("strSource") or "",
        source="TheMealDB"
    )


class MealDbProvider(HTTPRecipeProvider):
    """Recipe provider backed by TheMealDB"""

    name = "TheMealDB"

    def __init__(
        self,
        base_url: str = MEALDB_API_URL,
        area: str = MEALDB_AREA,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        super().__init__(base_url, transport=transport, **kwargs)
        self.area = area.strip().lower() if area else ""

    async def lookup_by_ingredient(self, ingredient: str) -> list[CandidateRef]:
        query = ingredient.strip().replace(" ", "_")
        result = await self._get("/filter.php", {"i": query})
        meals = (result or {}).get("meals") or []
        return [
            CandidateRef(
                id=f"mealdb_{meal.get('idMeal')}",
                title=meal.get("strMeal") or "",
                image_url=meal.get("strMealThumb") or ""
            )
            for meal in meals
            if meal.get("idMeal")
        ]

    async def fetch_details(self, recipe_id: str) -> Optional[Recipe]:
        meal_id = recipe_id.replace("mealdb_", "", 1) if recipe_id.startswith("mealdb_") else recipe_id
        result = await self._get("/lookup.php", {"i": meal_id})
        meals = (result or {}).get("meals") or []
        if not meals:
            return None

        recipe = format_meal(meals[0])
        if self.area and recipe.cuisine.lower() != self.area:
            logger.debug("Skipping %s: area %r is not %r", recipe.id, recipe.cuisine, self.area)
            return None
        return recipe

    async def check_health(self) -> bool:
        result = await self._get("/list.php", {"a": "list"}, use_cache=False)
        return bool(result and result.get("meals"))
