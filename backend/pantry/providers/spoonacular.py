"""
Spoonacular API Integration
Ingredient lookups and recipe details via the Spoonacular API
"""

import logging
import re
from typing import Optional
from urllib.parse import quote_plus

import httpx

from config import SPOONACULAR_API_KEY, SPOONACULAR_BASE_URL, SPOONACULAR_LOOKUP_LIMIT
from pantry.models import CandidateRef, Ingredient, Recipe
from pantry.providers.base import HTTPRecipeProvider

logger = logging.getLogger(__name__)

ID_PREFIX = "spoonacular_"


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def estimate_difficulty(ready_in_minutes: Optional[int]) -> str:
    """Estimate recipe difficulty from total time"""
    if not ready_in_minutes:
        return ""
    if ready_in_minutes < 30:
        return "easy"
    elif ready_in_minutes < 60:
        return "medium"
    else:
        return "hard"


def youtube_link(title: str, source_url: str = "") -> str:
    """The source itself when it is a video, otherwise a YouTube search"""
    if source_url and "youtube" in source_url:
        return source_url
    if not title:
        return ""
    return f"https://www.youtube.com/results?search_query={quote_plus(title)}"


def parse_instructions(data: dict) -> list[str]:
    instructions = []
    for section in data.get("analyzedInstructions") or []:
        for step in section.get("steps", []):
            step_text = (step.get("step") or "").strip()
            if step_text:
                instructions.append(step_text)

    # Fallback to plain instructions
    if not instructions and data.get("instructions"):
        raw = re.sub(r"<[^>]+>", "\n", data["instructions"])
        steps = re.split(r"\n+|\d+\.", raw)
        instructions = [s.strip() for s in steps if s.strip()]

    return instructions


def convert_to_full_recipe(data: dict) -> Recipe:
    """Convert Spoonacular API response to a Recipe"""
    ingredients = []
    for ing in data.get("extendedIngredients") or []:
        amount = ing.get("amount")
        measure = f"{amount:g} {ing.get('unit', '')}".strip() if isinstance(amount, (int, float)) else ""
        ingredients.append(Ingredient(
            name=ing.get("name") or ing.get("nameClean") or "",
            measure=measure
        ))

    tags = []
    tags.extend(data.get("diets", []))
    tags.extend(data.get("dishTypes", []))

    cuisines = data.get("cuisines", [])
    dish_types = data.get("dishTypes", [])
    ready_in = data.get("readyInMinutes")
    source_url = data.get("sourceUrl") or ""
    title = data.get("title") or ""

    return Recipe(
        id=f"{ID_PREFIX}{data.get('id', '')}",
        title=title,
        ingredients=ingredients,
        instructions=parse_instructions(data),
        cuisine=cuisines[0] if cuisines else "International",
        category=dish_types[0] if dish_types else "",
        tags=tags,
        image_url=data.get("image") or "",
        youtube_url=youtube_link(title, source_url),
        source_url=source_url,
        source="Spoonacular",
        ready_in_minutes=ready_in,
        servings=data.get("servings"),
        difficulty=estimate_difficulty(ready_in)
    )


# ============================================================================
# PROVIDER
# ============================================================================

class SpoonacularProvider(HTTPRecipeProvider):
    """Recipe provider backed by Spoonacular"""

    name = "Spoonacular"

    def __init__(
        self,
        api_key: str = SPOONACULAR_API_KEY,
        base_url: str = SPOONACULAR_BASE_URL,
        lookup_limit: int = SPOONACULAR_LOOKUP_LIMIT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        super().__init__(base_url, transport=transport, **kwargs)
        self.api_key = api_key
        self.lookup_limit = lookup_limit

    def _prepare_params(self, params: dict) -> dict:
        """Add API key to request parameters"""
        params = params.copy()
        params["apiKey"] = self.api_key
        return params

    async def lookup_by_ingredient(self, ingredient: str) -> list[CandidateRef]:
        params = {
            "ingredients": ingredient,
            "number": min(self.lookup_limit, 10),  # Limit to save quota
            "ranking": 1,
            "ignorePantry": True
        }
        result = await self._get("/recipes/findByIngredients", params)
        return [
            CandidateRef(
                id=f"{ID_PREFIX}{item['id']}",
                title=item.get("title", ""),
                image_url=item.get("image", "")
            )
            for item in result or []
            if item.get("id") is not None
        ]

    async def fetch_details(self, recipe_id: str) -> Optional[Recipe]:
        numeric_id = recipe_id[len(ID_PREFIX):] if recipe_id.startswith(ID_PREFIX) else recipe_id
        try:
            numeric_id = int(numeric_id)
        except ValueError:
            return None

        details = await self._get(
            f"/recipes/{numeric_id}/information",
            {"includeNutrition": False}
        )
        if not details:
            return None
        return convert_to_full_recipe(details)

    async def check_health(self) -> bool:
        if not self.api_key:
            logger.warning("SPOONACULAR_API_KEY is not set")
            return False
        result = await self._get(
            "/recipes/findByIngredients",
            {"ingredients": "rice", "number": 1},
            use_cache=False
        )
        return result is not None
