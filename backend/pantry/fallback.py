"""
Fallback Recipe Synthesizer
Builds a generic recipe when no provider data is available or nothing matched
"""

import re

from config import FALLBACK_READY_MINUTES, FALLBACK_SERVINGS
from pantry.models import Ingredient, Recipe
from pantry.normalizer import clean_user_ingredients, normalize_all

FALLBACK_NOTE = (
    "This recipe was generated from your ingredients because no matching "
    "recipe could be retrieved from a recipe provider."
)

PANTRY_STAPLES = ["salt", "pepper", "oil", "butter", "garlic"]

GENERIC_INSTRUCTIONS = [
    "Wash and chop all ingredients into bite-sized pieces",
    "Heat oil or butter in a pan over medium heat",
    "Add garlic and sauté for 30 seconds",
    "Add the remaining ingredients and cook, stirring, for 10-15 minutes",
    "Season with salt and pepper to taste",
    "Serve hot",
]

FALLBACK_TIPS = "Add a splash of water if the pan gets too dry"


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text).strip("-")


def synthesize(user_ingredients: list[str]) -> Recipe:
    """Deterministic generic recipe for the given ingredients"""
    your_ingredients = clean_user_ingredients(user_ingredients)
    first = your_ingredients[0].strip() if your_ingredients else "Pantry"
    canonical = normalize_all(your_ingredients)

    return Recipe(
        id="fallback-" + (_slug("-".join(canonical)) or "pantry"),
        title=f"Simple {first} Dish",
        ingredients=[Ingredient(name=name) for name in canonical]
        + [Ingredient(name=name, measure="to taste") for name in PANTRY_STAPLES],
        instructions=list(GENERIC_INSTRUCTIONS),
        cuisine="Any",
        category="Home cooking",
        source="Pantry Chef",
        ready_in_minutes=FALLBACK_READY_MINUTES,
        servings=FALLBACK_SERVINGS,
        difficulty="easy",
        your_ingredients=list(your_ingredients),
        pantry_ingredients=list(PANTRY_STAPLES),
        tips=FALLBACK_TIPS,
        note=FALLBACK_NOTE
    )
