"""
Recipe providers
"""

from config import RECIPE_PROVIDER
from pantry.providers.base import RecipeProvider, HTTPRecipeProvider, check_provider_health
from pantry.providers.mealdb import MealDbProvider
from pantry.providers.spoonacular import SpoonacularProvider

PROVIDERS = {
    "mealdb": MealDbProvider,
    "spoonacular": SpoonacularProvider,
}


def create_provider(name: str = RECIPE_PROVIDER, **kwargs) -> RecipeProvider:
    """Build the provider registered under `name`"""
    try:
        provider_cls = PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown recipe provider {name!r}; expected one of {', '.join(PROVIDERS)}"
        ) from None
    return provider_cls(**kwargs)


__all__ = [
    "RecipeProvider",
    "HTTPRecipeProvider",
    "check_provider_health",
    "MealDbProvider",
    "SpoonacularProvider",
    "create_provider",
]
