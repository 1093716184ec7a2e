"""
Pantry Chef Backend - FastAPI Application
Main entry point for the ingredient-based recipe finder API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import CORS_ORIGINS, LOG_LEVEL, MAX_INGREDIENTS, RECIPE_PROVIDER, SEARCH_TIMEOUT
from pantry.errors import IngredientValidationError
from pantry.finder import find_recipes, validate_ingredients
from pantry.models import Recipe, SearchStatus
from pantry.providers import RecipeProvider, check_provider_health, create_provider
from pantry.storage import InMemoryRecipeStore, SavedRecipeStore

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

STATUS_MESSAGES = {
    SearchStatus.MATCHED: "Here are recipes you can make with your ingredients.",
    SearchStatus.RELATED: "No exact match found, but here are some related recipes.",
    SearchStatus.FALLBACK: (
        "We couldn't find a matching recipe, so we generated a simple one "
        "from your ingredients."
    ),
    SearchStatus.EMPTY: "Please enter at least one ingredient.",
}

recipe_provider = create_provider(RECIPE_PROVIDER)
recipe_store = InMemoryRecipeStore()


def get_provider() -> RecipeProvider:
    return recipe_provider


def get_store() -> SavedRecipeStore:
    return recipe_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Pantry Chef backend v%s started - provider: %s", VERSION, RECIPE_PROVIDER)
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Pantry Chef API",
    description="Find recipes you can cook with the ingredients you have",
    version=VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response Models
class FindRequest(BaseModel):
    ingredients: list[str]


class SaveRequest(BaseModel):
    recipe: dict


class HealthResponse(BaseModel):
    status: str
    provider: str


# API Endpoints
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Pantry Chef API is running",
        "version": VERSION,
        "provider": RECIPE_PROVIDER,
        "max_ingredients": MAX_INGREDIENTS
    }


@app.get("/health", response_model=HealthResponse)
async def health_check(provider: RecipeProvider = Depends(get_provider)):
    """Health check endpoint"""
    healthy = await check_provider_health(provider)
    return HealthResponse(
        status="healthy" if healthy else "provider_unavailable",
        provider=RECIPE_PROVIDER
    )


@app.post("/recipes/find")
async def find(request: FindRequest, provider: RecipeProvider = Depends(get_provider)):
    """
    Rank recipes for 1-5 ingredients.
    Falls back to a generated recipe when the provider has nothing usable.
    """
    try:
        ingredients = validate_ingredients(request.ingredients)
    except IngredientValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = await find_recipes(ingredients, provider, timeout=SEARCH_TIMEOUT)
    payload = result.to_dict()
    payload["message"] = STATUS_MESSAGES[result.status]
    return payload


@app.post("/users/{user_id}/saved-recipes", status_code=201)
async def save_recipe(user_id: str, request: SaveRequest, store: SavedRecipeStore = Depends(get_store)):
    """Save a recipe exactly as it was returned by a search"""
    recipe = Recipe.from_dict(request.recipe)
    if not recipe.id or not recipe.title:
        raise HTTPException(status_code=422, detail="Recipe needs an id and a title")
    return store.save(user_id, recipe).to_dict()


@app.get("/users/{user_id}/saved-recipes")
async def list_saved_recipes(user_id: str, store: SavedRecipeStore = Depends(get_store)):
    """Saved recipes, newest first"""
    return [saved.to_dict() for saved in store.list_saved(user_id)]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
