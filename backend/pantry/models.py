"""
Recipe Data Model
Defines the Recipe dataclass and the match/ranking value types
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Ingredient:
    """A single ingredient line of a recipe"""
    name: str
    measure: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "measure": self.measure
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Ingredient":
        return cls(
            name=data.get("name", ""),
            measure=data.get("measure", "")
        )


@dataclass(frozen=True)
class CandidateRef:
    """What a provider lookup returns before details are fetched"""
    id: str
    title: str = ""
    image_url: str = ""


@dataclass(frozen=True)
class Recipe:
    """Represents a complete recipe candidate"""
    id: str
    title: str
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    cuisine: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    image_url: str = ""
    youtube_url: str = ""
    source_url: str = ""
    source: str = ""
    ready_in_minutes: Optional[int] = None
    servings: Optional[int] = None
    difficulty: str = ""
    # Only populated on generated recipes
    your_ingredients: list[str] = field(default_factory=list)
    pantry_ingredients: list[str] = field(default_factory=list)
    tips: str = ""
    note: str = ""

    @property
    def is_synthetic(self) -> bool:
        return bool(self.note)

    def ingredient_names(self) -> list[str]:
        """Raw ingredient names, blanks skipped"""
        return [ing.name for ing in self.ingredients if ing.name and ing.name.strip()]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": list(self.instructions),
            "cuisine": self.cuisine,
            "category": self.category,
            "tags": list(self.tags),
            "image_url": self.image_url,
            "youtube_url": self.youtube_url,
            "source_url": self.source_url,
            "source": self.source,
            "ready_in_minutes": self.ready_in_minutes,
            "servings": self.servings,
            "difficulty": self.difficulty,
            "your_ingredients": list(self.your_ingredients),
            "pantry_ingredients": list(self.pantry_ingredients),
            "tips": self.tips,
            "note": self.note,
            "is_synthetic": self.is_synthetic
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        ingredients = [
            Ingredient.from_dict(ing) if isinstance(ing, dict) else Ingredient(name=str(ing))
            for ing in data.get("ingredients", [])
        ]

        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            ingredients=ingredients,
            instructions=data.get("instructions", []),
            cuisine=data.get("cuisine", ""),
            category=data.get("category", ""),
            tags=data.get("tags", []),
            image_url=data.get("image_url", ""),
            youtube_url=data.get("youtube_url", ""),
            source_url=data.get("source_url", ""),
            source=data.get("source", ""),
            ready_in_minutes=data.get("ready_in_minutes"),
            servings=data.get("servings"),
            difficulty=data.get("difficulty", ""),
            your_ingredients=data.get("your_ingredients", []),
            pantry_ingredients=data.get("pantry_ingredients", []),
            tips=data.get("tips", ""),
            note=data.get("note", "")
        )


@dataclass(frozen=True)
class MatchResult:
    """How one recipe relates to the user's ingredients"""
    matched: list[str]
    missing: list[str]
    score: int

    @property
    def fully_coverable(self) -> bool:
        return not self.missing

    def to_dict(self) -> dict:
        return {
            "matched_ingredients": list(self.matched),
            "missing_ingredients": list(self.missing),
            "match_score": self.score,
            "can_make_with_only": self.fully_coverable
        }


@dataclass(frozen=True)
class ScoredRecipe:
    """A recipe annotated with its match result - only lives for a ranking pass"""
    recipe: Recipe
    match: MatchResult


class SearchStatus(str, Enum):
    MATCHED = "matched"
    RELATED = "related"
    FALLBACK = "fallback"
    EMPTY = "empty"


@dataclass(frozen=True)
class RankedResult:
    """Outcome of one search: a primary recipe plus up to a few alternates"""
    primary: Optional[Recipe]
    alternates: list[Recipe]
    used_fallback: bool
    status: SearchStatus
    matches: dict[str, MatchResult] = field(default_factory=dict)

    def to_dict(self) -> dict:
        def recipe_dict(recipe: Recipe) -> dict:
            data = recipe.to_dict()
            match = self.matches.get(recipe.id)
            if match:
                data.update(match.to_dict())
            return data

        return {
            "status": self.status.value,
            "used_fallback": self.used_fallback,
            "primary": recipe_dict(self.primary) if self.primary else None,
            "alternates": [recipe_dict(r) for r in self.alternates]
        }


@dataclass(frozen=True)
class SavedRecipe:
    """A recipe a user asked to keep"""
    id: str
    user_id: str
    recipe: Recipe
    saved_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "recipe_title": self.recipe.title,
            "recipe": self.recipe.to_dict(),
            "saved_at": self.saved_at.isoformat()
        }
