"""
Ranking Engine
Orders scored recipes and picks the primary result plus alternates
"""

from dataclasses import dataclass, field
from typing import Optional

from config import MAX_ALTERNATES
from pantry.models import ScoredRecipe


@dataclass(frozen=True)
class Ranking:
    primary: Optional[ScoredRecipe] = None
    alternates: list[ScoredRecipe] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.primary is None


def sort_scored(scored: list[ScoredRecipe]) -> list[ScoredRecipe]:
    """
    Fully coverable recipes first, then by descending match score.

    sorted() is stable, so equal keys keep their input order.
    """
    return sorted(
        scored,
        key=lambda item: (not item.match.fully_coverable, -item.match.score)
    )


def select(ordered: list[ScoredRecipe], max_alternates: int = MAX_ALTERNATES) -> Ranking:
    """Split an already ordered sequence into primary and alternates"""
    if not ordered:
        return Ranking()
    return Ranking(primary=ordered[0], alternates=list(ordered[1:1 + max_alternates]))


def rank(scored: list[ScoredRecipe], max_alternates: int = MAX_ALTERNATES) -> Ranking:
    return select(sort_scored(scored), max_alternates)


def rankable(scored: list[ScoredRecipe]) -> list[ScoredRecipe]:
    """Recipes that matched at least one user ingredient"""
    return [item for item in scored if item.match.matched]
