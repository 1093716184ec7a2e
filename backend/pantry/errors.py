"""
Pantry Chef exceptions
"""


class PantryError(Exception):
    """Base exception for recipe search errors"""
    pass


class ProviderError(PantryError):
    """Raised when a recipe provider call fails"""
    pass


class RateLimitError(ProviderError):
    """Raised when the provider quota or rate limit is hit"""
    pass


class ProviderUnavailableError(PantryError):
    """Raised when no provider data could be obtained at all"""
    pass


class IngredientValidationError(PantryError, ValueError):
    """Raised for an ingredient list outside the accepted size"""
    pass
