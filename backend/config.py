"""
Pantry Chef Backend Configuration
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Recipe provider selection: "mealdb" or "spoonacular"
RECIPE_PROVIDER = os.getenv("RECIPE_PROVIDER", "mealdb").lower()

# TheMealDB API
MEALDB_API_URL = os.getenv("MEALDB_API_URL", "https://www.themealdb.com/api/json/v1/1")
MEALDB_AREA = os.getenv("MEALDB_AREA", "")  # e.g. "Indian" to restrict to one cuisine

# Spoonacular API Configuration
SPOONACULAR_API_KEY = os.getenv("SPOONACULAR_API_KEY", "")
SPOONACULAR_BASE_URL = "https://api.spoonacular.com"
SPOONACULAR_LOOKUP_LIMIT = int(os.getenv("SPOONACULAR_LOOKUP_LIMIT", "5"))

# HTTP Settings
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))
HTTP_MAX_RETRIES = int(os.getenv("HTTP_MAX_RETRIES", "3"))
HTTP_RETRY_DELAY = float(os.getenv("HTTP_RETRY_DELAY", "1.0"))
CACHE_TTL = 300  # 5 minutes

# Search Settings
MAX_INGREDIENTS = 5
MAX_ALTERNATES = 3
DETAIL_FETCH_CONCURRENCY = int(os.getenv("DETAIL_FETCH_CONCURRENCY", "5"))
SEARCH_TIMEOUT = float(os.getenv("SEARCH_TIMEOUT", "30"))

# Fallback recipe defaults
FALLBACK_SERVINGS = 2
FALLBACK_READY_MINUTES = 25

# CORS - Frontend URLs
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    os.getenv("FRONTEND_URL", ""),  # Production frontend URL
]
# Filter empty strings
CORS_ORIGINS = [origin for origin in CORS_ORIGINS if origin]
