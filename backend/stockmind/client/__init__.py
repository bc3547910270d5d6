"""Python client for the StockMind API with cached query hooks."""
from stockmind.client.api import ApiClient, ApiClientError
from stockmind.client.cache import QueryCache
from stockmind.client.hooks import CachedQuery, use_current_user, use_projects, use_script

__all__ = [
    "ApiClient",
    "ApiClientError",
    "QueryCache",
    "CachedQuery",
    "use_current_user",
    "use_projects",
    "use_script",
]
