"""
Repository layer for storage access.
"""
from cardsearch.repositories.cache_repo import CacheRepository, connect_cache

__all__ = ["CacheRepository", "connect_cache"]
