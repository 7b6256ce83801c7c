"""Search index and match scanning."""

from .index import SearchIndex, SearchMatch, find_matches

__all__ = ["SearchIndex", "SearchMatch", "find_matches"]
