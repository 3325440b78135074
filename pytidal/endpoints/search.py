"""Endpoint functions related to search."""

from typing import TYPE_CHECKING

from pytidal.models import SearchResult

if TYPE_CHECKING:
    from pytidal.client import Tidal


# Page size used when the caller gives none
DEFAULT_SEARCH_LIMIT = 10


class Search:
    """Catalogue search. Obtain through Tidal.searches()."""

    def __init__(self, client: "Tidal") -> None:
        self.client = client

    async def find(self, term: str, limit: int | None = None) -> SearchResult:
        """
        Search artists, albums, playlists and tracks at once.

        Args:
            term: Free-text query.
            limit: Maximum results per kind. Defaults to 10.

        Returns:
            SearchResult: One page per resource kind.
        """
        if limit is None:
            limit = DEFAULT_SEARCH_LIMIT
        params = {"query": term, "limit": str(limit)}
        result = await self.client.get("/search", params)
        return self.client.convert_result(result, SearchResult.from_api)
