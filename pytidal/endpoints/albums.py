"""Endpoint functions related to albums."""

from typing import TYPE_CHECKING

from pytidal.models import Album, Track

if TYPE_CHECKING:
    from pytidal.client import Tidal


class Albums:
    """Album lookups. Obtain through Tidal.albums()."""

    def __init__(self, client: "Tidal") -> None:
        self.client = client

    async def get(self, id: str) -> Album:
        result = await self.client.get(f"/albums/{id}")
        return self.client.convert_result(result, Album.from_api)

    async def search(self, term: str, limit: int | None = None) -> list[Album]:
        found = await self.client.searches().find(term, limit)
        return found.albums.items

    async def tracks(self, id: str) -> list[Track]:
        """Get the tracks of an album, in album order."""
        result = await self.client.get(f"/albums/{id}/tracks")
        return self.client.convert_items(result, Track.from_api)
