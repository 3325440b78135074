"""Endpoint functions related to artists."""

from typing import TYPE_CHECKING

from pytidal.models import Album, Artist

if TYPE_CHECKING:
    from pytidal.client import Tidal


class Artists:
    """Artist lookups. Obtain through Tidal.artists()."""

    def __init__(self, client: "Tidal") -> None:
        self.client = client

    async def get(self, id: str) -> Artist:
        """
        Get an artist by id.

        Raises:
            NotFoundError: If no artist has this id.
        """
        result = await self.client.get(f"/artists/{id}")
        return self.client.convert_result(result, Artist.from_api)

    async def search(self, term: str, limit: int | None = None) -> list[Artist]:
        """Search the catalogue and keep only the artists."""
        found = await self.client.searches().find(term, limit)
        return found.artists.items

    async def albums(self, id: str) -> list[Album]:
        """Get the albums of an artist."""
        result = await self.client.get(f"/artists/{id}/albums")
        return self.client.convert_items(result, Album.from_api)
