"""Endpoint functions related to tracks."""

from typing import TYPE_CHECKING

from pytidal.models import Track

if TYPE_CHECKING:
    from pytidal.client import Tidal


class Tracks:
    """Track lookups. Obtain through Tidal.tracks()."""

    def __init__(self, client: "Tidal") -> None:
        self.client = client

    async def search(self, term: str, limit: int | None = None) -> list[Track]:
        found = await self.client.searches().find(term, limit)
        return found.tracks.items
