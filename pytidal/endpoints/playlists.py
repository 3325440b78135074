"""
Endpoint functions related to playlists.

Reading playlists works like any other resource. Editing is guarded by an
ETag: the client first reads the ETag of /playlists/{uuid}/items, then sends
it back as If-None-Match with the change. A stale ETag makes TIDAL reject
the edit (surfaced as a ClientError) instead of overwriting a concurrent
change.
"""

from typing import TYPE_CHECKING

from pytidal.core.logger import get_logger
from pytidal.models import Playlist, Track

if TYPE_CHECKING:
    from pytidal.client import Tidal


logger = get_logger(__name__)


class Playlists:
    """Playlist lookups and edits. Obtain through Tidal.playlists()."""

    def __init__(self, client: "Tidal") -> None:
        self.client = client

    async def get(self, id: str) -> Playlist:
        """Get a playlist by uuid."""
        result = await self.client.get(f"/playlists/{id}")
        return self.client.convert_result(result, Playlist.from_api)

    async def search(self, term: str, limit: int | None = None) -> list[Playlist]:
        found = await self.client.searches().find(term, limit)
        return found.playlists.items

    async def tracks(self, id: str) -> list[Track]:
        """Get the tracks of a playlist, in playlist order."""
        result = await self.client.get(f"/playlists/{id}/tracks")
        return self.client.convert_items(result, Track.from_api)

    async def create(self, title: str, description: str) -> Playlist:
        """
        Create a playlist owned by the logged-in user.

        Args:
            title: Playlist title.
            description: Playlist description, may be empty.

        Returns:
            Playlist: The new playlist as returned by the API.
        """
        url = f"/users/{self.client.user_id}/playlists"
        form = {"title": title, "description": description}
        logger.info(f"Creating playlist '{title}' for user {self.client.user_id}")
        result = await self.client.post(url, form)
        return self.client.convert_result(result, Playlist.from_api)

    async def add_tracks(
        self,
        id: str,
        tracks: list[Track],
        add_dupes: bool = False
    ) -> Playlist:
        """
        Append tracks to a playlist.

        Args:
            id: Playlist uuid.
            tracks: Tracks to add, in order. Each must have an id.
            add_dupes: If True, tracks already in the playlist are added
                       again; if False, the API refuses duplicates.

        Returns:
            Playlist: The playlist as it is after the edit.

        Raises:
            ValueError: If a track has no id. Nothing is sent in that case.
            EtagError: If the items endpoint returns no ETag.

        Behavior:
            1. GET /playlists/{id}/items to read the current ETag
            2. POST trackIds (comma separated) and onDupes with If-None-Match
            3. GET /playlists/{id} to return the updated playlist
        """
        missing = [index for index, track in enumerate(tracks) if track.id is None]
        if missing:
            raise ValueError(f"Tracks at positions {missing} have no id")

        url = f"/playlists/{id}/items"

        etag = await self.client.etag(url)

        form = {
            "trackIds": ",".join(str(track.id) for track in tracks),
            "onDupes": "ADD" if add_dupes else "FAIL",
        }
        logger.info(f"Adding {len(tracks)} track(s) to playlist {id}")
        await self.client.post(url, form, etag)

        return await self.get(id)

    async def user_playlists(self) -> list[Playlist]:
        """Get the playlists of the logged-in user."""
        url = f"/users/{self.client.user_id}/playlists"
        result = await self.client.get(url)
        return self.client.convert_items(result, Playlist.from_api)
