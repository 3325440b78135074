"""Search result record."""

from dataclasses import dataclass, field
from typing import Any

from pytidal.models.album import Album
from pytidal.models.artist import Artist
from pytidal.models.base import ItemPage, expect_dict
from pytidal.models.playlist import Playlist
from pytidal.models.track import Track


@dataclass(frozen=True)
class SearchResult:
    """
    Response of /search: one page per resource kind.

    A kind missing from the response (e.g. when the search was restricted
    with a "types" parameter) comes back as an empty page.
    """
    artists: ItemPage[Artist] = field(default_factory=ItemPage)
    albums: ItemPage[Album] = field(default_factory=ItemPage)
    playlists: ItemPage[Playlist] = field(default_factory=ItemPage)
    tracks: ItemPage[Track] = field(default_factory=ItemPage)

    @classmethod
    def from_api(cls, data: Any) -> "SearchResult":
        data = expect_dict(data, "SearchResult")

        def page(key: str, parse_item) -> ItemPage:
            if data.get(key) is None:
                return ItemPage()
            return ItemPage.from_api(data[key], parse_item)

        return cls(
            artists=page("artists", Artist.from_api),
            albums=page("albums", Album.from_api),
            playlists=page("playlists", Playlist.from_api),
            tracks=page("tracks", Track.from_api),
        )
