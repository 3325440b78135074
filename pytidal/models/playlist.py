"""Playlist record."""

from dataclasses import dataclass
from typing import Any

from pytidal.models.artist import Artist
from pytidal.models.base import ModelType, expect_dict, parse_enum, parse_list, parse_scalar


@dataclass(frozen=True)
class Playlist:
    """
    A TIDAL playlist. Playlists are keyed by uuid, not by a numeric id.

    Attributes:
        uuid: Playlist identifier. Example: "7ce7df87-6d37-4465-80db-84535a4e44a4"
        title: Playlist title.
        number_of_tracks: Track count.
        number_of_videos: Video count.
        description: Free-text description.
        duration: Total length in seconds.
        last_updated: ISO timestamp of the last change.
        created: ISO timestamp of creation.
        type: USER for user playlists, EDITORIAL for TIDAL's own.
        public_playlist: Whether other users can see it.
        url: Public web URL.
        image: Image id.
        popularity: Popularity score (0-100).
        square_image: Square image id.
        promoted_artists: Artists featured on editorial playlists.
        last_item_added_at: ISO timestamp of the last addition.
    """
    uuid: str | None = None
    title: str | None = None
    number_of_tracks: int | None = None
    number_of_videos: int | None = None
    description: str | None = None
    duration: int | None = None
    last_updated: str | None = None
    created: str | None = None
    type: ModelType | None = None
    public_playlist: bool | None = None
    url: str | None = None
    image: str | None = None
    popularity: int | None = None
    square_image: str | None = None
    promoted_artists: list[Artist] | None = None
    last_item_added_at: str | None = None

    @classmethod
    def from_api(cls, data: Any) -> "Playlist":
        data = expect_dict(data, "Playlist")
        return cls(
            uuid=parse_scalar(data, "uuid", str, "Playlist"),
            title=parse_scalar(data, "title", str, "Playlist"),
            number_of_tracks=parse_scalar(data, "numberOfTracks", int, "Playlist"),
            number_of_videos=parse_scalar(data, "numberOfVideos", int, "Playlist"),
            description=parse_scalar(data, "description", str, "Playlist"),
            duration=parse_scalar(data, "duration", int, "Playlist"),
            last_updated=parse_scalar(data, "lastUpdated", str, "Playlist"),
            created=parse_scalar(data, "created", str, "Playlist"),
            type=parse_enum(ModelType, data.get("type")),
            public_playlist=parse_scalar(data, "publicPlaylist", bool, "Playlist"),
            url=parse_scalar(data, "url", str, "Playlist"),
            image=parse_scalar(data, "image", str, "Playlist"),
            popularity=parse_scalar(data, "popularity", int, "Playlist"),
            square_image=parse_scalar(data, "squareImage", str, "Playlist"),
            promoted_artists=parse_list(
                data.get("promotedArtists"),
                Artist.from_api,
                "Playlist.promotedArtists"
            ),
            last_item_added_at=parse_scalar(data, "lastItemAddedAt", str, "Playlist"),
        )
