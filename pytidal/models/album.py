"""Album record."""

from dataclasses import dataclass
from typing import Any

from pytidal.models.artist import Artist
from pytidal.models.base import (
    AudioMode,
    AudioQuality,
    ModelType,
    expect_dict,
    parse_enum,
    parse_list,
    parse_scalar,
)


@dataclass(frozen=True)
class Album:
    """
    A TIDAL album.

    Attributes:
        id: Numeric album id. Example: 79914998
        title: Album title.
        duration: Total length in seconds.
        stream_ready: Whether the album can currently be streamed.
        stream_start_date: ISO timestamp from which streaming is allowed.
        allow_streaming: Whether streaming is permitted at all.
        premium_streaming_only: Whether a paid plan is needed.
        number_of_tracks: Track count.
        number_of_videos: Video count.
        number_of_volumes: Disc count.
        release_date: Release date, "YYYY-MM-DD".
        copyright: Copyright notice.
        version: Edition label, e.g. "Deluxe".
        url: Public web URL.
        cover: Cover image id.
        video_cover: Animated cover id, if any.
        explicit: Whether the album is marked explicit.
        upc: Universal Product Code.
        popularity: Popularity score (0-100).
        audio_quality: Best available quality.
        audio_modes: Available channel configurations.
        artists: Credited artists.
        type: Record kind, normally ALBUM.
    """
    id: int | None = None
    title: str | None = None
    duration: int | None = None
    stream_ready: bool | None = None
    stream_start_date: str | None = None
    allow_streaming: bool | None = None
    premium_streaming_only: bool | None = None
    number_of_tracks: int | None = None
    number_of_videos: int | None = None
    number_of_volumes: int | None = None
    release_date: str | None = None
    copyright: str | None = None
    version: str | None = None
    url: str | None = None
    cover: str | None = None
    video_cover: str | None = None
    explicit: bool | None = None
    upc: str | None = None
    popularity: int | None = None
    audio_quality: AudioQuality | None = None
    audio_modes: list[AudioMode] | None = None
    artists: list[Artist] | None = None
    type: ModelType | None = None

    @classmethod
    def from_api(cls, data: Any) -> "Album":
        data = expect_dict(data, "Album")
        return cls(
            id=parse_scalar(data, "id", int, "Album"),
            title=parse_scalar(data, "title", str, "Album"),
            duration=parse_scalar(data, "duration", int, "Album"),
            stream_ready=parse_scalar(data, "streamReady", bool, "Album"),
            stream_start_date=parse_scalar(data, "streamStartDate", str, "Album"),
            allow_streaming=parse_scalar(data, "allowStreaming", bool, "Album"),
            premium_streaming_only=parse_scalar(data, "premiumStreamingOnly", bool, "Album"),
            number_of_tracks=parse_scalar(data, "numberOfTracks", int, "Album"),
            number_of_videos=parse_scalar(data, "numberOfVideos", int, "Album"),
            number_of_volumes=parse_scalar(data, "numberOfVolumes", int, "Album"),
            release_date=parse_scalar(data, "releaseDate", str, "Album"),
            copyright=parse_scalar(data, "copyright", str, "Album"),
            version=parse_scalar(data, "version", str, "Album"),
            url=parse_scalar(data, "url", str, "Album"),
            cover=parse_scalar(data, "cover", str, "Album"),
            video_cover=parse_scalar(data, "videoCover", str, "Album"),
            explicit=parse_scalar(data, "explicit", bool, "Album"),
            upc=parse_scalar(data, "upc", str, "Album"),
            popularity=parse_scalar(data, "popularity", int, "Album"),
            audio_quality=parse_enum(AudioQuality, data.get("audioQuality")),
            audio_modes=parse_list(
                data.get("audioModes"),
                lambda value: parse_enum(AudioMode, value),
                "Album.audioModes"
            ),
            artists=parse_list(data.get("artists"), Artist.from_api, "Album.artists"),
            type=parse_enum(ModelType, data.get("type")),
        )
