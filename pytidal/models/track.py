"""Track record."""

from dataclasses import dataclass, field
from typing import Any

from pytidal.models.album import Album
from pytidal.models.artist import Artist
from pytidal.models.base import (
    AudioMode,
    AudioQuality,
    expect_dict,
    parse_enum,
    parse_list,
    parse_optional,
    parse_scalar,
)


@dataclass(frozen=True)
class Track:
    """
    A TIDAL track.

    Unlike albums, audio_modes and artists are always lists (empty when the
    API leaves them out), so callers can iterate without a None check.

    Attributes:
        id: Numeric track id. Required by Playlists.add_tracks().
        title: Track title.
        duration: Length in seconds.
        replay_gain: ReplayGain adjustment in dB.
        peak: Peak amplitude (0.0-1.0).
        track_number: Position on its volume.
        volume_number: Disc number.
        isrc: International Standard Recording Code.
        editable: Whether the track can be edited in the containing playlist.
        artist: Main artist.
        artists: All credited artists.
        album: Album the track belongs to (partial record).
    """
    id: int | None = None
    title: str | None = None
    duration: int | None = None
    replay_gain: float | None = None
    peak: float | None = None
    allow_streaming: bool | None = None
    stream_ready: bool | None = None
    stream_start_date: str | None = None
    premium_streaming_only: bool | None = None
    track_number: int | None = None
    volume_number: int | None = None
    version: str | None = None
    popularity: int | None = None
    copyright: str | None = None
    url: str | None = None
    isrc: str | None = None
    editable: bool | None = None
    explicit: bool | None = None
    audio_quality: AudioQuality | None = None
    audio_modes: list[AudioMode] = field(default_factory=list)
    artist: Artist | None = None
    artists: list[Artist] = field(default_factory=list)
    album: Album | None = None

    @classmethod
    def from_api(cls, data: Any) -> "Track":
        data = expect_dict(data, "Track")
        return cls(
            id=parse_scalar(data, "id", int, "Track"),
            title=parse_scalar(data, "title", str, "Track"),
            duration=parse_scalar(data, "duration", int, "Track"),
            replay_gain=parse_scalar(data, "replayGain", float, "Track"),
            peak=parse_scalar(data, "peak", float, "Track"),
            allow_streaming=parse_scalar(data, "allowStreaming", bool, "Track"),
            stream_ready=parse_scalar(data, "streamReady", bool, "Track"),
            stream_start_date=parse_scalar(data, "streamStartDate", str, "Track"),
            premium_streaming_only=parse_scalar(data, "premiumStreamingOnly", bool, "Track"),
            track_number=parse_scalar(data, "trackNumber", int, "Track"),
            volume_number=parse_scalar(data, "volumeNumber", int, "Track"),
            version=parse_scalar(data, "version", str, "Track"),
            popularity=parse_scalar(data, "popularity", int, "Track"),
            copyright=parse_scalar(data, "copyright", str, "Track"),
            url=parse_scalar(data, "url", str, "Track"),
            isrc=parse_scalar(data, "isrc", str, "Track"),
            editable=parse_scalar(data, "editable", bool, "Track"),
            explicit=parse_scalar(data, "explicit", bool, "Track"),
            audio_quality=parse_enum(AudioQuality, data.get("audioQuality")),
            audio_modes=parse_list(
                data.get("audioModes"),
                lambda value: parse_enum(AudioMode, value),
                "Track.audioModes"
            ) or [],
            artist=parse_optional(data.get("artist"), Artist.from_api),
            artists=parse_list(data.get("artists"), Artist.from_api, "Track.artists") or [],
            album=parse_optional(data.get("album"), Album.from_api),
        )
