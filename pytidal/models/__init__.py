"""
Data models for TIDAL entities.

Immutable records deserialized from API responses:
    - Artist, Album, Track, Playlist: resource records
    - ItemPage: the {"items": [...]} envelope of list endpoints
    - SearchResult: one ItemPage per resource kind
    - ModelType, ArtistType, AudioMode, AudioQuality: enum fields

Usage:
    from pytidal.models import Artist

    artist = Artist.from_api({"id": 37312, "name": "Trivium"})
"""

from pytidal.models.album import Album
from pytidal.models.artist import Artist
from pytidal.models.base import ArtistType, AudioMode, AudioQuality, ItemPage, ModelType
from pytidal.models.playlist import Playlist
from pytidal.models.search import SearchResult
from pytidal.models.track import Track

__all__ = [
    "Album",
    "Artist",
    "Playlist",
    "Track",
    "ItemPage",
    "SearchResult",
    "ModelType",
    "ArtistType",
    "AudioMode",
    "AudioQuality",
]
