"""Artist record."""

from dataclasses import dataclass
from typing import Any

from pytidal.models.base import (
    ArtistType,
    ModelType,
    expect_dict,
    parse_enum,
    parse_list,
    parse_scalar,
)


@dataclass(frozen=True)
class Artist:
    """
    A TIDAL artist, as returned by /artists/{id} or embedded in albums and tracks.

    Attributes:
        id: Numeric artist id. Example: 37312
        name: Display name.
        artist_types: Roles the artist has in the catalogue.
        url: Public web URL.
        picture: Image id; TIDAL serves it from resources.tidal.com.
        popularity: Popularity score (0-100).
        type: Role of the artist in the embedding record (e.g. MAIN).
    """
    id: int | None = None
    name: str | None = None
    artist_types: list[ArtistType] | None = None
    url: str | None = None
    picture: str | None = None
    popularity: int | None = None
    type: ModelType | None = None

    @classmethod
    def from_api(cls, data: Any) -> "Artist":
        data = expect_dict(data, "Artist")

        # /artists/{id} uses camelCase, some embedded artists snake_case
        raw_types = data.get("artistTypes", data.get("artist_types"))

        return cls(
            id=parse_scalar(data, "id", int, "Artist"),
            name=parse_scalar(data, "name", str, "Artist"),
            artist_types=parse_list(
                raw_types,
                lambda value: parse_enum(ArtistType, value),
                "Artist.artistTypes"
            ),
            url=parse_scalar(data, "url", str, "Artist"),
            picture=parse_scalar(data, "picture", str, "Artist"),
            popularity=parse_scalar(data, "popularity", int, "Artist"),
            type=parse_enum(ModelType, data.get("type")),
        )
