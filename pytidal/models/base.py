"""
Shared enums and parsing helpers for TIDAL response records.

Every record is a frozen dataclass built by a from_api() classmethod. All
fields are optional because the API omits keys freely depending on the
endpoint (an album embedded in a track carries far less than /albums/{id}).
Unknown keys are ignored. A value of the wrong JSON type raises ParseError,
and so does an unknown enum value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from pytidal.core.exceptions import ParseError


T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class ModelType(str, Enum):
    """Value of the "type" key on artists, albums and playlists."""
    ALBUM = "ALBUM"
    ARTIST = "ARTIST"
    EDITORIAL = "EDITORIAL"
    MAIN = "MAIN"
    USER = "USER"
    PODCAST = "PODCAST"
    CONTRIBUTOR = "CONTRIBUTOR"


class ArtistType(str, Enum):
    ARTIST = "ARTIST"
    CONTRIBUTOR = "CONTRIBUTOR"


class AudioMode(str, Enum):
    MONO = "MONO"
    STEREO = "STEREO"
    SONY_360_REALITY_AUDIO = "SONY_360RA"
    DOLBY_ATMOS = "DOLBY_ATMOS"


class AudioQuality(str, Enum):
    """Best quality a track or album is available in. HI_RES is sold as MQA "Master"."""
    LOSSLESS = "LOSSLESS"
    MASTER = "HI_RES"
    HIGH = "HIGH"
    LOW = "LOW"


def expect_dict(data: Any, record: str) -> dict[str, Any]:
    """
    Check that a decoded JSON value is an object.

    Raises:
        ParseError: If data is not a dict.
    """
    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object for {record}, got {type(data).__name__}",
            details={"record": record}
        )
    return data


def parse_enum(enum_cls: type[E], value: Any) -> E | None:
    """
    Convert an API string into an enum member.

    Returns:
        The member, or None when value is None.

    Raises:
        ParseError: If value is not one of the enum's values.
    """
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ParseError(
            f"Unknown {enum_cls.__name__} value: {value!r}",
            details={"enum": enum_cls.__name__, "value": value}
        ) from e


def parse_scalar(data: dict[str, Any], key: str, kind: type, record: str) -> Any:
    """
    Read data[key] and check it is a JSON value of the given kind.

    bool is never accepted for int or float fields, and int is accepted for
    float fields (returned as float).

    Returns:
        The value, or None when the key is missing or null.

    Raises:
        ParseError: If the value has another type.
    """
    value = data.get(key)
    if value is None:
        return None

    if isinstance(value, bool) and kind is not bool:
        is_valid = False
    elif kind is float and isinstance(value, int):
        return float(value)
    else:
        is_valid = isinstance(value, kind)

    if not is_valid:
        raise ParseError(
            f"Expected {kind.__name__} for {record}.{key}, got {type(value).__name__}",
            details={"record": record, "key": key, "value": repr(value)[:100]}
        )
    return value


def parse_list(
    values: Any,
    parse_item: Callable[[Any], T],
    record: str
) -> list[T] | None:
    """
    Apply parse_item to each element of a JSON array.

    Returns:
        The parsed list, or None when values is None.

    Raises:
        ParseError: If values is not a list, or an element fails to parse.
    """
    if values is None:
        return None
    if not isinstance(values, list):
        raise ParseError(
            f"Expected a JSON array for {record}, got {type(values).__name__}",
            details={"record": record}
        )
    return [parse_item(value) for value in values]


def parse_optional(value: Any, parse: Callable[[Any], T]) -> T | None:
    """Apply parse unless value is None."""
    if value is None:
        return None
    return parse(value)


@dataclass(frozen=True)
class ItemPage(Generic[T]):
    """
    The {"items": [...]} envelope used by every list endpoint.

    Attributes:
        items: Parsed records, in API order.
        limit: Page size requested, when reported.
        offset: Index of the first item, when reported.
        total_number_of_items: Size of the whole collection, when reported.
    """
    items: list[T] = field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    total_number_of_items: int | None = None

    @classmethod
    def from_api(cls, data: Any, parse_item: Callable[[Any], T]) -> "ItemPage[T]":
        data = expect_dict(data, "ItemPage")
        if "items" not in data:
            raise ParseError(
                "Missing 'items' in list response",
                details={"record": "ItemPage", "keys": sorted(data)}
            )
        return cls(
            items=parse_list(data["items"], parse_item, "ItemPage.items") or [],
            limit=parse_scalar(data, "limit", int, "ItemPage"),
            offset=parse_scalar(data, "offset", int, "ItemPage"),
            total_number_of_items=parse_scalar(data, "totalNumberOfItems", int, "ItemPage"),
        )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
