"""
Endpoint namespaces for pytidal.

Each namespace wraps a Tidal client and groups the calls for one kind of
resource. They are created by the client's accessors:

    client.albums()     -> Albums
    client.artists()    -> Artists
    client.playlists()  -> Playlists
    client.searches()   -> Search
    client.tracks()     -> Tracks
"""

from pytidal.endpoints.albums import Albums
from pytidal.endpoints.artists import Artists
from pytidal.endpoints.playlists import Playlists
from pytidal.endpoints.search import DEFAULT_SEARCH_LIMIT, Search
from pytidal.endpoints.tracks import Tracks

__all__ = [
    "Albums",
    "Artists",
    "Playlists",
    "Search",
    "Tracks",
    "DEFAULT_SEARCH_LIMIT",
]
