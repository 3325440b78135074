"""Test the albums endpoint"""

import pytest

from pytidal import AudioMode, AudioQuality, ModelType


class TestAlbums:

    @pytest.mark.asyncio
    async def test_get(self, client, fake_api):
        """Test fetching an album by id"""
        fake_api.add_file("GET", "/albums/79914998", "album.json")

        album = await client.albums().get("79914998")

        assert album.id == 79914998
        assert album.title == "My Album"
        assert album.number_of_tracks == 11
        assert album.release_date == "2017-10-20"
        assert album.type == ModelType.ALBUM
        assert album.audio_quality == AudioQuality.MASTER
        assert album.audio_modes == [AudioMode.STEREO]
        assert album.artists[0].name == "myband"
        assert album.artists[0].type == ModelType.MAIN
        assert album.version is None

    @pytest.mark.asyncio
    async def test_tracks(self, client, fake_api):
        """Test listing album tracks in order"""
        fake_api.add_file("GET", "/albums/79914998/tracks", "album_tracks.json")

        tracks = await client.albums().tracks("79914998")

        assert [track.track_number for track in tracks] == [1, 2]
        first = tracks[0]
        assert first.id == 79914999
        assert first.title == "The Sin and the Sentence"
        assert first.replay_gain == -10.59
        assert first.isrc == "NLA321700165"
        assert first.album.id == 79914998
        assert first.artist.name == "myband"

    @pytest.mark.asyncio
    async def test_search(self, client, fake_api):
        """Test searching keeps only the albums"""
        fake_api.add_file("GET", "/search", "search.json")

        albums = await client.albums().search("myband")

        assert [album.id for album in albums] == [138458220, 79914998]
