"""Tests for the LRCLIB client using a mocked requests session"""

from unittest.mock import MagicMock

import pytest

from bridge.lrclib_client import LrcLibClient


def _response(status=200, payload=None):
    r = MagicMock()
    r.status_code = status
    r.json.return_value = payload
    if status >= 400 and status != 404:
        r.raise_for_status.side_effect = RuntimeError(f"HTTP {status}")
    return r


@pytest.fixture
def session():
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return LrcLibClient(base_url="https://lrclib.test/", user_agent="arkia-tests", session=session)


class TestLrcLibClient:
    def test_sets_user_agent_and_strips_base_url(self, client, session):
        assert session.headers["User-Agent"] == "arkia-tests"
        assert client.base_url == "https://lrclib.test"

    def test_get_hit_returns_plain_lyrics(self, client, session):
        session.get.return_value = _response(payload={"plainLyrics": "  line a\nline b  ", "syncedLyrics": None})

        assert client.lookup_plain("Song", "Band", 181.6) == "line a\nline b"

        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "https://lrclib.test/api/get"
        assert params == {"track_name": "Song", "artist_name": "Band", "duration": 182}

    def test_duration_omitted_when_unknown(self, client, session):
        session.get.return_value = _response(payload={"plainLyrics": "x"})

        client.lookup_plain("Song", "Band", None)

        assert "duration" not in session.get.call_args.kwargs["params"]

    def test_falls_back_to_search_and_strips_synced(self, client, session):
        session.get.side_effect = [
            _response(status=404),
            _response(payload=[
                {"plainLyrics": None, "syncedLyrics": "[00:01.00]hello\n[00:02.00]world"},
                {"plainLyrics": "second result"},
            ]),
        ]

        assert client.lookup_plain("Song", "Band") == "hello\nworld"

        search_call = session.get.call_args_list[1]
        assert search_call.args[0] == "https://lrclib.test/api/search"
        assert search_call.kwargs["params"] == {"q": "Band Song", "artist_name": "Band"}

    def test_instrumental_returns_none(self, client, session):
        session.get.return_value = _response(payload={"instrumental": True, "plainLyrics": None})
        assert client.lookup_plain("Song", "Band") is None

    def test_no_match_returns_none(self, client, session):
        session.get.side_effect = [_response(status=404), _response(payload=[])]

        res = client.fetch_best("Song", "Band")

        assert res.source == "none"

    def test_server_error_propagates(self, client, session):
        session.get.return_value = _response(status=500)
        with pytest.raises(RuntimeError):
            client.lookup_plain("Song", "Band")

    def test_search_respects_limit(self, client, session):
        session.get.return_value = _response(payload=[{"id": i} for i in range(20)])
        assert len(client.search("q", limit=3)) == 3
