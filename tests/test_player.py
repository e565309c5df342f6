"""Tests for the QtMultimedia-backed player"""

import math

import pytest

pytest.importorskip("PySide6.QtMultimedia")

from PySide6.QtMultimedia import QMediaPlayer

from core.models import AudioData
from player.player import PlaybackError, Player


@pytest.fixture
def player(qapp):
    p = Player(volume=0.0)
    yield p
    p.close()


def _audio(path="/music/x.mp3", data=b"not really audio " * 8):
    return AudioData(file_path=path, data=data, mime_type="audio/mpeg")


class TestPlayer:
    def test_empty_data_is_rejected(self, player):
        with pytest.raises(PlaybackError):
            player.load(_audio(data=b""))
        assert not player.has_source()

    def test_play_without_source_raises(self, player):
        with pytest.raises(PlaybackError):
            player.play()

    def test_seek_clamps_to_zero(self, player):
        assert player.seek(-3.0) == 0.0
        assert player.seek(math.nan) == 0.0

    def test_seek_clamps_to_duration(self, player, monkeypatch):
        monkeypatch.setattr(player, "duration", lambda: 10.0)

        assert player.seek(25.0) == 10.0
        assert player.seek(4.5) == 4.5

    def test_volume_is_clamped(self, player):
        player.set_volume(3)
        assert player.audio.volume() == pytest.approx(1.0)
        player.set_volume(-1)
        assert player.audio.volume() == pytest.approx(0.0)


class TestPendingSource:
    """A loaded source only becomes current once the backend accepts it"""

    def _load_pending(self, player, audio):
        player.load(audio)
        if player._pending is None:
            pytest.skip("media backend resolved the source synchronously")

    def test_rejected_source_is_reported_and_not_kept(self, player):
        failed = []
        player.loadFailed.connect(lambda audio, message: failed.append(audio))
        audio = _audio()

        self._load_pending(player, audio)
        player._on_qt_media_status(QMediaPlayer.MediaStatus.InvalidMedia)

        assert failed[:1] == [audio]
        assert not player.has_source()

    def test_accepted_source_becomes_current(self, player):
        loaded = []
        player.loaded.connect(loaded.append)
        audio = _audio()

        self._load_pending(player, audio)
        player._on_qt_media_status(QMediaPlayer.MediaStatus.LoadedMedia)

        assert loaded == [audio]
        assert player.source is audio

    def test_positions_are_held_back_while_loading(self, player):
        positions = []
        player.positionChanged.connect(positions.append)

        self._load_pending(player, _audio())
        player._on_qt_position(1500)

        assert positions == []
