"""Test configuration and fixtures"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import tempfile
from pathlib import Path

import pytest
from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication

from core.controller import PlayerController
from core.models import AudioData, TrackMetadata
from core.state import AppState


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """One QApplication for the whole run (offscreen platform)"""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


class InlineRunner:
    """Runs bridge calls synchronously on the calling thread"""

    def __init__(self):
        self.calls = []

    def submit(self, fn, *args, on_result=None, on_error=None):
        self.calls.append((fn, args))
        try:
            result = fn(*args)
        except Exception as e:
            if on_error is None:
                raise
            on_error(e)
            return
        if on_result is not None:
            on_result(result)


class DeferredRunner:
    """Keeps bridge calls until the test completes them, in any order"""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args, on_result=None, on_error=None):
        self.pending.append((fn, args, on_result, on_error))

    def complete(self, i):
        fn, args, on_result, on_error = self.pending[i]
        try:
            result = fn(*args)
        except Exception as e:
            on_error(e)
            return
        on_result(result)


class FakeLoadError(RuntimeError):
    pass


class FakePlayer(QObject):
    loaded = Signal(object)
    loadFailed = Signal(object, str)
    positionChanged = Signal(float)
    durationChanged = Signal(float)
    ended = Signal()
    errorOccurred = Signal(str)

    def __init__(self, duration=180.0):
        super().__init__()
        self.source = None
        self.playing = False
        self.loads = []
        self.position_s = 0.0
        self._duration = duration
        self.closed = False
        self.rejects = set()   # paths the backend turns down after load() returned
        self.hold = False      # keep loads pending until resolve_pending()
        self.pending = None

    def load(self, audio):
        if not audio.data:
            raise FakeLoadError(f"cannot decode {audio.file_path}")
        self.loads.append(audio.file_path)
        self.pending = audio
        if not self.hold:
            self.resolve_pending()

    def resolve_pending(self):
        audio, self.pending = self.pending, None
        if audio.file_path in self.rejects:
            self.loadFailed.emit(audio, "Invalid media")
            return
        self.source = audio
        self.position_s = 0.0
        self.loaded.emit(audio)

    def has_source(self):
        return self.source is not None

    def play(self):
        self.playing = True

    def pause(self):
        self.playing = False

    def seek(self, seconds):
        self.position_s = min(max(0.0, seconds), self._duration)
        return self.position_s

    def duration(self):
        return self._duration if self.source is not None else 0.0

    def close(self):
        self.closed = True
        self.pending = None
        self.source = None
        self.playing = False


class FakeBridge:
    def __init__(self, paths=None, metadata=None):
        self.paths = list(paths or [])
        self.metadata = dict(metadata or {})
        self.missing = set()
        self.undecodable = set()
        self.save_ok = True
        self.saved = []
        self.online = None
        self.online_queries = []

    def open_audio_files(self):
        return list(self.paths)

    def read_metadata(self, path):
        return self.metadata.get(path, TrackMetadata(title=os.path.basename(path), artist="Unknown"))

    def read_file_data(self, path):
        if path in self.missing:
            raise FileNotFoundError(path)
        data = b"" if path in self.undecodable else b"ID3-audio-bytes"
        return AudioData(file_path=path, data=data, mime_type="audio/mpeg")

    def save_lyrics(self, path, text):
        self.saved.append((path, text))
        return self.save_ok

    def fetch_lyrics(self, title, artist, duration_s=None):
        self.online_queries.append((title, artist, duration_s))
        if isinstance(self.online, Exception):
            raise self.online
        return self.online


@pytest.fixture
def app_state():
    return AppState()


@pytest.fixture
def notifications(app_state):
    received = []
    app_state.notification.connect(received.append)
    return received


@pytest.fixture
def fake_player():
    return FakePlayer()


@pytest.fixture
def fake_bridge():
    return FakeBridge(
        paths=["/music/a.mp3", "/music/b.flac"],
        metadata={
            "/music/a.mp3": TrackMetadata(title="Alpha", artist="Ann", lyrics="la la\nla"),
            "/music/b.flac": TrackMetadata(title="Beta", artist="Bob"),
        },
    )


@pytest.fixture
def runner():
    return InlineRunner()


@pytest.fixture
def controller(app_state, fake_bridge, fake_player, runner):
    ctl = PlayerController(app_state, bridge=fake_bridge, player=fake_player, runner=runner)
    yield ctl
    ctl.shutdown()


@pytest.fixture
def loaded_controller(controller):
    """Controller with the two sample tracks imported and the first one playing"""
    controller.add_files()
    controller.play_index(0)
    return controller


@pytest.fixture
def spy():
    """Record every emission of a Qt signal; slots are disconnected afterwards"""
    connections = []

    def collect(signal):
        seen = []

        def record(*args):
            seen.append(args[0] if len(args) == 1 else args)

        signal.connect(record)
        connections.append((signal, record))
        return seen

    yield collect

    for signal, slot in connections:
        try:
            signal.disconnect(slot)
        except (RuntimeError, TypeError):
            pass


@pytest.fixture
def deferred_runner():
    return DeferredRunner()
