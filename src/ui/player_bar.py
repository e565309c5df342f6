# ui/player_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize
from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QVBoxLayout, QLabel, QToolButton, QPushButton, QSlider, QFrame
)

from core.utils import fmt_seconds
from ui.icons import svg_icon, ACCENT, SVG_PLAY, SVG_PAUSE, SVG_LYRICS, SVG_EYE
from ui.lyrics_panel import LyricsPanel


class PlayerBar(QWidget):
    """
    Bottom transport bar: artwork placeholder, title/artist, scrubber with
    elapsed/remaining time, lyrics toggle, edit button, play/pause and the
    inline lyrics panel.
    """

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller

        self._dragging = False

        root = QHBoxLayout(self)
        root.setContentsMargins(22, 14, 22, 14)
        root.setSpacing(18)

        # --- artwork placeholder ---
        self.artwork = QFrame()
        self.artwork.setObjectName("Artwork")
        self.artwork.setFixedSize(72, 72)
        root.addWidget(self.artwork)

        # --- info + timeline ---
        info = QVBoxLayout()
        info.setSpacing(10)

        top = QHBoxLayout()
        names = QVBoxLayout()
        names.setSpacing(2)
        self.lbl_title = QLabel("")
        self.lbl_title.setObjectName("NowPlaying")
        self.lbl_title.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.lbl_artist = QLabel("")
        self.lbl_artist.setObjectName("Artist")
        names.addWidget(self.lbl_title)
        names.addWidget(self.lbl_artist)
        top.addLayout(names, 1)

        self.btn_lyrics = QToolButton()
        self.btn_lyrics.setIcon(svg_icon(SVG_LYRICS, 20))
        self.btn_lyrics.setIconSize(QSize(20, 20))
        self.btn_lyrics.setToolTip("Toggle lyrics")

        self.btn_edit = QPushButton("Edit Lyrics")
        self.btn_edit.setObjectName("BtnEdit")
        self.btn_edit.setToolTip("Edit lyrics")

        top.addWidget(self.btn_lyrics)
        top.addWidget(self.btn_edit)
        info.addLayout(top)

        timeline = QHBoxLayout()
        timeline.setSpacing(12)
        self.lbl_time = QLabel("0:00")
        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, 1000)
        self.slider.setSingleStep(1000)
        self.slider.setPageStep(5000)
        self.lbl_remaining = QLabel("- 0:00")
        timeline.addWidget(self.lbl_time)
        timeline.addWidget(self.slider, 1)
        timeline.addWidget(self.lbl_remaining)
        info.addLayout(timeline)

        root.addLayout(info, 1)

        # --- play/pause ---
        self.btn_play = QToolButton()
        self.btn_play.setObjectName("BtnPlay")
        self.btn_play.setFixedSize(56, 56)
        self.btn_play.setIcon(svg_icon(SVG_PLAY, 22))
        self.btn_play.setIconSize(QSize(22, 22))
        self.btn_play.setToolTip("Play")
        root.addWidget(self.btn_play)

        # --- lyrics panel (right) ---
        self.lyrics_panel = LyricsPanel()
        self.lyrics_panel.setVisible(False)
        root.addWidget(self.lyrics_panel)

        # --- signals ---
        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)
        self.slider.sliderMoved.connect(self._on_slider_moved)
        self.slider.actionTriggered.connect(self._on_slider_action)

        self.btn_play.clicked.connect(self.controller.toggle_play)
        self.btn_lyrics.clicked.connect(self.controller.toggle_lyrics_visible)
        self.btn_edit.clicked.connect(self.controller.open_editor)

        self.controller.currentTrackChanged.connect(self._on_track_changed)
        self.controller.playingChanged.connect(self._set_playing)
        self.controller.positionChanged.connect(self._on_position)
        self.controller.durationChanged.connect(self._on_duration)
        self.controller.lyricsVisibilityChanged.connect(self._on_lyrics_visibility)
        self.controller.lyricsScrollChanged.connect(self.lyrics_panel.apply_scroll_fraction)

        self.setObjectName("PlayerBar")
        self.setVisible(False)  # shown once something is playing
        self._apply_styles()

    # --- slider handling ---
    def _on_slider_pressed(self):
        self._dragging = True

    def _on_slider_moved(self, value: int):
        # preview while dragging
        self.lbl_time.setText(fmt_seconds(value / 1000.0))

    def _on_slider_released(self):
        self._dragging = False
        self.controller.seek(self.slider.value() / 1000.0)

    def _on_slider_action(self, _action: int):
        # groove clicks and keyboard steps; drags seek on release
        if self._dragging or self.slider.isSliderDown():
            return
        self.controller.seek(self.slider.sliderPosition() / 1000.0)

    # --- controller updates ---
    def _on_track_changed(self, track):
        if track is None:
            self.setVisible(False)
            return
        self.lbl_title.setText(track.title)
        self.lbl_artist.setText(track.artist)
        self.lyrics_panel.set_lyrics(track.lyrics)
        self.setVisible(True)

    def _set_playing(self, playing: bool):
        if playing:
            self.btn_play.setIcon(svg_icon(SVG_PAUSE, 20))
            self.btn_play.setToolTip("Pause")
        else:
            self.btn_play.setIcon(svg_icon(SVG_PLAY, 22))
            self.btn_play.setToolTip("Play")

    def _on_lyrics_visibility(self, visible: bool):
        self.lyrics_panel.setVisible(visible)
        if visible:
            self.btn_lyrics.setIcon(svg_icon(SVG_EYE, 18, ACCENT))
        else:
            self.btn_lyrics.setIcon(svg_icon(SVG_LYRICS, 20))

    def _on_duration(self, seconds: float):
        ms = int(seconds * 1000) if seconds and seconds > 0 else 0
        self.slider.setRange(0, ms or 1000)
        self._update_remaining()

    def _on_position(self, seconds: float):
        self._update_remaining()
        if self._dragging:
            return
        self.lbl_time.setText(fmt_seconds(seconds))
        self.slider.setValue(int((seconds or 0.0) * 1000))

    def _update_remaining(self):
        self.lbl_remaining.setText(f"- {fmt_seconds(self.controller.remaining())}")

    def _apply_styles(self):
        self.setStyleSheet("""
        QWidget#PlayerBar {
            background-color: #0b0c0d;
            border-top: 1px solid #121314;
        }
        QFrame#Artwork {
            background: #111111;
            border-radius: 10px;
        }

        QToolButton {
            border: none;
            background: transparent;
            padding: 8px;
            border-radius: 8px;
        }
        QToolButton:hover { background: #16171a; }

        QToolButton#BtnPlay {
            background: #1e1f22;
            border-radius: 14px;
        }
        QToolButton#BtnPlay:hover { background: #26282c; }

        QPushButton#BtnEdit {
            background: #1e1f22;
            border: none;
            color: #ffffff;
            padding: 8px 10px;
            border-radius: 8px;
        }

        QSlider::groove:horizontal {
            height: 4px;
            background: #1a1b1c;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            width: 12px;
            height: 12px;
            margin: -4px 0;
            border-radius: 6px;
            background: #2a9d8f;
        }
        QSlider::sub-page:horizontal {
            background: #2a9d8f;
            border-radius: 2px;
        }

        QLabel {
            color: rgba(255, 255, 255, 0.7);
            font-size: 13px;
        }
        QLabel#NowPlaying {
            color: #ffffff;
            font-weight: 700;
            font-size: 14px;
        }
        """)
