from __future__ import annotations

from PySide6.QtCore import Qt, QTimer, QEasingCurve, QPoint, QPropertyAnimation
from PySide6.QtWidgets import QWidget, QFrame, QLabel, QHBoxLayout, QGraphicsOpacityEffect

# kind -> (background, border)
_COLORS = {
    "info": ("#0b0c0d", "#2a9d8f"),
    "success": ("#06231f", "#2a9d8f"),
    "warning": ("#2a1a05", "#f59e0b"),
    "error": ("#2a0a0a", "#ef4444"),
}


def normalize_kind(kind: str | None) -> str:
    kind = (kind or "info").lower()
    if kind == "warn":
        kind = "warning"
    return kind if kind in _COLORS else "info"


class ToastWidget(QFrame):
    def __init__(self, message: str, kind: str, parent: QWidget):
        super().__init__(parent)
        bg, border = _COLORS[normalize_kind(kind)]

        self.setObjectName("Toast")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(f"""
        QFrame#Toast {{
            background: {bg};
            border: 1px solid {border};
            border-radius: 10px;
        }}
        QLabel {{ color: #ffffff; font-size: 12px; }}
        """)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        self.label = QLabel(message)
        self.label.setWordWrap(True)
        layout.addWidget(self.label)

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)
        self._anim: QPropertyAnimation | None = None

    def fade(self, start: float, end: float, on_done=None):
        self._anim = QPropertyAnimation(self._opacity, b"opacity", self)
        self._anim.setDuration(180)
        self._anim.setStartValue(start)
        self._anim.setEndValue(end)
        self._anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        if on_done is not None:
            self._anim.finished.connect(on_done)
        self._anim.start()


class ToastManager(QWidget):
    """
    Transparent overlay on the host window stacking toasts in the top-right
    corner, newest first.
    """
    def __init__(self, host: QWidget, max_visible: int = 4):
        super().__init__(host)
        self.host = host
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)

        self._toasts: list[ToastWidget] = []
        self._margin = 14
        self._spacing = 10
        self._max_visible = max_visible

        self.raise_()
        self.show()

    def show_toast(self, message: str, notify_type: str = "info", timeout_ms: int = 3000):
        self.setGeometry(self.host.rect())
        self.raise_()

        toast = ToastWidget(message, notify_type, parent=self)
        toast.setFixedWidth(min(420, max(260, self.width() // 2)))
        self._toasts.insert(0, toast)

        while len(self._toasts) > self._max_visible:
            old = self._toasts.pop()
            old.hide()
            old.deleteLater()

        self._layout_toasts()
        toast.show()
        toast.fade(0.0, 1.0)

        QTimer.singleShot(max(500, int(timeout_ms)), lambda: self._dismiss(toast))

    def _dismiss(self, toast: ToastWidget):
        if toast not in self._toasts:
            return

        def remove():
            if toast in self._toasts:
                self._toasts.remove(toast)
            toast.hide()
            toast.deleteLater()
            self._layout_toasts()

        toast.fade(1.0, 0.0, remove)

    def _layout_toasts(self):
        self.setGeometry(self.host.rect())
        x_right = self.width() - self._margin
        y = self._margin
        for t in self._toasts:
            t.adjustSize()
            t.move(QPoint(x_right - t.width(), y))
            y += t.sizeHint().height() + self._spacing
        self.raise_()
