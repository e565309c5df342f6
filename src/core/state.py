from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error

class AppState(QObject):
    notification = Signal(object)   # emits Notify

    def __init__(self, config=None):
        super().__init__()
        self.config = config
        self.player = None
        self.bridge = None
        self.queued_notifications: list[Notify] = []

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))

    def queue(self, message: str, notify_type: str = "info"):
        # for messages produced before the main window listens
        self.queued_notifications.append(Notify(message=message, notify_type=notify_type))
