import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from bridge.host_bridge import HostBridge
from core.config import APP_NAME, ORG_NAME, load_config
from core.controller import PlayerController
from core.logging_setup import setup_logging
from core.state import AppState
from player.player import Player
from ui.main_window import MainWindow
from ui.workers.bridge_worker import BridgeRunner

logger = logging.getLogger("arkia")


def init_app_state() -> AppState:
    config = load_config()
    setup_logging(config)
    logger.info("Starting %s (data dir: %s)", APP_NAME, config.app_data_dir)

    app_state = AppState(config)
    app_state.bridge = HostBridge(config)

    try:
        app_state.player = Player(volume=config.volume)
    except Exception as e:
        logger.exception("Failed to initialize audio player")
        app_state.player = None
        app_state.queue(f"Failed to initialize audio player: {e}", "error")

    return app_state


def main() -> int:
    qt_app = QApplication(sys.argv)
    qt_app.setOrganizationName(ORG_NAME)
    qt_app.setApplicationName(APP_NAME)

    app_state = init_app_state()
    controller = PlayerController(
        app_state,
        bridge=app_state.bridge,
        player=app_state.player,
        runner=BridgeRunner(),
    )

    main_window = MainWindow(app_state, controller)
    app_state.bridge.dialog_parent = main_window
    main_window.show()

    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
