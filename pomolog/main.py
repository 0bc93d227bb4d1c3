"""Application entry point.

Builds the Qt application, opens the store, restores the saved timer and
session log, and shows the main window.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication

from pomolog.core.app_state import AppState
from pomolog.core.config import APP_NAME, AppConfig
from pomolog.core.logger import get_logger
from pomolog.data.storage import Storage
from pomolog.ui.main_window import MainWindow
from pomolog.ui.styles import apply_theme


log = logging.getLogger(__name__)


def main(config: AppConfig | None = None) -> int:
    config = config or AppConfig.from_env()
    get_logger(log_dir=config.log_dir, level=config.log_level, console=config.console_log)
    log.info(f"=== Starting {APP_NAME}, data in '{config.data_dir}' ===")

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    apply_theme(app)

    storage = Storage(config.db_path)
    storage.init_db()

    app_state = AppState()
    # Window first so it hears anything rehydration announces
    window = MainWindow(app_state=app_state)
    app_state.load_from_storage(storage)

    app.aboutToQuit.connect(app_state.flush)
    window.show()
    QTimer.singleShot(0, window.sync_after_load)
    return app.exec()


def run() -> None:
    try:
        raise SystemExit(main())
    except SystemExit:
        raise
    except Exception:
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)


if __name__ == "__main__":
    run()
