from __future__ import annotations

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication, QMainWindow, QSystemTrayIcon

from pomolog.core.config import TITLE_FLASH_MS


BEEP_INTERVAL_MS = 200
BEEP_SEQUENCE_MS = 3000
ALERT_TITLE = "Time's up!"
ALERT_BODY = "Your pomodoro session has finished."


class CompletionAlerts:
    """Beeps, tray notification and title flash for a finished countdown.

    None of these are required to succeed; a missing tray or muted bell just
    means the user sees the annotation dialog without the extra signal.
    """

    def __init__(self, window: QMainWindow) -> None:
        self._window = window
        self._tray: QSystemTrayIcon | None = None
        self._beeps_left = 0
        self._beep_timer = QTimer(window)
        self._beep_timer.setInterval(BEEP_INTERVAL_MS)
        self._beep_timer.timeout.connect(self._beep)
        self._title_timer = QTimer(window)
        self._title_timer.setSingleShot(True)
        self._title_timer.timeout.connect(self._restore_title)
        self._previous_title = window.windowTitle()

    def prime(self) -> None:
        if self._tray is None and QSystemTrayIcon.isSystemTrayAvailable():
            self._tray = QSystemTrayIcon(self._window.windowIcon(), self._window)
            self._tray.setToolTip(self._window.windowTitle())
            self._tray.show()

    def announce(self) -> None:
        self.prime()
        self._beeps_left = BEEP_SEQUENCE_MS // BEEP_INTERVAL_MS
        self._beep()
        self._beep_timer.start()
        if self._tray is not None:
            self._tray.showMessage(ALERT_TITLE, ALERT_BODY, QSystemTrayIcon.MessageIcon.Information)
        QApplication.alert(self._window)
        if not self._title_timer.isActive():
            self._previous_title = self._window.windowTitle()
        self._window.setWindowTitle(f"{ALERT_TITLE} - Pomodoro")
        self._title_timer.start(TITLE_FLASH_MS)

    def _beep(self) -> None:
        if self._beeps_left <= 0:
            self._beep_timer.stop()
            return
        self._beeps_left -= 1
        QApplication.beep()

    def _restore_title(self) -> None:
        self._window.setWindowTitle(self._previous_title)
