from __future__ import annotations

from datetime import datetime

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from pomolog.core.app_state import AppState
from pomolog.core.clock import MS_PER_SECOND
from pomolog.core.config import APP_NAME, MAX_INPUT_SECONDS, TICK_INTERVAL_MS, Preset
from pomolog.core.models import PendingSession, Session, TimerPhase
from pomolog.core.report import format_clock
from pomolog.core.timer import TimerSnapshot
from pomolog.ui.alerts import CompletionAlerts
from pomolog.ui.dialogs import AnnotationDialog, EditSessionDialog, ask_confirmation
from pomolog.ui.report_view import ReportView


REPORT_TAB = "report"
TABS = [
    (Preset.POMODORO.value, "Pomodoro"),
    (Preset.SHORT_BREAK.value, "Short break"),
    (Preset.LONG_BREAK.value, "Long break"),
    (REPORT_TAB, "Report"),
]


class SessionRow(QFrame):
    def __init__(self, session: Session, window: "MainWindow") -> None:
        super().__init__()
        self.setObjectName("Card")
        layout = QHBoxLayout(self)

        main = QVBoxLayout()
        meta = QHBoxLayout()
        when = datetime.fromtimestamp(session.ended_at / MS_PER_SECOND).strftime("%Y-%m-%d %H:%M:%S")
        meta.addWidget(QLabel(when))
        duration = QLabel(format_clock(session.duration_seconds))
        duration.setObjectName("MutedText")
        meta.addWidget(duration)
        meta.addStretch()
        main.addLayout(meta)
        if session.tags:
            tags = QLabel("  ".join(f"#{tag}" for tag in session.tags))
            tags.setObjectName("TagText")
            main.addWidget(tags)
        note = QLabel(session.note or "(no note)")
        note.setWordWrap(True)
        if not session.note:
            note.setObjectName("MutedText")
        main.addWidget(note)
        layout.addLayout(main, 1)

        edit_btn = QPushButton("Edit")
        delete_btn = QPushButton("Delete")
        delete_btn.setObjectName("DangerButton")
        edit_btn.clicked.connect(lambda: window.edit_session(session.id))
        delete_btn.clicked.connect(lambda: window.delete_session(session.id))
        layout.addWidget(edit_btn)
        layout.addWidget(delete_btn)


class MainWindow(QMainWindow):
    def __init__(self, app_state: AppState) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(720, 760)

        self.app_state = app_state
        self.alerts = CompletionAlerts(self)
        self._annotation_dialog: AnnotationDialog | None = None

        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self.app_state.tick)

        self._build_ui()
        self._connect_signals()
        self._sync_inputs()
        self._on_timer_changed(self.app_state.snapshot())
        self.refresh_sessions()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root = QVBoxLayout(central)

        tabs_bar = QHBoxLayout()
        self.tab_group = QButtonGroup(self)
        self.tab_group.setExclusive(True)
        self.tab_buttons: dict[str, QPushButton] = {}
        for key, title in TABS:
            btn = QPushButton(title)
            btn.setCheckable(True)
            btn.setObjectName("TabButton")
            self.tab_group.addButton(btn)
            self.tab_buttons[key] = btn
            tabs_bar.addWidget(btn)
        self.tab_buttons[Preset.POMODORO.value].setChecked(True)
        root.addLayout(tabs_bar)

        self.pages = QStackedWidget()
        root.addWidget(self.pages, 1)

        timer_page = QWidget()
        timer_layout = QVBoxLayout(timer_page)
        self.timer_label = QLabel("25:00")
        self.timer_label.setObjectName("TimerLabel")
        self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        timer_layout.addWidget(self.timer_label)

        controls = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.start_btn.setObjectName("PrimaryButton")
        self.stop_btn = QPushButton("Stop")
        self.reset_btn = QPushButton("Reset")
        controls.addStretch()
        controls.addWidget(self.start_btn)
        controls.addWidget(self.stop_btn)
        controls.addWidget(self.reset_btn)
        controls.addStretch()
        timer_layout.addLayout(controls)

        inputs = QHBoxLayout()
        self.minutes_input = QSpinBox()
        self.minutes_input.setRange(0, 999)
        self.seconds_input = QSpinBox()
        self.seconds_input.setRange(0, MAX_INPUT_SECONDS)
        self.apply_btn = QPushButton("Apply")
        inputs.addStretch()
        inputs.addWidget(QLabel("Minutes"))
        inputs.addWidget(self.minutes_input)
        inputs.addWidget(QLabel("Seconds"))
        inputs.addWidget(self.seconds_input)
        inputs.addWidget(self.apply_btn)
        inputs.addStretch()
        timer_layout.addLayout(inputs)

        sessions_title = QLabel("Completed sessions")
        sessions_title.setObjectName("SubtleTitle")
        timer_layout.addWidget(sessions_title)
        self.empty_sessions = QLabel("No sessions yet. Finish a timer to log one.")
        self.empty_sessions.setObjectName("MutedText")
        timer_layout.addWidget(self.empty_sessions)
        self.session_list = QListWidget()
        timer_layout.addWidget(self.session_list, 1)
        self.pages.addWidget(timer_page)

        self.report_view = ReportView()
        self.pages.addWidget(self.report_view)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self._space_toggle)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.start_btn.clicked.connect(self.app_state.start)
        self.stop_btn.clicked.connect(self.app_state.stop)
        self.reset_btn.clicked.connect(self.app_state.reset)
        self.apply_btn.clicked.connect(self._apply_time)
        self.minutes_input.valueChanged.connect(self._on_inputs_changed)
        self.seconds_input.valueChanged.connect(self._on_inputs_changed)
        for key, btn in self.tab_buttons.items():
            btn.clicked.connect(lambda _checked=False, k=key: self._switch_tab(k))

        self.app_state.timer_changed.connect(self._on_timer_changed)
        self.app_state.tick_armed.connect(self._on_tick_armed)
        self.app_state.alerts_primed.connect(self.alerts.prime)
        self.app_state.session_completed.connect(self._on_session_completed)
        self.app_state.sessions_changed.connect(self.refresh_sessions)
        self.app_state.state_changed.connect(self._on_state_changed)

    def sync_after_load(self) -> None:
        """Catches up with whatever `load_from_storage` restored, including a pending annotation."""
        self._sync_inputs()
        self._on_tick_armed(self.app_state.is_running)
        self._on_timer_changed(self.app_state.snapshot())
        self.refresh_sessions()
        self._maybe_open_annotation()

    def _sync_inputs(self) -> None:
        state = self.app_state.timer.state
        for spin, value in ((self.minutes_input, state.input_minutes), (self.seconds_input, state.input_seconds)):
            spin.blockSignals(True)
            spin.setValue(value)
            spin.blockSignals(False)

    def _on_inputs_changed(self, *_args) -> None:
        self.app_state.configure(self.minutes_input.value(), self.seconds_input.value())

    def _apply_time(self) -> None:
        self._on_inputs_changed()
        self.app_state.apply_configured_duration()

    def _switch_tab(self, key: str) -> None:
        if key == REPORT_TAB:
            self.report_view.set_report(self.app_state.report())
            self.pages.setCurrentWidget(self.report_view)
            return
        self.pages.setCurrentIndex(0)
        self.app_state.select_preset(Preset(key))
        self._sync_inputs()

    def _space_toggle(self) -> None:
        if self.app_state.is_running:
            self.app_state.stop()
        else:
            self.app_state.start()

    def _on_tick_armed(self, armed: bool) -> None:
        if armed:
            self.tick_timer.start()
        else:
            self.tick_timer.stop()

    def _on_timer_changed(self, snapshot: TimerSnapshot) -> None:
        self.timer_label.setText(format_clock(snapshot.remaining_seconds))
        phase = snapshot.phase
        self.start_btn.setEnabled(phase == TimerPhase.IDLE)
        self.stop_btn.setEnabled(phase == TimerPhase.RUNNING)
        self.apply_btn.setEnabled(phase != TimerPhase.AWAITING_ANNOTATION)

    def _on_state_changed(self) -> None:
        if self.pages.currentWidget() is self.report_view:
            self.report_view.set_report(self.app_state.report())

    def _on_session_completed(self, _pending: PendingSession) -> None:
        self.alerts.announce()
        # Let the tick handler unwind before blocking on a modal dialog
        QTimer.singleShot(0, self._maybe_open_annotation)

    def _maybe_open_annotation(self) -> None:
        pending = self.app_state.pending_session
        if pending is None or self._annotation_dialog is not None:
            return
        state = self.app_state.timer.state
        dialog = AnnotationDialog(pending, state.note_draft, state.tags_draft, self)
        dialog.form.note_edit.textChanged.connect(lambda: self.app_state.update_note_draft(*dialog.values()))
        dialog.form.tags_edit.textChanged.connect(lambda _text: self.app_state.update_note_draft(*dialog.values()))
        self._annotation_dialog = dialog
        try:
            if dialog.exec():
                if dialog.confirmed:
                    self.app_state.save_annotation(*dialog.values())
                else:
                    self.app_state.skip_annotation()
        finally:
            self._annotation_dialog = None

    def refresh_sessions(self) -> None:
        sessions = self.app_state.sessions
        self.empty_sessions.setVisible(not sessions)
        self.session_list.setVisible(bool(sessions))
        self.session_list.clear()
        for session in sessions:
            row = SessionRow(session, self)
            item = QListWidgetItem(self.session_list)
            item.setSizeHint(row.sizeHint())
            self.session_list.setItemWidget(item, row)

    def edit_session(self, session_id: str) -> None:
        session = self.app_state.begin_edit(session_id)
        if session is None:
            return
        dialog = EditSessionDialog(session, self)
        if dialog.exec():
            self.app_state.edit_session(session_id, *dialog.values())
        else:
            self.app_state.cancel_edit()

    def delete_session(self, session_id: str) -> None:
        self.app_state.delete_session(session_id, lambda message: ask_confirmation(self, message))

    def hideEvent(self, event) -> None:  # noqa: N802
        self.app_state.flush()
        super().hideEvent(event)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.tick_timer.stop()
        self.app_state.flush()
        event.accept()
