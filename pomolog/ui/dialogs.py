from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pomolog.core.models import PendingSession, Session, format_tags
from pomolog.core.report import format_clock


class _NoteForm(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.note_edit = QPlainTextEdit()
        self.note_edit.setPlaceholderText("Write a short note...")
        self.note_edit.setFixedHeight(110)
        tags_label = QLabel("Tags (comma-separated)")
        tags_label.setObjectName("MutedText")
        self.tags_edit = QLineEdit()
        self.tags_edit.setPlaceholderText("e.g. project, practice")
        layout.addWidget(self.note_edit)
        layout.addWidget(tags_label)
        layout.addWidget(self.tags_edit)

    def values(self) -> tuple[str, str]:
        return self.note_edit.toPlainText(), self.tags_edit.text()

    def set_values(self, note: str, tags_text: str) -> None:
        self.note_edit.setPlainText(note)
        self.tags_edit.setText(tags_text)


class AnnotationDialog(QDialog):
    """Shown when a countdown finishes; Save logs the session, Skip discards it."""

    def __init__(self, pending: PendingSession, note: str = "", tags_text: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Session complete")
        self.setModal(True)
        self.pending = pending
        self.confirmed = False

        layout = QVBoxLayout(self)
        heading = QLabel("Session complete")
        heading.setObjectName("Heading")
        layout.addWidget(heading)
        layout.addWidget(QLabel(f"What did you accomplish in {format_clock(pending.duration_seconds)}?"))
        self.form = _NoteForm()
        self.form.set_values(note, tags_text)
        layout.addWidget(self.form)

        actions = QHBoxLayout()
        actions.addStretch()
        save_btn = QPushButton("Save")
        save_btn.setObjectName("PrimaryButton")
        skip_btn = QPushButton("Skip")
        skip_btn.setObjectName("SecondaryButton")
        actions.addWidget(save_btn)
        actions.addWidget(skip_btn)
        layout.addLayout(actions)

        save_btn.clicked.connect(self._save)
        skip_btn.clicked.connect(self._skip)

    def values(self) -> tuple[str, str]:
        return self.form.values()

    def _save(self) -> None:
        self.confirmed = True
        self.accept()

    def _skip(self) -> None:
        self.confirmed = False
        self.accept()

    def reject(self) -> None:
        # Escape and the close button leave the session pending; only Save or Skip resolve it
        return


class EditSessionDialog(QDialog):
    def __init__(self, session: Session, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Edit session note")
        self.setModal(True)
        self.session = session

        layout = QVBoxLayout(self)
        heading = QLabel("Edit session note")
        heading.setObjectName("Heading")
        layout.addWidget(heading)
        layout.addWidget(QLabel("Update the note for this session."))
        self.form = _NoteForm()
        self.form.set_values(session.note, format_tags(session.tags))
        layout.addWidget(self.form)

        actions = QHBoxLayout()
        actions.addStretch()
        save_btn = QPushButton("Save")
        save_btn.setObjectName("PrimaryButton")
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setObjectName("SecondaryButton")
        actions.addWidget(save_btn)
        actions.addWidget(cancel_btn)
        layout.addLayout(actions)

        save_btn.clicked.connect(self.accept)
        cancel_btn.clicked.connect(self.reject)

    def values(self) -> tuple[str, str]:
        return self.form.values()


def ask_confirmation(parent: QWidget, message: str) -> bool:
    answer = QMessageBox.question(
        parent,
        "Confirm",
        message,
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return answer == QMessageBox.StandardButton.Yes
