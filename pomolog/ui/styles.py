from __future__ import annotations

from PyQt6.QtWidgets import QApplication


THEME_QSS = """
QWidget {
    background: #0f172a;
    color: #e5e7eb;
    font-size: 13px;
}

QLabel {
    background: transparent;
}

QLabel#Heading {
    font-size: 20px;
    font-weight: 700;
}

QLabel#SubtleTitle {
    font-size: 14px;
    font-weight: 600;
    color: #cbd5e1;
}

QLabel#TimerLabel {
    font-size: 72px;
    font-weight: 700;
}

QLabel#MutedText {
    color: #94a3b8;
}

QLabel#TagText {
    color: #60a5fa;
}

QFrame#Card {
    background: #111827;
    border-radius: 12px;
}

QPushButton {
    border: none;
    background: #1f2937;
    border-radius: 10px;
    padding: 8px 14px;
    font-weight: 600;
}

QPushButton:hover {
    background: #273449;
}

QPushButton:disabled {
    color: #475569;
    background: #162032;
}

QPushButton#PrimaryButton {
    background: #22c55e;
    color: #04130a;
}

QPushButton#PrimaryButton:hover {
    background: #16a34a;
}

QPushButton#PrimaryButton:disabled {
    background: #14532d;
    color: #4b5563;
}

QPushButton#DangerButton {
    background: #7f1d1d;
    color: #fecaca;
}

QPushButton#TabButton:checked {
    background: #334155;
}

QLineEdit, QSpinBox, QPlainTextEdit {
    background: #0a0f1c;
    border: 1px solid rgba(255, 255, 255, 0.08);
    border-radius: 10px;
    padding: 6px 10px;
}

QListWidget {
    background: transparent;
    border: none;
}

QListWidget::item {
    padding: 2px;
}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
