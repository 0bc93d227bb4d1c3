from __future__ import annotations

from PyQt6.QtCore import QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QMouseEvent, QPainter, QPen
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from pomolog.core.report import DayReport, format_clock, humanize_duration, legend_duration


PALETTE = [
    "#22c55e", "#60a5fa", "#f59e0b", "#a78bfa", "#f472b6",
    "#34d399", "#f87171", "#38bdf8", "#eab308", "#10b981",
]
GAP_DEGREES = 2.0


def segment_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


class DonutChart(QWidget):
    cleared = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(260, 260)
        self._report: DayReport | None = None
        self._selected: str | None = None

    def set_report(self, report: DayReport, selected: str | None) -> None:
        self._report = report
        self._selected = selected
        self.update()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        self.cleared.emit()
        super().mousePressEvent(event)

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        side = min(self.width(), self.height()) - 30
        ring = max(14, side // 7)
        rect = QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)

        painter.setPen(QPen(QColor(255, 255, 255, 20), ring))
        painter.drawEllipse(rect)

        report = self._report
        if report is None or report.total_seconds <= 0:
            return

        start = 0.0
        for idx, (_label, seconds) in enumerate(report.entries):
            sweep = seconds / report.total_seconds * 360.0
            visible = max(0.0, sweep - GAP_DEGREES)
            pen = QPen(QColor(segment_color(idx)), ring)
            pen.setCapStyle(Qt.PenCapStyle.FlatCap)
            painter.setPen(pen)
            # Qt angles are counter-clockwise in 1/16 degree from 3 o'clock
            painter.drawArc(rect, int((90 - start) * 16), int(-visible * 16))
            start += sweep

        if self._selected is not None:
            title, value = self._selected, format_clock(report.seconds_for(self._selected))
        else:
            title, value = "TODAY", humanize_duration(report.total_seconds)
        painter.setPen(QColor("#94a3b8"))
        font = QFont(painter.font())
        font.setPointSize(10)
        painter.setFont(font)
        title_rect = rect.adjusted(ring, ring, -ring, -rect.height() / 2)
        painter.drawText(title_rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignBottom, title)
        painter.setPen(QColor("#e5e7eb"))
        font.setPointSize(16)
        font.setBold(True)
        painter.setFont(font)
        value_rect = rect.adjusted(ring, rect.height() / 2, -ring, -ring)
        painter.drawText(value_rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop, value)


class _LegendRow(QWidget):
    clicked = pyqtSignal(str)

    def __init__(self, label: str, seconds: int, color: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.label = label
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        swatch = QLabel()
        swatch.setFixedSize(12, 12)
        swatch.setStyleSheet(f"background: {color}; border-radius: 6px;")
        text = QLabel(label)
        time_text = QLabel(legend_duration(seconds))
        time_text.setObjectName("MutedText")
        layout.addWidget(swatch)
        layout.addWidget(text, 1)
        layout.addWidget(time_text)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        self.clicked.emit(self.label)
        super().mousePressEvent(event)


class ReportView(QWidget):
    """Today's time by session label: donut chart plus legend."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._selected: str | None = None
        self._report: DayReport | None = None

        layout = QVBoxLayout(self)
        title = QLabel("Time by session")
        title.setObjectName("SubtleTitle")
        layout.addWidget(title)
        self.empty_label = QLabel("No data yet.")
        self.empty_label.setObjectName("MutedText")
        layout.addWidget(self.empty_label)
        self.chart = DonutChart()
        layout.addWidget(self.chart, 1)
        self.legend = QVBoxLayout()
        layout.addLayout(self.legend)
        layout.addStretch()

        self.chart.cleared.connect(lambda: self._select(None))

    def set_report(self, report: DayReport) -> None:
        self._report = report
        if self._selected is not None and report.seconds_for(self._selected) == 0:
            self._selected = None
        self.empty_label.setVisible(report.total_seconds == 0)
        self.chart.setVisible(report.total_seconds > 0)
        self.chart.set_report(report, self._selected)
        self._rebuild_legend(report)

    def _rebuild_legend(self, report: DayReport) -> None:
        while self.legend.count():
            item = self.legend.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        for idx, (label, seconds) in enumerate(report.entries):
            row = _LegendRow(label, seconds, segment_color(idx))
            row.clicked.connect(self._select)
            self.legend.addWidget(row)

    def _select(self, label: str | None) -> None:
        self._selected = label
        if self._report is not None:
            self.chart.set_report(self._report, label)
