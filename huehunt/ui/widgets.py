"""Game screen widgets: background, cards, stat cards, countdown bar and the color grid."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QPoint, QRectF, Signal
from PySide6.QtGui import QColor, QLinearGradient, QPainter, QPen, QRadialGradient
from PySide6.QtWidgets import QFrame, QGraphicsDropShadowEffect, QLabel, QVBoxLayout, QWidget

from huehunt.core.round_engine import Grid
from huehunt.ui.colors import ThemeColors, timer_color


class GradientBackground(QWidget):
    """Soft lavender gradient with a couple of glow spots."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        gradient = QLinearGradient(0, 0, self.width(), self.height())
        gradient.setColorAt(0.0, QColor(ThemeColors.BG_TOP))
        gradient.setColorAt(0.5, QColor(ThemeColors.BG_MIDDLE))
        gradient.setColorAt(1.0, QColor(ThemeColors.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)

        painter.setPen(Qt.NoPen)
        for x_ratio, y_ratio, radius in ((0.85, 0.15, 220), (0.12, 0.82, 170)):
            center = QPoint(int(self.width() * x_ratio), int(self.height() * y_ratio))
            glow = QRadialGradient(center, radius)
            glow.setColorAt(0, QColor(255, 255, 255, 70))
            glow.setColorAt(1, QColor(255, 255, 255, 0))
            painter.setBrush(glow)
            painter.drawEllipse(center, radius, radius)


class GlassCard(QFrame):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("glassCard")
        self.setStyleSheet(
            f"""
            QFrame#glassCard {{
                background: {ThemeColors.CARD_BG};
                border: 1px solid {ThemeColors.CARD_BORDER};
                border-radius: 20px;
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(30, 20, 90, 40))
        self.setGraphicsEffect(shadow)


class StatCard(QFrame):
    """Small colored card showing one number (level, score, time)."""

    def __init__(self, label: str, value: str, bg_color: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("statCard")
        self.setStyleSheet(
            f"""
            QFrame#statCard {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {bg_color}, stop:1 {QColor(bg_color).darker(112).name()});
                border-radius: 16px;
                border: none;
            }}
            """
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 12, 18, 12)
        layout.setSpacing(2)
        label_widget = QLabel(label)
        label_widget.setStyleSheet("color: rgba(255,255,255,0.92); font-size: 12px; font-weight: 600;")
        layout.addWidget(label_widget)
        self.value_label = QLabel(str(value))
        self.value_label.setStyleSheet("color: white; font-size: 26px; font-weight: 900;")
        layout.addWidget(self.value_label)

    def set_value(self, value: str) -> None:
        self.value_label.setText(str(value))


class CountdownBar(QWidget):
    """Rounded bar that shrinks and shifts from green to red as the round runs out."""

    def __init__(self, budget: int, parent: Optional[QWidget] = None, *, height: int = 12) -> None:
        super().__init__(parent)
        self._budget = max(1, budget)
        self._time_left = self._budget
        self.setFixedHeight(height)
        self.setMinimumWidth(120)

    def set_time_left(self, time_left: int) -> None:
        self._time_left = max(0, min(self._budget, int(time_left)))
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        radius = min(8, self.height() // 2)

        painter.setBrush(QColor(ThemeColors.TIMER_TRACK))
        painter.drawRoundedRect(0, 0, self.width(), self.height(), radius, radius)

        fill_width = int(self.width() * self._time_left / self._budget)
        if fill_width > 0:
            painter.setBrush(QColor(timer_color(self._time_left, self._budget)))
            painter.drawRoundedRect(0, 0, fill_width, self.height(), radius, radius)


class ColorGridWidget(QWidget):
    """Square grid of colored cells. Emits ``cell_clicked`` with the cell index."""

    cell_clicked = Signal(int)

    _SPACING = 8
    _RADIUS = 10

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._grid: Optional[Grid] = None
        self._selected_index = -1
        self._show_result = False
        self.setMinimumSize(240, 240)
        self.setCursor(Qt.PointingHandCursor)

    def set_round(self, grid: Optional[Grid], selected_index: int, show_result: bool) -> None:
        self._grid = grid
        self._selected_index = selected_index
        self._show_result = show_result
        self.update()

    def _board_rect(self) -> QRectF:
        side = min(self.width(), self.height())
        return QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)

    def _cell_rect(self, index: int) -> QRectF:
        board = self._board_rect()
        size = self._grid.size if self._grid else 1
        cell = (board.width() - self._SPACING * (size - 1)) / size
        row, col = divmod(index, size)
        return QRectF(
            board.left() + col * (cell + self._SPACING),
            board.top() + row * (cell + self._SPACING),
            cell,
            cell,
        )

    def _index_at(self, x: float, y: float) -> int:
        if self._grid is None:
            return -1
        for index in range(len(self._grid)):
            if self._cell_rect(index).contains(x, y):
                return index
        return -1

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        pos = event.position()
        index = self._index_at(pos.x(), pos.y())
        if index >= 0:
            self.cell_clicked.emit(index)

    def paintEvent(self, event) -> None:
        if self._grid is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        for index, color in enumerate(self._grid.cells):
            rect = self._cell_rect(index)
            pen = Qt.NoPen
            if self._show_result:
                if index == self._grid.target_index:
                    pen = QPen(QColor(ThemeColors.CORRECT), 5)
                elif index == self._selected_index:
                    pen = QPen(QColor(ThemeColors.WRONG), 5)
            painter.setPen(pen)
            painter.setBrush(QColor(color.to_hex()))
            painter.drawRoundedRect(rect.adjusted(2, 2, -2, -2), self._RADIUS, self._RADIUS)
