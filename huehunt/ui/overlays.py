"""In-window overlays: player sign-in and leaderboard."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from huehunt.core.errors import IdentityError
from huehunt.core.identity import IdentityProvider, PlayerIdentity
from huehunt.core.leaderboard import Leaderboard, LeaderboardView
from huehunt.ui.colors import ThemeColors, rank_badge


def _themed_card_container(radius: int = 20, object_name: str = "overlayContainer") -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(400)
    container.setMaximumWidth(520)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: #ffffff;
            border: 1px solid rgba(91, 75, 219, 0.12);
            border-radius: {radius}px;
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(20)
    shadow.setOffset(0, 6)
    shadow.setColor(QColor(30, 20, 90, 25))
    container.setGraphicsEffect(shadow)
    return container


def _overlay_background(parent: QWidget, on_click: Callable[[], None]) -> QWidget:
    overlay_bg = QWidget(parent)
    overlay_bg.setStyleSheet("background: rgba(0, 0, 0, 0.2);")
    overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    overlay_bg.setMinimumSize(1, 1)
    overlay_bg.mousePressEvent = lambda e: on_click()
    return overlay_bg


def _overlay_layout(owner: QWidget, on_background_click: Callable[[], None]) -> QGridLayout:
    main_layout = QGridLayout(owner)
    main_layout.setContentsMargins(0, 0, 0, 0)
    main_layout.setSpacing(0)
    main_layout.setRowStretch(0, 1)
    main_layout.setColumnStretch(0, 1)
    main_layout.addWidget(_overlay_background(owner, on_background_click), 0, 0)
    return main_layout


def primary_button_style() -> str:
    return f"""
        QPushButton {{
            background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                stop:0 {ThemeColors.PRIMARY_LIGHT}, stop:1 {ThemeColors.PRIMARY});
            color: white;
            padding: 10px 18px;
            border: none;
            border-radius: 12px;
            font-weight: 600;
            font-size: 14px;
        }}
        QPushButton:hover {{ background: {ThemeColors.PRIMARY}; }}
        QPushButton:disabled {{ background: #c9c4ec; }}
    """


def secondary_button_style() -> str:
    return f"""
        QPushButton {{
            background: #fafafa;
            color: {ThemeColors.TEXT_PRIMARY};
            padding: 10px 16px;
            border: 1px solid #e0e0e0;
            border-radius: 12px;
            font-weight: 600;
            font-size: 13px;
        }}
        QPushButton:hover {{
            background: #f0f0f0;
            border-color: {ThemeColors.PRIMARY};
            color: {ThemeColors.PRIMARY};
        }}
    """


class SignInOverlay(QWidget):
    """Asks for a player name and signs the player in through the identity provider."""

    signed_in = Signal(object)  # PlayerIdentity

    def __init__(self, identity: IdentityProvider, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._identity = identity
        main_layout = _overlay_layout(self, lambda: None)

        container = _themed_card_container(object_name="signInContainer")
        content = QVBoxLayout(container)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(14)

        title = QLabel("Who's playing?")
        title.setStyleSheet(f"color: {ThemeColors.TEXT_PRIMARY}; font-size: 20px; font-weight: 800;")
        content.addWidget(title)

        hint = QLabel("Your best score is saved under this name.")
        hint.setStyleSheet(f"color: {ThemeColors.TEXT_MUTED}; font-size: 13px;")
        content.addWidget(hint)

        self._name_input = QLineEdit()
        self._name_input.setPlaceholderText("Player name")
        self._name_input.setStyleSheet(
            f"""
            QLineEdit {{
                padding: 10px 12px;
                border: 1px solid #d8d4f0;
                border-radius: 10px;
                font-size: 14px;
                color: {ThemeColors.TEXT_PRIMARY};
            }}
            QLineEdit:focus {{ border-color: {ThemeColors.PRIMARY}; }}
            """
        )
        self._name_input.returnPressed.connect(self._submit)
        content.addWidget(self._name_input)

        self._error_label = QLabel("")
        self._error_label.setStyleSheet(f"color: {ThemeColors.WRONG}; font-size: 12px;")
        self._error_label.setVisible(False)
        content.addWidget(self._error_label)

        submit = QPushButton("Sign in")
        submit.setCursor(Qt.PointingHandCursor)
        submit.setStyleSheet(primary_button_style())
        submit.clicked.connect(self._submit)
        content.addWidget(submit)

        main_layout.addWidget(container, 0, 0, Qt.AlignCenter)

    def open(self) -> None:
        self._error_label.setVisible(False)
        self._name_input.clear()
        self.show()
        self.raise_()
        self._name_input.setFocus()

    def _submit(self) -> None:
        try:
            player: PlayerIdentity = self._identity.sign_in(self._name_input.text())
        except IdentityError as e:
            self._error_label.setText(str(e))
            self._error_label.setVisible(True)
            return
        self.hide()
        self.signed_in.emit(player)


class LeaderboardOverlay(QWidget):
    """Top scores; re-fetched every time it opens."""

    closed = Signal()

    def __init__(self, view: LeaderboardView, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._view = view
        main_layout = _overlay_layout(self, self._close)

        container = _themed_card_container(object_name="leaderboardContainer")
        content = QVBoxLayout(container)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(12)

        header = QHBoxLayout()
        title = QLabel("🏆 Leaderboard")
        title.setStyleSheet(f"color: {ThemeColors.TEXT_PRIMARY}; font-size: 20px; font-weight: 800;")
        header.addWidget(title)
        header.addStretch(1)
        close_btn = QPushButton("×")
        close_btn.setFixedSize(32, 32)
        close_btn.setCursor(Qt.PointingHandCursor)
        close_btn.setStyleSheet(secondary_button_style())
        close_btn.clicked.connect(self._close)
        header.addWidget(close_btn)
        content.addLayout(header)

        self._rank_label = QLabel("")
        self._rank_label.setStyleSheet(f"color: {ThemeColors.PRIMARY}; font-size: 14px; font-weight: 700;")
        content.addWidget(self._rank_label)

        self._rows = QVBoxLayout()
        self._rows.setSpacing(6)
        content.addLayout(self._rows)

        footer = QPushButton("Close")
        footer.setCursor(Qt.PointingHandCursor)
        footer.setStyleSheet(secondary_button_style())
        footer.clicked.connect(self._close)
        content.addWidget(footer)

        main_layout.addWidget(container, 0, 0, Qt.AlignCenter)

    def open(self, player: Optional[PlayerIdentity]) -> None:
        board = self._view.fetch_top(player.player_id if player else None)
        self._populate(board, player)
        self.show()
        self.raise_()

    def _populate(self, board: Leaderboard, player: Optional[PlayerIdentity]) -> None:
        while self._rows.count():
            item = self._rows.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()

        if board.player_rank is not None:
            self._rank_label.setText(f"Your rank: #{board.player_rank}")
            self._rank_label.setVisible(True)
        else:
            self._rank_label.setVisible(False)

        if not board.available:
            self._rows.addWidget(self._message_label("Leaderboard could not be loaded."))
            return
        if not board.entries:
            self._rows.addWidget(self._message_label("No scores recorded yet!"))
            return

        for entry in board.entries:
            record = entry.record
            is_me = player is not None and record.player_id == player.player_id
            row = QFrame()
            row.setObjectName("leaderboardRow")
            row.setStyleSheet(
                f"""
                QFrame#leaderboardRow {{
                    background: {"#eeebff" if is_me else "#fafafa"};
                    border-radius: 10px;
                }}
                """
            )
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(12, 8, 12, 8)
            row_layout.setSpacing(12)

            badge = QLabel(rank_badge(entry.rank))
            badge.setFixedWidth(36)
            badge.setStyleSheet("font-size: 16px; font-weight: 700;")
            row_layout.addWidget(badge)

            info = QVBoxLayout()
            name = QLabel(record.display_name or "Anonymous")
            name.setStyleSheet(f"color: {ThemeColors.TEXT_PRIMARY}; font-size: 14px; font-weight: 700;")
            since = QLabel(record.created_at.astimezone().strftime("%m/%d/%Y"))
            since.setStyleSheet(f"color: {ThemeColors.TEXT_MUTED}; font-size: 11px;")
            info.addWidget(name)
            info.addWidget(since)
            row_layout.addLayout(info, 1)

            score = QVBoxLayout()
            high = QLabel(str(record.high_score))
            high.setAlignment(Qt.AlignRight)
            high.setStyleSheet(f"color: {ThemeColors.PRIMARY}; font-size: 18px; font-weight: 900;")
            level = QLabel(f"Level {record.max_level}")
            level.setAlignment(Qt.AlignRight)
            level.setStyleSheet(f"color: {ThemeColors.TEXT_MUTED}; font-size: 11px;")
            score.addWidget(high)
            score.addWidget(level)
            row_layout.addLayout(score)

            self._rows.addWidget(row)

    def _message_label(self, text: str) -> QLabel:
        label = QLabel(text)
        label.setAlignment(Qt.AlignCenter)
        label.setStyleSheet(f"color: {ThemeColors.TEXT_MUTED}; font-size: 14px; padding: 20px;")
        return label

    def _close(self) -> None:
        self.hide()
        self.closed.emit()
