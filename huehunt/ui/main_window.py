from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from huehunt.core.errors import IdentityUnavailable
from huehunt.core.identity import IdentityProvider, PlayerIdentity
from huehunt.core.leaderboard import LeaderboardView
from huehunt.core.reconcile import ScoreReconciler, save_session_result
from huehunt.core.session import GameSession, SessionResult, SessionSnapshot, SessionState
from huehunt.core.settings import GameSettings
from huehunt.ui.colors import ThemeColors
from huehunt.ui.overlays import (
    LeaderboardOverlay,
    SignInOverlay,
    primary_button_style,
    secondary_button_style,
)
from huehunt.ui.scheduler import QtScheduler
from huehunt.ui.widgets import ColorGridWidget, CountdownBar, GlassCard, GradientBackground, StatCard


class MainWindow(QMainWindow):
    """Start screen, game screen and game-over screen around one GameSession.

    The window only renders session snapshots and forwards two inputs: a cell
    pick and start/reset. Saving the final score happens once per finished
    session.
    """

    def __init__(
        self,
        settings: GameSettings,
        identity: IdentityProvider,
        reconciler: ScoreReconciler,
        leaderboard: LeaderboardView,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._identity = identity
        self._reconciler = reconciler
        self._scheduler = QtScheduler(self)
        self._session = GameSession(self._scheduler, settings)

        self._stack: Optional[QStackedWidget] = None
        self._start_screen: Optional[QWidget] = None
        self._game_screen: Optional[QWidget] = None
        self._over_screen: Optional[QWidget] = None
        self._player_label: Optional[QLabel] = None
        self._level_card: Optional[StatCard] = None
        self._score_card: Optional[StatCard] = None
        self._time_card: Optional[StatCard] = None
        self._countdown_bar: Optional[CountdownBar] = None
        self._grid_widget: Optional[ColorGridWidget] = None
        self._instructions_label: Optional[QLabel] = None
        self._final_score_label: Optional[QLabel] = None
        self._final_level_label: Optional[QLabel] = None
        self._save_label: Optional[QLabel] = None

        self._build_ui()
        self._sign_in_overlay = SignInOverlay(identity, self.centralWidget())
        self._sign_in_overlay.signed_in.connect(self._on_signed_in)
        self._sign_in_overlay.hide()
        self._leaderboard_overlay = LeaderboardOverlay(leaderboard, self.centralWidget())
        self._leaderboard_overlay.hide()

        self._session.add_change_listener(self._render)
        self._session.add_finish_listener(self._on_session_finished)
        self._identity.add_listener(self._on_identity_changed)

        self._render(self._session.snapshot())
        self._update_player_label(self._identity.current)
        if self._identity.current is None:
            QTimer.singleShot(0, self._sign_in_overlay.open)

    def _build_ui(self) -> None:
        self.setWindowTitle("HueHunt")
        self.setMinimumSize(720, 760)

        background = GradientBackground()
        self.setCentralWidget(background)
        root = QVBoxLayout(background)
        root.setContentsMargins(32, 24, 32, 24)
        root.setSpacing(16)

        header = QHBoxLayout()
        title = QLabel("HueHunt")
        title.setStyleSheet(f"color: {ThemeColors.PRIMARY_DARK}; font-size: 28px; font-weight: 900;")
        header.addWidget(title)
        header.addStretch(1)
        self._player_label = QLabel("")
        self._player_label.setStyleSheet(f"color: {ThemeColors.TEXT_SECONDARY}; font-size: 14px; font-weight: 600;")
        header.addWidget(self._player_label)
        leaderboard_btn = QPushButton("🏆 Leaderboard")
        leaderboard_btn.setCursor(Qt.PointingHandCursor)
        leaderboard_btn.setStyleSheet(secondary_button_style())
        leaderboard_btn.clicked.connect(self._show_leaderboard)
        header.addWidget(leaderboard_btn)
        sign_out_btn = QPushButton("Sign out")
        sign_out_btn.setCursor(Qt.PointingHandCursor)
        sign_out_btn.setStyleSheet(secondary_button_style())
        sign_out_btn.clicked.connect(self._identity.sign_out)
        header.addWidget(sign_out_btn)
        root.addLayout(header)

        stats = QHBoxLayout()
        stats.setSpacing(12)
        self._level_card = StatCard("Level", "1", ThemeColors.PRIMARY_LIGHT)
        self._score_card = StatCard("Score", "0", ThemeColors.MINT)
        self._time_card = StatCard("Time", f"{self._settings.round_seconds}s", ThemeColors.CORAL)
        for card in (self._level_card, self._score_card, self._time_card):
            stats.addWidget(card, 1)
        root.addLayout(stats)

        self._countdown_bar = CountdownBar(self._settings.round_seconds)
        root.addWidget(self._countdown_bar)

        self._stack = QStackedWidget()
        self._start_screen = self._build_start_screen()
        self._game_screen = self._build_game_screen()
        self._over_screen = self._build_over_screen()
        for screen in (self._start_screen, self._game_screen, self._over_screen):
            self._stack.addWidget(screen)
        root.addWidget(self._stack, 1)

    def _build_start_screen(self) -> QWidget:
        card = GlassCard()
        layout = QVBoxLayout(card)
        layout.setContentsMargins(40, 40, 40, 40)
        layout.setSpacing(16)
        layout.addStretch(1)
        heading = QLabel("Welcome!")
        heading.setAlignment(Qt.AlignCenter)
        heading.setStyleSheet(f"color: {ThemeColors.TEXT_PRIMARY}; font-size: 26px; font-weight: 800;")
        layout.addWidget(heading)
        blurb = QLabel(
            f"Find the cell with a different tone. You have {self._settings.round_seconds} seconds per level!"
        )
        blurb.setWordWrap(True)
        blurb.setAlignment(Qt.AlignCenter)
        blurb.setStyleSheet(f"color: {ThemeColors.TEXT_SECONDARY}; font-size: 15px;")
        layout.addWidget(blurb)
        start_btn = QPushButton("Start game")
        start_btn.setCursor(Qt.PointingHandCursor)
        start_btn.setStyleSheet(primary_button_style())
        start_btn.clicked.connect(self._start_game)
        layout.addWidget(start_btn, 0, Qt.AlignCenter)
        layout.addStretch(1)
        return card

    def _build_game_screen(self) -> QWidget:
        card = GlassCard()
        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)
        self._grid_widget = ColorGridWidget()
        self._grid_widget.cell_clicked.connect(self._session.choose_cell)
        layout.addWidget(self._grid_widget, 1)
        self._instructions_label = QLabel("")
        self._instructions_label.setAlignment(Qt.AlignCenter)
        self._instructions_label.setStyleSheet(f"color: {ThemeColors.TEXT_MUTED}; font-size: 13px;")
        layout.addWidget(self._instructions_label)
        return card

    def _build_over_screen(self) -> QWidget:
        card = GlassCard()
        layout = QVBoxLayout(card)
        layout.setContentsMargins(40, 40, 40, 40)
        layout.setSpacing(12)
        layout.addStretch(1)
        heading = QLabel("Game over!")
        heading.setAlignment(Qt.AlignCenter)
        heading.setStyleSheet(f"color: {ThemeColors.TEXT_PRIMARY}; font-size: 26px; font-weight: 800;")
        layout.addWidget(heading)

        self._final_score_label = QLabel("")
        self._final_level_label = QLabel("")
        self._save_label = QLabel("")
        for label in (self._final_score_label, self._final_level_label):
            label.setAlignment(Qt.AlignCenter)
            label.setStyleSheet(f"color: {ThemeColors.TEXT_SECONDARY}; font-size: 16px;")
            layout.addWidget(label)
        self._save_label.setAlignment(Qt.AlignCenter)
        self._save_label.setStyleSheet(f"color: {ThemeColors.PRIMARY}; font-size: 15px; font-weight: 700;")
        layout.addWidget(self._save_label)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        again_btn = QPushButton("Play again")
        again_btn.setCursor(Qt.PointingHandCursor)
        again_btn.setStyleSheet(primary_button_style())
        again_btn.clicked.connect(self._start_game)
        buttons.addWidget(again_btn)
        board_btn = QPushButton("Leaderboard")
        board_btn.setCursor(Qt.PointingHandCursor)
        board_btn.setStyleSheet(secondary_button_style())
        board_btn.clicked.connect(self._show_leaderboard)
        buttons.addWidget(board_btn)
        buttons.addStretch(1)
        layout.addLayout(buttons)
        layout.addStretch(1)
        return card

    def _render(self, snapshot: SessionSnapshot) -> None:
        """Redraw everything from one session snapshot."""
        self._level_card.set_value(str(snapshot.level))
        self._score_card.set_value(str(snapshot.score))
        self._time_card.set_value(f"{snapshot.time_left}s")
        self._countdown_bar.set_time_left(snapshot.time_left)

        if snapshot.state is SessionState.NOT_STARTED:
            self._save_label.setText("")
            self._stack.setCurrentWidget(self._start_screen)
        elif snapshot.state is SessionState.OVER:
            self._final_score_label.setText(f"Your score: {snapshot.score}")
            self._final_level_label.setText(f"Level reached: {snapshot.level}")
            self._stack.setCurrentWidget(self._over_screen)
        else:
            self._grid_widget.set_round(snapshot.grid, snapshot.selected_index, snapshot.show_result)
            if snapshot.grid is not None:
                size = snapshot.grid.size
                self._instructions_label.setText(f"Find the different tone! Grid size: {size}x{size}")
            self._stack.setCurrentWidget(self._game_screen)

    def _start_game(self) -> None:
        try:
            self._session.start(self._identity.current)
        except IdentityUnavailable:
            self._sign_in_overlay.open()

    def _on_session_finished(self, result: SessionResult) -> None:
        self._save_label.setText("Saving score…")
        report = save_session_result(self._reconciler, result)
        self._save_label.setText(report.message)
        color = ThemeColors.PRIMARY if report.saved else ThemeColors.WRONG
        self._save_label.setStyleSheet(f"color: {color}; font-size: 15px; font-weight: 700;")

    def _on_signed_in(self, player: PlayerIdentity) -> None:
        self._update_player_label(player)

    def _on_identity_changed(self, player: Optional[PlayerIdentity]) -> None:
        self._update_player_label(player)
        if player is None:
            self._session.identity_lost()
            self._sign_in_overlay.open()

    def _update_player_label(self, player: Optional[PlayerIdentity]) -> None:
        self._player_label.setText(f"👤 {player.display_name}" if player else "")

    def _show_leaderboard(self) -> None:
        self._leaderboard_overlay.open(self._identity.current)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        central = self.centralWidget()
        for name in ("_sign_in_overlay", "_leaderboard_overlay"):
            overlay = getattr(self, name, None)
            if overlay is not None:
                overlay.setGeometry(central.rect())

    def closeEvent(self, event: QCloseEvent) -> None:
        self._session.close()
        self._scheduler.cancel_all()
        super().closeEvent(event)
