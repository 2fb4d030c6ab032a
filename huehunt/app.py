"""Application entry point and setup for HueHunt."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from huehunt.core.identity import IdentityProvider
from huehunt.core.leaderboard import LeaderboardView
from huehunt.core.reconcile import ScoreReconciler
from huehunt.core.scores import ScoreStore
from huehunt.core.settings import data_dir, load_settings
from huehunt.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings and stores, then open the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("HueHunt")
    app.setApplicationDisplayName("HueHunt")

    settings = load_settings()
    logging.info("Storing scores and profile under %s", data_dir())
    store = ScoreStore()
    identity = IdentityProvider()

    window = MainWindow(
        settings=settings,
        identity=identity,
        reconciler=ScoreReconciler(store),
        leaderboard=LeaderboardView(store, size=settings.leaderboard_size),
    )
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(900, geometry.width()), min(960, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
