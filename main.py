"""Entry point for the Double Pendulum application."""

import logging
import sys

from PyQt6.QtWidgets import QApplication, QMainWindow, QStatusBar

from pendulum.view import PendulumView


class MainWindow(QMainWindow):
    """Top-level window hosting the pendulum view and its status labels."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Double Pendulum")
        self.resize(1000, 700)

        self.pendulum_view = PendulumView()
        self.setCentralWidget(self.pendulum_view)

        status_bar = QStatusBar()
        self.setStatusBar(status_bar)
        status_bar.addWidget(self.pendulum_view.time_label)
        status_bar.addWidget(self.pendulum_view.energy_label)
        status_bar.addWidget(self.pendulum_view.drift_label)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    logging.getLogger(__name__).info("Double pendulum window opened")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
