"""Entry point for the pharmacy purchase invoice desktop app."""

import logging
import sys

from PyQt5.QtWidgets import QApplication

from pharmacy_pos import config
from pharmacy_pos.ui.main_window import MainWindow


def main() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
