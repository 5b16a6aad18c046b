"""Entry point for the GST Bill Book desktop app."""

import logging
import sys

from PyQt5.QtWidgets import QApplication

from billbook import config
from billbook.data_store import BillStore
from billbook.ui.main_window import MainWindow


def main() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = QApplication(sys.argv)
    window = MainWindow(BillStore())
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
