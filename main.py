"""
Main entry point for the toolpath viewer.
Initializes logging and the Qt application, then starts the event loop.
"""

import logging
import sys
from PySide6.QtWidgets import QApplication
from gui.main_window import MainWindow


def main():
    """Initializes and runs the PySide6 application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
