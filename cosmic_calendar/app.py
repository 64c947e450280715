"""
Launcher for the Cosmic Calendar window.
"""

import logging
import sys

from PyQt5.QtWidgets import QApplication

from cosmic_calendar.calendar_config import CalendarConfig
from cosmic_calendar.calendar_dialog import CalendarDialog


def main(argv=None):
    """Configure logging, load settings and show the calendar dialog."""
    argv = sys.argv if argv is None else argv

    config = CalendarConfig()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = QApplication(argv)
    dialog = CalendarDialog(config)
    dialog.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
