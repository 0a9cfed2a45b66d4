import logging
import signal
import sys
from PySide6.QtWidgets import QApplication

from packages.shared.store import ConfigStore
from packages.core.logging_ import setup_logging
from .ui.window import MainWindow

log = logging.getLogger(__name__)


def main() -> None:
    store = ConfigStore()
    cfg = store.load()
    setup_logging(cfg.log_level)
    log.info("Config loaded from %s", store.path())

    app = QApplication(sys.argv)
    app.setApplicationName("Time Tracker")
    win = MainWindow(store, cfg)
    # quitting without closing the window skips closeEvent
    app.aboutToQuit.connect(win.controller.shutdown)
    win.show()

    def on_sigint(sig, frame):
        log.info("Interrupted, closing window")
        win.close()

    if hasattr(signal, "SIGINT"):
        signal.signal(signal.SIGINT, on_sigint)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
