"""
Main tracker window: process selection, pause/stop controls and a live clock.
"""

from __future__ import annotations

import logging
from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from packages.shared.config import AppConfig
from packages.shared.store import ConfigStore
from packages.core.tracker.controller import SessionController

from .theme import Theme
from .components import Card, DurationLabel, PrimaryButton, SecondaryButton, StatusPill
from .process_picker import ProcessPickerDialog

log = logging.getLogger(__name__)

BASE_TITLE = "Time Tracker"


class MainWindow(QMainWindow):
    """Thin consumer of SessionController; polls its publisher on a QTimer."""

    def __init__(self, store: ConfigStore, cfg: AppConfig) -> None:
        super().__init__()
        self.setWindowTitle(BASE_TITLE)
        self.resize(560, 260)

        self.store = store
        self.cfg = cfg

        self.theme = Theme("dark" if self.cfg.dark_mode else "light")

        self.controller = SessionController(config=self.cfg.to_tracker_config())
        self.controller.on_error(lambda msg: log.error("Tracker error: %s", msg))

        self._ended_seen = False

        self._build_ui()
        self._apply_theme()

        self._refresh_timer = QTimer(self)
        self._refresh_timer.timeout.connect(self._refresh_status)
        self._refresh_timer.start(100)
        self._refresh_status()

    def _apply_theme(self) -> None:
        self.setStyleSheet(self.theme.get_stylesheet())

    def _toggle_dark_mode(self, checked: bool) -> None:
        if checked == (self.theme.mode == "dark"):
            return
        self.theme.toggle_mode()
        self._apply_theme()
        self.cfg.dark_mode = checked
        self.store.save(self.cfg)

    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        main_layout = QVBoxLayout(root)
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(12)

        top_row = QHBoxLayout()
        top_row.setSpacing(12)

        self.process_label = QLabel("Selected Process: ")
        self.process_label.setObjectName("BodyLabel")
        top_row.addWidget(self.process_label, 1)

        self.btn_select = PrimaryButton("Select")
        self.btn_select.clicked.connect(self._select_process)
        top_row.addWidget(self.btn_select)

        self.btn_pause = SecondaryButton("Pause")
        self.btn_pause.clicked.connect(self._toggle_pause)
        top_row.addWidget(self.btn_pause)

        self.btn_stop = SecondaryButton("Stop")
        self.btn_stop.clicked.connect(self._stop_tracking)
        top_row.addWidget(self.btn_stop)

        main_layout.addLayout(top_row)

        clock_card = Card()
        self.duration_label = DurationLabel()
        clock_card.layout.addWidget(self.duration_label)
        main_layout.addWidget(clock_card, 1)

        bottom_row = QHBoxLayout()
        self.status_pill = StatusPill("IDLE")
        bottom_row.addWidget(self.status_pill)
        bottom_row.addStretch()

        self.chk_dark_mode = QCheckBox("Dark mode")
        self.chk_dark_mode.setChecked(self.theme.mode == "dark")
        self.chk_dark_mode.toggled.connect(self._toggle_dark_mode)
        bottom_row.addWidget(self.chk_dark_mode)

        main_layout.addLayout(bottom_row)

    def _refresh_status(self) -> None:
        snapshot = self.controller.publisher.snapshot()
        self.duration_label.setText(snapshot.text)

        paused = self.controller.is_paused
        self.btn_pause.setText("Un-Pause" if paused else "Pause")

        tracking = self.controller.tracked_pid is not None
        self.btn_pause.setEnabled(tracking and not snapshot.ended)
        self.btn_stop.setEnabled(tracking)

        if snapshot.ended:
            changed = self.status_pill.set_status("PROCESS EXITED", "ended")
            if not self._ended_seen:
                self._ended_seen = True
                if self.cfg.beep_on_session_end:
                    QApplication.beep()
        elif not tracking:
            changed = self.status_pill.set_status("IDLE", "idle")
        elif paused:
            changed = self.status_pill.set_status("PAUSED", "paused")
        else:
            changed = self.status_pill.set_status("TRACKING", "active")
        if changed:
            self.status_pill.setStyleSheet(self.theme.get_stylesheet())

    def _select_process(self) -> None:
        dialog = ProcessPickerDialog(self)
        dialog.setStyleSheet(self.theme.get_stylesheet())
        if not dialog.exec() or dialog.selected is None:
            return
        pid, name = dialog.selected
        if self.controller.start_session(pid):
            self._ended_seen = False
            self.process_label.setText(f"Selected Process: {name}")
            self.setWindowTitle(f"{BASE_TITLE} - {name}")
        self._refresh_status()

    def _toggle_pause(self) -> None:
        self.controller.toggle_pause()
        self._refresh_status()

    def _stop_tracking(self) -> None:
        self.controller.stop()
        self.process_label.setText("Selected Process: ")
        self.setWindowTitle(BASE_TITLE)
        self._refresh_status()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._refresh_timer.stop()
        self.controller.shutdown()
        super().closeEvent(event)
