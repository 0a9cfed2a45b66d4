"""
Process selection dialog: a name filter over the currently running processes.
"""

from __future__ import annotations

import logging
from typing import Optional

import psutil
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QDialog, QLineEdit, QListWidget, QListWidgetItem, QVBoxLayout

log = logging.getLogger(__name__)


def running_processes(name_filter: str = "") -> list[tuple[int, str]]:
    """(pid, name) for every visible process whose name contains `name_filter`."""
    needle = name_filter.strip().lower()
    found: list[tuple[int, str]] = []
    for p in psutil.process_iter(attrs=["pid", "name"]):
        try:
            name = p.info.get("name")
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
        if not name:
            continue
        if needle and needle not in str(name).lower():
            continue
        found.append((int(p.info["pid"]), str(name)))
    found.sort(key=lambda item: (item[1].lower(), item[0]))
    return found


class ProcessPickerDialog(QDialog):
    """Modal list of running processes. `selected` holds (pid, name) after accept."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Select Process")
        self.resize(360, 480)
        self.selected: Optional[tuple[int, str]] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.filter_input = QLineEdit()
        self.filter_input.setPlaceholderText("Name Filter...")
        self.filter_input.textChanged.connect(self._refresh)
        layout.addWidget(self.filter_input)

        self.process_list = QListWidget()
        self.process_list.itemActivated.connect(self._choose)
        self.process_list.itemClicked.connect(self._choose)
        layout.addWidget(self.process_list, 1)

        self._refresh()

    def _refresh(self) -> None:
        self.process_list.clear()
        procs = running_processes(self.filter_input.text())
        for pid, name in procs:
            item = QListWidgetItem(f"{name}  ({pid})")
            item.setData(Qt.UserRole, (pid, name))
            self.process_list.addItem(item)
        log.debug(f"Process list refreshed: {len(procs)} entries")

    def _choose(self, item: QListWidgetItem) -> None:
        pid, name = item.data(Qt.UserRole)
        self.selected = (int(pid), str(name))
        self.accept()
