"""
Reusable widgets for the tracker window.
"""

from __future__ import annotations

from typing import Literal

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout

from packages.core.tracker.types import IDLE_PLACEHOLDER

PillKind = Literal["idle", "active", "paused", "ended"]

_PILL_OBJECT_NAMES = {
    "idle": "StatusPill",
    "active": "StatusPillActive",
    "paused": "StatusPillPaused",
    "ended": "StatusPillEnded",
}


class Card(QFrame):
    """Card container with rounded corners and subtle styling."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Card")
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(16, 16, 16, 16)
        self.layout.setSpacing(12)


class PrimaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("PrimaryButton")


class SecondaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("SecondaryButton")


class DurationLabel(QLabel):
    """Large monospace HH:MM:SS clock."""

    def __init__(self, parent=None):
        super().__init__(IDLE_PLACEHOLDER, parent)
        self.setObjectName("DurationLabel")
        self.setAlignment(Qt.AlignCenter)


class StatusPill(QLabel):
    """Status indicator pill (e.g. "TRACKING", "PAUSED")."""

    def __init__(self, text: str = "", kind: PillKind = "idle", parent=None):
        super().__init__(text, parent)
        self._kind: PillKind = kind
        self.setObjectName(_PILL_OBJECT_NAMES[kind])

    def set_status(self, text: str, kind: PillKind) -> bool:
        """Update text and style. Returns True if the style class changed."""
        self.setText(text)
        if kind == self._kind:
            return False
        self._kind = kind
        self.setObjectName(_PILL_OBJECT_NAMES[kind])
        return True
