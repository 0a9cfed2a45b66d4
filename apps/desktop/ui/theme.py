"""
Light/dark QSS theme for the tracker window.
"""

from __future__ import annotations

from typing import Literal

FONT_FAMILY = "Segoe UI, -apple-system, BlinkMacSystemFont, sans-serif"
MONO_FAMILY = "Consolas, Menlo, DejaVu Sans Mono, monospace"

ACCENT_BLUE = "#007AFF"
ACCENT_GREEN = "#34C759"
ACCENT_ORANGE = "#FF9500"
ACCENT_RED = "#FF3B30"

LIGHT_COLORS = {
    "background": "#F5F5F7",
    "surface": "#FFFFFF",
    "surface_secondary": "#F9F9F9",
    "text_primary": "#000000",
    "text_secondary": "#6E6E73",
    "border": "#E5E5EA",
}

DARK_COLORS = {
    "background": "#000000",
    "surface": "#1C1C1E",
    "surface_secondary": "#2C2C2E",
    "text_primary": "#FFFFFF",
    "text_secondary": "#98989D",
    "border": "#38383A",
}

ThemeMode = Literal["light", "dark"]


def _rgba(hex_color: str, alpha: float) -> str:
    hex_color = hex_color.lstrip("#")
    r, g, b = int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)
    return f"rgba({r}, {g}, {b}, {alpha})"


class Theme:
    """Theme manager providing QSS stylesheets for light and dark modes."""

    def __init__(self, mode: ThemeMode = "dark"):
        self.mode = mode
        self.colors = LIGHT_COLORS if mode == "light" else DARK_COLORS

    def toggle_mode(self) -> None:
        self.mode = "dark" if self.mode == "light" else "light"
        self.colors = LIGHT_COLORS if self.mode == "light" else DARK_COLORS

    def get_stylesheet(self) -> str:
        colors = self.colors
        return f"""
        QMainWindow, QDialog {{
            background-color: {colors["background"]};
            color: {colors["text_primary"]};
        }}

        QLabel#BodyLabel {{
            font-family: {FONT_FAMILY};
            font-size: 15px;
            color: {colors["text_primary"]};
        }}

        QLabel#DurationLabel {{
            font-family: {MONO_FAMILY};
            font-size: 48px;
            color: {colors["text_primary"]};
        }}

        QFrame#Card {{
            background-color: {colors["surface"]};
            border-radius: 16px;
            border: 1px solid {colors["border"]};
        }}

        QPushButton#PrimaryButton {{
            background-color: {ACCENT_BLUE};
            color: #FFFFFF;
            border: none;
            border-radius: 16px;
            padding: 6px 18px;
            font-family: {FONT_FAMILY};
            font-weight: 600;
        }}

        QPushButton#SecondaryButton {{
            background-color: {colors["surface_secondary"]};
            color: {ACCENT_BLUE};
            border: 1px solid {colors["border"]};
            border-radius: 16px;
            padding: 6px 18px;
            font-family: {FONT_FAMILY};
        }}

        QPushButton:disabled {{
            color: {colors["text_secondary"]};
        }}

        QLineEdit {{
            background-color: {colors["surface"]};
            color: {colors["text_primary"]};
            border: 1px solid {colors["border"]};
            border-radius: 10px;
            padding: 6px 10px;
        }}

        QLineEdit:focus {{
            border-color: {ACCENT_BLUE};
        }}

        QListWidget {{
            background-color: {colors["surface"]};
            color: {colors["text_primary"]};
            border: 1px solid {colors["border"]};
            border-radius: 10px;
        }}

        QListWidget::item:selected {{
            background-color: {_rgba(ACCENT_BLUE, 0.2)};
            color: {colors["text_primary"]};
        }}

        QLabel#StatusPill {{
            background-color: {colors["surface_secondary"]};
            color: {colors["text_secondary"]};
            border-radius: 12px;
            padding: 4px 12px;
            font-size: 13px;
        }}

        QLabel#StatusPillActive {{
            background-color: {_rgba(ACCENT_GREEN, 0.15)};
            color: {ACCENT_GREEN};
            border-radius: 12px;
            padding: 4px 12px;
            font-size: 13px;
        }}

        QLabel#StatusPillPaused {{
            background-color: {_rgba(ACCENT_ORANGE, 0.15)};
            color: {ACCENT_ORANGE};
            border-radius: 12px;
            padding: 4px 12px;
            font-size: 13px;
        }}

        QLabel#StatusPillEnded {{
            background-color: {_rgba(ACCENT_RED, 0.15)};
            color: {ACCENT_RED};
            border-radius: 12px;
            padding: 4px 12px;
            font-size: 13px;
        }}
        """
