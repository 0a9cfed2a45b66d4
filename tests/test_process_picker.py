"""Tests for the process list feeding the picker dialog."""

from __future__ import annotations

import psutil
import pytest

pytest.importorskip("PySide6.QtWidgets")

from apps.desktop.ui.process_picker import running_processes  # noqa: E402


class FakeEntry:
    def __init__(self, pid, name):
        self.info = {"pid": pid, "name": name}


class VanishingEntry:
    @property
    def info(self):
        raise psutil.NoSuchProcess(1)


@pytest.fixture
def procs(monkeypatch):
    entries = [
        FakeEntry(30, "steam.exe"),
        FakeEntry(10, "Code.exe"),
        FakeEntry(20, "SteamWebHelper"),
        FakeEntry(40, None),
        VanishingEntry(),
    ]
    monkeypatch.setattr(psutil, "process_iter", lambda attrs=None: iter(entries))
    return entries


class TestRunningProcesses:
    def test_lists_all_named_sorted_by_name(self, procs):
        assert running_processes() == [(10, "Code.exe"), (30, "steam.exe"), (20, "SteamWebHelper")]

    def test_filter_is_case_insensitive_substring(self, procs):
        assert running_processes("STEAM") == [(30, "steam.exe"), (20, "SteamWebHelper")]

    def test_filter_without_match(self, procs):
        assert running_processes("nope") == []
