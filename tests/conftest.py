"""Shared fixtures: isolate the clipboard store and the OS clipboard."""

import pytest

from pixelinput import clipboard, persistence
from pixelinput.constants import InputConstants


@pytest.fixture(autouse=True)
def isolated_store(tmp_path, monkeypatch):
    """Point the process-wide store at a fresh temporary directory."""
    monkeypatch.setenv(InputConstants.STORE_DIR_ENV, str(tmp_path / "store"))
    persistence.reset_store()
    yield persistence.get_store()
    persistence.reset_store()


@pytest.fixture(autouse=True)
def os_clipboard(monkeypatch):
    """Record OS clipboard writes instead of touching the real clipboard."""
    copied = []
    monkeypatch.setattr("pyperclip.copy", copied.append)
    yield copied
    # Finish this test's writes before the real copy is restored
    clipboard.ClipboardBridge().os_writer.wait()
