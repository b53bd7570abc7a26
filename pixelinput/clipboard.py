"""Clipboard shared by every input widget, mirrored to the OS clipboard."""

import logging
import queue
import threading
from typing import Optional

import pyperclip

from .constants import InputConstants
from .persistence import PersistentStore, get_store

logger = logging.getLogger(__name__)


class OSClipboardWriter:
    """Writes to the OS clipboard on one background thread.

    Values are written in the order they were submitted, so the OS
    clipboard always ends up holding the most recent copy even when a
    single write blocks for a while.
    """

    def __init__(self):
        self._pending: "queue.Queue[str]" = queue.Queue()
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None

    def submit(self, value: str) -> None:
        self._pending.put(value)
        with self._lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(
                    target=self._drain,
                    name="pixelinput-clipboard",
                    daemon=True,
                )
                self._worker.start()

    def wait(self) -> None:
        """Block until every submitted value has been written."""
        self._pending.join()

    def _drain(self) -> None:
        while True:
            value = self._pending.get()
            try:
                ClipboardBridge._copy_to_os(value)
            finally:
                self._pending.task_done()


_os_writer = OSClipboardWriter()


class ClipboardBridge:
    """Reads and writes the process-wide clipboard value.

    Reading the OS clipboard is unreliable (it may need a helper binary,
    block, or be refused outright), so the value of record lives in the
    persistent store and reads only ever consult that mirror. Writes also
    go to the OS clipboard through the shared background writer so other
    applications can paste; that write is never waited on and its failures
    are dropped.
    """

    def __init__(self, store: Optional[PersistentStore] = None,
                 key: str = InputConstants.CLIPBOARD_KEY,
                 os_writer: Optional[OSClipboardWriter] = None):
        """Initialize the bridge.

        Args:
            store: Persistent store holding the mirror. Defaults to the
                process-wide store, looked up on every access so that a
                store swapped by ``set_store`` takes effect immediately.
            key: Key of the clipboard value in the store
            os_writer: Writer for the OS clipboard. Defaults to the one
                shared by every bridge in the process.
        """
        self._store = store
        self.key = key
        self.os_writer = os_writer or _os_writer

    @property
    def store(self) -> PersistentStore:
        return self._store if self._store is not None else get_store()

    def get(self) -> str:
        """Return the current clipboard text, empty if nothing was copied."""
        return self.store.get_item(self.key) or ""

    def set(self, value: str) -> None:
        """Copy ``value``; empty values leave the clipboard as it was."""
        if not value:
            return
        self.store.set_item(self.key, value)
        self.os_writer.submit(value)

    @staticmethod
    def _copy_to_os(value: str) -> None:
        try:
            pyperclip.copy(value)
        except (pyperclip.PyperclipException, OSError) as e:
            # No clipboard mechanism (headless session, missing xclip, ...)
            logger.debug(f"OS clipboard write failed: {e}")
