from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from typing import Iterator


class CancelToken:
    """Set once by the interrupt handler, polled by the update loops."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@contextmanager
def interrupt_handler(token: CancelToken) -> Iterator[CancelToken]:
    """Route SIGINT to `token` for the duration of the block.

    The previous handler is restored on exit, so an interrupt during one
    phase never leaks into the next phase or the next comic.
    """
    if threading.current_thread() is not threading.main_thread():
        # signal handlers can only be installed from the main thread
        yield token
        return

    def _on_sigint(signum, frame):
        if not token.cancelled:
            print("[WARN] Interrupted by user...")
        token.cancel()

    previous = signal.signal(signal.SIGINT, _on_sigint)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)
