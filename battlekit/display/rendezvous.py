"""
Action rendezvous - the blocking hand-off between the battle worker and
the display's foreground thread.

The worker calls ``request()`` and blocks. The foreground thread, in
response to a click or key press, calls ``submit(code)``. Each request
owns a single-slot future that is resolved at most once, so a stray
second click can never wake a later request.

    worker                          foreground
    ------                          ----------
    request() -> open slot
               -> on_open()         (controls enabled)
               -> block             submit(2) -> slot resolved
    <- 2       <- on_close()        (controls disabled)

Invariants:
- At most one outstanding request (a second one raises).
- Submits while no request is open are discarded.
- Codes outside ``0..slots-1`` are rejected before the engine sees them.
- ``abort()`` resolves the pending request with ``NO_ACTION`` and makes
  every later request return ``NO_ACTION`` until ``reset()``.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, TimeoutError as FutureTimeout
from typing import Callable, Optional

from battlekit.core.errors import RendezvousBusyError

logger = logging.getLogger(__name__)

NO_ACTION = -1
ACTION_SLOTS = 4

_DEFAULT = object()


class ActionRendezvous:
    """
    Single-slot channel carrying one action code per request.

    Args:
        slots: Number of valid action codes (codes are ``0..slots-1``)
        on_open: Called on the requesting thread after the slot opens
        on_close: Called on the requesting thread after the slot closes
        timeout: Default wait in seconds, None waits forever
    """

    def __init__(
        self,
        slots: int = ACTION_SLOTS,
        on_open: Optional[Callable[[], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
        timeout: Optional[float] = None,
    ):
        if slots <= 0:
            raise ValueError("slots must be positive")

        self.slots = slots
        self.timeout = timeout
        self._on_open = on_open
        self._on_close = on_close

        self._lock = threading.Lock()
        self._pending: Optional[Future] = None
        self._selected: int = NO_ACTION
        self._aborted = False

    @property
    def is_awaiting(self) -> bool:
        """True while a request is open and waiting for input."""
        with self._lock:
            return self._pending is not None

    @property
    def is_aborted(self) -> bool:
        """True once abort() has been called (until reset())."""
        with self._lock:
            return self._aborted

    @property
    def last_action(self) -> int:
        """Code delivered to the most recent request, or NO_ACTION."""
        with self._lock:
            return self._selected

    def is_valid_code(self, code: int) -> bool:
        """Check a code is one of the action slots."""
        return isinstance(code, int) and not isinstance(code, bool) and 0 <= code < self.slots

    def request(self, timeout: Optional[float] = _DEFAULT) -> int:  # type: ignore[assignment]
        """
        Block until the foreground delivers an action code.

        Args:
            timeout: Seconds to wait (defaults to the rendezvous timeout)

        Returns:
            The submitted code, or NO_ACTION when aborted or timed out

        Raises:
            RendezvousBusyError: if another request is already pending
        """
        if timeout is _DEFAULT:
            timeout = self.timeout

        with self._lock:
            if self._aborted:
                return NO_ACTION
            if self._pending is not None:
                raise RendezvousBusyError("An action request is already pending")
            self._selected = NO_ACTION
            future: Future = Future()
            self._pending = future

        try:
            # Outside the lock: the hook may submit synchronously
            self._call_hook(self._on_open)
            try:
                future.result(timeout=timeout)
            except FutureTimeout:
                pass
        finally:
            # Release the slot even if the open hook raised
            with self._lock:
                if self._pending is future:
                    self._pending = None
                if future.done():
                    code = future.result()
                else:
                    future.cancel()
                    code = NO_ACTION
                self._selected = code
            self._call_hook(self._on_close)

        if code == NO_ACTION and not self.is_aborted:
            logger.warning(f"Action request timed out after {timeout}s")
        return code

    def submit(self, code: int) -> bool:
        """
        Deliver an action code to the pending request.

        Safe to call from any thread. Returns True if the code woke a
        request, False if it was discarded.
        """
        with self._lock:
            future = self._pending
            if future is None or future.done():
                logger.debug(f"Discarding action {code}: no request pending")
                return False
            if not self.is_valid_code(code):
                logger.warning(f"Rejecting out-of-range action code {code!r}")
                return False
            future.set_result(code)
            return True

    def abort(self) -> None:
        """Wake any pending request with NO_ACTION and refuse new ones."""
        with self._lock:
            self._aborted = True
            future = self._pending
            if future is not None and not future.done():
                future.set_result(NO_ACTION)
        logger.info("Action rendezvous aborted")

    def reset(self) -> None:
        """Clear the abort latch."""
        with self._lock:
            self._aborted = False
            self._selected = NO_ACTION

    def _call_hook(self, hook: Optional[Callable[[], None]]) -> None:
        if hook is not None:
            hook()
