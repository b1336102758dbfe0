"""
Cancellation tokens and deadline-bounded execution.

``run_with_deadline`` runs a verification on a daemon thread and races it
against a deadline and an optional caller token. Whichever settles first
decides the result; the losing side is discarded. Python threads cannot be
preempted, so the worker gets its own token that is cancelled when the
caller stops waiting and is expected to check it between steps.
"""

import threading
import time
from datetime import datetime, timedelta
from typing import Callable, Optional, TypeVar, Union

from msgverify.errors import Cancelled, Timeout
from msgverify.log import SafeLogger

T = TypeVar('T')

Deadline = Union[None, int, float, timedelta, datetime]


class CancelToken:
    """One-shot cancellation signal shared between a caller and a worker"""

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None
        self._callbacks = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled by caller") -> bool:
        """Fire the token. Returns False if it had already fired."""
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()
        return True

    def add_callback(self, callback: Callable[[], None]):
        """Run callback on cancel, or immediately if already cancelled"""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def remove_callback(self, callback: Callable[[], None]):
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise Cancelled(self._reason)


def checkpoint(token: Optional[CancelToken]):
    """Stop at a safe point if the token has fired"""
    if token is not None:
        token.raise_if_cancelled()


def seconds_until(deadline: Deadline) -> Optional[float]:
    """Normalize a relative timeout or absolute instant to seconds remaining"""
    if deadline is None:
        return None
    if isinstance(deadline, datetime):
        now = datetime.now(deadline.tzinfo)
        return (deadline - now).total_seconds()
    if isinstance(deadline, timedelta):
        return deadline.total_seconds()
    return float(deadline)


def run_with_deadline(verify_fn: Callable[[CancelToken], T], timeout: Deadline = None,
                      token: Optional[CancelToken] = None, logger=None) -> T:
    """
    Run ``verify_fn(work_token)`` and wait at most ``timeout`` for it.

    Raises Timeout if the deadline passes first and Cancelled if ``token``
    fires first. Otherwise returns the worker's value or re-raises its error.
    """
    log = SafeLogger(logger)
    remaining = seconds_until(timeout)

    if remaining is None:
        log.debug("No deadline set")
    else:
        log.debug("Deadline in %.6fs", remaining)

    if token is not None and token.cancelled:
        log.error("Cancelled before start: %s", token.reason)
        raise Cancelled(token.reason)
    if remaining is not None and remaining <= 0:
        log.error("Deadline already passed")
        raise Timeout("deadline exceeded")

    work_token = CancelToken()
    wake = threading.Event()
    lock = threading.Lock()
    state = {'settled': False, 'result': None}
    started = time.monotonic()

    def worker():
        try:
            result = ('value', verify_fn(work_token))
        except Exception as e:
            result = ('error', e)
        with lock:
            if not state['settled']:
                state['result'] = result
        log.debug("Verification worker finished after %.3fs", time.monotonic() - started)
        wake.set()

    if token is not None:
        token.add_callback(wake.set)

    thread = threading.Thread(target=worker, name="msgverify-worker", daemon=True)
    thread.start()
    try:
        wake.wait(remaining)
    finally:
        if token is not None:
            token.remove_callback(wake.set)

    with lock:
        state['settled'] = True
        result = state['result']

    if result is not None:
        kind, payload = result
        if kind == 'error':
            raise payload
        return payload

    if token is not None and token.cancelled:
        work_token.cancel(token.reason or "cancelled by caller")
        log.error("Verification cancelled: %s", token.reason)
        raise Cancelled(token.reason)

    work_token.cancel("deadline exceeded")
    log.error("Verification timed out after %.3fs", time.monotonic() - started)
    raise Timeout("deadline exceeded")
