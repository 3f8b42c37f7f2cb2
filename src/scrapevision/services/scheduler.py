"""Cancellable delayed calls executed one at a time on a worker thread."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a pending call; ``cancel()`` revokes it if it has not started."""
    
    def __init__(self):
        self._cancelled = threading.Event()
        self._timer: Optional[threading.Timer] = None
    
    def cancel(self) -> None:
        self._cancelled.set()
        if self._timer is not None:
            self._timer.cancel()
    
    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


class ThreadScheduler:
    """Runs scheduled calls sequentially on a single worker thread.

    Delays are handled by ``threading.Timer``; when a timer fires the call is
    queued on a one-worker executor, so two calls never run concurrently.
    Fire-and-forget work goes through ``call_detached`` on a second worker
    and never holds up the main queue.
    """
    
    def __init__(self, name: str = "scrapevision"):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._detached = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{name}-detached")
        self._lock = threading.Lock()
        self._closed = False
    
    def call_later(self, delay: float, fn: Callable, *args) -> ScheduledCall:
        """Run ``fn(*args)`` after ``delay`` seconds."""
        handle = ScheduledCall()
        if delay <= 0:
            self._enqueue(handle, fn, args)
            return handle
        
        timer = threading.Timer(delay, self._enqueue, args=(handle, fn, args))
        timer.daemon = True
        handle._timer = timer
        timer.start()
        return handle
    
    def call_detached(self, fn: Callable, *args) -> ScheduledCall:
        """Run ``fn(*args)`` as soon as possible on the side worker."""
        handle = ScheduledCall()
        with self._lock:
            if not self._closed:
                self._detached.submit(self._run, handle, fn, args)
        return handle
    
    def _enqueue(self, handle: ScheduledCall, fn: Callable, args) -> None:
        with self._lock:
            if self._closed or handle.cancelled:
                return
            self._executor.submit(self._run, handle, fn, args)
    
    @staticmethod
    def _run(handle: ScheduledCall, fn: Callable, args) -> None:
        if handle.cancelled:
            return
        try:
            fn(*args)
        except Exception:
            logger.exception(f"Scheduled call {getattr(fn, '__name__', fn)!r} failed")
    
    def shutdown(self, wait: bool = False) -> None:
        """Stop accepting new calls; already queued calls still run."""
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait)
        self._detached.shutdown(wait=wait)
