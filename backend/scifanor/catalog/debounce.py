"""Cancellable quiet-period timer for search-as-you-type."""
import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs ``func`` once input has been quiet for ``wait_ms`` milliseconds.

    Every ``call`` cancels the pending timer and starts a new one, so at most
    one evaluation is ever pending for the input stream.
    """

    def __init__(self, func: Callable[..., Any], wait_ms: int = 300,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.func = func
        self.wait = wait_ms / 1000
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._args: tuple = ()
        self._kwargs: dict = {}

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._args, self._kwargs = args, kwargs
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.wait, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Run the pending evaluation immediately, if there is one."""
        if self._handle is not None:
            self.cancel()
            self._run()

    def _fire(self) -> None:
        self._handle = None
        self._run()

    def _run(self) -> None:
        args, kwargs = self._args, self._kwargs
        self._args, self._kwargs = (), {}
        try:
            self.func(*args, **kwargs)
        except Exception:
            logger.exception("Debounced call to %r failed", self.func)
