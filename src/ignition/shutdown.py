"""
Shutdown coordination.

A ShutdownCoordinator owns the process shutdown lifecycle: components
register async callbacks once, the coordinator binds the termination signals,
and the callbacks run in registration order exactly once, either on a signal
or when shutdown() is awaited directly.
"""

import asyncio
import signal
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from .logging_config import logger


ShutdownCallback = Callable[[], Awaitable[None]]

DEFAULT_SIGNALS = (signal.SIGTERM, signal.SIGINT)


class ShutdownCoordinator:
    """
    Runs registered shutdown callbacks when the process is asked to stop.

    Registration is keyed by name so a component registering twice does not
    get its callback run twice.
    """

    def __init__(self, signals: Sequence[int] = DEFAULT_SIGNALS):
        self.signals = tuple(signals)
        self.shutdown_event = asyncio.Event()
        self._callbacks: Dict[str, ShutdownCallback] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_signals: List[int] = []
        self._previous_handlers: Dict[int, object] = {}
        self._task: Optional[asyncio.Task] = None
        self._started = False

    @property
    def installed(self) -> bool:
        return self._loop is not None

    @property
    def registered(self) -> List[str]:
        return list(self._callbacks)

    def register(self, name: str, callback: ShutdownCallback) -> bool:
        """
        Register a shutdown callback.

        Args:
            name: Unique name of the registering component
            callback: Coroutine function to await on shutdown

        Returns:
            True if registered, False if the name was already registered
        """
        if name in self._callbacks:
            logger.debug(f"Shutdown hook '{name}' already registered, ignoring")
            return False
        self._callbacks[name] = callback
        logger.debug(f"Registered shutdown hook '{name}'")
        return True

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """
        Bind the termination signals to this coordinator.

        Uses the event loop's signal support where available and falls back
        to signal.signal() otherwise. Calling install() again is a no-op.
        """
        if self.installed:
            return
        self._loop = loop or asyncio.get_running_loop()

        for sig in self.signals:
            try:
                self._loop.add_signal_handler(sig, self._on_signal, sig)
                self._loop_signals.append(sig)
            except (NotImplementedError, RuntimeError):
                try:
                    self._previous_handlers[sig] = signal.signal(sig, self._handle_signal_fallback)
                except ValueError as e:
                    # Not the main thread; the owner has to call shutdown() itself
                    logger.warning(f"Cannot bind signal {sig}: {e}")

        logger.debug(f"Shutdown signals bound: {[int(s) for s in self.signals]}")

    def uninstall(self) -> None:
        """Restore the signal handling that was in place before install()."""
        if not self.installed:
            return
        for sig in self._loop_signals:
            self._loop.remove_signal_handler(sig)
        for sig, previous in self._previous_handlers.items():
            signal.signal(sig, previous)
        self._loop_signals.clear()
        self._previous_handlers.clear()
        self._loop = None

    def _on_signal(self, signum: int) -> None:
        logger.info(f"Received signal {signum}, shutting down")
        if self._task is None:
            self._task = self._loop.create_task(self.shutdown())

    def _handle_signal_fallback(self, signum, frame):
        """signal.signal() handler; hands the signal over to the event loop."""
        self._loop.call_soon_threadsafe(self._on_signal, signum)

    async def shutdown(self) -> None:
        """
        Run every registered callback once, in registration order.

        A failing callback stops the sequence and its error propagates.
        Later calls return immediately.
        """
        if self._started:
            return
        self._started = True

        try:
            for name, callback in list(self._callbacks.items()):
                logger.debug(f"Running shutdown hook '{name}'")
                try:
                    await callback()
                except Exception as e:
                    logger.error(f"Shutdown hook '{name}' failed: {e}")
                    raise
        finally:
            self.shutdown_event.set()

    async def wait(self) -> None:
        """Block until shutdown has run; re-raises a signal-triggered failure."""
        await self.shutdown_event.wait()
        if self._task is not None:
            await self._task
