"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Shutdown is triggered by an OS signal, by a component calling
request_shutdown() (device disconnect), or by a critical task failing.
Registered handlers then run in priority order.
"""

import asyncio
import signal
from typing import List, Optional, Set

from lifecycle.task_registry import TaskRegistry, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

# A failure in one of these ends the process
CRITICAL_TASK_CATEGORIES: Set[TaskCategory] = {
    TaskCategory.DEVICE,
    TaskCategory.INPUT,
}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(AnimationShutdownHandler(players))
        coordinator.register(DeviceShutdownHandler(device))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self.reason: Optional[str] = None
        self.failed = False

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT (Ctrl+C) and SIGTERM handlers."""

        def signal_handler(sig: signal.Signals) -> None:
            log.info(f"Signal {sig.name} received → triggering shutdown")
            self.request_shutdown(sig.name)

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str, failed: bool = False) -> None:
        """Trigger shutdown from application code. First reason wins."""
        if self._shutdown_event.is_set():
            return
        self.reason = reason
        self.failed = failed
        self._shutdown_event.set()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutdown_event.is_set()

    def _find_failed_critical_task(self) -> Optional[str]:
        for record in TaskRegistry.instance().failed():
            if record.info.category in CRITICAL_TASK_CATEGORIES:
                return record.info.description
        return None

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a shutdown request, a signal, or a critical task failure.
        """
        while not self._shutdown_event.is_set():
            failed_task = self._find_failed_critical_task()
            if failed_task:
                log.error(f"❌ Critical task failed: {failed_task}")
                self.request_shutdown(f"Task failure: {failed_task}", failed=True)
                return

            critical_tasks = [
                r.task for r in TaskRegistry.instance().active()
                if r.info.category in CRITICAL_TASK_CATEGORIES
            ]
            shutdown_waiter = asyncio.ensure_future(self._shutdown_event.wait())
            try:
                await asyncio.wait(
                    {shutdown_waiter, *critical_tasks},
                    timeout=None if critical_tasks else 0.2,
                    return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                if not shutdown_waiter.done():
                    shutdown_waiter.cancel()

            # Let the registry's done-callbacks record task outcomes
            await asyncio.sleep(0)

        log.debug("Shutdown requested", reason=self.reason)

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first).
        Each handler has its own timeout and the whole sequence has a
        global timeout. A failing handler does not stop the others.
        """
        log.info("🛑 Initiating graceful shutdown sequence...", reason=self.reason or "UNKNOWN")

        sorted_handlers = sorted(
            self._handlers, key=lambda h: h.shutdown_priority, reverse=True
        )

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"⚠️  Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")

            except asyncio.TimeoutError:
                log.error(f"⚠️  {handler_name} shutdown timeout ({self._timeout_per_handler}s)")

            except Exception as e:
                log.error(f"❌ Error shutting down {handler_name}", error=f"{type(e).__name__}: {e}")

        log.info("✓ Shutdown sequence complete")

    def get_handler(self, handler_type: type):
        """Get a registered handler by type (testing / debugging)."""
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
