import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Cancels all tracked background tasks (animation ticks, delayed status
    clears, keyboard input) and waits for them to finish.

    The task running the shutdown sequence and any explicitly excluded
    tasks are never cancelled.

    Priority: 40 (last)
    """

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        self.exclude_tasks = exclude_tasks or []

    @property
    def shutdown_priority(self) -> int:
        return 40

    async def shutdown(self) -> None:
        exclude = list(self.exclude_tasks)
        current = asyncio.current_task()
        if current:
            exclude.append(current)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("No background tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background task(s)...")
        for task in tasks:
            task.cancel(msg="shutdown")

        await asyncio.gather(*tasks, return_exceptions=True)
        log.debug("Background tasks cancelled", summary=TaskRegistry.instance().summary())
