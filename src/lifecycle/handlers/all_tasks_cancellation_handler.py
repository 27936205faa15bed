import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AllTasksCancellationHandler(IShutdownHandler):
    """
    Cancels every tracked task except the one running this handler and any
    explicitly excluded tasks, then waits for them to unwind.

    Priority: 30 (last)
    """

    shutdown_priority = 30

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None, grace_seconds: float = 1.0):
        self.exclude_tasks = exclude_tasks or []
        self.grace_seconds = grace_seconds

    async def shutdown(self) -> None:
        current = asyncio.current_task()
        exclude = list(self.exclude_tasks)
        if current:
            exclude.append(current)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("AllTasksCancellationHandler: no tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background task{'s' if len(tasks) != 1 else ''}")

        for task in tasks:
            if not task.done():
                task.cancel(msg="shutdown")

        _, pending = await asyncio.wait(tasks, timeout=self.grace_seconds)
        if pending:
            log.warn(f"{len(pending)} task(s) still running after cancellation")
        else:
            log.debug("All tracked tasks finished")
