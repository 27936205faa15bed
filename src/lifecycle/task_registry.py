"""
Task Registry
-------------

Centralized tracking of asyncio tasks created across the application.
Every cancellable loop or timer (layer frame loops, transition runs,
effect reverts, the auto-advance timer) is spawned through here and handed
back to its owner as a TaskHandle.

Features:
- Register tasks with metadata (category, description, origin)
- Track creation time, completion state, cancellation, errors
- Introspection API for debugging & the HTTP API
- Shutdown helper returning every task still running
"""

from __future__ import annotations

import asyncio
import traceback
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Coroutine, Dict, List, Optional
from datetime import datetime, timezone

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


# ---------------------------------------------------------------------------
# TASK CATEGORY ENUM
# ---------------------------------------------------------------------------

class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    ANIMATION = auto()    # Text layer frame loops
    TRANSITION = auto()   # Background hand-offs
    EFFECT = auto()       # Overlay pulse reverts
    SCHEDULER = auto()    # Auto-advance timer
    API = auto()
    INPUT = auto()
    SYSTEM = auto()
    GENERAL = auto()


# ---------------------------------------------------------------------------
# TASK METADATA
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string
    created_timestamp: float  # epoch, for sorting
    origin_stack: str  # short stack trace where the task was spawned
    created_by: Optional[str] = None  # optional hint (module / function)


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None
    finished_at: Optional[str] = None  # ISO time when finished


# ---------------------------------------------------------------------------
# TASK HANDLE
# ---------------------------------------------------------------------------

@dataclass
class TaskHandle:
    """
    Cancellable handle for one tracked task.

    The single handle type for every loop and timer in the engine; the
    category tag tells what kind of work it is.

    cancel() on a finished or already-cancelled handle is a no-op and
    returns False.
    """
    task: asyncio.Task
    category: TaskCategory
    description: str = ""
    task_id: Optional[int] = None

    @property
    def done(self) -> bool:
        return self.task.done()

    def cancel(self) -> bool:
        if self.task.done():
            return False
        return self.task.cancel()

    async def wait(self) -> None:
        """Await completion, swallowing only this task's own cancellation."""
        try:
            await asyncio.shield(self.task)
        except asyncio.CancelledError:
            if not self.task.cancelled():
                raise

    async def cancel_and_wait(self) -> bool:
        cancelled = self.cancel()
        try:
            await self.task
        except asyncio.CancelledError:
            if not self.task.cancelled():
                raise
        except Exception:
            # Failure already recorded and logged by the registry
            pass
        return cancelled


# ---------------------------------------------------------------------------
# TASK REGISTRY SINGLETON
# ---------------------------------------------------------------------------

class TaskRegistry:
    """
    Global registry for all asyncio tasks in the application.

    Responsibilities:
    - Track tasks and metadata
    - Detect and log task failures
    - Provide debugging API
    - Assist shutdown by exposing active tasks
    """

    _instance: Optional["TaskRegistry"] = None

    # Finished records kept for introspection; older ones are dropped
    MAX_FINISHED = 500

    def __init__(self) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._next_id: int = 1

    # -----------------------------
    # Singleton accessor
    # -----------------------------
    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (tests)."""
        cls._instance = None

    # -----------------------------
    # Register new task
    # -----------------------------
    def register(
        self,
        task: asyncio.Task,
        category: TaskCategory,
        description: str,
        created_by: Optional[str] = None
    ) -> int:
        """Register a new task with metadata."""
        task_id = self._next_id
        self._next_id += 1

        # Capture short stack, dropping the frame inside this module
        stack_lines = traceback.format_stack(limit=8)
        origin_stack = "".join(stack_lines[:-1])

        now = datetime.now(timezone.utc)

        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=now.isoformat(),
            created_timestamp=now.timestamp(),
            origin_stack=origin_stack,
            created_by=created_by,
        )

        self._records[task_id] = TaskRecord(task=task, info=info)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        self._prune()

        return task_id

    # -----------------------------
    # Internal completion handler
    # -----------------------------
    def _on_task_done(self, task: asyncio.Task) -> None:
        """Internal callback whenever a task finishes."""
        record = self._get_record_by_task(task)
        if record is None:
            return

        record.finished_at = datetime.now(timezone.utc).isoformat()

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(
                f"[Task {record.info.id}] FAILED: {exc}",
                description=record.info.description,
                task_category=record.info.category.name,
            )
        else:
            record.finished_return = task.result()
            log.debug(f"[Task {record.info.id}] Completed successfully")

    def _get_record_by_task(self, task: asyncio.Task) -> Optional[TaskRecord]:
        for record in self._records.values():
            if record.task is task:
                return record
        return None

    def _prune(self) -> None:
        finished = [tid for tid, r in self._records.items() if r.task.done()]
        overflow = len(finished) - self.MAX_FINISHED
        for tid in finished[:max(0, overflow)]:
            del self._records[tid]

    # -----------------------------
    # Public API
    # -----------------------------

    def list_all(self) -> List[TaskRecord]:
        """Return a list of all tracked task records."""
        return list(self._records.values())

    def active(self, category: Optional[TaskCategory] = None) -> List[TaskRecord]:
        """Return only tasks that are still running, optionally of one category."""
        return [
            r for r in self._records.values()
            if not r.task.done() and (category is None or r.info.category is category)
        ]

    def failed(self) -> List[TaskRecord]:
        """Return tasks that ended with an exception."""
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        """Return cancelled tasks."""
        return [r for r in self._records.values() if r.cancelled]

    def summary(self) -> str:
        """Return human-readable summary for logs."""
        return (
            f"Tasks: total={len(self._records)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={len(self.cancelled())}"
        )

    # -----------------------------
    # Shutdown helpers
    # -----------------------------

    def get_tasks_for_shutdown(
        self,
        exclude: Optional[List[asyncio.Task]] = None
    ) -> List[asyncio.Task]:
        """Return all tasks that should be cancelled during shutdown."""
        exclude = exclude or []
        tasks = [
            r.task for r in self._records.values()
            if not r.task.done() and r.task not in exclude
        ]

        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


# ---------------------------------------------------------------------------
# Convenience wrapper functions
# ---------------------------------------------------------------------------

def create_tracked_task(
    coro: Coroutine,
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """
    Create and register a task in a single call.
    """
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro)

    TaskRegistry.instance().register(
        task=task,
        category=category,
        description=description
    )

    return task


def spawn(
    coro: Coroutine,
    *,
    category: TaskCategory,
    description: str,
) -> TaskHandle:
    """Create a tracked task and wrap it in a TaskHandle."""
    task = asyncio.get_running_loop().create_task(coro)
    task_id = TaskRegistry.instance().register(
        task=task,
        category=category,
        description=description,
    )
    return TaskHandle(task=task, category=category, description=description, task_id=task_id)
