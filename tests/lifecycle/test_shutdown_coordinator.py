"""
Shutdown coordinator: trigger sources, critical task monitoring and the
handler sequence
"""

import asyncio

import pytest

from lifecycle.handlers import AllTasksCancellationHandler, PerformanceShutdownHandler
from lifecycle.shutdown_coordinator import ShutdownCoordinator
from lifecycle.task_registry import TaskCategory, spawn


async def _forever():
    while True:
        await asyncio.sleep(0.05)


class RecordingHandler:

    def __init__(self, name, priority, calls, delay=0.0, fail=False):
        self.name = name
        self.shutdown_priority = priority
        self.calls = calls
        self.delay = delay
        self.fail = fail

    async def shutdown(self):
        self.calls.append(self.name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError(f"{self.name} broke")


class TestTriggers:

    @pytest.mark.asyncio
    async def test_request_shutdown(self):
        coordinator = ShutdownCoordinator()
        background = spawn(_forever(), category=TaskCategory.INPUT, description="keyboard")

        async def request_later():
            await asyncio.sleep(0.1)
            coordinator.request_shutdown("quit key")

        requester = asyncio.create_task(request_later())
        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

        assert coordinator.reason == "quit key"
        background.cancel()
        await requester

    @pytest.mark.asyncio
    async def test_critical_task_failure(self):
        coordinator = ShutdownCoordinator()

        async def crash():
            await asyncio.sleep(0.05)
            raise OSError("address already in use")

        spawn(crash(), category=TaskCategory.API, description="API server")

        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

        assert coordinator.reason == "Task failure: API server"

    @pytest.mark.asyncio
    async def test_non_critical_failure_keeps_running(self):
        coordinator = ShutdownCoordinator()

        async def crash():
            raise RuntimeError("layer loop broke")

        spawn(crash(), category=TaskCategory.ANIMATION, description="layer 0")

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=0.5)
        assert coordinator.reason is None

    @pytest.mark.asyncio
    async def test_critical_task_finishing_cleanly_is_not_fatal(self):
        coordinator = ShutdownCoordinator()

        async def finish():
            await asyncio.sleep(0.05)

        spawn(finish(), category=TaskCategory.INPUT, description="keyboard")

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=0.5)


class TestSequence:

    @pytest.mark.asyncio
    async def test_handlers_run_by_priority(self):
        calls = []
        coordinator = ShutdownCoordinator()
        coordinator.register(RecordingHandler("tasks", 30, calls))
        coordinator.register(RecordingHandler("performance", 130, calls))
        coordinator.register(RecordingHandler("api", 90, calls))

        await coordinator.shutdown_all()

        assert calls == ["performance", "api", "tasks"]

    @pytest.mark.asyncio
    async def test_failing_and_slow_handlers_do_not_block_the_rest(self):
        calls = []
        coordinator = ShutdownCoordinator(timeout_per_handler=0.1)
        coordinator.register(RecordingHandler("broken", 100, calls, fail=True))
        coordinator.register(RecordingHandler("slow", 50, calls, delay=5.0))
        coordinator.register(RecordingHandler("last", 10, calls))

        await asyncio.wait_for(coordinator.shutdown_all(), timeout=2.0)

        assert calls == ["broken", "slow", "last"]

    def test_register_rejects_incomplete_handler(self):
        coordinator = ShutdownCoordinator()
        with pytest.raises(ValueError):
            coordinator.register(object())

    def test_get_handler(self):
        coordinator = ShutdownCoordinator()
        handler = AllTasksCancellationHandler()
        coordinator.register(handler)

        assert coordinator.get_handler(AllTasksCancellationHandler) is handler
        assert coordinator.get_handler(PerformanceShutdownHandler) is None


class TestHandlers:

    @pytest.mark.asyncio
    async def test_all_tasks_cancellation(self):
        keep = spawn(_forever(), category=TaskCategory.API, description="api")
        doomed = [spawn(_forever(), category=TaskCategory.ANIMATION, description=f"layer {i}") for i in range(3)]
        await asyncio.sleep(0)

        await AllTasksCancellationHandler(exclude_tasks=[keep.task]).shutdown()

        assert all(h.task.cancelled() for h in doomed)
        assert not keep.done
        keep.cancel()

    @pytest.mark.asyncio
    async def test_performance_handler(self, performance, clock):
        await performance.add_or_update_layer(0, "BYE", "zoom")
        await performance.start_auto_advance()
        handler = PerformanceShutdownHandler(performance)

        await handler.shutdown()
        await clock.settle()

        assert handler.shutdown_priority == 130
        assert not performance.auto_advance.enabled
        assert not performance.layers.layer(0).is_running()
