from .all_tasks_cancellation_handler import AllTasksCancellationHandler
from .api_server_shutdown_handler import APIServerShutdownHandler
from .performance_shutdown_handler import PerformanceShutdownHandler

__all__ = [
    "AllTasksCancellationHandler",
    "APIServerShutdownHandler",
    "PerformanceShutdownHandler",
]
