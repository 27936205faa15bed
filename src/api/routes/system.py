"""
System endpoints - task introspection, engine status, event history
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from animations.registry import ANIMATIONS
from api.dependencies import get_service_container
from lifecycle.task_registry import TaskRecord, TaskRegistry
from services.service_container import ServiceContainer
from utils.serialization import Serializer

router = APIRouter(prefix="/system", tags=["System"])


def _task_status(r: TaskRecord) -> str:
    if not r.task.done():
        return "running"
    if r.cancelled:
        return "cancelled"
    if r.finished_with_error:
        return "failed"
    return "completed"


def _task_to_dict(r: TaskRecord) -> Dict[str, Any]:
    return {
        "id": r.info.id,
        "category": r.info.category.name,
        "description": r.info.description,
        "created_at": r.info.created_at,
        "status": _task_status(r),
        "error": str(r.finished_with_error) if r.finished_with_error else None,
    }


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    High-level task summary.

    Returns:
        - summary: Human-readable summary string
        - total / active / failed / cancelled counts
    """
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "total": len(registry.list_all()),
        "active": len(registry.active()),
        "failed": len(registry.failed()),
        "cancelled": len(registry.cancelled()),
    }


@router.get("/tasks")
async def get_all_tasks() -> Dict[str, Any]:
    records = TaskRegistry.instance().list_all()
    return {"count": len(records), "tasks": [_task_to_dict(r) for r in records]}


@router.get("/tasks/active")
async def get_active_tasks() -> Dict[str, Any]:
    """Currently running tasks, oldest first (layer loops, timers, transitions)"""
    now = datetime.now(timezone.utc).timestamp()
    records = sorted(TaskRegistry.instance().active(), key=lambda r: r.info.created_timestamp)
    tasks = []
    for r in records:
        entry = _task_to_dict(r)
        entry["running_for_seconds"] = round(now - r.info.created_timestamp, 2)
        tasks.append(entry)
    return {"count": len(tasks), "tasks": tasks}


@router.get("/tasks/failed")
async def get_failed_tasks() -> Dict[str, Any]:
    records = TaskRegistry.instance().failed()
    tasks = []
    for r in records:
        entry = _task_to_dict(r)
        entry["error_type"] = type(r.finished_with_error).__name__
        tasks.append(entry)
    return {"count": len(tasks), "tasks": tasks}


@router.get("/animations")
async def list_animations() -> Dict[str, Any]:
    """Every animation kind a text layer accepts"""
    kinds: List[str] = [kind.value for kind in ANIMATIONS]
    return {"animations": kinds, "count": len(kinds)}


@router.get("/status")
async def get_status(services: ServiceContainer = Depends(get_service_container)) -> Dict[str, Any]:
    """Full engine snapshot: background, layers, overlay, auto-advance"""
    return Serializer.to_jsonable(services.performance.status())


@router.get("/events")
async def get_recent_events(
    limit: int = Query(20, ge=1, le=100),
    services: ServiceContainer = Depends(get_service_container)
) -> Dict[str, Any]:
    events = services.event_bus.get_event_history(limit)
    return {
        "count": len(events),
        "events": [
            {
                "type": event.type.name,
                "source": event.source.name if event.source else None,
                "timestamp": event.timestamp,
                "data": Serializer.to_jsonable(event.to_data()),
            }
            for event in events
        ],
    }
