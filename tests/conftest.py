import random

import pytest

from engine.clock import ManualClock
from lifecycle.task_registry import TaskRegistry
from models.config import PerformanceConfig, SurfaceConfig, TextLayerConfig, TransitionSettings
from models.enums import TransitionMode
from models.layer import LayerParams
from services.event_bus import EventBus
from services.performance_service import PerformanceService
from surfaces import VirtualSurfaceProvider


@pytest.fixture(autouse=True)
def fresh_task_registry():
    """Every test starts with an empty task registry"""
    TaskRegistry.reset()
    yield
    TaskRegistry.reset()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def surfaces():
    return VirtualSurfaceProvider()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def event_bus():
    return EventBus()


def make_config(surface_count: int = 4, auto_mode: bool = False, mode: TransitionMode = TransitionMode.FIXED) -> PerformanceConfig:
    return PerformanceConfig(
        surfaces=[SurfaceConfig(id=f"player-{i}", title=f"Video {i + 1}") for i in range(surface_count)],
        texts=[
            TextLayerConfig(content="", animation="scroll"),
            TextLayerConfig(content="", animation="vertical", params=LayerParams(color="#00ff00")),
            TextLayerConfig(content="", animation="blink", params=LayerParams(color="#ff00ff")),
        ],
        transitions=TransitionSettings(auto_mode=auto_mode, mode=mode),
    )


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
async def performance(config, surfaces, clock, event_bus):
    service = PerformanceService(config, surfaces, clock, event_bus, rng=random.Random(42))
    yield service
    await service.shutdown()


@pytest.fixture
def config_factory():
    return make_config
