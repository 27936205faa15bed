"""
HTTP control API against a live PerformanceService.

Switches use an instant "cut" transition so requests return immediately.
"""

import random

import pytest
from fastapi.testclient import TestClient

from api.dependencies import set_service_container
from api.main import create_app
from engine.clock import AsyncioClock
from managers.config_manager import ConfigManager
from services.event_bus import EventBus
from services.performance_service import PerformanceService
from services.service_container import ServiceContainer
from surfaces import VirtualSurfaceProvider

V1 = "/api/v1"


async def cut(outgoing, incoming, ctx):
    outgoing.hide()
    incoming.show()


@pytest.fixture
def performance(config_factory):
    surfaces = VirtualSurfaceProvider()
    event_bus = EventBus()
    service = PerformanceService(config_factory(), surfaces, AsyncioClock(), event_bus, rng=random.Random(7))
    service.register_transition("cut", cut)
    set_service_container(ServiceContainer(
        performance=service,
        event_bus=event_bus,
        surfaces=surfaces,
        clock=service.clock,
        config_manager=ConfigManager(),
    ))
    yield service
    set_service_container(None)


@pytest.fixture
def client(performance):
    with TestClient(create_app()) as client:
        yield client
        client.portal.call(performance.shutdown)


def error_code(response):
    return response.json()["error"]["code"]


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_services_not_ready(self):
        set_service_container(None)
        with TestClient(create_app()) as client:
            assert client.get(f"{V1}/layers").status_code == 503


class TestLayers:

    def test_list(self, client):
        body = client.get(f"{V1}/layers").json()
        assert body["count"] == 3
        assert [layer["visible"] for layer in body["layers"]] == [False, False, False]

    def test_update_starts_animation(self, client):
        response = client.put(f"{V1}/layers/0", json={
            "content": "HELLO TOKYO",
            "animation": "wave",
            "params": {"color": "#00ffff", "fontSize": "64px"},
        })

        assert response.status_code == 200
        body = response.json()
        assert body["visible"] and body["running"]
        assert body["animation"] == "wave"
        assert body["params"]["fontSize"] == "64px"
        assert body["params"]["color"] == "#00ffff"
        assert client.get(f"{V1}/layers/visibility").json() == [True, False, False]

    def test_unknown_animation(self, client):
        response = client.put(f"{V1}/layers/0/animation", json={"animation": "moonwalk"})

        assert response.status_code == 404
        assert error_code(response) == "UNKNOWN_KIND"
        assert "scroll" in response.json()["error"]["details"]["available"]

    def test_unknown_index(self, client):
        response = client.get(f"{V1}/layers/7")

        assert response.status_code == 404
        assert error_code(response) == "ADDRESSING_ERROR"

    def test_bad_colour(self, client):
        response = client.patch(f"{V1}/layers/1/params", json={"color": "not a colour"})

        assert response.status_code == 422
        assert error_code(response) == "VALIDATION_ERROR"

    def test_params_and_toggle(self, client):
        body = client.patch(f"{V1}/layers/1/params", json={"speed": 3, "position": "bottom"}).json()
        assert body["params"]["speed"] == 3.0
        assert body["params"]["position"] == "bottom"

        assert client.post(f"{V1}/layers/1/toggle").json() == {"id": 1, "visible": True}

    def test_speed_reset_clear(self, client):
        client.put(f"{V1}/layers/2", json={"content": "X", "animation": "spiral"})

        assert client.post(f"{V1}/layers/speed", json={"multiplier": 2}).json()["speeds"][2] == 2.0
        assert client.post(f"{V1}/layers/reset").json() == {"restarted": 1}
        assert client.post(f"{V1}/layers/clear").json()["layers"][2]["visible"] is False


class TestBackground:

    def test_switch(self, client):
        response = client.post(f"{V1}/background/switch/2", json={"transition": "cut"})

        assert response.status_code == 200
        assert response.json()["switched"] is True
        assert response.json()["current_index"] == 2
        assert response.json()["transition"] == "cut"

        again = client.post(f"{V1}/background/switch/2", json={"transition": "cut"}).json()
        assert again["switched"] is False

    def test_switch_invalid_index(self, client):
        response = client.post(f"{V1}/background/switch/9")
        assert response.status_code == 404

    def test_listing(self, client):
        body = client.get(f"{V1}/background").json()
        assert body["current_index"] == 0
        assert body["switching"] is False
        assert [s["id"] for s in body["surfaces"]] == ["player-0", "player-1", "player-2", "player-3"]


class TestTransitions:

    def test_list(self, client):
        body = client.get(f"{V1}/transitions").json()
        assert body["available"] == ["fade", "glitch", "slide", "cut"]
        assert body["default"] == "fade"
        assert body["mode"] == "fixed"

    def test_execute(self, client):
        body = client.post(f"{V1}/transitions/execute", json={"to_index": 1, "name": "cut"}).json()
        assert body["current_index"] == 1
        assert body["transition"] == "cut"

    def test_default_and_mode(self, client):
        assert client.put(f"{V1}/transitions/default", json={"name": "cut"}).json()["default"] == "cut"
        assert client.put(f"{V1}/transitions/default", json={"name": "wipe"}).status_code == 404
        assert client.put(f"{V1}/transitions/mode", json={"mode": "random"}).json()["mode"] == "random"
        assert client.put(f"{V1}/transitions/mode", json={"mode": "shuffle"}).status_code == 422


class TestEffects:

    def test_trigger(self, client):
        body = client.post(f"{V1}/effects/flash").json()
        assert body == {"kind": "flash", "duration_ms": 200, "background": None}

        blackout = client.post(f"{V1}/effects/blackout", json={"duration_ms": 50}).json()
        assert blackout["duration_ms"] == 50
        assert blackout["background"] == "#000000"

    def test_unknown_effect(self, client):
        response = client.post(f"{V1}/effects/strobe")
        assert response.status_code == 404
        assert error_code(response) == "UNKNOWN_KIND"

    def test_overlay_listing(self, client):
        body = client.get(f"{V1}/effects").json()
        assert body["available"] == ["flash", "glitch", "colorShift", "blackout", "whiteout"]
        assert body["durations_ms"]["colorShift"] == 300


class TestAutoAdvance:

    def test_status_and_toggle(self, client):
        assert client.get(f"{V1}/auto").json()["enabled"] is False
        assert client.post(f"{V1}/auto/start").json()["enabled"] is True
        assert client.post(f"{V1}/auto/toggle").json()["enabled"] is False

    def test_interval(self, client):
        response = client.put(f"{V1}/auto/interval", json={"min_ms": 500, "max_ms": 800})
        assert response.status_code == 422
        assert error_code(response) == "INVALID_INTERVAL"

        body = client.put(f"{V1}/auto/interval", json={"min_ms": 3000, "max_ms": 6000}).json()
        assert body["interval"] == {"min": 3000, "max": 6000}

        scaled = client.post(f"{V1}/auto/scale", json={"multiplier": 0.5}).json()
        assert scaled["interval"] == {"min": 1500, "max": 3000}


class TestSystem:

    def test_status(self, client):
        body = client.get(f"{V1}/system/status").json()
        assert body["current_surface"] == "player-0"
        assert body["overlay"]["kind"] is None
        assert len(body["layers"]) == 3

    def test_events(self, client):
        client.post(f"{V1}/background/switch/1", json={"transition": "cut"})

        events = client.get(f"{V1}/system/events", params={"limit": 5}).json()["events"]
        assert events[-1]["type"] == "SURFACE_SWITCHED"
        assert events[-1]["data"] == {"from_index": 0, "to_index": 1, "transition": "cut"}

    def test_animations(self, client):
        body = client.get(f"{V1}/system/animations").json()
        assert body["count"] == 13
        assert "randomMove" in body["animations"]

    def test_tasks(self, client):
        client.put(f"{V1}/layers/0", json={"content": "A", "animation": "scroll"})

        summary = client.get(f"{V1}/system/tasks/summary").json()
        assert summary["active"] >= 1
        active = client.get(f"{V1}/system/tasks/active").json()
        assert any(t["category"] == "ANIMATION" for t in active["tasks"])
