"""
Dummy keyboard adapter for sessions without a usable terminal (service
managers, piped stdin, Windows). Publishes nothing; the HTTP API remains the
only control surface.
"""

import asyncio
from typing import TYPE_CHECKING

from .base import IKeyboardAdapter

if TYPE_CHECKING:
    from services.event_bus import EventBus


class DummyKeyboardAdapter(IKeyboardAdapter):

    def __init__(self, event_bus: "EventBus"):
        self.event_bus = event_bus

    async def run(self) -> None:
        while True:
            await asyncio.sleep(1.0)
