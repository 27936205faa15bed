import asyncio
import select
import sys
import termios
import tty
from typing import List, Optional

from models.events import KeyboardKeyPressEvent, KeyboardSource
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory
from .base import IKeyboardAdapter

log = get_logger().for_category(LogCategory.INPUT)

ARROW_KEYS = {
    '\x1b[A': 'UP',
    '\x1b[B': 'DOWN',
    '\x1b[C': 'RIGHT',
    '\x1b[D': 'LEFT',
}


class StdinKeyboardAdapter(IKeyboardAdapter):
    """
    Terminal keyboard adapter

    Intended for SSH sessions and local terminals running the performance
    headless. Puts the terminal in cbreak mode (Ctrl+C still raises SIGINT)
    and restores it on exit.

    Key names published: single characters upper-cased ('1', 'Q'), 'SPACE',
    'ENTER', 'TAB', 'BACKSPACE', 'ESCAPE', 'UP', 'DOWN', 'LEFT', 'RIGHT'.
    Ctrl+letter arrives as the letter with modifiers=['CTRL'].
    """

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self._old_settings = None
        self._buffer = ""

    async def run(self) -> None:
        """
        Read stdin until cancelled.

        Raises:
            RuntimeError: stdin is not a TTY or cannot be read
        """
        if not sys.stdin.isatty():
            raise RuntimeError("STDIN is not a TTY")

        self._old_settings = termios.tcgetattr(sys.stdin)
        tty.setcbreak(sys.stdin.fileno())
        log.info("STDIN keyboard adapter active (cbreak mode enabled)")

        try:
            while True:
                ready, _, _ = select.select([sys.stdin], [], [], 0)
                if not ready:
                    await asyncio.sleep(0.01)
                    continue

                try:
                    char = sys.stdin.read(1)
                except OSError as e:
                    raise RuntimeError("STDIN read failed") from e

                if not char:
                    continue

                self._buffer += char
                await self.feed()

        except asyncio.CancelledError:
            log.debug("STDIN keyboard adapter cancelled")
            raise

        finally:
            if self._old_settings:
                termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self._old_settings)
                log.debug("Terminal settings restored")

    async def feed(self, data: str = "") -> None:
        """
        Consume buffered input and publish one event per complete key.

        An incomplete escape sequence stays buffered until more input arrives.
        """
        self._buffer += data

        while self._buffer:
            if self._buffer.startswith('\x1b['):
                if len(self._buffer) < 3:
                    return
                seq, self._buffer = self._buffer[:3], self._buffer[3:]
                key = ARROW_KEYS.get(seq)
                if key:
                    await self._publish_key(key)
                else:
                    log.debug("Unknown escape sequence", sequence=repr(seq))
                continue

            if self._buffer == '\x1b':
                return

            if self._buffer.startswith('\x1b'):
                self._buffer = self._buffer[1:]
                await self._publish_key("ESCAPE")
                continue

            char, self._buffer = self._buffer[0], self._buffer[1:]

            if char in ('\r', '\n'):
                await self._publish_key("ENTER")
            elif char == '\t':
                await self._publish_key("TAB")
            elif char == '\x7f':
                await self._publish_key("BACKSPACE")
            elif char == ' ':
                await self._publish_key("SPACE")
            elif '\x01' <= char <= '\x1a':
                await self._publish_key(chr(ord(char) + 96).upper(), modifiers=["CTRL"])
            elif char.isprintable():
                if char.isupper():
                    await self._publish_key(char, modifiers=["SHIFT"])
                else:
                    await self._publish_key(char.upper())

    async def _publish_key(self, key: str, modifiers: Optional[List[str]] = None) -> None:
        log.debug(f"Key pressed (stdin): {key}", modifiers=modifiers or [])
        await self.event_bus.publish(KeyboardKeyPressEvent(key, modifiers, KeyboardSource.STDIN))
