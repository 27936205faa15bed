"""
Logger singleton, level filtering and detail tree formatting
"""

import pytest

from utils.logger import LogCategory, LogLevel, configure_logger, get_category_logger, get_logger


@pytest.fixture
def captured():
    lines = []
    logger = get_logger()
    previous = (logger.min_level, logger.use_colors)
    configure_logger(LogLevel.INFO, use_colors=False)
    logger.set_sink(lines.append)
    yield lines
    logger.set_sink(None)
    configure_logger(*previous)


class TestLogger:

    def test_singleton_survives_configure(self):
        original = get_logger()
        configure_logger(LogLevel.DEBUG)
        assert get_logger() is original
        assert get_logger().min_level is LogLevel.DEBUG
        configure_logger(LogLevel.INFO)

    def test_message_with_details(self, captured):
        get_logger().info(LogCategory.TRANSITION, "Transition slide complete", incoming="player-2", duration_ms=600)

        assert "TRANSITION" in captured[0]
        assert captured[0].endswith("Transition slide complete")
        assert captured[1].strip() == "├─ incoming: player-2"
        assert captured[2].strip() == "└─ duration_ms: 600"

    def test_level_filtering(self, captured):
        log = get_category_logger(LogCategory.SCHEDULER)
        log.debug("Next auto switch scheduled", delay_ms=4200)
        assert captured == []

        log.warn("Auto switch skipped")
        assert len(captured) == 1
        assert "SCHEDULER" in captured[0]

    def test_bound_logger_category_override(self, captured):
        log = get_logger().for_category(LogCategory.LAYER)
        log.with_category(LogCategory.EFFECT).info("Flash triggered")

        assert "EFFECT" in captured[0]

    def test_explicit_details_list(self, captured):
        get_logger().info(LogCategory.CONFIG, "Config invalid", details=["Text 1: bad colour"])
        assert captured[1].strip() == "└─ Text 1: bad colour"
