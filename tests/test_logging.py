"""Tests for structured logging configuration."""
import json
import logging
from collections.abc import Iterator
from io import StringIO

import pytest
import structlog
from rich.console import Console

from license_report.logging import setup_logging


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(logging.WARNING)


class TestConsoleLogging:
    """Tests for the rich console renderer."""

    def test_warning_is_printed_with_context(self) -> None:
        """Test that events are printed as key=value lines."""
        output = StringIO()
        setup_logging("INFO", console=Console(file=output, width=200))

        structlog.get_logger("importer").warning(
            "Skipping malformed record", importer="Front End", index=3
        )

        text = output.getvalue()
        assert "Skipping malformed record" in text
        assert "importer" in text
        assert "Front End" in text
        assert "warning" in text

    def test_events_below_level_are_dropped(self) -> None:
        """Test that the configured level filters events."""
        output = StringIO()
        setup_logging("WARNING", console=Console(file=output, width=200))

        structlog.get_logger("pipeline").info("Report built", dependencies=3)

        assert output.getvalue() == ""

    def test_markup_in_values_is_not_interpreted(self) -> None:
        """Test that square brackets in values are printed literally."""
        output = StringIO()
        setup_logging("INFO", console=Console(file=output, width=200))

        structlog.get_logger("normalizer").warning("Odd value", text="[bold]x[/bold]")

        assert "[bold]x[/bold]" in output.getvalue()


class TestJsonLogging:
    """Tests for JSON log output."""

    def test_events_are_json_objects(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that JSON mode emits one parseable object per event."""
        setup_logging("INFO", json_output=True)

        structlog.get_logger("dispatch").error("Renderer failed", renderer="json")

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "Renderer failed"
        assert payload["renderer"] == "json"
        assert payload["level"] == "error"
        assert payload["logger"] == "dispatch"
        assert "timestamp" in payload
