"""Fixtures compartidas: superficie busy y sumidero de telemetría que graban."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from adapters.error_reporter import ErrorReporter  # noqa: E402
from core.services.busy_signal import BusySignalCoordinator  # noqa: E402


class RecordingSurface:
    def __init__(self) -> None:
        self.events: list[bool] = []

    def set_busy(self, busy: bool) -> None:
        self.events.append(busy)


class RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple[BaseException, str]] = []

    def report(self, error: BaseException, origin: str) -> None:
        self.calls.append((error, origin))


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def busy(surface: RecordingSurface) -> BusySignalCoordinator:
    return BusySignalCoordinator(surface)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def reporter(sink: RecordingSink) -> ErrorReporter:
    return ErrorReporter(sink)
