from __future__ import annotations

from datetime import datetime

from lib_log_fanout.domain.events import LogEvent, SourceLocation, format_timestamp
from lib_log_fanout.domain.levels import LogLevel


def test_render_contains_level_source_and_message_without_timestamp() -> None:
    event = LogEvent(
        level=LogLevel.WARNING,
        message="low disk",
        source=SourceLocation("worker.py", 42),
        timestamp=datetime(2025, 9, 23, 12, 0, 0),
    )

    assert event.render() == "[Warning] worker.py:42 - low disk\n"


def test_source_location_keeps_only_the_base_name() -> None:
    location = SourceLocation.from_path("/srv/app/jobs/worker.py", 9)

    assert location.file == "worker.py"
    assert str(location) == "worker.py:9"


def test_timestamp_prefix_uses_local_wall_clock_fields() -> None:
    assert format_timestamp(datetime(2025, 1, 2, 3, 4, 5, 999999)) == "2025-01-02 03:04:05 "
