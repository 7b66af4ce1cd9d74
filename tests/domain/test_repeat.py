from __future__ import annotations

from datetime import datetime

from lib_log_fanout.domain.repeat import REPEAT_MARKER, RepeatCollapser

TS = datetime(2025, 9, 23, 12, 0, 0)
LATER = datetime(2025, 9, 23, 12, 0, 7)


def test_first_occurrence_is_written_in_full() -> None:
    collapser = RepeatCollapser()

    assert collapser.collapse("[Info] a.py:1 - hi\n", TS) == "2025-09-23 12:00:00 [Info] a.py:1 - hi\n"
    assert collapser.repeating is False


def test_repeats_become_single_markers_without_newline() -> None:
    collapser = RepeatCollapser()
    collapser.collapse("[Info] a.py:1 - hi\n", TS)

    assert [collapser.collapse("[Info] a.py:1 - hi\n", LATER) for _ in range(3)] == [REPEAT_MARKER] * 3
    assert collapser.repeating is True


def test_distinct_line_after_run_starts_on_a_new_line() -> None:
    collapser = RepeatCollapser()
    collapser.collapse("[Info] a.py:1 - hi\n", TS)
    collapser.collapse("[Info] a.py:1 - hi\n", TS)

    assert collapser.collapse("[Error] a.py:1 - hi\n", LATER) == "\n2025-09-23 12:00:07 [Error] a.py:1 - hi\n"
    assert collapser.repeating is False


def test_same_message_at_another_level_is_not_a_repeat() -> None:
    collapser = RepeatCollapser()
    collapser.collapse("[Info] a.py:1 - hi\n", TS)

    assert collapser.collapse("[Notice] a.py:1 - hi\n", TS).endswith("[Notice] a.py:1 - hi\n")


def test_reset_forgets_the_previous_message() -> None:
    collapser = RepeatCollapser()
    collapser.collapse("[Info] a.py:1 - hi\n", TS)
    collapser.collapse("[Info] a.py:1 - hi\n", TS)
    collapser.reset()

    assert collapser.collapse("[Info] a.py:1 - hi\n", TS) == "2025-09-23 12:00:00 [Info] a.py:1 - hi\n"
