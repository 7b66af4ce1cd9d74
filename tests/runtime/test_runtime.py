from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

import click
import pytest

import lib_log_fanout as log
from lib_log_fanout import LogLevel, SourceLocation, SyslogUnavailableError

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture
def root_logger_guard() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    try:
        yield root
    finally:
        log.shutdown()
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
        for handler in before:
            if handler not in root.handlers and not type(handler).__module__.startswith("_pytest"):
                root.addHandler(handler)
        root.setLevel(level)


def test_each_level_twice_collapses_pairs_in_the_file(tmp_path: Path, console, clock, terminations) -> None:
    target = tmp_path / "app.log"
    log.init(console=console, clock=clock, terminate=terminations, file_path=target, file_level="debug")
    levels = [
        LogLevel.DEBUG,
        LogLevel.INFO,
        LogLevel.NOTICE,
        LogLevel.WARNING,
        LogLevel.ERROR,
        LogLevel.CRITICAL,
        LogLevel.ALERT,
    ]

    for level in levels:
        for _ in range(2):
            log.log(level, "test")

    lines = target.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 14
    for index, level in enumerate(levels):
        full, marker = lines[2 * index], lines[2 * index + 1]
        assert re.fullmatch(rf"2025-09-23 12:00:00 \[{level.display_name}\] test_runtime\.py:\d+ - test", full)
        assert marker == "."
    assert console.text == target.read_text(encoding="utf-8")


def test_default_runtime_is_created_on_first_use(capsys: pytest.CaptureFixture[str]) -> None:
    assert log.is_initialised() is False

    result = log.info("hello", "world")

    out = ANSI_RE.sub("", capsys.readouterr().out)
    assert result == {"ok": True, "sinks": ("console",)}
    assert log.is_initialised() is True
    assert re.search(r"\[Info\] test_runtime\.py:\d+ - hello world\n", out)


def test_severe_levels_reach_stderr_through_the_default_console(capsys: pytest.CaptureFixture[str]) -> None:
    log.warning("careful")

    captured = capsys.readouterr()
    assert "[Warning]" in ANSI_RE.sub("", captured.err)
    assert captured.out == ""


def test_plain_and_pattern_variants_build_the_message(runtime) -> None:
    log.error("failed", 3, None)
    log.errorf("%s=%d", "retries", 3)
    log.noticef("100% literal")

    texts = [line.split(" - ", 1)[1] for _, line in runtime.lines]
    assert texts == ["failed 3 None\n", "retries=3\n", "100% literal\n"]


def test_explicit_source_overrides_the_call_site(runtime) -> None:
    log.log("info", "ready", source=SourceLocation("worker.py", 7))
    log.logf(LogLevel.INFO, "%s", "steady", source=SourceLocation("worker.py", 8))

    assert runtime.lines[0][1].endswith("[Info] worker.py:7 - ready\n")
    assert runtime.lines[1][1].endswith("[Info] worker.py:8 - steady\n")


def test_fatal_dispatches_then_terminates(runtime, terminations) -> None:
    result = log.fatal("giving", "up")
    log.fatalf("code %d", 7)
    log.log("emerg", "via alias")

    assert result["ok"] is True
    assert terminations.count == 3
    assert [level for level, _ in runtime.lines] == [LogLevel.FATAL] * 3
    assert runtime.lines[0][1].endswith(" - giving up\n")


@pytest.mark.parametrize(
    ("func", "level"),
    [
        (log.alert, LogLevel.ALERT),
        (log.critical, LogLevel.CRITICAL),
        (log.error, LogLevel.ERROR),
        (log.warning, LogLevel.WARNING),
        (log.notice, LogLevel.NOTICE),
        (log.info, LogLevel.INFO),
        (log.debug, LogLevel.DEBUG),
    ],
)
def test_per_level_entry_points(runtime, terminations, func, level: LogLevel) -> None:
    func("message")

    assert runtime.lines[0][0] is level
    assert f"[{level.display_name}]" in runtime.lines[0][1]
    assert terminations.count == 0


def test_console_threshold_setter(runtime) -> None:
    log.set_console_level("warning")

    assert log.info("hidden") == {"ok": True, "sinks": ()}
    assert log.warning("shown")["ok"] is True
    assert log.inspect_runtime().console_level is LogLevel.WARNING
    assert len(runtime.lines) == 1


def test_file_sink_registration_and_threshold(runtime, tmp_path: Path) -> None:
    target = tmp_path / "late.log"
    log.info("before file")

    log.init_file(target, "error")
    log.info("console only")
    log.error("both")
    log.set_file_level("info")
    log.info("now in file")

    content = target.read_text(encoding="utf-8")
    assert "before file" not in content
    assert "console only" not in content
    assert "[Error]" in content and "- both" in content
    assert "- now in file" in content
    assert log.inspect_runtime().file_path == target


def test_file_sink_failure_is_reported_then_sink_stays_off(runtime, tmp_path: Path) -> None:
    log.init_file(tmp_path)

    first = log.error("one")
    second = log.error("two")

    assert first["reason"] == "adapter_error"
    assert second["ok"] is True
    assert log.inspect_runtime().file_path is None
    with pytest.raises(log.DispatchError):
        log.raise_for_errors(first)


def test_rate_limit_setter(runtime, clock) -> None:
    log.set_max_messages_per_second(2)

    results = [log.info(f"burst {index}")["ok"] for index in range(3)]
    clock.advance(1)
    later = log.info("after")
    log.set_max_messages_per_second(0)

    assert results == [True, True, False]
    assert later["ok"] is True
    assert log.inspect_runtime().max_messages_per_second == 0


def test_syslog_init_and_level_setter(runtime, syslog_sender) -> None:
    log.init_syslog("svc", "warning", sender=syslog_sender)
    log.info("console only")
    log.warning("everywhere")
    log.set_syslog_level("info")
    log.info("now syslog too")

    assert [priority for priority, _ in syslog_sender.sent] == ["warning", "info"]
    assert syslog_sender.sent[0][1].startswith("[Warning] test_runtime.py:")
    snapshot = log.inspect_runtime()
    assert snapshot.syslog_tag == "svc"
    assert snapshot.syslog_level is LogLevel.INFO
    assert snapshot.console_level is LogLevel.DEBUG


def test_failed_syslog_init_leaves_the_sink_inactive(runtime, tmp_path: Path) -> None:
    with pytest.raises(SyslogUnavailableError):
        log.init_syslog("svc", "error", address=str(tmp_path / "missing.sock"))

    snapshot = log.inspect_runtime()
    assert snapshot.syslog_tag is None
    assert snapshot.syslog_level is LogLevel.DEBUG
    assert log.info("still fine")["sinks"] == ("console",)


def test_shutdown_closes_syslog_and_reinit_replaces_runtime(console, clock, terminations, syslog_sender) -> None:
    log.init(console=console, clock=clock, terminate=terminations, syslog_tag="svc", syslog_sender=syslog_sender)
    log.init(console=console, clock=clock, terminate=terminations)

    assert syslog_sender.closed is True
    assert log.inspect_runtime().syslog_tag is None

    log.shutdown()
    assert log.is_initialised() is False


def test_captured_stdlib_records_are_relevelled(root_logger_guard, console, clock, terminations) -> None:
    log.init(console=console, clock=clock, terminate=terminations, capture_std_logging=True)

    logging.getLogger("tests.vendor").error("ERROR: disk full")
    logging.getLogger("tests.vendor").info("plain chatter")

    assert log.inspect_runtime().std_logging_captured is True
    assert [level for level, _ in console.lines] == [LogLevel.ERROR, LogLevel.NOTICE]
    assert re.search(r"\[Error\] test_runtime\.py:\d+ - disk full\n$", console.lines[0][1])
    assert console.lines[1][1].endswith("- plain chatter\n")
    assert terminations.count == 0


def test_captured_fatal_line_terminates(root_logger_guard, console, clock, terminations) -> None:
    log.init(console=console, clock=clock, terminate=terminations)
    log.capture_std_logging()

    logging.getLogger().warning("fatal: reactor breach")

    assert console.lines[0][0] is LogLevel.FATAL
    assert terminations.count == 1


def test_exit_raised_by_terminate_stops_the_logging_caller(root_logger_guard, console, clock) -> None:
    def terminate() -> None:
        raise click.exceptions.Exit(log.FATAL_EXIT_CODE)

    log.init(console=console, clock=clock, terminate=terminate, capture_std_logging=True)

    with pytest.raises(click.exceptions.Exit) as excinfo:
        logging.getLogger("tests.vendor").error("FATAL: reactor breach")

    assert excinfo.value.exit_code == log.FATAL_EXIT_CODE
    assert console.lines[0][0] is LogLevel.FATAL


def test_default_runtime_leaves_stdlib_logging_alone(root_logger_guard) -> None:
    assert log.inspect_runtime().std_logging_captured is False
    assert not any(type(handler).__name__ == "_CaptureHandler" for handler in root_logger_guard.handlers)


def test_restore_and_shutdown_release_stdlib_logging(root_logger_guard, runtime) -> None:
    log.capture_std_logging()
    log.restore_std_logging()

    assert log.inspect_runtime().std_logging_captured is False
    assert root_logger_guard.level == logging.WARNING

    log.capture_std_logging()
    log.shutdown()
    assert not any(type(handler).__name__ == "_CaptureHandler" for handler in root_logger_guard.handlers)


def test_environment_overrides_init_arguments(monkeypatch: pytest.MonkeyPatch, console, clock, terminations, tmp_path: Path) -> None:
    monkeypatch.setenv("LOG_CONSOLE_LEVEL", "error")
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "env.log"))
    monkeypatch.setenv("LOG_MAX_MESSAGES_PER_SECOND", "5")

    log.init(console=console, clock=clock, terminate=terminations, console_level="debug")

    snapshot = log.inspect_runtime()
    assert snapshot.console_level is LogLevel.ERROR
    assert snapshot.file_path == tmp_path / "env.log"
    assert snapshot.max_messages_per_second == 5


def test_diagnostic_hook_receives_pipeline_events(console, clock, terminations) -> None:
    events: list[str] = []
    log.init(
        console=console,
        clock=clock,
        terminate=terminations,
        console_level="info",
        syslog_level="info",
        file_level="info",
        diagnostic_hook=lambda name, payload: events.append(name),
    )

    log.debug("dropped")
    log.info("kept")

    assert events == ["filtered", "emitted"]


def test_summary_info_mentions_the_distribution() -> None:
    assert "Info for lib_log_fanout" in log.summary_info()
