"""Tests for the on-disk agent log."""

import re
from pathlib import Path

from storyof.logger import AgentLogger

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] ")


def test_no_path_is_a_noop(tmp_path: Path) -> None:
    logger = AgentLogger()
    logger.log("ignored")
    assert list(tmp_path.iterdir()) == []


def test_log_appends_timestamped_lines(tmp_path: Path) -> None:
    log_path = tmp_path / "nested" / "agent.log"
    logger = AgentLogger(log_path)

    logger.log("first")
    logger.log("second")

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert all(LINE.match(line) for line in lines)
    assert lines[0].endswith("] first")
    assert lines[1].endswith("] second")


def test_log_stderr_prefixes_every_line(tmp_path: Path) -> None:
    logger = AgentLogger()
    logger.set_path(tmp_path / "agent.log")

    logger.log_stderr("warn one\nwarn two")

    lines = (tmp_path / "agent.log").read_text(encoding="utf-8").splitlines()
    assert [line.split("] ", 1)[1] for line in lines] == ["[stderr] warn one", "[stderr] warn two"]
