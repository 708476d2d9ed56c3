"""Agent log persisted to disk."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AgentLogger:
    """Appends ``[timestamp] message`` lines to a log file once a path is set."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path: Path | None = None
        if path is not None:
            self.set_path(path)

    def set_path(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _append(self, text: str) -> None:
        if self.path is None:
            return
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(text)
        except OSError:
            # Logging must never take down a render.
            pass

    def log(self, message: str) -> None:
        self._append(f"[{_timestamp()}] {message}\n")

    def log_stderr(self, text: str) -> None:
        ts = _timestamp()
        self._append("\n".join(f"[{ts}] [stderr] {line}" for line in text.split("\n")) + "\n")
