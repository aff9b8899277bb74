"""Lightweight event logging for environment loads."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, TextIO

EVENT_CODES = {
    "env-loaded": "I001",
    "env-not-found": "E001",
    "search-failed": "E002",
    "parse-failed": "E003",
}


@dataclass(frozen=True)
class LogEntry:
    """Captured event with minimal metadata."""

    level: str
    code: str
    message: str
    path: str | None = None

    def format(self) -> str:
        location = f" ({self.path})" if self.path else ""
        return f"[{self.level.upper()}][{self.code}] {self.message}{location}"


class EventLogger:
    """Collect load events.

    Entries are kept in memory and, when configured, echoed to ``stream`` and
    appended to a timestamped file under ``log_dir``.
    """

    def __init__(
        self,
        name: str = "locenv",
        *,
        log_dir: Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.stream = stream
        self.log_path: Path | None = None
        if log_dir is not None:
            sanitized = re.sub(r"[^A-Za-z0-9_-]", "_", name) or "locenv"
            timestamp = datetime.now().strftime("%Y-%m-%d-%H%M")
            self.log_path = Path(log_dir) / f"{sanitized}_{timestamp}.log"
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._entries: List[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def success(self, message: str, *, code: str, path: Path | str | None = None) -> None:
        self._record("success", message, code=code, path=path)

    def error(self, message: str, *, code: str, path: Path | str | None = None) -> None:
        self._record("error", message, code=code, path=path)

    def summary(self) -> str:
        errors = sum(1 for entry in self._entries if entry.level == "error")
        text = f"Recorded {len(self._entries)} events ({errors} errors)."
        if self.log_path is not None:
            text += f" See {self.log_path.name}"
        return text

    def has_errors(self) -> bool:
        return any(entry.level == "error" for entry in self._entries)

    def _record(
        self, level: str, message: str, *, code: str, path: Path | str | None
    ) -> None:
        entry = LogEntry(
            level=level,
            code=EVENT_CODES.get(code, code),
            message=message,
            path=Path(path).as_posix() if path is not None else None,
        )
        self._entries.append(entry)
        if self.stream is not None:
            print(entry.format(), file=self.stream)
        if self.log_path is not None:
            with self.log_path.open("a", encoding="utf-8") as handle:
                handle.write(f"{entry.format()}\n")


__all__ = ["EventLogger", "LogEntry", "EVENT_CODES"]
