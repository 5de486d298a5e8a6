"""Structured logging: in-memory records echoed as terminal progress lines."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, TextIO

Level = Literal["info", "success", "warning", "error"]

_COLORS: dict[str, str] = {
    "info": "\033[0;34m",
    "success": "\033[0;32m",
    "warning": "\033[1;33m",
    "error": "\033[0;31m",
}
_RESET = "\033[0m"


@dataclass(slots=True)
class StructuredLogger:
    records: list[dict[str, Any]] = field(default_factory=list)
    stream: TextIO | None = field(default_factory=lambda: sys.stderr)
    color: bool | None = None

    def log(
        self,
        *,
        operation: str,
        message: str,
        dependency: str | None = None,
        strategy: str | None = None,
        level: Level = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "dependency": dependency,
            "strategy": strategy,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        self._emit(level, message)

    def info(self, operation: str, message: str, **kwargs: Any) -> None:
        self.log(operation=operation, message=message, level="info", **kwargs)

    def success(self, operation: str, message: str, **kwargs: Any) -> None:
        self.log(operation=operation, message=message, level="success", **kwargs)

    def warning(self, operation: str, message: str, **kwargs: Any) -> None:
        self.log(operation=operation, message=message, level="warning", **kwargs)

    def error(self, operation: str, message: str, **kwargs: Any) -> None:
        self.log(operation=operation, message=message, level="error", **kwargs)

    def records_for_dependency(self, dependency: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("dependency") == dependency]

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = [json.dumps(record, sort_keys=True) for record in self.records]
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path

    def _emit(self, level: str, message: str) -> None:
        if self.stream is None:
            return
        tag = f"[{level.upper()}]"
        use_color = self.color
        if use_color is None:
            isatty = getattr(self.stream, "isatty", None)
            use_color = bool(isatty and isatty())
        if use_color:
            tag = f"{_COLORS[level]}{tag}{_RESET}"
        print(f"{tag} {message}", file=self.stream, flush=True)
