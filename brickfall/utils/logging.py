from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


_default_logger: Optional["JsonlLogger"] = None


class JsonlLogger:
    """Append-only JSONL run log; the most recently opened one is the default."""

    def __init__(self, path: Path, run_name: Optional[str] = None):
        self.path = Path(path)
        ensure_dir(self.path.parent)
        self.run_name = run_name
        self._file = self.path.open("a", encoding="utf-8")

        global _default_logger
        _default_logger = self

    def log(self, obj: Dict[str, Any]) -> None:
        record = {"ts": round(time.time(), 3), **obj}
        if self.run_name is not None:
            record.setdefault("run", self.run_name)
        self._file.write(json.dumps(record, ensure_ascii=False) + "\n")

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        global _default_logger
        if not self._file.closed:
            self._file.close()
        if _default_logger is self:
            _default_logger = None

    def __enter__(self) -> "JsonlLogger":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def has_default_logger() -> bool:
    return _default_logger is not None


def log_event(event_type: str, payload: Dict[str, Any]) -> None:
    if _default_logger is None:
        raise RuntimeError("No default logger configured; instantiate JsonlLogger first")

    _default_logger.log({"type": event_type, **payload})


def flush() -> None:
    if _default_logger is not None:
        _default_logger.flush()
