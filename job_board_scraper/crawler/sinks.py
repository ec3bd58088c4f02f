from __future__ import annotations

import json
from pathlib import Path
from typing import IO, List, Optional

from .models import JobRecord


class BaseRecordSink:
    """Append-only destination for output records."""

    def append(self, record: JobRecord) -> None:
        raise NotImplementedError("append must be implemented by sink classes")

    def close(self) -> None:
        return None

    def __enter__(self) -> "BaseRecordSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MemoryRecordSink(BaseRecordSink):
    def __init__(self) -> None:
        self.records: List[JobRecord] = []

    def append(self, record: JobRecord) -> None:
        self.records.append(record)


class JsonlRecordSink(BaseRecordSink):
    """One JSON object per line; the file is flushed after every record."""

    def __init__(self, path: str | Path, *, append: bool = False) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle: Optional[IO[str]] = self.path.open("a" if append else "w", encoding="utf-8")
        self.count = 0

    def append(self, record: JobRecord) -> None:
        if self._handle is None:
            raise ValueError(f"Sink for {self.path} is closed")
        self._handle.write(json.dumps(record.model_dump(), ensure_ascii=False))
        self._handle.write("\n")
        self._handle.flush()
        self.count += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
