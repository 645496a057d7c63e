from __future__ import annotations

import copy
from typing import Any, Optional

from .base import ResumeStore


class InMemoryResumeStore(ResumeStore):
    """Process-local store, mostly for tests and one-shot CLI runs."""

    def __init__(self) -> None:
        super().__init__()
        self._records: dict[str, dict[str, Any]] = {}

    @property
    def backend_type(self) -> str:
        return "memory"

    def _read_record(self, resume_id: str) -> Optional[dict[str, Any]]:
        record = self._records.get(resume_id)
        return copy.deepcopy(record) if record is not None else None

    def _write_record(self, resume_id: str, record: dict[str, Any]) -> None:
        self._records[resume_id] = copy.deepcopy(record)

    def _delete_record(self, resume_id: str) -> bool:
        return self._records.pop(resume_id, None) is not None

    def _list_record_ids(self) -> list[str]:
        return list(self._records)
