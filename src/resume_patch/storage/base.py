"""Abstract base class for resume stores.

A store keeps one current version of each resume plus a revision counter.
``set`` takes the revision the caller read; if someone else committed in
between the write is refused with ``ResumeConflictError``.
"""

from __future__ import annotations

import logging
import re
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from resume_patch.schema import ResumeData, default_resume_tree, dump_resume, validate_resume

logger = logging.getLogger(__name__)

_RESUME_ID_RE = re.compile(r"[A-Za-z0-9_-]{1,64}")


@dataclass(frozen=True)
class StoredResume:
    """A resume as read from or written to a store."""

    id: str
    data: ResumeData
    revision: int
    updated_at: datetime


class ResumeNotFoundError(LookupError):
    def __init__(self, resume_id: str):
        self.resume_id = resume_id
        super().__init__(f"Resume not found: {resume_id}")


class ResumeConflictError(RuntimeError):
    def __init__(self, resume_id: str, expected_revision: Optional[int], actual_revision: Optional[int]):
        self.resume_id = resume_id
        self.expected_revision = expected_revision
        self.actual_revision = actual_revision
        super().__init__(
            f"Resume {resume_id} is at revision {actual_revision}, expected {expected_revision}"
        )


def check_resume_id(resume_id: str) -> str:
    if not isinstance(resume_id, str) or _RESUME_ID_RE.fullmatch(resume_id) is None:
        raise ValueError(f"Invalid resume id: {resume_id!r} (use 1-64 letters, digits, '-' or '_')")
    return resume_id


class ResumeStore(ABC):
    """Base class for resume stores.

    Subclasses implement record-level reads and writes; revision checks and
    validation live here and run under one lock per store instance.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Return the backend type identifier (e.g. 'memory', 'local')."""

    # === Record operations ===

    @abstractmethod
    def _read_record(self, resume_id: str) -> Optional[dict[str, Any]]:
        """Return the raw record or None if it does not exist."""

    @abstractmethod
    def _write_record(self, resume_id: str, record: dict[str, Any]) -> None:
        """Persist a raw record, replacing any previous one."""

    @abstractmethod
    def _delete_record(self, resume_id: str) -> bool:
        """Delete a record. Returns False if it did not exist."""

    @abstractmethod
    def _list_record_ids(self) -> list[str]:
        """Ids of all stored records, in any order."""

    # === Public API ===

    def get(self, resume_id: str) -> StoredResume:
        check_resume_id(resume_id)
        with self._lock:
            record = self._read_record(resume_id)
        if record is None:
            raise ResumeNotFoundError(resume_id)
        return self._from_record(record)

    def set(
        self,
        resume_id: str,
        data: ResumeData,
        expected_revision: Optional[int] = None,
    ) -> StoredResume:
        """Replace an existing resume.

        Args:
            resume_id: Id of the resume to replace.
            data: The new document. It is re-validated before writing.
            expected_revision: Revision the caller based ``data`` on. None
                               skips the check (last writer wins).

        Raises:
            ResumeNotFoundError: if the resume does not exist.
            ResumeConflictError: if the stored revision has moved on.
        """
        check_resume_id(resume_id)
        tree = dump_resume(validate_resume(data))
        with self._lock:
            current = self._read_record(resume_id)
            if current is None:
                raise ResumeNotFoundError(resume_id)
            if expected_revision is not None and current["revision"] != expected_revision:
                raise ResumeConflictError(resume_id, expected_revision, current["revision"])
            record = self._make_record(resume_id, tree, current["revision"] + 1)
            self._write_record(resume_id, record)
        logger.debug("Stored resume %s at revision %d", resume_id, record["revision"])
        return self._from_record(record)

    def create(self, data: Optional[ResumeData] = None, resume_id: Optional[str] = None) -> StoredResume:
        """Store a new resume (the empty default when ``data`` is None)."""
        if resume_id is None:
            resume_id = uuid.uuid4().hex
        check_resume_id(resume_id)
        tree = dump_resume(validate_resume(data if data is not None else default_resume_tree()))
        with self._lock:
            existing = self._read_record(resume_id)
            if existing is not None:
                raise ResumeConflictError(resume_id, None, existing["revision"])
            record = self._make_record(resume_id, tree, 1)
            self._write_record(resume_id, record)
        logger.info("Created resume %s", resume_id)
        return self._from_record(record)

    def list_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._list_record_ids())

    def delete(self, resume_id: str) -> None:
        check_resume_id(resume_id)
        with self._lock:
            if not self._delete_record(resume_id):
                raise ResumeNotFoundError(resume_id)
        logger.info("Deleted resume %s", resume_id)

    # === Helpers ===

    @staticmethod
    def _make_record(resume_id: str, tree: dict[str, Any], revision: int) -> dict[str, Any]:
        return {
            "id": resume_id,
            "revision": revision,
            "updatedAt": datetime.now(timezone.utc).isoformat(),
            "data": tree,
        }

    @staticmethod
    def _from_record(record: dict[str, Any]) -> StoredResume:
        return StoredResume(
            id=record["id"],
            data=validate_resume(record["data"]),
            revision=record["revision"],
            updated_at=datetime.fromisoformat(record["updatedAt"]),
        )
