"""Local filesystem resume store.

One JSON file per resume under ``root_dir``. Writes go to a temporary file
in the same directory and are moved into place with ``os.replace`` so a
reader never sees a half-written resume.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from resume_patch.settings import get_settings

from .base import ResumeStore


class LocalResumeStore(ResumeStore):
    """Resume store using the local filesystem.

    Args:
        root_dir: Directory holding the resume files.
                  Defaults to ``Settings.STORAGE_ROOT``.
    """

    def __init__(self, root_dir: Optional[str] = None):
        super().__init__()
        self._root = Path(root_dir or get_settings().STORAGE_ROOT).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def backend_type(self) -> str:
        return "local"

    @property
    def root_path(self) -> str:
        return str(self._root)

    def _full_path(self, resume_id: str) -> Path:
        return self._root / f"{resume_id}.json"

    def _read_record(self, resume_id: str) -> Optional[dict[str, Any]]:
        full_path = self._full_path(resume_id)
        if not full_path.is_file():
            return None
        return json.loads(full_path.read_text(encoding="utf-8"))

    def _write_record(self, resume_id: str, record: dict[str, Any]) -> None:
        full_path = self._full_path(resume_id)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{resume_id}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(record, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, full_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _delete_record(self, resume_id: str) -> bool:
        full_path = self._full_path(resume_id)
        if not full_path.is_file():
            return False
        full_path.unlink()
        return True

    def _list_record_ids(self) -> list[str]:
        return [p.stem for p in self._root.glob("*.json") if not p.name.startswith(".")]
