from __future__ import annotations

import logging
from typing import Any, Optional

from resume_patch.storage import ResumeStore
from resume_patch.tools.patch_resume import PatchResult, patch_resume

logger = logging.getLogger(__name__)


def patch_stored_resume(
    store: ResumeStore,
    resume_id: str,
    operations: Any,
    max_operations: Optional[int] = None,
) -> PatchResult:
    """
    Fetch a resume, patch it and commit the result.

    The write is conditional on the revision that was read, so a concurrent
    commit surfaces as ``ResumeConflictError`` instead of being overwritten.
    A rejected batch leaves the stored resume untouched.

    Raises:
        ResumeNotFoundError: if ``resume_id`` does not exist.
        ResumeConflictError: if the resume changed between read and write.
    """
    snapshot = store.get(resume_id)
    result = patch_resume(snapshot.data, operations, max_operations=max_operations)
    if not result.success:
        return result

    stored = store.set(resume_id, result.data, expected_revision=snapshot.revision)
    logger.info(
        "Committed %d operation(s) to resume %s (revision %d -> %d)",
        len(result.applied_operations),
        resume_id,
        snapshot.revision,
        stored.revision,
    )
    return result
