"""
Patch a resume: structural validation, application, schema re-validation.

This module never reads or writes storage. Callers hand in a snapshot and
decide what to do with the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from resume_patch.schema import ResumeData, ResumeSchemaError, SchemaIssue, dump_resume, validate_resume
from resume_patch.tools.apply_patches import JsonPatchApplicator
from resume_patch.tools.errors import ResumePatchError, SchemaViolationError
from resume_patch.tools.json_pointer import parse_json_pointer
from resume_patch.tools.operations import (
    MoveOperation,
    OperationBase,
    operation_to_json,
    operations_to_json,
    validate_operations,
)

logger = logging.getLogger(__name__)


@dataclass
class PatchResult:
    """Outcome of one batch. On failure ``data`` is the untouched snapshot."""

    success: bool
    data: ResumeData
    applied_operations: list[dict[str, Any]] = field(default_factory=list)
    error: Optional[ResumePatchError] = None

    def to_tool_output(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "appliedOperations": self.applied_operations}
        return {"success": False, "error": self.error.to_dict() if self.error else None}


def _related(op_tokens: list[str], issue_tokens: list[str]) -> bool:
    if op_tokens and op_tokens[-1] == "-":
        op_tokens = op_tokens[:-1]
    shorter = min(len(op_tokens), len(issue_tokens))
    return op_tokens[:shorter] == issue_tokens[:shorter]


def _blame(issues: list[SchemaIssue], operations: list[OperationBase]) -> Optional[int]:
    """Index of the last operation touching the first failing field."""
    if not issues:
        return None
    issue_tokens = parse_json_pointer(issues[0].pointer)
    for index in range(len(operations) - 1, -1, -1):
        operation = operations[index]
        pointers = [operation.path]
        if isinstance(operation, MoveOperation):
            pointers.append(operation.from_)
        if any(_related(parse_json_pointer(p), issue_tokens) for p in pointers):
            return index
    return None


def _as_snapshot(data: Union[ResumeData, dict[str, Any]]) -> ResumeData:
    if isinstance(data, ResumeData):
        return data
    return validate_resume(data)


def _patch(
    data: Union[ResumeData, dict[str, Any]],
    operations: Any,
    max_operations: Optional[int] = None,
) -> tuple[ResumeData, list[OperationBase]]:
    snapshot = _as_snapshot(data)
    typed = validate_operations(operations, max_operations=max_operations)
    patched = JsonPatchApplicator.apply(dump_resume(snapshot), typed)
    try:
        result = validate_resume(patched)
    except ResumeSchemaError as exc:
        index = _blame(exc.issues, typed)
        raise SchemaViolationError(
            exc.issues,
            index=index,
            operation=operation_to_json(typed[index]) if index is not None else None,
        ) from exc
    return result, typed


def apply_resume_patches(
    data: Union[ResumeData, dict[str, Any]],
    operations: Any,
    max_operations: Optional[int] = None,
) -> ResumeData:
    """
    Apply a batch to a resume snapshot and return the new resume.

    Args:
        data: The snapshot. A plain tree is validated first and raises
              ``ResumeSchemaError`` if it is not a resume.
        operations: The RFC 6902 batch.
        max_operations: Batch length limit; defaults to the settings value.

    Raises:
        ResumePatchError: one of its four subclasses. Nothing is mutated.
    """
    result, _ = _patch(data, operations, max_operations)
    return result


def patch_resume(
    data: Union[ResumeData, dict[str, Any]],
    operations: Any,
    max_operations: Optional[int] = None,
) -> PatchResult:
    """Like ``apply_resume_patches`` but reports failures as a ``PatchResult``."""
    snapshot = _as_snapshot(data)
    try:
        result, typed = _patch(snapshot, operations, max_operations)
    except ResumePatchError as exc:
        logger.info("Patch batch rejected: [%s] %s", exc.code, exc)
        return PatchResult(success=False, data=snapshot, error=exc)
    logger.info("Applied %d patch operation(s) to resume", len(typed))
    return PatchResult(success=True, data=result, applied_operations=operations_to_json(typed))


def execute_patch_resume(
    data: Union[ResumeData, dict[str, Any]],
    operations: Any,
) -> dict[str, Any]:
    """
    Tool-call contract: ``{"success": True, "appliedOperations": [...]}``.

    Raises on rejection; the patched document itself is not part of the
    payload, callers that need it use ``apply_resume_patches``.
    """
    _, typed = _patch(data, operations)
    return {"success": True, "appliedOperations": operations_to_json(typed)}
