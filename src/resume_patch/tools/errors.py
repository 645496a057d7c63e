from __future__ import annotations

from typing import Any, Optional

from resume_patch.schema.validation import SchemaIssue

ERROR_MESSAGES: dict[str, str] = {
    "SEQUENCE_NOT_AN_ARRAY": "Patch sequence must be an array.",
    "SEQUENCE_EMPTY": "Patch sequence must contain at least one operation.",
    "SEQUENCE_TOO_LONG": "Patch sequence contains too many operations.",
    "OPERATION_NOT_AN_OBJECT": "Operation is not an object.",
    "OPERATION_OP_INVALID": "Operation `op` property is not one of the operations defined in RFC 6902.",
    "OPERATION_PATH_INVALID": "Operation `path` property is not a valid JSON Pointer.",
    "OPERATION_FROM_REQUIRED": "Operation `from` property is required for move and copy operations.",
    "OPERATION_FROM_INVALID": "Operation `from` property is not a valid JSON Pointer.",
    "OPERATION_VALUE_REQUIRED": "Operation `value` property is required for add, replace and test operations.",
    "OPERATION_VALUE_NOT_JSON": "Operation `value` property is not a JSON value.",
    "OPERATION_PATH_CANNOT_ADD": "Cannot perform an `add` operation at the desired path.",
    "OPERATION_PATH_UNRESOLVABLE": "Cannot perform the operation at a path that does not exist.",
    "OPERATION_FROM_UNRESOLVABLE": "Cannot perform the operation from a path that does not exist.",
    "OPERATION_PATH_ILLEGAL_ARRAY_INDEX": "Expected an unsigned base-10 integer value, making the new referenced value the array element with the zero-based index.",
    "OPERATION_VALUE_OUT_OF_BOUNDS": "The specified index must not be bigger than the number of elements in the array.",
    "OPERATION_PATH_CANNOT_REMOVE_ROOT": "Cannot remove the whole document.",
    "OPERATION_MOVE_INTO_DESCENDANT": "Cannot move a value into one of its own children.",
    "TEST_OPERATION_FAILED": "Test operation failed: value at path does not match.",
    "SCHEMA_VIOLATION": "Patched resume does not match the resume schema.",
}


class ResumePatchError(Exception):
    """
    Base class for every rejection of a patch batch.

    Attributes:
        code: Stable machine-readable error code (see ``ERROR_MESSAGES``).
        index: Index of the offending operation in the batch, if known.
        operation: The offending operation as received, if known.
        path: The pointer involved in the failure, if any.
    """

    kind = "ResumePatchError"

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
        index: Optional[int] = None,
        operation: Any = None,
        path: Optional[str] = None,
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, code)
        self.index = index
        self.operation = operation
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = f"Operation {self.index}: " if self.index is not None else ""
        suffix = f" (path: {self.path!r})" if self.path is not None else ""
        return f"{prefix}{self.message}{suffix}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
            "index": self.index,
            "path": self.path,
            "operation": self.operation,
        }


class StructuralValidationError(ResumePatchError):
    """The batch or one of its operations is malformed."""

    kind = "StructuralValidationError"


class PathResolutionError(ResumePatchError):
    """A ``path`` or ``from`` does not resolve against the working tree."""

    kind = "PathResolutionError"


class AssertionFailedError(ResumePatchError):
    """A ``test`` operation found a different value."""

    kind = "AssertionFailedError"


class SchemaViolationError(ResumePatchError):
    """The patched tree is not a valid resume."""

    kind = "SchemaViolationError"

    def __init__(
        self,
        issues: list[SchemaIssue],
        index: Optional[int] = None,
        operation: Any = None,
    ):
        self.issues = issues
        first = issues[0] if issues else None
        message = ERROR_MESSAGES["SCHEMA_VIOLATION"]
        if first is not None:
            message = f"{message} {first.pointer or '(root)'}: {first.message} (received {first.received})"
        super().__init__(
            "SCHEMA_VIOLATION",
            message=message,
            index=index,
            operation=operation,
            path=first.pointer if first is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["issues"] = [issue.to_dict() for issue in self.issues]
        return out
