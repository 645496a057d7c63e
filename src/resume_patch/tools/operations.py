"""
Structural validation of RFC 6902 patch operations.

Nothing here looks at the document: an operation can be well-formed and
still fail to resolve later in ``apply_patches``.
"""

from __future__ import annotations

import logging
import math
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from resume_patch.settings import get_settings
from resume_patch.tools.errors import StructuralValidationError
from resume_patch.tools.json_pointer import is_valid_pointer

logger = logging.getLogger(__name__)

OP_NAMES = ("add", "remove", "replace", "move", "copy", "test")
VALUE_OPS = frozenset({"add", "replace", "test"})
FROM_OPS = frozenset({"move", "copy"})


# ======================================================================
# Typed operations
# ======================================================================
class OperationBase(BaseModel):
    # RFC 6902 section 4: members not defined for an operation are ignored.
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    op: str
    path: str = Field(description="JSON Pointer to the target location.")


class AddOperation(OperationBase):
    op: Literal["add"] = "add"
    value: Any


class RemoveOperation(OperationBase):
    op: Literal["remove"] = "remove"


class ReplaceOperation(OperationBase):
    op: Literal["replace"] = "replace"
    value: Any


class MoveOperation(OperationBase):
    op: Literal["move"] = "move"
    from_: str = Field(alias="from")


class CopyOperation(OperationBase):
    op: Literal["copy"] = "copy"
    from_: str = Field(alias="from")


class TestOperation(OperationBase):
    __test__ = False  # not a pytest class

    op: Literal["test"] = "test"
    value: Any


PatchOperation = Annotated[
    Union[AddOperation, RemoveOperation, ReplaceOperation, MoveOperation, CopyOperation, TestOperation],
    Field(discriminator="op"),
]

_MODELS: dict[str, type[OperationBase]] = {
    "add": AddOperation,
    "remove": RemoveOperation,
    "replace": ReplaceOperation,
    "move": MoveOperation,
    "copy": CopyOperation,
    "test": TestOperation,
}


# ======================================================================
# Validation
# ======================================================================
def is_json_value(value: Any) -> bool:
    """True if ``value`` survives a JSON round trip unchanged."""
    if value is None or isinstance(value, (bool, int, str)):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, list):
        return all(is_json_value(v) for v in value)
    if isinstance(value, dict):
        return all(isinstance(k, str) and is_json_value(v) for k, v in value.items())
    return False


def _validate_one(index: int, raw: Any) -> OperationBase:
    if isinstance(raw, OperationBase):
        raw = operation_to_json(raw)

    if not isinstance(raw, dict):
        raise StructuralValidationError("OPERATION_NOT_AN_OBJECT", index=index, operation=raw)

    op = raw.get("op")
    if not isinstance(op, str) or op not in _MODELS:
        raise StructuralValidationError("OPERATION_OP_INVALID", index=index, operation=raw)

    path = raw.get("path")
    if not is_valid_pointer(path):
        raise StructuralValidationError(
            "OPERATION_PATH_INVALID",
            index=index,
            operation=raw,
            path=path if isinstance(path, str) else None,
        )

    if op in VALUE_OPS:
        if "value" not in raw:
            raise StructuralValidationError("OPERATION_VALUE_REQUIRED", index=index, operation=raw, path=path)
        if not is_json_value(raw["value"]):
            raise StructuralValidationError("OPERATION_VALUE_NOT_JSON", index=index, operation=raw, path=path)

    if op in FROM_OPS:
        if "from" not in raw:
            raise StructuralValidationError("OPERATION_FROM_REQUIRED", index=index, operation=raw, path=path)
        if not is_valid_pointer(raw["from"]):
            from_ = raw["from"]
            raise StructuralValidationError(
                "OPERATION_FROM_INVALID",
                index=index,
                operation=raw,
                path=from_ if isinstance(from_, str) else None,
            )

    return _MODELS[op].model_validate(raw)


def validate_operations(raw: Any, max_operations: Optional[int] = None) -> list[OperationBase]:
    """
    Check a raw batch and return it as typed operations.

    Args:
        raw: The batch as received (normally a list of dicts).
        max_operations: Upper bound on the batch length. Defaults to
                        ``Settings.MAX_PATCH_OPERATIONS``.

    Returns:
        The typed operations, in order.

    Raises:
        StructuralValidationError: on the first malformed operation, with
            its index and the operation as received.
    """
    if not isinstance(raw, (list, tuple)):
        raise StructuralValidationError("SEQUENCE_NOT_AN_ARRAY", operation=raw)
    if len(raw) == 0:
        raise StructuralValidationError("SEQUENCE_EMPTY")

    if max_operations is None:
        max_operations = get_settings().MAX_PATCH_OPERATIONS
    if len(raw) > max_operations:
        raise StructuralValidationError(
            "SEQUENCE_TOO_LONG",
            message=f"Patch sequence contains {len(raw)} operations; at most {max_operations} are allowed.",
        )

    operations = [_validate_one(index, item) for index, item in enumerate(raw)]
    logger.debug("Validated %d patch operation(s)", len(operations))
    return operations


def operation_to_json(operation: OperationBase) -> dict[str, Any]:
    """RFC 6902 wire form of one operation (``from_`` becomes ``from``)."""
    return operation.model_dump(mode="json", by_alias=True)


def operations_to_json(operations: list[OperationBase]) -> list[dict[str, Any]]:
    return [operation_to_json(op) for op in operations]
