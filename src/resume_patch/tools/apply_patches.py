from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from resume_patch.tools.errors import AssertionFailedError, PathResolutionError
from resume_patch.tools.json_pointer import (
    format_json_pointer,
    is_proper_prefix,
    parse_array_index,
    parse_json_pointer,
)
from resume_patch.tools.operations import (
    AddOperation,
    CopyOperation,
    MoveOperation,
    OperationBase,
    RemoveOperation,
    ReplaceOperation,
    TestOperation,
    operation_to_json,
    validate_operations,
)

logger = logging.getLogger(__name__)


class JsonPatchApplicator:
    """
    RFC 6902 applicator over plain JSON trees.

    The input tree is cloned once; every operation then mutates the clone
    and sees the result of the previous one. Any failure raises before the
    clone is returned, so the caller's tree is never touched.
    """

    @staticmethod
    def _clone(obj: Any) -> Any:
        return copy.deepcopy(obj)

    @classmethod
    def _deep_equal(cls, a: Any, b: Any) -> bool:
        if a is b:
            return True
        if isinstance(a, bool) or isinstance(b, bool):
            return isinstance(a, bool) and isinstance(b, bool) and a == b
        if isinstance(a, (int, float)) and isinstance(b, (int, float)):
            return a == b
        if type(a) is not type(b):
            return False
        if isinstance(a, list):
            if len(a) != len(b):
                return False
            return all(cls._deep_equal(x, y) for x, y in zip(a, b))
        if isinstance(a, dict):
            if set(a.keys()) != set(b.keys()):
                return False
            return all(cls._deep_equal(a[k], b[k]) for k in a)
        return a == b

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    @staticmethod
    def _fail(
        code: str,
        index: int,
        operation: OperationBase,
        pointer: str,
        message: Optional[str] = None,
    ) -> PathResolutionError:
        return PathResolutionError(
            code,
            message=message,
            index=index,
            operation=operation_to_json(operation),
            path=pointer,
        )

    @classmethod
    def _array_index(
        cls,
        token: str,
        length: int,
        index: int,
        operation: OperationBase,
        pointer: str,
        missing_code: str,
    ) -> int:
        """Index of an existing array element named by ``token``."""
        if token == "-":
            raise cls._fail(
                missing_code,
                index,
                operation,
                pointer,
                "The '-' index refers to the position after the last element and only works as the final token of an add.",
            )
        position = parse_array_index(token)
        if position is None:
            raise cls._fail("OPERATION_PATH_ILLEGAL_ARRAY_INDEX", index, operation, pointer)
        if position >= length:
            raise cls._fail(
                missing_code,
                index,
                operation,
                pointer,
                f"Array index {position} is out of range (length {length}).",
            )
        return position

    @classmethod
    def _resolve(
        cls,
        doc: Any,
        tokens: list[str],
        index: int,
        operation: OperationBase,
        missing_code: str = "OPERATION_PATH_UNRESOLVABLE",
    ) -> Any:
        """Value at ``tokens``; raises if any token fails to resolve."""
        cur = doc
        for depth, token in enumerate(tokens):
            pointer = format_json_pointer(tokens[: depth + 1])
            if isinstance(cur, list):
                cur = cur[cls._array_index(token, len(cur), index, operation, pointer, missing_code)]
            elif isinstance(cur, dict):
                if token not in cur:
                    raise cls._fail(missing_code, index, operation, pointer)
                cur = cur[token]
            else:
                raise cls._fail(
                    missing_code,
                    index,
                    operation,
                    pointer,
                    f"Cannot traverse into a scalar value at {format_json_pointer(tokens[:depth]) or '(root)'}.",
                )
        return cur

    # ------------------------------------------------------------------
    # Primitive mutations
    # ------------------------------------------------------------------
    @classmethod
    def _add(cls, doc: Any, tokens: list[str], value: Any, index: int, operation: OperationBase) -> Any:
        if not tokens:
            return value
        pointer = format_json_pointer(tokens)
        parent = cls._resolve(doc, tokens[:-1], index, operation)
        key = tokens[-1]
        if isinstance(parent, list):
            if key == "-":
                parent.append(value)
                return doc
            position = parse_array_index(key)
            if position is None:
                raise cls._fail("OPERATION_PATH_ILLEGAL_ARRAY_INDEX", index, operation, pointer)
            if position > len(parent):
                raise cls._fail(
                    "OPERATION_VALUE_OUT_OF_BOUNDS",
                    index,
                    operation,
                    pointer,
                    f"Index {position} is greater than the array length {len(parent)}.",
                )
            parent.insert(position, value)
            return doc
        if isinstance(parent, dict):
            parent[key] = value
            return doc
        raise cls._fail("OPERATION_PATH_CANNOT_ADD", index, operation, pointer)

    @classmethod
    def _remove(
        cls,
        doc: Any,
        tokens: list[str],
        index: int,
        operation: OperationBase,
        missing_code: str = "OPERATION_PATH_UNRESOLVABLE",
    ) -> Any:
        """Detach the value at ``tokens`` from ``doc`` and return it."""
        pointer = format_json_pointer(tokens)
        parent = cls._resolve(doc, tokens[:-1], index, operation, missing_code)
        key = tokens[-1]
        if isinstance(parent, list):
            return parent.pop(cls._array_index(key, len(parent), index, operation, pointer, missing_code))
        if isinstance(parent, dict):
            if key not in parent:
                raise cls._fail(missing_code, index, operation, pointer)
            return parent.pop(key)
        raise cls._fail(missing_code, index, operation, pointer)

    @classmethod
    def _replace(cls, doc: Any, tokens: list[str], value: Any, index: int, operation: OperationBase) -> Any:
        if not tokens:
            return value
        pointer = format_json_pointer(tokens)
        parent = cls._resolve(doc, tokens[:-1], index, operation)
        key = tokens[-1]
        if isinstance(parent, list):
            parent[cls._array_index(key, len(parent), index, operation, pointer, "OPERATION_PATH_UNRESOLVABLE")] = value
            return doc
        if isinstance(parent, dict):
            if key not in parent:
                raise cls._fail("OPERATION_PATH_UNRESOLVABLE", index, operation, pointer)
            parent[key] = value
            return doc
        raise cls._fail("OPERATION_PATH_UNRESOLVABLE", index, operation, pointer)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    @classmethod
    def _apply_one(cls, doc: Any, index: int, operation: OperationBase) -> Any:
        tokens = parse_json_pointer(operation.path)

        if isinstance(operation, AddOperation):
            return cls._add(doc, tokens, cls._clone(operation.value), index, operation)

        if isinstance(operation, RemoveOperation):
            if not tokens:
                raise cls._fail("OPERATION_PATH_CANNOT_REMOVE_ROOT", index, operation, operation.path)
            cls._remove(doc, tokens, index, operation)
            return doc

        if isinstance(operation, ReplaceOperation):
            return cls._replace(doc, tokens, cls._clone(operation.value), index, operation)

        if isinstance(operation, TestOperation):
            actual = cls._resolve(doc, tokens, index, operation)
            if not cls._deep_equal(actual, operation.value):
                raise AssertionFailedError(
                    "TEST_OPERATION_FAILED",
                    index=index,
                    operation=operation_to_json(operation),
                    path=operation.path,
                )
            return doc

        if isinstance(operation, CopyOperation):
            from_tokens = parse_json_pointer(operation.from_)
            value = cls._resolve(doc, from_tokens, index, operation, "OPERATION_FROM_UNRESOLVABLE")
            return cls._add(doc, tokens, cls._clone(value), index, operation)

        if isinstance(operation, MoveOperation):
            from_tokens = parse_json_pointer(operation.from_)
            cls._resolve(doc, from_tokens, index, operation, "OPERATION_FROM_UNRESOLVABLE")
            if from_tokens == tokens:
                return doc
            if is_proper_prefix(from_tokens, tokens):
                raise cls._fail("OPERATION_MOVE_INTO_DESCENDANT", index, operation, operation.path)
            value = cls._remove(doc, from_tokens, index, operation, "OPERATION_FROM_UNRESOLVABLE")
            return cls._add(doc, tokens, value, index, operation)

        raise TypeError(f"Unsupported operation type: {type(operation).__name__}")

    @classmethod
    def apply(cls, doc: Any, operations: list[OperationBase]) -> Any:
        current = cls._clone(doc)
        for index, operation in enumerate(operations):
            current = cls._apply_one(current, index, operation)
        logger.debug("Applied %d patch operation(s)", len(operations))
        return current


def apply_json_patch(tree: Any, operations: list[Any], max_operations: Optional[int] = None) -> Any:
    """
    Apply an RFC 6902 batch to a JSON tree.

    Args:
        tree: Any JSON value. It is never mutated.
        operations: Raw dicts or typed operations; validated first.
        max_operations: Batch length limit passed to ``validate_operations``.

    Returns:
        The patched copy of ``tree``.

    Raises:
        StructuralValidationError, PathResolutionError, AssertionFailedError
    """
    typed = validate_operations(operations, max_operations=max_operations)
    return JsonPatchApplicator.apply(tree, typed)
