from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Union

from pydantic import ValidationError

from resume_patch.schema.resume import SECTION_KEYS, ResumeData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaIssue:
    """One failing field of a resume candidate."""

    pointer: str
    code: str
    message: str
    received: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class ResumeSchemaError(ValueError):
    """Raised when a candidate tree is not a valid resume."""

    def __init__(self, issues: list[SchemaIssue]):
        self.issues = issues
        super().__init__(self._summary())

    def _summary(self) -> str:
        if not self.issues:
            return "Resume failed schema validation"
        first = self.issues[0]
        where = first.pointer or "(root)"
        text = f"Resume failed schema validation at {where}: {first.message}"
        if len(self.issues) > 1:
            text += f" (+{len(self.issues) - 1} more)"
        return text


def describe_json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def pointer_from_loc(tree: Any, loc: tuple[Union[int, str], ...]) -> str:
    """
    Map a pydantic error location onto an RFC 6901 pointer into ``tree``.

    Pydantic inserts union tags (``"experience"`` for a custom section of
    that type) into ``loc``; those are skipped by checking each element
    against the tree actually being validated. The final element is always
    kept so that missing required keys still point at the key itself.
    """
    tokens: list[str] = []
    cur: Any = tree
    last = len(loc) - 1
    for position, part in enumerate(loc):
        if isinstance(cur, list) and isinstance(part, int):
            tokens.append(str(part))
            cur = cur[part] if 0 <= part < len(cur) else None
        elif isinstance(cur, dict) and isinstance(part, str):
            if part in cur:
                tokens.append(part)
                cur = cur[part]
            elif position == last:
                tokens.append(part)
                cur = None
        else:
            tokens.append(str(part))
            cur = None
    return "".join("/" + _escape(tok) for tok in tokens)


def issues_from_validation_error(tree: Any, exc: ValidationError) -> list[SchemaIssue]:
    issues: list[SchemaIssue] = []
    for err in exc.errors(include_url=False):
        issues.append(
            SchemaIssue(
                pointer=pointer_from_loc(tree, tuple(err.get("loc", ()))),
                code=err.get("type", "value_error"),
                message=err.get("msg", "Invalid value"),
                received=describe_json_type(err.get("input")),
            )
        )
    return issues


def _duplicate_issues(base: str, ids: Iterable[str], what: str) -> list[SchemaIssue]:
    issues: list[SchemaIssue] = []
    seen: set[str] = set()
    for position, item_id in enumerate(ids):
        if item_id in seen:
            issues.append(
                SchemaIssue(
                    pointer=f"{base}/{position}/id",
                    code="duplicate_id",
                    message=f"id '{item_id}' is already used by another {what}",
                    received=describe_json_type(item_id),
                )
            )
        seen.add(item_id)
    return issues


def cross_field_issues(data: ResumeData) -> list[SchemaIssue]:
    """
    Check the rules that span several fields of an otherwise valid resume.

    Ids must be unique within each list, custom sections may not reuse a
    built-in key, and every layout entry must name a section that exists.
    """
    issues = _duplicate_issues("/basics/customFields", (f.id for f in data.basics.custom_fields), "custom field")

    for key in SECTION_KEYS:
        section = getattr(data.sections, key)
        issues += _duplicate_issues(f"/sections/{key}/items", (item.id for item in section.items), "item")

    reserved = set(SECTION_KEYS) | {"summary"}
    custom_ids: set[str] = set()
    for position, section in enumerate(data.custom_sections):
        pointer = f"/customSections/{position}/id"
        if section.id in reserved:
            issues.append(
                SchemaIssue(
                    pointer=pointer,
                    code="reserved_section_id",
                    message=f"id '{section.id}' clashes with a built-in section",
                    received=describe_json_type(section.id),
                )
            )
        elif section.id in custom_ids:
            issues.append(
                SchemaIssue(
                    pointer=pointer,
                    code="duplicate_id",
                    message=f"id '{section.id}' is used by another custom section",
                    received=describe_json_type(section.id),
                )
            )
        custom_ids.add(section.id)
        issues += _duplicate_issues(
            f"/customSections/{position}/items", (item.id for item in section.items), "item"
        )

    known = reserved | custom_ids
    for page_index, page in enumerate(data.metadata.layout.pages):
        for column in ("main", "sidebar"):
            for position, section_id in enumerate(getattr(page, column)):
                if section_id not in known:
                    issues.append(
                        SchemaIssue(
                            pointer=f"/metadata/layout/pages/{page_index}/{column}/{position}",
                            code="unknown_section_reference",
                            message=(
                                f"'{section_id}' is not a built-in section, 'summary' or a custom section id"
                            ),
                            received=describe_json_type(section_id),
                        )
                    )
    return issues


def validate_resume(candidate: Any) -> ResumeData:
    """
    Validate a JSON tree (or a ``ResumeData``) against the resume schema.

    Args:
        candidate: The tree to validate. A ``ResumeData`` instance is dumped
                   and re-validated so that cross-field rules are rechecked.

    Returns:
        The typed document.

    Raises:
        ResumeSchemaError: with one ``SchemaIssue`` per failing field.
    """
    if isinstance(candidate, ResumeData):
        candidate = dump_resume(candidate)
    try:
        data = ResumeData.model_validate(candidate)
    except ValidationError as exc:
        issues = issues_from_validation_error(candidate, exc)
        logger.debug("Resume validation failed with %d issue(s)", len(issues))
        raise ResumeSchemaError(issues) from exc

    issues = cross_field_issues(data)
    if issues:
        logger.debug("Resume failed %d cross-field check(s)", len(issues))
        raise ResumeSchemaError(issues)
    return data


def is_valid_resume(candidate: Any) -> bool:
    try:
        validate_resume(candidate)
    except ResumeSchemaError:
        return False
    return True


def dump_resume(data: ResumeData) -> dict[str, Any]:
    """Canonical JSON tree of a resume (camelCase keys, JSON-native values)."""
    return data.model_dump(mode="json", by_alias=True)
