from __future__ import annotations

from typing import Any

from langchain_core.tools import tool
from pydantic import BaseModel, Field

from resume_patch.tools.operations import PatchOperation


# ======================================================================
# patch_resume
# ======================================================================
class PatchResumeArgs(BaseModel):
    operations: list[dict[str, Any]] = Field(
        min_length=1,
        description=(
            "Ordered JSON Patch operations. Each has `op` (add, remove, replace, move, copy, test), "
            "`path` (JSON Pointer such as /basics/name or /sections/skills/items/0/level), "
            "`value` for add/replace/test and `from` for move/copy. "
            'New items need a unique `id`, e.g. {"op":"add","path":"/sections/experience/items/-",'
            '"value":{"id":"exp-acme","company":"Acme","position":"Engineer"}}.'
        ),
    )


@tool("patch_resume", args_schema=PatchResumeArgs)
def patch_resume_tool(operations: list[dict[str, Any]]) -> str:
    """Apply JSON Patch (RFC 6902) operations to modify the user's resume.

    Always generate the minimal set of operations needed.
    Prefer "replace" for updates, "add" for new content, "remove" for deletions.
    Use the special "-" index to append to arrays (e.g. "/sections/experience/items/-").

    The whole batch is rejected if any operation fails or the result does not
    match the resume schema; read the error, fix the operations and retry.
    """
    raise NotImplementedError("Execution handled by execute_tools_node")


# ======================================================================
# read_resume
# ======================================================================
class ReadResumeArgs(BaseModel):
    path: str = Field(
        default="",
        description=(
            "JSON Pointer (RFC 6901) to read. "
            'Use "" for the whole resume, "/sections/experience/items" for the experience list, '
            '"/sections/experience/items/0" for its first item, etc.'
        ),
    )


@tool("read_resume", args_schema=ReadResumeArgs)
def read_resume_tool(path: str = "") -> str:
    """Returns the current value at a JSON Pointer in the resume.

    Use this to:
    - Check array lengths and item ids before a replace, remove or move.
    - Confirm a field exists before replacing it.

    Long strings and large arrays are truncated in the result.
    """
    raise NotImplementedError("Execution handled by execute_tools_node")


class PatchResumeInput(BaseModel):
    operations: list[PatchOperation] = Field(min_length=1)


PATCH_RESUME_INPUT_SCHEMA: dict[str, Any] = PatchResumeInput.model_json_schema(by_alias=True)

ALL_TOOLS = [patch_resume_tool, read_resume_tool]
