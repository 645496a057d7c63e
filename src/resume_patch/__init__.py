"""Apply RFC 6902 JSON Patch batches to schema-validated resumes."""

from resume_patch.schema import (
    ResumeData,
    ResumeSchemaError,
    SchemaIssue,
    default_resume,
    dump_resume,
    resume_json_schema,
    sample_resume,
    validate_resume,
)
from resume_patch.service import patch_stored_resume
from resume_patch.tools import (
    AssertionFailedError,
    PatchResult,
    PathResolutionError,
    ResumePatchError,
    SchemaViolationError,
    StructuralValidationError,
    apply_json_patch,
    apply_resume_patches,
    execute_patch_resume,
    patch_resume,
    validate_operations,
)

__version__ = "0.1.0"

__all__ = [
    "AssertionFailedError",
    "PatchResult",
    "PathResolutionError",
    "ResumeData",
    "ResumePatchError",
    "ResumeSchemaError",
    "SchemaIssue",
    "SchemaViolationError",
    "StructuralValidationError",
    "apply_json_patch",
    "apply_resume_patches",
    "default_resume",
    "dump_resume",
    "execute_patch_resume",
    "patch_resume",
    "patch_stored_resume",
    "resume_json_schema",
    "sample_resume",
    "validate_operations",
    "validate_resume",
]
