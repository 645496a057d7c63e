from resume_patch.tools.apply_patches import JsonPatchApplicator, apply_json_patch
from resume_patch.tools.errors import (
    AssertionFailedError,
    PathResolutionError,
    ResumePatchError,
    SchemaViolationError,
    StructuralValidationError,
)
from resume_patch.tools.operations import operations_to_json, validate_operations
from resume_patch.tools.patch_resume import (
    PatchResult,
    apply_resume_patches,
    execute_patch_resume,
    patch_resume,
)
from resume_patch.tools.read_value import read_value

__all__ = [
    "AssertionFailedError",
    "JsonPatchApplicator",
    "PatchResult",
    "PathResolutionError",
    "ResumePatchError",
    "SchemaViolationError",
    "StructuralValidationError",
    "apply_json_patch",
    "apply_resume_patches",
    "execute_patch_resume",
    "operations_to_json",
    "patch_resume",
    "read_value",
    "validate_operations",
]
