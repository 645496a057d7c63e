from resume_patch.schema.export import (
    resume_json_schema,
    schema_etag,
    schema_response_headers,
)
from resume_patch.schema.resume import (
    SCHEMA_VERSION,
    SECTION_KEYS,
    ResumeData,
    default_resume,
    default_resume_tree,
)
from resume_patch.schema.sample import sample_resume, sample_resume_tree
from resume_patch.schema.validation import (
    ResumeSchemaError,
    SchemaIssue,
    cross_field_issues,
    describe_json_type,
    dump_resume,
    is_valid_resume,
    validate_resume,
)

__all__ = [
    "SCHEMA_VERSION",
    "SECTION_KEYS",
    "ResumeData",
    "ResumeSchemaError",
    "SchemaIssue",
    "cross_field_issues",
    "default_resume",
    "default_resume_tree",
    "describe_json_type",
    "dump_resume",
    "is_valid_resume",
    "resume_json_schema",
    "sample_resume",
    "sample_resume_tree",
    "schema_etag",
    "schema_response_headers",
    "validate_resume",
]
