"""
Machine-readable projection of the resume schema.

The schema is derived from the pydantic models, so it can never drift from
what ``validate_resume`` accepts. Rules that plain JSON Schema cannot
express travel as ``x-`` keywords.
"""

from __future__ import annotations

import copy
from functools import lru_cache
from typing import Any

from resume_patch.schema.resume import SCHEMA_VERSION, ResumeData

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_ID = f"https://resume-patch.dev/schema/v{SCHEMA_VERSION}.json"

ONE_DAY_SECONDS = 60 * 60 * 24


@lru_cache(maxsize=1)
def _build_schema() -> dict[str, Any]:
    body = ResumeData.model_json_schema(by_alias=True, mode="validation")
    schema: dict[str, Any] = {
        "$schema": JSON_SCHEMA_DIALECT,
        "$id": SCHEMA_ID,
        "title": "ResumeData",
        "version": SCHEMA_VERSION,
    }
    for key, value in body.items():
        if key != "title":
            schema[key] = value
    return schema


def resume_json_schema() -> dict[str, Any]:
    """Return the resume JSON Schema. Callers get their own copy."""
    return copy.deepcopy(_build_schema())


def schema_etag() -> str:
    return f'"v{SCHEMA_VERSION}"'


def schema_response_headers() -> dict[str, str]:
    """HTTP headers for serving the schema as a versioned, cacheable file."""
    return {
        "Content-Type": "application/schema+json; charset=utf-8",
        "Cache-Control": f"public, max-age={ONE_DAY_SECONDS}, immutable",
        "Surrogate-Control": f"max-age={ONE_DAY_SECONDS}",
        "X-Content-Type-Options": "nosniff",
        "X-Robots-Tag": "index, follow",
        "ETag": schema_etag(),
        "Vary": "Accept",
    }
