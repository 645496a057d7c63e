"""Tests for schema/ — resume models, validation and error pointers."""

from __future__ import annotations

import copy

import pytest

from resume_patch.schema import (
    SECTION_KEYS,
    ResumeData,
    ResumeSchemaError,
    cross_field_issues,
    default_resume,
    default_resume_tree,
    dump_resume,
    is_valid_resume,
    sample_resume,
    validate_resume,
)
from resume_patch.schema.validation import describe_json_type, pointer_from_loc


def _issues(tree):
    with pytest.raises(ResumeSchemaError) as exc_info:
        validate_resume(tree)
    return exc_info.value.issues


# ======================================================================
# Defaults and shape
# ======================================================================
class TestDefaults:

    def test_default_resume_is_valid(self, empty_tree):
        assert validate_resume(empty_tree) == default_resume()

    def test_camel_case_keys(self, empty_tree):
        assert "customSections" in empty_tree
        assert "aspectRatio" in empty_tree["picture"]
        assert "sidebarWidth" in empty_tree["metadata"]["layout"]
        assert "fontFamily" in empty_tree["metadata"]["typography"]["body"]

    def test_all_sections_present(self, empty_tree):
        assert tuple(empty_tree["sections"].keys()) == SECTION_KEYS
        for key in SECTION_KEYS:
            assert empty_tree["sections"][key] == {"title": "", "columns": 1, "hidden": False, "items": []}

    def test_metadata_defaults(self, empty_tree):
        metadata = empty_tree["metadata"]
        assert metadata["template"] == "onyx"
        assert metadata["page"]["format"] == "a4"
        assert metadata["design"]["level"] == {"icon": "star", "type": "circle"}
        assert metadata["typography"]["heading"]["fontWeights"] == ["600"]
        assert metadata["layout"]["pages"][0]["main"][0] == "profiles"

    def test_default_tree_matches_model_dump(self, empty_tree):
        assert default_resume_tree() == empty_tree

    def test_default_tree_is_fresh(self):
        tree = default_resume_tree()
        tree["metadata"]["layout"]["pages"][0]["main"].clear()
        assert default_resume_tree()["metadata"]["layout"]["pages"][0]["main"][0] == "profiles"

    def test_empty_tree_rejected(self):
        issues = _issues({})
        pointers = {issue.pointer for issue in issues}
        assert {"/picture", "/basics", "/summary", "/sections", "/customSections", "/metadata"} <= pointers
        assert all(issue.code == "missing" for issue in issues)

    def test_missing_section_rejected(self, empty_tree):
        del empty_tree["sections"]["experience"]
        issue = _issues(empty_tree)[0]
        assert issue.pointer == "/sections/experience"
        assert issue.code == "missing"

    def test_missing_metadata_block_rejected(self, empty_tree):
        del empty_tree["metadata"]["typography"]
        assert _issues(empty_tree)[0].pointer == "/metadata/typography"

    def test_missing_items_rejected(self, empty_tree):
        del empty_tree["sections"]["skills"]["items"]
        assert _issues(empty_tree)[0].pointer == "/sections/skills/items"

    def test_sample_resume(self):
        data = sample_resume()
        assert data.basics.name == "David Kowalski"
        assert data.sections.experience.items[0].company == "Cascade Studios"
        assert data.picture.size == 100

    def test_round_trip(self, populated_resume):
        assert validate_resume(dump_resume(populated_resume)) == populated_resume


# ======================================================================
# Strict scalars and closed shapes
# ======================================================================
class TestStrictness:

    def test_number_for_string(self, empty_tree):
        empty_tree["basics"]["email"] = 12345
        issues = _issues(empty_tree)
        assert issues[0].pointer == "/basics/email"
        assert issues[0].code == "string_type"
        assert issues[0].received == "integer"

    def test_string_for_bool(self, empty_tree):
        empty_tree["picture"]["hidden"] = "false"
        assert _issues(empty_tree)[0].pointer == "/picture/hidden"

    def test_int_for_bool(self, empty_tree):
        empty_tree["summary"]["hidden"] = 0
        assert _issues(empty_tree)[0].pointer == "/summary/hidden"

    def test_string_for_number(self, empty_tree):
        empty_tree["picture"]["size"] = "90"
        assert _issues(empty_tree)[0].pointer == "/picture/size"

    def test_int_accepted_for_number(self, empty_tree):
        empty_tree["picture"]["size"] = 90
        assert validate_resume(empty_tree).picture.size == 90

    def test_unknown_key(self, empty_tree):
        empty_tree["basics"]["nickname"] = "Ada"
        issue = _issues(empty_tree)[0]
        assert issue.pointer == "/basics/nickname"
        assert issue.code == "extra_forbidden"

    def test_snake_case_key_rejected(self, empty_tree):
        empty_tree["custom_sections"] = []
        assert _issues(empty_tree)[0].pointer == "/custom_sections"

    def test_range(self, empty_tree):
        empty_tree["metadata"]["typography"]["body"]["fontSize"] = 40
        assert _issues(empty_tree)[0].pointer == "/metadata/typography/body/fontSize"

    def test_enum(self, empty_tree):
        empty_tree["metadata"]["template"] = "charizard"
        assert _issues(empty_tree)[0].pointer == "/metadata/template"

    def test_email_pattern(self, empty_tree):
        empty_tree["basics"]["email"] = "not-an-email"
        assert _issues(empty_tree)[0].code == "string_pattern_mismatch"

    def test_empty_email_allowed(self, empty_tree):
        empty_tree["basics"]["email"] = ""
        assert is_valid_resume(empty_tree)

    def test_not_an_object(self):
        issues = _issues([])
        assert issues[0].pointer == ""
        assert issues[0].received == "array"


# ======================================================================
# Items
# ======================================================================
class TestItems:

    def test_minimal_item(self, empty_tree):
        empty_tree["sections"]["experience"]["items"].append({"id": "x1", "company": "Acme"})
        item = validate_resume(empty_tree).sections.experience.items[0]
        assert item.company == "Acme"
        assert item.position == ""
        assert item.hidden is False

    def test_missing_headline_field(self, empty_tree):
        empty_tree["sections"]["skills"]["items"].append({"id": "s1"})
        issue = _issues(empty_tree)[0]
        assert issue.pointer == "/sections/skills/items/0/name"
        assert issue.code == "missing"

    def test_empty_id(self, empty_tree):
        empty_tree["sections"]["skills"]["items"].append({"id": "", "name": "Go"})
        assert _issues(empty_tree)[0].pointer == "/sections/skills/items/0/id"

    def test_duplicate_ids(self, empty_tree):
        empty_tree["sections"]["skills"]["items"] = [
            {"id": "s1", "name": "Go"},
            {"id": "s1", "name": "Rust"},
        ]
        issue = _issues(empty_tree)[0]
        assert issue.pointer == "/sections/skills/items/1/id"
        assert issue.code == "duplicate_id"
        assert issue.received == "string"

    def test_duplicate_custom_field_ids(self, empty_tree):
        empty_tree["basics"]["customFields"] = [{"id": "cf1"}, {"id": "cf2"}, {"id": "cf1"}]
        assert _issues(empty_tree)[0].pointer == "/basics/customFields/2/id"

    def test_same_id_in_different_sections(self, empty_tree):
        empty_tree["sections"]["skills"]["items"] = [{"id": "x", "name": "Go"}]
        empty_tree["sections"]["interests"]["items"] = [{"id": "x", "name": "Chess"}]
        assert is_valid_resume(empty_tree)

    def test_level_range(self, empty_tree):
        empty_tree["sections"]["languages"]["items"] = [{"id": "l1", "language": "French", "level": 6}]
        assert _issues(empty_tree)[0].pointer == "/sections/languages/items/0/level"

    def test_website_must_be_object(self, empty_tree):
        empty_tree["sections"]["projects"]["items"] = [{"id": "p1", "name": "X", "website": "https://x.dev"}]
        assert _issues(empty_tree)[0].pointer == "/sections/projects/items/0/website"


# ======================================================================
# Custom sections and layout references
# ======================================================================
class TestCustomSections:

    def test_custom_section(self, empty_tree, custom_section):
        empty_tree["customSections"].append(custom_section)
        data = validate_resume(empty_tree)
        assert data.custom_sections[0].items[0].company == "Studio North"

    def test_cover_letter(self, empty_tree):
        empty_tree["customSections"].append({
            "id": "letter",
            "type": "cover-letter",
            "items": [{"id": "c1", "recipient": "<p>Hiring team</p>", "content": "<p>Hello</p>"}],
        })
        assert validate_resume(empty_tree).custom_sections[0].items[0].recipient == "<p>Hiring team</p>"

    def test_union_tag_not_in_pointer(self, empty_tree, custom_section):
        custom_section["items"][0]["company"] = 7
        empty_tree["customSections"].append(custom_section)
        assert _issues(empty_tree)[0].pointer == "/customSections/0/items/0/company"

    def test_unknown_type(self, empty_tree, custom_section):
        custom_section["type"] = "hobbies"
        empty_tree["customSections"].append(custom_section)
        assert _issues(empty_tree)[0].pointer.startswith("/customSections/0")

    def test_item_shape_follows_type(self, empty_tree, custom_section):
        custom_section["type"] = "skills"
        empty_tree["customSections"].append(custom_section)
        assert not is_valid_resume(empty_tree)

    def test_duplicate_custom_ids(self, empty_tree, custom_section):
        empty_tree["customSections"] = [custom_section, copy.deepcopy(custom_section)]
        issue = _issues(empty_tree)[0]
        assert issue.pointer == "/customSections/1/id"
        assert issue.code == "duplicate_id"

    def test_duplicate_ids_inside_custom_section(self, empty_tree, custom_section):
        custom_section["items"].append({"id": "gig1", "company": "Other"})
        empty_tree["customSections"].append(custom_section)
        assert _issues(empty_tree)[0].pointer == "/customSections/0/items/1/id"

    def test_id_clashes_with_builtin(self, empty_tree, custom_section):
        custom_section["id"] = "experience"
        empty_tree["customSections"].append(custom_section)
        issue = _issues(empty_tree)[0]
        assert issue.pointer == "/customSections/0/id"
        assert issue.code == "reserved_section_id"

    def test_layout_reference_to_custom_section(self, empty_tree, custom_section):
        empty_tree["customSections"].append(custom_section)
        empty_tree["metadata"]["layout"]["pages"][0]["main"].append("freelance")
        assert is_valid_resume(empty_tree)

    def test_layout_unknown_reference(self, empty_tree):
        empty_tree["metadata"]["layout"]["pages"][0]["sidebar"].append("ghost")
        issue = _issues(empty_tree)[0]
        assert issue.pointer == "/metadata/layout/pages/0/sidebar/6"
        assert issue.code == "unknown_section_reference"
        assert issue.received == "string"
        assert "ghost" in issue.message

    def test_all_cross_field_issues_reported(self, empty_tree):
        empty_tree["sections"]["skills"]["items"] = [{"id": "s1", "name": "Go"}, {"id": "s1", "name": "Rust"}]
        empty_tree["metadata"]["layout"]["pages"][0]["main"].append("ghost")
        data = ResumeData.model_validate(empty_tree)
        assert [issue.pointer for issue in cross_field_issues(data)] == [
            "/sections/skills/items/1/id",
            "/metadata/layout/pages/0/main/7",
        ]


# ======================================================================
# Helpers
# ======================================================================
class TestHelpers:

    def test_pointer_from_loc_skips_tags(self):
        tree = {"customSections": [{"type": "experience", "items": []}]}
        assert pointer_from_loc(tree, ("customSections", 0, "experience", "items")) == "/customSections/0/items"

    def test_pointer_from_loc_keeps_missing_leaf(self):
        assert pointer_from_loc({"a": {}}, ("a", "b")) == "/a/b"

    def test_pointer_from_loc_escapes(self):
        assert pointer_from_loc({"a/b": 1}, ("a/b",)) == "/a~1b"

    @pytest.mark.parametrize(
        "value,expected",
        [(None, "null"), (True, "boolean"), (1, "integer"), (1.5, "number"), ("x", "string"), ([], "array"), ({}, "object")],
    )
    def test_describe_json_type(self, value, expected):
        assert describe_json_type(value) == expected

    def test_error_message_names_first_issue(self, empty_tree):
        empty_tree["basics"]["name"] = 1
        with pytest.raises(ResumeSchemaError, match="/basics/name"):
            validate_resume(empty_tree)

    def test_model_instance_revalidated(self, populated_resume):
        assert validate_resume(populated_resume) == populated_resume
