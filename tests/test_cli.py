"""Tests for cli/main.py — subcommands, exit codes and output."""

from __future__ import annotations

import json

import pytest

from langchain_core.messages import AIMessage

from resume_patch.agent import nodes
from resume_patch.cli import build_parser, main


@pytest.fixture
def resume_file(tmp_path, populated_tree):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps(populated_tree), encoding="utf-8")
    return path


def _write(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _exit_code(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


# ======================================================================
# apply
# ======================================================================
class TestApply:

    def test_prints_patched_resume(self, tmp_path, resume_file, capsys):
        patch = _write(tmp_path, "ops.json", [{"op": "replace", "path": "/basics/name", "value": "Jane Doe"}])
        main(["apply", "--resume", str(resume_file), "--patch", str(patch)])
        out = json.loads(capsys.readouterr().out)
        assert out["basics"]["name"] == "Jane Doe"

    def test_writes_output_file(self, tmp_path, resume_file):
        patch = _write(tmp_path, "ops.json", [{"op": "remove", "path": "/sections/skills/items/0"}])
        target = tmp_path / "out.json"
        main(["-q", "apply", "-r", str(resume_file), "-p", str(patch), "-o", str(target), "--pretty"])
        written = json.loads(target.read_text(encoding="utf-8"))
        assert [item["id"] for item in written["sections"]["skills"]["items"]] == ["skill2"]

    def test_rejected_batch(self, tmp_path, resume_file, capsys):
        patch = _write(tmp_path, "ops.json", [{"op": "replace", "path": "/basics/email", "value": 12345}])
        assert _exit_code(["-q", "apply", "-r", str(resume_file), "-p", str(patch)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "SCHEMA_VIOLATION" in captured.err

    def test_rejected_batch_panel(self, tmp_path, resume_file, capsys):
        patch = _write(tmp_path, "ops.json", [{"op": "remove", "path": "/nope"}])
        assert _exit_code(["apply", "-r", str(resume_file), "-p", str(patch)]) == 1
        assert "OPERATION_PATH_UNRESOLVABLE" in capsys.readouterr().err

    def test_missing_patch_file(self, tmp_path, resume_file, capsys):
        assert _exit_code(["-q", "apply", "-r", str(resume_file), "-p", str(tmp_path / "none.json")]) == 1
        assert "Patch file not found" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, resume_file, capsys):
        patch = tmp_path / "ops.json"
        patch.write_text("[{", encoding="utf-8")
        assert _exit_code(["-q", "apply", "-r", str(resume_file), "-p", str(patch)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err


# ======================================================================
# validate / schema
# ======================================================================
class TestValidate:

    def test_valid(self, resume_file, capsys):
        main(["validate", "--resume", str(resume_file)])
        assert "Resume is valid" in capsys.readouterr().out

    def test_invalid(self, tmp_path, empty_tree, capsys):
        empty_tree["basics"]["email"] = 12345
        path = _write(tmp_path, "bad.json", empty_tree)
        assert _exit_code(["-q", "validate", "-r", str(path)]) == 1
        assert "/basics/email" in capsys.readouterr().err

    def test_missing_section(self, tmp_path, empty_tree, capsys):
        del empty_tree["sections"]["awards"]
        path = _write(tmp_path, "bad.json", empty_tree)
        assert _exit_code(["-q", "validate", "-r", str(path)]) == 1
        assert "/sections/awards" in capsys.readouterr().err


class TestSchema:

    def test_stdout(self, capsys):
        main(["schema"])
        schema = json.loads(capsys.readouterr().out)
        assert schema["title"] == "ResumeData"

    def test_output_file(self, tmp_path):
        target = tmp_path / "resume.schema.json"
        main(["-q", "schema", "--output", str(target)])
        assert json.loads(target.read_text(encoding="utf-8"))["version"] == "5.0.0"


# ======================================================================
# edit
# ======================================================================
class TestEdit:

    def test_edit(self, monkeypatch, resume_file, capsys):
        responses = [
            AIMessage(
                content="",
                tool_calls=[{
                    "name": "patch_resume",
                    "args": {"operations": [{"op": "replace", "path": "/basics/headline", "value": "Staff Engineer"}]},
                    "id": "c1",
                }],
            ),
            AIMessage(content="Headline updated."),
        ]

        class Model:
            def invoke(self, messages):
                return responses.pop(0)

        monkeypatch.setattr(nodes, "get_tool_calling_model", lambda: Model())
        main(["-q", "edit", "-r", str(resume_file), "-i", "Make me a Staff Engineer"])
        assert json.loads(capsys.readouterr().out)["basics"]["headline"] == "Staff Engineer"

    def test_edit_error(self, monkeypatch, resume_file, capsys):
        call = AIMessage(
            content="",
            tool_calls=[{"name": "read_resume", "args": {"path": ""}, "id": "c1"}],
        )

        class Model:
            def invoke(self, messages):
                return call

        monkeypatch.setattr(nodes, "get_tool_calling_model", lambda: Model())
        assert _exit_code(["-q", "edit", "-r", str(resume_file), "-i", "x", "--max-iterations", "1"]) == 1
        assert "Stopped after 1 iterations" in capsys.readouterr().err


class TestParser:

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_edit_defaults_from_settings(self):
        args = build_parser().parse_args(["edit", "-r", "r.json", "-i", "x"])
        assert args.max_iterations == 6
