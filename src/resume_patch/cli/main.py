import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from rich.logging import RichHandler

from resume_patch.cli.rich_display import (
    console,
    err_console,
    print_error_panel,
    print_patch_error_panel,
    print_result_panel,
    print_schema_issues_panel,
)
from resume_patch.schema import (
    ResumeData,
    ResumeSchemaError,
    dump_resume,
    resume_json_schema,
    validate_resume,
)
from resume_patch.settings import get_settings
from resume_patch.tools.patch_resume import patch_resume


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="resume-patch",
        description="Apply JSON Patch (RFC 6902) batches to schema-validated resumes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Apply a batch and print the patched resume
  resume-patch apply --resume resume.json --patch ops.json --pretty

  # Check a resume against the schema
  resume-patch validate --resume resume.json

  # Export the JSON Schema
  resume-patch schema --output resume.schema.json

  # Let the model edit a resume
  resume-patch edit --resume resume.json --instruction "Change my headline to Staff Engineer"
""",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Silent mode (only final result, plain errors on stderr)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: LOG_LEVEL setting)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    apply_p = sub.add_parser("apply", help="Apply a patch batch to a resume")
    apply_p.add_argument("--resume", "-r", type=Path, required=True, help="Resume JSON file")
    apply_p.add_argument("--patch", "-p", type=Path, required=True, help="JSON file with the operations array")
    _add_output_args(apply_p)

    validate_p = sub.add_parser("validate", help="Validate a resume against the schema")
    validate_p.add_argument("--resume", "-r", type=Path, required=True, help="Resume JSON file")

    schema_p = sub.add_parser("schema", help="Print the resume JSON Schema")
    schema_p.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")

    settings = get_settings()
    edit_p = sub.add_parser("edit", help="Edit a resume with the AI agent")
    edit_p.add_argument("--resume", "-r", type=Path, required=True, help="Resume JSON file")
    edit_p.add_argument("--instruction", "-i", type=str, required=True, help="What to change")
    edit_p.add_argument(
        "--max-iterations",
        type=int,
        default=settings.MAX_AGENT_ITERATIONS,
        help=f"Maximum number of LLM calls (default: {settings.MAX_AGENT_ITERATIONS})",
    )
    _add_output_args(edit_p)

    return parser


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output", "-o", type=Path, help="Output file for the resume (default: stdout)")
    parser.add_argument("--pretty", action="store_true", help="Format JSON with indentation")


def _configure_logging(level: Optional[str]) -> None:
    logging.basicConfig(
        level=(level or get_settings().LOG_LEVEL).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(message: str, quiet: bool) -> None:
    if quiet:
        print(f"Error: {message}", file=sys.stderr)
    else:
        print_error_panel(message)
    sys.exit(1)


def _read_json(path: Path, what: str, quiet: bool) -> Any:
    """Read and parse a JSON file, exiting with status 1 on failure."""
    if not path.exists():
        _fail(f"{what} file not found: {path}", quiet)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON in {what.lower()} file {path}: {e}", quiet)


def _read_resume(path: Path, quiet: bool) -> ResumeData:
    tree = _read_json(path, "Resume", quiet)
    try:
        return validate_resume(tree)
    except ResumeSchemaError as e:
        if quiet:
            print(f"Error: {e}", file=sys.stderr)
        else:
            print_schema_issues_panel(e.issues, title=f"Invalid resume: {path}")
        sys.exit(1)


def _write_resume(data: ResumeData, args: argparse.Namespace) -> None:
    indent = 2 if args.pretty else None
    output_json = json.dumps(dump_resume(data), indent=indent, ensure_ascii=False)
    if args.output:
        args.output.write_text(output_json, encoding="utf-8")
    else:
        print(output_json)


def _cmd_apply(args: argparse.Namespace) -> None:
    data = _read_resume(args.resume, args.quiet)
    operations = _read_json(args.patch, "Patch", args.quiet)

    result = patch_resume(data, operations)
    if not result.success:
        error = result.error.to_dict()
        if args.quiet:
            print(f"Error: [{error['code']}] {result.error}", file=sys.stderr)
        else:
            print_patch_error_panel(error)
        sys.exit(1)

    _write_resume(result.data, args)
    if not args.quiet:
        print_result_panel(len(result.applied_operations), output=str(args.output) if args.output else None)


def _cmd_validate(args: argparse.Namespace) -> None:
    _read_resume(args.resume, args.quiet)
    if not args.quiet:
        console.print(f"[green]Resume is valid:[/green] {args.resume}")


def _cmd_schema(args: argparse.Namespace) -> None:
    output_json = json.dumps(resume_json_schema(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output_json, encoding="utf-8")
        if not args.quiet:
            console.print(f"[green]Schema saved in:[/green] {args.output}")
    else:
        print(output_json)


def _cmd_edit(args: argparse.Namespace) -> None:
    from resume_patch.agent import edit_resume

    data = _read_resume(args.resume, args.quiet)
    result = edit_resume(data, args.instruction, max_iterations=args.max_iterations)

    if result.get("error"):
        _fail(result["error"], args.quiet)

    _write_resume(result["resume"], args)
    if not args.quiet:
        print_result_panel(
            len(result["applied_operations"]),
            output=str(args.output) if args.output else None,
            token_usage=result["token_usage"],
            reply=result["reply"],
        )


_COMMANDS = {
    "apply": _cmd_apply,
    "validate": _cmd_validate,
    "schema": _cmd_schema,
    "edit": _cmd_edit,
}


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point of the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    _COMMANDS[args.command](args)
