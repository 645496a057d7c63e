from .main import build_parser, main
from .rich_display import (
    build_issues_table,
    console,
    err_console,
    print_error_panel,
    print_patch_error_panel,
    print_result_panel,
    print_schema_issues_panel,
)

__all__ = [
    "main",
    "build_parser",
    "build_issues_table",
    "console",
    "err_console",
    "print_error_panel",
    "print_patch_error_panel",
    "print_result_panel",
    "print_schema_issues_panel",
]
