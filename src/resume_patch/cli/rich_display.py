import json
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from resume_patch.schema import SchemaIssue

console = Console()
# Panels and logs go to stderr so stdout stays pipeable JSON.
err_console = Console(stderr=True)


def _format_token_count(n: int) -> str:
    """Format a token count with thousands separator."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}k"
    return str(n)


def build_issues_table(issues: list[SchemaIssue]) -> Table:
    """Table with one row per failing field."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Code", style="magenta")
    table.add_column("Received")
    table.add_column("Message", overflow="fold")
    for issue in issues:
        table.add_row(escape(issue.pointer or "(root)"), issue.code, issue.received, escape(issue.message))
    return table


def print_error_panel(message: str) -> None:
    """Print the error panel."""
    err_console.print(
        Panel(
            f"[red]{escape(message)}[/red]",
            title="[bold red]Error[/bold red]",
            border_style="red",
        )
    )
    err_console.print()


def print_patch_error_panel(error: dict[str, Any]) -> None:
    """Print a rejected batch: kind, code, operation index and path."""
    lines = [
        f"[bold]{error.get('kind')}[/bold] [dim]({error.get('code')})[/dim]",
        f"[red]{escape(str(error.get('message')))}[/red]",
    ]
    if error.get("index") is not None:
        lines.append(f"[bold]Operation:[/bold] #{error['index']} {escape(json.dumps(error.get('operation'), ensure_ascii=False, default=str))}")
    if error.get("path") is not None:
        lines.append(f"[bold]Path:[/bold] {escape(error['path'] or '(root)')}")
    err_console.print(
        Panel(
            "\n".join(lines),
            title="[bold red]Patch rejected[/bold red]",
            border_style="red",
        )
    )
    issues = error.get("issues")
    if issues:
        err_console.print(build_issues_table([SchemaIssue(**issue) for issue in issues]))
    err_console.print()


def print_schema_issues_panel(issues: list[SchemaIssue], title: str = "Invalid resume") -> None:
    err_console.print(
        Panel(
            build_issues_table(issues),
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
        )
    )
    err_console.print()


def print_result_panel(
    applied_operations: int,
    output: Optional[str] = None,
    token_usage: Optional[dict] = None,
    reply: Optional[str] = None,
) -> None:
    """Print the success panel after a patch or an edit."""
    lines = [
        "[bold green]Resume updated successfully![/bold green]\n",
        f"[bold]Operations applied:[/bold] {applied_operations}",
    ]
    if output:
        lines.append(f"[bold]Saved in:[/bold] {output}")

    if token_usage and token_usage.get("total_tokens", 0) > 0:
        total = _format_token_count(token_usage["total_tokens"])
        inp = _format_token_count(token_usage.get("input_tokens", 0))
        out = _format_token_count(token_usage.get("output_tokens", 0))
        lines.append("")
        lines.append(f"[bold]Tokens:[/bold] {total} total  [dim]([/dim]input: {inp}  output: {out}[dim])[/dim]")
        lines.append(f"[bold]LLM calls:[/bold] {token_usage.get('llm_calls', 0)}")

    if reply:
        lines.append("")
        lines.append(escape(reply))

    err_console.print(
        Panel(
            "\n".join(lines),
            title="[bold green]Done[/bold green]",
            border_style="green",
        )
    )
    err_console.print()

