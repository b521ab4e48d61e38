from __future__ import annotations

import json
import sys
import typing

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from ._api import close, init
from ._config import ClientConfig
from ._dispatch import dispatch
from ._exceptions import RequestsError

if typing.TYPE_CHECKING:
    from ._context import RequestContext

# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _status_color(status_code: int) -> str:
    """Return a rich color name based on HTTP status category."""
    if status_code < 200:
        return "cyan"
    elif status_code < 300:
        return "green"
    elif status_code < 400:
        return "yellow"
    elif status_code < 500:
        return "red"
    else:
        return "bold red"


def is_binary_content(content: bytes) -> bool:
    return b"\0" in content


def _looks_like_json(text: str) -> bool:
    return text.lstrip()[:1] in ("{", "[")


def format_response_plain(context: RequestContext, verbose: bool = False) -> str:
    lines: list[str] = [f"{context.status_code}"]
    if verbose:
        lines.append(f"{context.response_size} bytes from {context.url}")
    lines.append("")

    content = context.response_body
    if content:
        if is_binary_content(content):
            lines.append(f"<{len(content)} bytes of binary data>")
        else:
            lines.append(context.text)

    return "\n".join(lines)


def print_response_rich(
    console: Console, context: RequestContext, verbose: bool = False
) -> None:
    """Pretty-print a finished exchange using rich."""
    status_line = Text()
    status_line.append(
        f"{context.status_code}", style=f"bold {_status_color(context.status_code)}"
    )
    if verbose:
        status_line.append(f"  {context.response_size} bytes", style="dim")
        status_line.append(f" from {context.url}", style="dim cyan")
    console.print(status_line)
    console.print()

    content = context.response_body
    if not content:
        return
    if is_binary_content(content):
        console.print(f"[dim]<{len(content)} bytes of binary data>[/dim]")
        return

    text = context.text
    if _looks_like_json(text):
        try:
            formatted = json.dumps(json.loads(text), indent=4, ensure_ascii=False)
        except (json.JSONDecodeError, TypeError):
            console.print(text, markup=False)
        else:
            console.print(Syntax(formatted, "json", theme="monokai"))
    else:
        console.print(text, markup=False)


# ---------------------------------------------------------------------------
# Argument parsing helpers
# ---------------------------------------------------------------------------


def parse_field(field: str) -> tuple[str, str]:
    """Parse a 'key=value' form field."""
    if "=" not in field:
        raise click.BadParameter(
            f"Invalid form field: '{field}'. Expected 'key=value'."
        )
    key, _, value = field.partition("=")
    return key, value


# ---------------------------------------------------------------------------
# CLI command
# ---------------------------------------------------------------------------


@click.command(help="Send a GET, POST or PUT request and print the response.")
@click.argument("url")
@click.option(
    "-m",
    "--method",
    default="GET",
    type=click.Choice(["GET", "POST", "PUT"], case_sensitive=False),
    help="HTTP method.",
)
@click.option(
    "-d",
    "--data",
    "fields",
    multiple=True,
    help="Add a form field, e.g. -d name=value.",
)
@click.option(
    "-H",
    "--header",
    "headers",
    multiple=True,
    help='Add a header, e.g. -H "Authorization: Bearer token".',
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output.")
@click.option(
    "--follow-redirects", is_flag=True, default=False, help="Follow redirects."
)
@click.option(
    "--no-color", is_flag=True, default=False, help="Disable colored output."
)
def main(
    url: str,
    method: str,
    fields: tuple[str, ...],
    headers: tuple[str, ...],
    verbose: bool,
    follow_redirects: bool,
    no_color: bool,
) -> None:
    use_rich = not no_color and sys.stdout.isatty()
    method = method.upper()

    data = [parse_field(field) for field in fields] if fields else None
    if data is not None and method == "GET":
        raise click.UsageError("Form fields can only be sent with POST or PUT.")

    config = ClientConfig.from_env(follow_redirects=follow_redirects)

    try:
        context, transport = init(url, config=config)
        try:
            dispatch(transport, context, method, data, list(headers) or None)

            if use_rich:
                print_response_rich(Console(), context, verbose=verbose)
            else:
                click.echo(format_response_plain(context, verbose=verbose))

            failed = context.status_code >= 300
        finally:
            close(transport, context)

    except RequestsError as exc:
        if use_rich:
            console = Console(stderr=True)
            console.print(f"[bold red]{type(exc).__name__}[/bold red]: {exc}")
        else:
            click.echo(f"{type(exc).__name__}: {exc}", err=True)
        sys.exit(1)

    if failed:
        sys.exit(1)
