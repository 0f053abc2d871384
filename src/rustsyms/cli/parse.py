"""rustsyms parse command - extract symbols from one Rust file."""

from pathlib import Path

import click

from rustsyms.config.models import RustSymsConfig
from rustsyms.core.errors import ExtractionError
from rustsyms.core.logging import clear_request_id, set_request_id
from rustsyms.core.telemetry import init_telemetry, shutdown_telemetry
from rustsyms.extract.ops import extract_file
from rustsyms.extract.projection import flatten_modules, modules_to_json


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--include-private/--public-only",
    default=None,
    help="Include items without a pub modifier (default: extract.include_private)",
)
@click.option("--pretty", is_flag=True, help="Indent the JSON output")
@click.option("--modules", is_flag=True, help="Print one record per module instead of the tree")
@click.pass_context
def parse_command(
    ctx: click.Context,
    path: Path,
    include_private: bool | None,
    pretty: bool,
    modules: bool,
) -> None:
    """Parse a Rust source file and print its symbols as JSON.

    Syntax errors do not fail the command: they are reported in the
    "diagnostics" array and "success" is false.
    """
    ctx.ensure_object(dict)
    config: RustSymsConfig = ctx.obj.get("config") or RustSymsConfig()
    if include_private is None:
        include_private = config.extract.include_private

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read '{path}': {e}") from e

    set_request_id()
    init_telemetry(config.telemetry)
    try:
        response = extract_file(
            text,
            include_private=include_private,
            file_path=str(path),
            edition=config.extract.edition,
        )
    finally:
        shutdown_telemetry()
        clear_request_id()

    indent = 2 if pretty else None
    try:
        if modules:
            output = modules_to_json(flatten_modules(response.file_info), indent=indent)
        else:
            output = response.to_json(indent=indent)
    except ExtractionError as e:
        raise click.ClickException(e.message) from e

    click.echo(output)
