"""rustsyms CLI - rustsyms command."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click

from rustsyms.cli.parse import parse_command
from rustsyms.config.loader import load_config
from rustsyms.core.errors import ConfigError
from rustsyms.core.logging import configure_logging


def _version() -> str:
    try:
        return version("rustsyms")
    except PackageNotFoundError:
        return "0.1.0"


@click.group()
@click.version_option(version=_version(), prog_name="rustsyms")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (overrides ~/.config/rustsyms/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """rustsyms - Extract declaration symbols from Rust source files."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(parse_command, name="parse")


if __name__ == "__main__":
    cli()
