"""apichangelog CLI - API changelog generator for PHP codebases."""

import click

from apichangelog.cli.generate import generate_command
from apichangelog.core.logging import clear_run_id, configure_logging, set_run_id


@click.group()
@click.version_option(version="0.1.0", prog_name="apichangelog")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """apichangelog - SemVer-aware changelogs from public API differences."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    set_run_id()
    ctx.call_on_close(clear_run_id)
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(generate_command, name="generate")


if __name__ == "__main__":
    cli()
