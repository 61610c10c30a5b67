"""itest CLI - itest command."""

import click

from itest.cli.coverage import coverage_command
from itest.cli.discover import discover_command
from itest.cli.results import results_command
from itest.cli.run import run_command
from itest.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="itest")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """itest - RPGUnit test runner with CODECOV coverage."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(discover_command, name="discover")
cli.add_command(run_command, name="run")
cli.add_command(coverage_command, name="coverage")
cli.add_command(results_command, name="results")


if __name__ == "__main__":
    cli()
