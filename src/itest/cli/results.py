"""itest results command - parse an RPGUnit result document."""

from pathlib import Path

import click

from itest.cli.utils import echo_json
from itest.core.errors import ResultParseError
from itest.testing.models import worst_status
from itest.testing.parsers import parse_test_results


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--member",
    is_flag=True,
    help="Results come from a source member (line numbers carry two decimals).",
)
@click.pass_context
def results_command(ctx: click.Context, document: Path, member: bool) -> None:
    """Print the test cases of an RPGUnit result DOCUMENT as JSON.

    Exits non-zero when any test case failed or errored.
    """
    try:
        results = parse_test_results(document.read_bytes(), is_stream_oriented=not member)
    except ResultParseError as e:
        raise click.ClickException(str(e)) from e

    status = worst_status(*(r.status for r in results))
    echo_json({"status": status, "cases": results})
    ctx.exit(0 if status == "passed" else 1)
