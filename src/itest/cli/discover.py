"""itest discover command - list test suites and cases of a project."""

from pathlib import Path

import click

from itest.cli.utils import bucket_to_dict, echo_json
from itest.testing.discovery import LocalTestBucketBuilder


@click.command()
@click.argument("project", type=click.Path(exists=True, file_okay=False, path_type=Path))
def discover_command(project: Path) -> None:
    """Discover RPGUnit test suites below PROJECT.

    Prints every ``*.TEST.*`` source with its ``TEST*`` procedures as JSON.
    """
    buckets = LocalTestBucketBuilder(project).get_test_buckets()
    echo_json([bucket_to_dict(bucket) for bucket in buckets])
