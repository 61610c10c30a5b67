"""itest coverage command - decode a CODECOV archive."""

import asyncio
import tempfile
from pathlib import Path

import click

from itest.cli.utils import echo_json
from itest.config.loader import load_config
from itest.core.errors import ItestError
from itest.testing.coverage.archive import CoverageArchiveReader
from itest.testing.coverage.merge import merge_coverage
from itest.testing.coverage.models import CoverageData, MappedCoverageData
from itest.testing.coverage.report import build_summary
from itest.testing.discovery import ProcedureScanner
from itest.testing.models import BasicUri, CoverageLevel
from itest.transport.local import LocalTransport


async def _read_archive(
    archive: Path, work_dir: Path, level: CoverageLevel
) -> list[CoverageData] | None:
    reader = CoverageArchiveReader(LocalTransport(), work_dir, level=level, docs=ProcedureScanner())
    return await reader.get_coverage(str(archive))


@click.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--level",
    type=click.Choice(["*LINE", "*PROC"]),
    default="*LINE",
    show_default=True,
    help="Coverage level the archive was collected at.",
)
def coverage_command(archive: Path, level: CoverageLevel) -> None:
    """Decode a local .cczip ARCHIVE and print its coverage summary as JSON."""
    try:
        config = load_config()
    except ItestError as e:
        raise click.ClickException(str(e)) from e

    with tempfile.TemporaryDirectory(prefix="itest-") as work_dir:
        datasets = asyncio.run(_read_archive(archive.resolve(), Path(work_dir), level))

    if datasets is None:
        raise click.ClickException(f"Failed to read code coverage results: {archive}")

    merged = merge_coverage(
        MappedCoverageData(
            uri=BasicUri(scheme="streamfile", path=f"/{data.path.lstrip('/')}"),
            level=level,
            data=data,
        )
        for data in datasets
    )
    echo_json(build_summary(merged, thresholds=config.coverage.thresholds))
