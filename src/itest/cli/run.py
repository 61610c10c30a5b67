"""itest run command - compile and run RPGUnit tests of a project on this host."""

import asyncio
import signal
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import click
import structlog
from rich.console import Console
from rich.markup import escape

from itest.cli.utils import echo_json
from itest.config.loader import load_config
from itest.config.models import ItestConfig
from itest.core.errors import ItestError
from itest.core.logging import configure_logging
from itest.testing.collaborators import TestListener
from itest.testing.coverage.report import build_summary
from itest.testing.discovery import LocalTestBucketBuilder, ProcedureScanner
from itest.testing.models import (
    AssertionResult,
    BasicUri,
    CompilationStatus,
    CompileMode,
    CoverageLevel,
    DeploymentStatus,
    TestBucket,
    TestMetrics,
    TestRequest,
    TestSuite,
)
from itest.testing.runner import Runner
from itest.transport.local import LocalTransport, LocalWorkspace

logger = structlog.get_logger()

_STATUS_STYLES = {
    "passed": "green",
    "failed": "red",
    "errored": "red",
    "cancelled": "dim",
}


class ReportingListener(TestListener):
    """Prints progress to stderr and keeps outcomes for the JSON report."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self.cases: dict[str, dict[str, Any]] = {}
        self.notifications: list[dict[str, str | None]] = []

    def _record(
        self,
        uri: BasicUri,
        status: str,
        duration: float | None = None,
        results: Sequence[AssertionResult] = (),
    ) -> None:
        self.cases[str(uri)] = {
            "status": status,
            "duration": duration,
            "messages": [r.message for r in results if r.message],
        }
        style = _STATUS_STYLES.get(status, "white")
        label = f"{status.upper():<9}"
        self._console.print(f"[{style}]{label}[/{style}] {escape(str(uri))}")

    async def skipped(self, uri: BasicUri) -> None:
        self._record(uri, "cancelled")

    async def passed(self, uri: BasicUri, duration: float | None = None) -> None:
        self._record(uri, "passed", duration)

    async def failed(
        self,
        uri: BasicUri,
        results: Sequence[AssertionResult],
        duration: float | None = None,
    ) -> None:
        self._record(uri, "failed", duration, results)

    async def errored(
        self,
        uri: BasicUri,
        results: Sequence[AssertionResult],
        duration: float | None = None,
    ) -> None:
        self._record(uri, "errored", duration, results)

    async def deployed(self, bucket: TestBucket, status: DeploymentStatus) -> None:
        self._console.print(f"Deployment of [bold]{escape(bucket.name)}[/bold]: {status}")

    async def compiled(
        self,
        suite: TestSuite,
        status: CompilationStatus,
        messages: Sequence[str] = (),
    ) -> None:
        self._console.print(f"Compilation of [bold]{escape(suite.name)}[/bold]: {status}")
        for message in messages:
            self._console.print(f"  [dim]{escape(message)}[/dim]")

    async def runtime_warning(self, suite: TestSuite, message: str) -> None:
        self._console.print(f"[yellow]Warning[/yellow] in {escape(suite.name)}: {escape(message)}")

    def notify(self, level: str, message: str, details: str | None = None) -> None:
        self.notifications.append({"level": level, "message": message, "details": details})


async def _run(
    request: TestRequest,
    config: ItestConfig,
    listener: ReportingListener,
    current_library: str,
) -> Runner:
    cancel_event = asyncio.Event()

    def signal_handler() -> None:
        logger.info("run.cancel_requested")
        cancel_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    scanner = ProcedureScanner()
    runner = Runner(
        request,
        LocalTransport(),
        LocalWorkspace(current_library=current_library),
        listener,
        config=config,
        docs=scanner,
        cancel_event=cancel_event,
    )
    try:
        await runner.run()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
    return runner


def _report(runner: Runner, listener: ReportingListener, config: ItestConfig) -> dict[str, Any]:
    metrics: TestMetrics = runner.metrics
    report: dict[str, Any] = {
        "metrics": metrics.to_dict(),
        "cases": listener.cases,
        "notifications": listener.notifications,
    }
    if runner.merged_coverage:
        report["coverage"] = build_summary(
            runner.merged_coverage, thresholds=config.coverage.thresholds
        )
    return report


@click.command()
@click.argument("project", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--mode",
    type=click.Choice(["check", "force", "skip"]),
    default="check",
    show_default=True,
    help="Compile when needed, always, or never.",
)
@click.option(
    "--coverage",
    "coverage_level",
    type=click.Choice(["*LINE", "*PROC"]),
    default=None,
    help="Collect CODECOV coverage at this level.",
)
@click.option("--curlib", default="*CURLIB", help="Current library when .env sets none.")
@click.option("--timeout", type=float, default=None, help="Per command timeout in seconds.")
@click.pass_context
def run_command(
    ctx: click.Context,
    project: Path,
    mode: CompileMode,
    coverage_level: CoverageLevel | None,
    curlib: str,
    timeout: float | None,
) -> None:
    """Compile and run the RPGUnit tests of PROJECT.

    Prints the run metrics, per case outcomes and the coverage summary as
    JSON. Exits non-zero when any test file or case failed or errored.
    """
    project = project.resolve()
    try:
        config = load_config(project)
    except ItestError as e:
        raise click.ClickException(str(e)) from e

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if verbose:
        configure_logging(level="DEBUG")
    else:
        configure_logging(config=config.logging)

    if timeout is not None:
        if timeout <= 0:
            raise click.BadParameter("must be positive", param_hint="--timeout")
        config.runner = config.runner.model_copy(update={"command_timeout_sec": timeout})

    buckets = LocalTestBucketBuilder(project).get_test_buckets()
    for bucket in buckets:
        for suite in bucket.test_suites:
            suite.coverage_level = coverage_level

    request = TestRequest(compile_mode=mode, buckets=buckets)
    listener = ReportingListener()
    try:
        runner = asyncio.run(_run(request, config, listener, curlib))
    except ItestError as e:
        raise click.ClickException(str(e)) from e

    echo_json(_report(runner, listener, config))
    ctx.exit(runner.metrics.exit_code)
