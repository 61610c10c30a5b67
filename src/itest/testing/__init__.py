"""Remote RPGUnit test orchestration."""

from itest.testing.collaborators import (
    CommandResult,
    DocsProvider,
    LibraryList,
    TestListener,
    Transport,
    Workspace,
)
from itest.testing.discovery import LocalTestBucketBuilder, ProcedureScanner
from itest.testing.models import (
    AssertionResult,
    BasicUri,
    TestBucket,
    TestCase,
    TestCaseResult,
    TestMetrics,
    TestRequest,
    TestSuite,
)
from itest.testing.parsers import parse_test_results
from itest.testing.runner import Runner

__all__ = [
    "AssertionResult",
    "BasicUri",
    "CommandResult",
    "DocsProvider",
    "LibraryList",
    "LocalTestBucketBuilder",
    "ProcedureScanner",
    "Runner",
    "TestBucket",
    "TestCase",
    "TestCaseResult",
    "TestListener",
    "TestMetrics",
    "TestRequest",
    "TestSuite",
    "Transport",
    "Workspace",
    "parse_test_results",
]
