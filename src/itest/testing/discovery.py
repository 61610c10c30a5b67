"""Local test discovery.

Builds a single file-scheme TestBucket for a project directory: every
``*.TEST.<ext>`` source becomes a TestSuite whose test cases are the
procedures named ``TEST*``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

import structlog

from itest.config.testing import LocalTestingConfigResolver
from itest.testing.models import BasicUri, TestBucket, TestCase, TestSuite
from itest.testing.naming import get_system_name, is_test_source

logger = structlog.get_logger()

TEST_PROCEDURE_PATTERN = re.compile(r"^TEST", re.IGNORECASE)

# Free-form ``dcl-proc NAME``, fixed-form ``P NAME  B`` and COBOL ``PROGRAM-ID. NAME.``
_FREE_PROC = re.compile(r"^\s*dcl-proc\s+([\w#@$]+)", re.IGNORECASE)
_FIXED_PROC = re.compile(r"^.{5}[pP]([\w#@$]+)\s+[bB]\b")
_COBOL_PROGRAM = re.compile(r"^.{6}\s*PROGRAM-ID\.\s*'?([\w#@$-]+)'?", re.IGNORECASE)


class ProcedureScanner:
    """Line based procedure finder for RPGLE and COBOL sources.

    Also serves as the docs provider for ``*PROC`` coverage naming.
    """

    def scan(self, source: str) -> dict[int, str]:
        """Map zero-based start line to procedure name."""
        procedures: dict[int, str] = {}
        for index, line in enumerate(source.split("\n")):
            match = _FREE_PROC.match(line) or _FIXED_PROC.match(line) or _COBOL_PROGRAM.match(line)
            if match:
                procedures[index] = match.group(1)
        return procedures

    async def get_procedures(self, path: str, source: str) -> Mapping[int, str] | None:
        return self.scan(source)

    def test_cases(self, source: str) -> list[str]:
        return [name for name in self.scan(source).values() if TEST_PROCEDURE_PATTERN.match(name)]


class LocalTestBucketBuilder:
    """Enumerates test suites below a local project directory."""

    def __init__(self, project: Path, scanner: ProcedureScanner | None = None) -> None:
        self._project = project.resolve()
        self._scanner = scanner or ProcedureScanner()
        self._config_resolver = LocalTestingConfigResolver(self._project)

    def get_test_buckets(self) -> list[TestBucket]:
        logger.info("discovery.searching", directory=str(self._project))

        bucket = TestBucket(
            name=self._project.name,
            uri=BasicUri(scheme="file", path=str(self._project)),
        )

        for path in sorted(p for p in self._project.rglob("*") if p.is_file()):
            if not is_test_source(path.name):
                continue
            bucket.test_suites.append(self._build_suite(path))

        logger.info(
            "discovery.complete",
            suites=len(bucket.test_suites),
            cases=sum(len(s.test_cases) for s in bucket.test_suites),
        )
        return [bucket]

    def _build_suite(self, path: Path) -> TestSuite:
        source = path.read_text(encoding="utf-8", errors="replace")
        file_path = str(path)
        return TestSuite(
            name=path.name,
            system_name=get_system_name(path.stem),
            uri=BasicUri(scheme="file", path=file_path),
            test_cases=[
                TestCase(name=name, uri=BasicUri(scheme="file", path=file_path, fragment=name))
                for name in self._scanner.test_cases(source)
            ],
            is_compiled=False,
            is_entire_suite=True,
            testing_config=self._config_resolver.resolve(path),
        )
