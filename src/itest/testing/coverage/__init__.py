"""CODECOV coverage decoding, merging and reporting.

Usage:
    from itest.testing.coverage import CoverageArchiveReader, merge_coverage, build_summary

    reader = CoverageArchiveReader(transport, work_dir, level="*LINE")
    runs = await reader.get_coverage("/tmp/vscode-ibmi-testing/CODECOV/TCUST_1.cczip")
    merged = merge_coverage(mapped_runs)
    summary = build_summary(merged, thresholds=(60, 90))
"""

from itest.testing.coverage.archive import CoverageArchiveReader
from itest.testing.coverage.decoder import (
    build_active_lines,
    decode,
    decode_hits,
    decode_line_spec,
    percent_ran,
    resolve_procedure_name,
)
from itest.testing.coverage.merge import merge_coverage, merge_lines
from itest.testing.coverage.models import (
    CoverageData,
    CoverageLine,
    MappedCoverageData,
    MergedCoverageData,
)
from itest.testing.coverage.report import (
    build_summary,
    compress_ranges,
    compute_file_stats,
    coverage_band,
    coverage_percent,
)

__all__ = [
    # Models
    "CoverageData",
    "CoverageLine",
    "MappedCoverageData",
    "MergedCoverageData",
    # Decoding
    "CoverageArchiveReader",
    "build_active_lines",
    "decode",
    "decode_hits",
    "decode_line_spec",
    "percent_ran",
    "resolve_procedure_name",
    # Merge
    "merge_coverage",
    "merge_lines",
    # Report
    "build_summary",
    "compress_ranges",
    "compute_file_stats",
    "coverage_band",
    "coverage_percent",
]
