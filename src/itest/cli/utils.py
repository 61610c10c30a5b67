"""CLI utilities."""

import json
from dataclasses import fields, is_dataclass
from typing import Any

import click

from itest.testing.models import BasicUri, TestBucket


def to_jsonable(value: Any) -> Any:
    """Convert models to plain JSON data. URIs render as ``scheme:path#fragment``."""
    if isinstance(value, BasicUri):
        return str(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name))
            for f in fields(value)
            if f.name != "testing_config"
        }
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    return value


def echo_json(data: Any) -> None:
    click.echo(json.dumps(to_jsonable(data), indent=2))


def bucket_to_dict(bucket: TestBucket) -> dict[str, Any]:
    return {
        "name": bucket.name,
        "uri": str(bucket.uri),
        "suites": [
            {
                "name": suite.name,
                "system_name": suite.system_name,
                "uri": str(suite.uri),
                "has_testing_config": suite.testing_config is not None,
                "cases": [case.name for case in suite.test_cases],
            }
            for suite in bucket.test_suites
        ],
    }
