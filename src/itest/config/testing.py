"""Per-suite testing configuration (testing.json).

Layering (highest to lowest precedence):
1. Nearest ``testing.json`` found walking up from the suite file to the bucket root
2. Global ``<bucket root>/.vscode/testing.json``

Keys follow the camelCase names used in testing.json files. Each RPGUnit
command section is an open parameter map; its ``wrapperCmd`` is split out
into its own structure at parse time so the inner command parameters and
the wrapper parameters never share a dict.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from itest.config.loader import _deep_merge
from itest.core.logging import notify

logger = structlog.get_logger()

TESTING_CONFIG_NAME = "testing"
TESTING_CONFIG_BASENAME = f"{TESTING_CONFIG_NAME}.json"
GLOBAL_CONFIG_DIRECTORY = ".vscode"


class WrapperCommand(BaseModel):
    """Command wrapping a compile or execute command: ``cmd(<inner>) <params>``."""

    cmd: str | None = None
    params: dict[str, str | int | None] = Field(default_factory=dict)


class CommandConfig(BaseModel):
    """Parameters for one RPGUnit command plus an optional wrapper."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    wrapper_cmd: WrapperCommand | None = Field(default=None, alias="wrapperCmd")

    @property
    def params(self) -> dict[str, Any]:
        """Inner command parameters, keyed as written in testing.json."""
        return dict(self.model_extra or {})


class RpgUnitConfig(BaseModel):
    rucrtrpg: CommandConfig = Field(default_factory=CommandConfig)
    rucrtcbl: CommandConfig = Field(default_factory=CommandConfig)
    rucalltst: CommandConfig = Field(default_factory=CommandConfig)


class CodeCovSettings(BaseModel):
    """CODECOV settings from testing.json."""

    model_config = ConfigDict(populate_by_name=True)

    module: list[str] = Field(default_factory=list)
    cc_view: str | None = Field(default=None, alias="ccView")
    test_id: str | None = Field(default=None, alias="testId")


class TestingConfig(BaseModel):
    """Fully defaulted testing configuration for one test suite."""

    rpgunit: RpgUnitConfig = Field(default_factory=RpgUnitConfig)
    codecov: CodeCovSettings = Field(default_factory=CodeCovSettings)


def parse_testing_config(data: dict[str, Any]) -> TestingConfig:
    return TestingConfig.model_validate(data)


class LocalTestingConfigResolver:
    """Resolves testing configuration for suites inside a local project."""

    def __init__(self, root: Path) -> None:
        self._root = root.resolve()

    def resolve(self, suite_path: Path) -> TestingConfig | None:
        """Return the merged configuration, or None when no file applies."""
        directory_path = self._find_directory_config(suite_path.resolve().parent)
        directory_config = self._read(directory_path) if directory_path else None
        if directory_path and directory_config is not None:
            logger.info("testing_config.directory_found", path=str(directory_path))

        global_path = self._root / GLOBAL_CONFIG_DIRECTORY / TESTING_CONFIG_BASENAME
        global_config = self._read(global_path)
        if global_config is not None:
            logger.info("testing_config.global_found", path=str(global_path))

        if directory_config is None and global_config is None:
            return None

        merged = _deep_merge(global_config or {}, directory_config or {})
        try:
            config = parse_testing_config(merged)
        except ValidationError as e:
            notify("error", "Failed to retrieve testing configuration", str(e))
            return None
        logger.debug("testing_config.merged", config=merged)
        return config

    def _find_directory_config(self, directory: Path) -> Path | None:
        for candidate in (directory, *directory.parents):
            if not candidate.is_relative_to(self._root):
                return None
            config_path = candidate / TESTING_CONFIG_BASENAME
            if config_path.is_file():
                return config_path
        return None

    def _read(self, path: Path) -> dict[str, Any] | None:
        if not path.is_file():
            logger.debug("testing_config.not_found", path=str(path))
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            notify("error", "Failed to read testing configuration", f"{path} - {e}")
            return None
        if not isinstance(data, dict):
            notify("error", "Failed to read testing configuration", f"{path} - not an object")
            return None
        return data
