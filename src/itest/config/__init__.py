"""Config module exports."""

from itest.config.env import read_env_file
from itest.config.loader import load_config
from itest.config.models import (
    CoverageConfig,
    ExecutionDefaults,
    ItestConfig,
    LoggingConfig,
    RunnerConfig,
)
from itest.config.testing import (
    CodeCovSettings,
    CommandConfig,
    LocalTestingConfigResolver,
    TestingConfig,
    WrapperCommand,
)

__all__ = [
    "load_config",
    "read_env_file",
    "ItestConfig",
    "LoggingConfig",
    "RunnerConfig",
    "ExecutionDefaults",
    "CoverageConfig",
    "TestingConfig",
    "CommandConfig",
    "WrapperCommand",
    "CodeCovSettings",
    "LocalTestingConfigResolver",
]
