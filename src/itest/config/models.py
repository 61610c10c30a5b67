"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (ITEST__SECTION__KEY)
3. Project YAML (.itest/config.yaml)
4. Global YAML (~/.config/itest/config.yaml)
5. Built-in defaults (this file)

Examples:
    ITEST__LOGGING__LEVEL=DEBUG
    ITEST__RUNNER__COMMAND_TIMEOUT_SEC=900
    ITEST__RUNNER__PRODUCT_LIBRARY=RPGUNIT
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        ITEST__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG includes every generated command.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class RunnerConfig(BaseModel):
    """Orchestrator configuration.

    Env vars:
        ITEST__RUNNER__PRODUCT_LIBRARY: Library holding the RPGUnit commands
        ITEST__RUNNER__TEMP_DIR: Remote directory for test output storage
        ITEST__RUNNER__COMMAND_TIMEOUT_SEC: Per remote command timeout
    """

    product_library: str = Field(
        default="RPGUNIT",
        description="Library qualifying RUCRTRPG, RUCRTCBL and RUCALLTST.",
    )
    coverage_command: str = Field(
        default="QDEVTOOLS/CODECOV",
        description="Qualified code coverage command wrapping test execution.",
    )
    temp_dir: str = Field(
        default="/tmp",
        description="Remote temporary directory. Result documents and coverage "
        "archives are written below it.",
    )
    command_timeout_sec: float = Field(
        default=600.0,
        description="Timeout for a single remote compile or execute command. "
        "Expiry is reported as an errored outcome for the affected scope.",
    )

    @field_validator("command_timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class ExecutionDefaults(BaseModel):
    """Base parameters for the RUCALLTST execute command.

    Per-suite `rpgunit.rucalltst` settings override these.
    """

    order: str = "*API"
    detail: str = "*BASIC"
    output: str = "*ALLWAYS"
    libl: str = "*CURRENT"
    jobd: str = "*DFT"
    rclrsc: str = "*NO"


class CoverageConfig(BaseModel):
    """Coverage reporting configuration."""

    thresholds: tuple[int, int] = Field(
        default=(60, 90),
        description="Percent boundaries (medium, high) for coverage bands.",
    )

    @field_validator("thresholds")
    @classmethod
    def validate_thresholds(cls, v: tuple[int, int]) -> tuple[int, int]:
        low, high = v
        if not (0 <= low <= high <= 100):
            raise ValueError(f"Thresholds must satisfy 0 <= medium <= high <= 100, got {v}")
        return v


class ItestConfig(BaseModel):
    """Root configuration for itest.

    All settings can be configured via:
    1. Environment variables: ITEST__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    execution: ExecutionDefaults = Field(default_factory=ExecutionDefaults)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
