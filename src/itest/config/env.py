"""Workspace ``.env`` variables.

Each ``KEY=value`` line becomes a ``&KEY`` substitution variable, the form
used by the remote command environment.
"""

from pathlib import Path

ENV_FILE_NAME = ".env"
VARIABLE_PREFIX = "&"


def read_env_file(workspace_root: Path) -> dict[str, str]:
    """Read ``<workspace_root>/.env``; missing file yields an empty mapping."""
    env_path = workspace_root / ENV_FILE_NAME
    if not env_path.is_file():
        return {}

    env: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").replace("\r", "").split("\n"):
        if line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if key and value:
            env[f"{VARIABLE_PREFIX}{key}"] = value
    return env
