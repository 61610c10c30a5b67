"""On-host transport and workspace.

Used when itest runs on the host itself: CL commands go through
``system``, shell commands through ``/bin/sh``, and remote files are local
files. A local project is its own deploy directory.
"""

from __future__ import annotations

import asyncio
import shlex
import shutil
from collections.abc import Mapping
from pathlib import Path

import structlog

from itest.config.env import read_env_file
from itest.testing.collaborators import CommandResult, LibraryList
from itest.testing.models import DeploymentStatus

logger = structlog.get_logger()

SYSTEM_COMMAND = "system"
DEFAULT_CURRENT_LIBRARY = "*CURLIB"


def substitute_env(command: str, env: Mapping[str, str]) -> str:
    """Replace ``&KEY`` variables in a command, longest names first."""
    for key in sorted(env, key=len, reverse=True):
        command = command.replace(key, env[key])
    return command


class LocalTransport:
    """Transport for commands and files on the local host."""

    def __init__(self, system_command: str = SYSTEM_COMMAND) -> None:
        self._system_command = system_command

    async def run_command(self, command: str, env: Mapping[str, str]) -> CommandResult:
        cl = substitute_env(command, env)
        logger.debug("transport.run_command", command=cl)
        return await self._exec(self._system_command, cl)

    async def send_command(self, command: str) -> CommandResult:
        logger.debug("transport.send_command", command=command)
        return await self._exec("/bin/sh", "-c", command)

    async def download_file(self, remote_path: str, local_path: str) -> None:
        await asyncio.to_thread(shutil.copyfile, remote_path, local_path)

    async def read_file(self, remote_path: str) -> bytes:
        return await asyncio.to_thread(Path(remote_path).read_bytes)

    async def _exec(self, *args: str) -> CommandResult:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout_bytes, stderr_bytes = await proc.communicate()
        except asyncio.CancelledError:
            # Timeouts cancel us; do not leave the job running
            proc.kill()
            await proc.wait()
            raise

        return CommandResult(
            code=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout_bytes.decode(errors="replace"),
            stderr=stderr_bytes.decode(errors="replace"),
        )


class LocalWorkspace:
    """Workspace services for a project that already lives on the host."""

    def __init__(self, current_library: str = DEFAULT_CURRENT_LIBRARY) -> None:
        self._current_library = current_library

    async def deploy(self, bucket_path: str) -> DeploymentStatus:
        if not Path(bucket_path).is_dir():
            logger.error("workspace.deploy_missing", path=bucket_path)
            return "errored"
        return "success"

    def get_deploy_directory(self, bucket_path: str) -> str:
        return str(Path(bucket_path).resolve())

    async def get_library_list(self, bucket_path: str | None = None) -> LibraryList:
        env = read_env_file(Path(bucket_path)) if bucket_path else {}
        libraries = env.get("&LIBL", "")
        return LibraryList(
            current_library=env.get("&CURLIB") or self._current_library,
            libraries=shlex.split(libraries) if libraries else [],
        )

    async def get_env(self, bucket_path: str) -> dict[str, str]:
        return read_env_file(Path(bucket_path))

    async def load_diagnostics(self, qualified_object: str, bucket_path: str) -> None:
        logger.debug("workspace.diagnostics_skipped", object=qualified_object)

    async def clear_diagnostics(self) -> None:
        pass
