"""Transports for reaching the host."""

from itest.transport.local import LocalTransport, LocalWorkspace, substitute_env

__all__ = ["LocalTransport", "LocalWorkspace", "substitute_env"]
