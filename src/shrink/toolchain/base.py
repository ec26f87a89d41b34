"""Protocols for toolchain collaborators and shared subprocess helpers."""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from shrink.errors import BuildError, ProvisioningError
from shrink.models import BuildArtifact, BuildMode

STDERR_LIMIT = 2000


class ToolchainManager(Protocol):
    """Host toolchain state. Every method is idempotent and raises on failure."""

    def ensure_target_installed(self, triple: str) -> None:
        """Make the target's standard library available to the default toolchain."""

    def ensure_channel_installed(self, channel: str) -> None:
        """Install the release channel if it is missing."""

    def ensure_component_installed(self, component: str, channel: str) -> None:
        """Attach a component to an installed channel."""

    def query_version(self, channel: str) -> str:
        """Return the compiler version string for a channel."""


class CompilerDriver(Protocol):
    def build(
        self,
        channel: str,
        flags: Sequence[str],
        target: str,
        mode: BuildMode,
    ) -> BuildArtifact:
        """Compile the project and return the produced artifact."""


def run_command(
    argv: Sequence[str],
    *,
    error: type[ProvisioningError] | type[BuildError],
    message: str,
    hint: str | None = None,
    context: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    capture: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run *argv* to completion and raise *error* on a non-zero status.

    With ``capture=False`` output goes straight to the terminal, which is what
    long compilations want.
    """
    result = subprocess.run(
        list(argv),
        cwd=str(cwd) if cwd is not None else None,
        capture_output=capture,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise error(
            message,
            hint=hint,
            context={
                **dict(context or {}),
                "command": " ".join(argv),
                "returncode": str(result.returncode),
                "stderr": result.stderr[:STDERR_LIMIT] if result.stderr else "",
            },
            returncode=result.returncode,
        )
    return result
