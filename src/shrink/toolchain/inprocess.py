"""In-process toolchain for testing and dry runs.

Records every collaborator call and keeps installed state in memory instead of
touching the host, making it suitable for:
- Unit tests that assert call order and fail-fast behavior
- ``shrink --dry-run`` on machines without rustup
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from shrink.errors import (
    CompilationError,
    ComponentAttachError,
    ToolchainUnavailableError,
)
from shrink.models import BuildArtifact, BuildMode
from shrink.toolchain.cargo import compose_build_command

PACKAGE_NAME = "app"


@dataclass(frozen=True, slots=True)
class ToolchainCall:
    operation: str
    args: tuple[str, ...] = ()


@dataclass(slots=True)
class InProcessToolchain:
    """Recording fake that implements both toolchain manager and compiler driver."""

    name: str = "inprocess"
    version: str = "rustc 0.0.0-nightly (inprocess)"
    output_dir: Path | None = None
    failures: dict[str, Exception] = field(default_factory=dict)
    unavailable_components: set[str] = field(default_factory=set)
    installed_targets: set[str] = field(default_factory=set)
    installed_channels: set[str] = field(default_factory=set)
    installed_components: set[tuple[str, str]] = field(default_factory=set)
    calls: list[ToolchainCall] = field(default_factory=list)
    installs: list[ToolchainCall] = field(default_factory=list)

    @property
    def trace(self) -> tuple[str, ...]:
        return tuple(call.operation for call in self.calls)

    def fail(self, operation: str, error: Exception) -> None:
        """Make every later call to *operation* raise *error*."""
        self.failures[operation] = error

    def reset_calls(self) -> None:
        self.calls.clear()
        self.installs.clear()

    def ensure_target_installed(self, triple: str) -> None:
        call = self._record("ensure_target_installed", triple)
        if triple not in self.installed_targets:
            self.installed_targets.add(triple)
            self.installs.append(call)

    def ensure_channel_installed(self, channel: str) -> None:
        call = self._record("ensure_channel_installed", channel)
        if channel not in self.installed_channels:
            self.installed_channels.add(channel)
            self.installs.append(call)

    def ensure_component_installed(self, component: str, channel: str) -> None:
        call = self._record("ensure_component_installed", component, channel)
        if channel not in self.installed_channels:
            raise ComponentAttachError(
                f"Cannot add component `{component}`: channel `{channel}` is not installed.",
                context={"toolchain": self.name, "operation": call.operation},
            )
        if component in self.unavailable_components:
            raise ComponentAttachError(
                f"Component `{component}` is not available for `{channel}`.",
                context={"toolchain": self.name, "operation": call.operation},
            )
        key = (component, channel)
        if key not in self.installed_components:
            self.installed_components.add(key)
            self.installs.append(call)

    def query_version(self, channel: str) -> str:
        call = self._record("query_version", channel)
        if channel not in self.installed_channels:
            raise ToolchainUnavailableError(
                f"Toolchain channel `{channel}` is not installed.",
                context={"toolchain": self.name, "operation": call.operation},
            )
        return self.version

    def build(
        self,
        channel: str,
        flags: Sequence[str],
        target: str,
        mode: BuildMode,
    ) -> BuildArtifact:
        command = compose_build_command(
            tool="cargo",
            channel=channel,
            flags=flags,
            target=target,
            mode=mode,
        )
        call = self._record("build", channel, *flags, target, mode)
        if channel not in self.installed_channels:
            raise CompilationError(
                f"Toolchain channel `{channel}` is not installed.",
                context={"toolchain": self.name, "operation": call.operation},
                returncode=101,
            )
        base = self.output_dir if self.output_dir is not None else Path("target")
        output_path = base / target / mode / PACKAGE_NAME
        if self.output_dir is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            digest = hashlib.sha256(" ".join(command).encode()).hexdigest()
            output_path.write_text(f"shrink-artifact: {digest}\n", encoding="utf-8")
        return BuildArtifact(
            channel=channel,
            target=target,
            mode=mode,
            command=command,
            output_path=output_path,
        )

    def _record(self, operation: str, *args: str) -> ToolchainCall:
        call = ToolchainCall(operation=operation, args=args)
        self.calls.append(call)
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure
        return call
