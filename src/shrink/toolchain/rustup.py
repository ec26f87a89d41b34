"""Host toolchain provisioning through rustup.

rustup's ``target add``, ``toolchain install`` and ``component add`` are all
no-ops when the item is already present, so each ``ensure_*`` call is safe to
repeat after a partial or complete run.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from shrink.errors import ComponentAttachError, ToolchainUnavailableError
from shrink.toolchain.base import run_command


@dataclass(slots=True)
class RustupToolchain:
    name: str = "rustup"
    rustup: str = "rustup"
    rustc: str = "rustc"

    def ensure_target_installed(self, triple: str) -> None:
        self._ensure_local_prerequisites()
        run_command(
            (self.rustup, "target", "add", triple),
            error=ToolchainUnavailableError,
            message=f"Failed to install target `{triple}`.",
            hint="Check the target triple and network access to the rustup dist server.",
            context={"toolchain": self.name, "operation": "ensure_target_installed"},
        )

    def ensure_channel_installed(self, channel: str) -> None:
        self._ensure_local_prerequisites()
        run_command(
            (self.rustup, "toolchain", "install", channel),
            error=ToolchainUnavailableError,
            message=f"Failed to install toolchain channel `{channel}`.",
            hint="Check network access to the rustup dist server.",
            context={"toolchain": self.name, "operation": "ensure_channel_installed"},
        )

    def ensure_component_installed(self, component: str, channel: str) -> None:
        self._ensure_local_prerequisites()
        run_command(
            (self.rustup, "component", "add", component, "--toolchain", channel),
            error=ComponentAttachError,
            message=f"Failed to add component `{component}` to `{channel}`.",
            hint=(
                "The component may not be published for this channel or target; "
                "see https://rust-lang.github.io/rustup-components-history/."
            ),
            context={
                "toolchain": self.name,
                "operation": "ensure_component_installed",
                "channel": channel,
            },
        )

    def query_version(self, channel: str) -> str:
        result = run_command(
            (self.rustc, f"+{channel}", "--version"),
            error=ToolchainUnavailableError,
            message=f"Failed to query rustc version for `{channel}`.",
            context={"toolchain": self.name, "operation": "query_version"},
        )
        return result.stdout.strip()

    def _ensure_local_prerequisites(self) -> None:
        if shutil.which(self.rustup) is None:
            raise ToolchainUnavailableError(
                f"Toolchain provisioning requires `{self.rustup}` in PATH.",
                hint="Install rustup from https://rustup.rs and re-run.",
                context={"toolchain": self.name, "operation": "prepare"},
            )
