"""Cargo compiler driver."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from shrink.errors import CompilationError, ValidationError
from shrink.models import RELEASE_FLAG, BuildArtifact, BuildMode
from shrink.toolchain.base import run_command


def compose_build_command(
    *,
    tool: str,
    channel: str,
    flags: Sequence[str],
    target: str,
    mode: BuildMode,
    manifest_path: Path | None = None,
) -> tuple[str, ...]:
    """Translate profile flags into a cargo argv, preserving their order.

    ``key=value`` flags become unstable ``-Z`` options, flags that already start
    with ``-`` pass through, and ``release`` is expressed by *mode*.
    """
    command: list[str] = [tool, f"+{channel}", "build"]
    for flag in flags:
        if flag == RELEASE_FLAG:
            continue
        if flag.startswith("-"):
            command.append(flag)
        else:
            command.extend(("-Z", flag))
    command.extend(("--target", target))
    if mode == "release":
        command.append("--release")
    if manifest_path is not None:
        command.extend(("--manifest-path", str(manifest_path)))
    return tuple(command)


@dataclass(slots=True)
class CargoDriver:
    manifest_path: Path | None = None
    tool: str = "cargo"

    def build(
        self,
        channel: str,
        flags: Sequence[str],
        target: str,
        mode: BuildMode,
    ) -> BuildArtifact:
        command = compose_build_command(
            tool=self.tool,
            channel=channel,
            flags=flags,
            target=target,
            mode=mode,
            manifest_path=self.manifest_path.resolve() if self.manifest_path else None,
        )
        run_command(
            command,
            error=CompilationError,
            message="cargo build failed.",
            hint="Check the cargo output above for details.",
            context={"compiler": self.tool, "operation": "build", "target": target},
            cwd=self.project_dir,
            capture=False,
        )
        return BuildArtifact(
            channel=channel,
            target=target,
            mode=mode,
            command=command,
            output_path=self.artifact_path(target=target, mode=mode),
        )

    @property
    def project_dir(self) -> Path:
        if self.manifest_path is None:
            return Path.cwd()
        return self.manifest_path.parent

    def artifact_path(self, *, target: str, mode: BuildMode) -> Path:
        """Return where cargo places the binary for *target* and *mode*.

        Falls back to the profile output directory when the manifest has no
        ``[package]`` table (e.g. a virtual workspace).
        """
        output_dir = self.target_dir() / target / mode
        package = self._package_name()
        if package is None:
            return output_dir
        suffix = ".exe" if "windows" in target else ""
        return output_dir / f"{package}{suffix}"

    def target_dir(self) -> Path:
        """Return cargo's target directory for this project.

        A relative ``CARGO_TARGET_DIR`` is taken relative to the project
        directory, where cargo runs.  Without it, workspace members share the
        workspace root's ``target/``.
        """
        override = os.environ.get("CARGO_TARGET_DIR")
        if override:
            return self.project_dir / override
        return self._workspace_root() / "target"

    def _workspace_root(self) -> Path:
        start = self.project_dir.resolve()
        for directory in (start, *start.parents):
            manifest = directory / "Cargo.toml"
            if manifest.exists() and "workspace" in _read_manifest(manifest):
                return self.project_dir if directory == start else directory
        return self.project_dir

    def _package_name(self) -> str | None:
        manifest = self.manifest_path or self.project_dir / "Cargo.toml"
        if not manifest.exists():
            return None
        package = _read_manifest(manifest).get("package")
        if not isinstance(package, dict):
            return None
        name = package.get("name")
        return name if isinstance(name, str) else None


def _read_manifest(manifest: Path) -> dict[str, object]:
    try:
        return tomllib.loads(manifest.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValidationError(
            "Cargo manifest is not valid TOML.",
            context={"manifest": str(manifest), "error": str(exc)},
        ) from exc
