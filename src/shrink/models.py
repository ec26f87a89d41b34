"""Core typed dataclasses for build profiles and run results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Literal

from shrink.errors import ShrinkError

BuildMode = Literal["release", "debug"]

RELEASE_FLAG = "release"
VALIDATION_STEP = "validation"


class SequencerState(StrEnum):
    INIT = "init"
    PROVISIONING = "provisioning"
    BUILDING = "building"
    DONE = "done"
    FAILED = "failed"


StepState = Literal["ok", "warning", "failed"]


@dataclass(frozen=True, slots=True)
class BuildProfile:
    """Static description of one size-optimized build."""

    target_triple: str
    toolchain_channel: str
    required_components: tuple[str, ...]
    build_flags: tuple[str, ...]
    name: str = "tiny"

    @property
    def mode(self) -> BuildMode:
        return "release" if RELEASE_FLAG in self.build_flags else "debug"


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    channel: str
    target: str
    mode: BuildMode
    command: tuple[str, ...]
    output_path: Path


@dataclass(frozen=True, slots=True)
class StepRecord:
    name: str
    state: StepState
    detail: str = ""


@dataclass(frozen=True, slots=True)
class Success:
    profile: BuildProfile
    artifact: BuildArtifact
    steps: tuple[StepRecord, ...] = ()

    ok = True
    state = SequencerState.DONE

    @property
    def exit_code(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class Failure:
    profile: BuildProfile
    step: str
    cause: ShrinkError
    steps: tuple[StepRecord, ...] = ()

    ok = False
    state = SequencerState.FAILED

    @property
    def exit_code(self) -> int:
        if self.cause.returncode is not None and self.cause.returncode > 0:
            return self.cause.returncode
        return 1


ExecutionResult = Success | Failure
