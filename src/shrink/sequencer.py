"""Provision-then-build sequencer.

Runs an ordered list of idempotent provisioning steps followed by exactly one
build step against a single :class:`~shrink.models.BuildProfile`, stopping at
the first fatal failure.  Failures are returned as
:class:`~shrink.models.Failure` values rather than raised, so callers can
inspect which step failed and why.  Nothing is rolled back: provisioning is
idempotent, so a later run resumes from wherever this one stopped.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from shrink.errors import (
    CompilationError,
    DiagnosticWarning,
    ShrinkError,
    ToolchainUnavailableError,
    ValidationError,
)
from shrink.models import (
    VALIDATION_STEP,
    BuildProfile,
    ExecutionResult,
    Failure,
    SequencerState,
    StepRecord,
    Success,
)
from shrink.observability import StructuredLogger
from shrink.toolchain.base import CompilerDriver, ToolchainManager
from shrink.validate import unique_components, validate_profile

BUILD_STEP = "build"

_TRANSITIONS: dict[SequencerState, frozenset[SequencerState]] = {
    SequencerState.INIT: frozenset({SequencerState.PROVISIONING, SequencerState.FAILED}),
    SequencerState.PROVISIONING: frozenset({SequencerState.BUILDING, SequencerState.FAILED}),
    SequencerState.BUILDING: frozenset({SequencerState.DONE, SequencerState.FAILED}),
    SequencerState.DONE: frozenset(),
    SequencerState.FAILED: frozenset(),
}


@dataclass(frozen=True, slots=True)
class ProvisioningStep:
    name: str
    action: Callable[[], object]
    fatal: bool = True


@dataclass(slots=True)
class Sequencer:
    toolchain: ToolchainManager
    compiler: CompilerDriver
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    state: SequencerState = field(default=SequencerState.INIT, init=False)

    def plan(self, profile: BuildProfile) -> tuple[ProvisioningStep, ...]:
        """Return the provisioning steps for *profile* in execution order."""
        channel = profile.toolchain_channel
        steps = [
            ProvisioningStep(
                "ensure_target",
                partial(self.toolchain.ensure_target_installed, profile.target_triple),
            ),
            ProvisioningStep(
                "ensure_channel",
                partial(self.toolchain.ensure_channel_installed, channel),
            ),
            ProvisioningStep(
                "query_version",
                partial(self.toolchain.query_version, channel),
                fatal=False,
            ),
        ]
        for component in unique_components(profile):
            steps.append(
                ProvisioningStep(
                    f"ensure_component:{component}",
                    partial(self.toolchain.ensure_component_installed, component, channel),
                ),
            )
        return tuple(steps)

    def run(self, profile: BuildProfile) -> ExecutionResult:
        self.state = SequencerState.INIT
        records: list[StepRecord] = []

        try:
            validate_profile(profile)
        except ValidationError as exc:
            return self._fail(profile, VALIDATION_STEP, exc, records)

        if len(unique_components(profile)) != len(profile.required_components):
            self._log(
                profile,
                operation="collapse_components",
                step=None,
                message="Duplicate component entries collapsed to one install each.",
                extra={"components": list(unique_components(profile))},
            )

        self._transition(profile, SequencerState.PROVISIONING)
        for step in self.plan(profile):
            self._log(profile, operation="step_start", step=step.name, message="Starting step.")
            try:
                outcome = step.action()
            except Exception as exc:
                cause = _as_shrink_error(exc, step=step.name)
                if step.fatal:
                    records.append(StepRecord(step.name, "failed", cause.message))
                    return self._fail(profile, step.name, cause, records)
                records.append(StepRecord(step.name, "warning", cause.message))
                self._log(
                    profile,
                    operation="step_warning",
                    step=step.name,
                    message=cause.message,
                    level="warning",
                    extra=cause.to_dict(),
                )
                warnings.warn(
                    f"{step.name} failed, continuing: {cause.message}",
                    DiagnosticWarning,
                    stacklevel=2,
                )
                continue
            detail = outcome if isinstance(outcome, str) else ""
            records.append(StepRecord(step.name, "ok", detail))
            self._log(
                profile,
                operation="step_complete",
                step=step.name,
                message=detail or "Step complete.",
            )

        self._transition(profile, SequencerState.BUILDING)
        self._log(profile, operation="step_start", step=BUILD_STEP, message="Starting build.")
        try:
            artifact = self.compiler.build(
                profile.toolchain_channel,
                profile.build_flags,
                profile.target_triple,
                profile.mode,
            )
        except Exception as exc:
            cause = _as_shrink_error(exc, step=BUILD_STEP)
            records.append(StepRecord(BUILD_STEP, "failed", cause.message))
            return self._fail(profile, BUILD_STEP, cause, records)

        records.append(StepRecord(BUILD_STEP, "ok", str(artifact.output_path)))
        self._transition(profile, SequencerState.DONE)
        self._log(
            profile,
            operation="run_complete",
            step=BUILD_STEP,
            message=f"Built {artifact.output_path}.",
            extra={"command": list(artifact.command)},
        )
        return Success(profile=profile, artifact=artifact, steps=tuple(records))

    def _fail(
        self,
        profile: BuildProfile,
        step: str,
        cause: ShrinkError,
        records: list[StepRecord],
    ) -> Failure:
        cause.step = step
        self._transition(profile, SequencerState.FAILED)
        self._log(
            profile,
            operation="run_failed",
            step=step,
            message=cause.message,
            level="error",
            extra=cause.to_dict(),
        )
        return Failure(profile=profile, step=step, cause=cause, steps=tuple(records))

    def _transition(self, profile: BuildProfile, new_state: SequencerState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal sequencer transition {self.state} -> {new_state}.")
        self._log(
            profile,
            operation="transition",
            step=None,
            message=f"{self.state} -> {new_state}",
            state=new_state,
        )
        self.state = new_state

    def _log(
        self,
        profile: BuildProfile,
        *,
        operation: str,
        step: str | None,
        message: str,
        level: str = "info",
        state: SequencerState | None = None,
        extra: dict[str, object] | None = None,
    ) -> None:
        self.logger.log(
            operation=operation,
            profile=profile.name,
            step=step,
            state=str(state or self.state),
            message=message,
            level=level,
            extra=extra,
        )


def _as_shrink_error(exc: Exception, *, step: str) -> ShrinkError:
    if isinstance(exc, ShrinkError):
        exc.step = step
        return exc
    error_cls = CompilationError if step == BUILD_STEP else ToolchainUnavailableError
    hint = (
        "Check that the toolchain binaries are installed and in PATH."
        if isinstance(exc, OSError)
        else None
    )
    error = error_cls(
        f"Could not run {step}: {exc}",
        hint=hint,
        context={"operation": step, "error": type(exc).__name__},
    )
    error.step = step
    error.__cause__ = exc
    return error
