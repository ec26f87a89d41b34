"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error identifiers used across API surfaces."""

    VALIDATION = "E_VALIDATION"
    PROVISIONING = "E_PROVISIONING"
    BUILD = "E_BUILD"


class ShrinkError(Exception):
    """Base error class that carries code, optional hint, and context.

    ``returncode`` is set when the error comes from a failed sub-command so the
    CLI can propagate that status as its own exit code.
    """

    code: str
    hint: str | None
    context: Mapping[str, str]
    returncode: int | None
    step: str | None

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})
        self.returncode = returncode
        self.step = None

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def to_dict(self) -> dict[str, object]:
        """Return the error as a report payload.

        ``step`` is filled in by the sequencer once the error is attributed to a
        run step; ``returncode`` only appears for failed sub-commands.
        """
        payload: dict[str, object] = {
            "code": self.code,
            "kind": type(self).__name__,
            "message": self.message,
            "step": self.step,
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        if self.returncode is not None:
            payload["returncode"] = self.returncode
        return payload


class ValidationError(ShrinkError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, hint=hint, context=context)


class ProvisioningError(ShrinkError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.PROVISIONING,
            hint=hint,
            context=context,
            returncode=returncode,
        )


class ToolchainUnavailableError(ProvisioningError):
    """Installer, network, or missing-tool failure while provisioning."""


class ComponentAttachError(ProvisioningError):
    """A named component is not available for the channel/target combination."""


class BuildError(ShrinkError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.BUILD,
            hint=hint,
            context=context,
            returncode=returncode,
        )


class CompilationError(BuildError):
    """The compiler exited non-zero. The cause is not interpreted."""


class DiagnosticWarning(RuntimeWarning):
    """Observational step failed; the run continues."""


__all__ = [
    "BuildError",
    "CompilationError",
    "ComponentAttachError",
    "DiagnosticWarning",
    "ErrorCode",
    "ProvisioningError",
    "ShrinkError",
    "ToolchainUnavailableError",
    "ValidationError",
]
