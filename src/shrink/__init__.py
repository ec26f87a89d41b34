"""Public package entrypoint for the shrink build-profile orchestrator."""

from .errors import (
    BuildError,
    CompilationError,
    ComponentAttachError,
    DiagnosticWarning,
    ProvisioningError,
    ShrinkError,
    ToolchainUnavailableError,
    ValidationError,
)
from .models import (
    BuildArtifact,
    BuildProfile,
    ExecutionResult,
    Failure,
    SequencerState,
    StepRecord,
    Success,
)
from .profiles import tiny_profile
from .report import RunReport
from .sequencer import ProvisioningStep, Sequencer

__all__ = [
    "BuildArtifact",
    "BuildError",
    "BuildProfile",
    "CompilationError",
    "ComponentAttachError",
    "DiagnosticWarning",
    "ExecutionResult",
    "Failure",
    "ProvisioningError",
    "ProvisioningStep",
    "RunReport",
    "Sequencer",
    "SequencerState",
    "ShrinkError",
    "StepRecord",
    "Success",
    "ToolchainUnavailableError",
    "ValidationError",
    "tiny_profile",
]
