from pathlib import Path

from shrink.errors import (
    BuildError,
    CompilationError,
    ComponentAttachError,
    ErrorCode,
    ProvisioningError,
    ToolchainUnavailableError,
    ValidationError,
)
from shrink.models import BuildArtifact, BuildProfile, Failure, SequencerState, Success


def _profile(**overrides: object) -> BuildProfile:
    fields: dict[str, object] = {
        "target_triple": "x86_64-unknown-linux-gnu",
        "toolchain_channel": "nightly",
        "required_components": ("rust-src",),
        "build_flags": ("build-std=std,panic_abort", "release"),
    }
    fields.update(overrides)
    return BuildProfile(**fields)  # type: ignore[arg-type]


def test_profile_mode_follows_release_flag() -> None:
    assert _profile().mode == "release"
    assert _profile(build_flags=("build-std=std",)).mode == "debug"


def test_error_codes_are_stable_and_machine_readable() -> None:
    errors = [
        ValidationError("bad profile"),
        ProvisioningError("install failed"),
        ToolchainUnavailableError("network down"),
        ComponentAttachError("no rust-src"),
        BuildError("build failed"),
        CompilationError("cargo failed"),
    ]
    assert [error.code for error in errors] == [
        ErrorCode.VALIDATION.value,
        ErrorCode.PROVISIONING.value,
        ErrorCode.PROVISIONING.value,
        ErrorCode.PROVISIONING.value,
        ErrorCode.BUILD.value,
        ErrorCode.BUILD.value,
    ]


def test_error_to_dict_includes_hint_context_and_returncode() -> None:
    error = CompilationError(
        "cargo build failed.",
        hint="Check the cargo output above for details.",
        context={"command": "cargo +nightly build", "stderr": ""},
        returncode=101,
    )

    payload = error.to_dict()

    assert payload["code"] == "E_BUILD"
    assert payload["kind"] == "CompilationError"
    assert payload["message"] == "cargo build failed."
    assert payload["step"] is None
    assert payload["hint"] == "Check the cargo output above for details."
    assert payload["returncode"] == 101
    assert payload["context"] == {"command": "cargo +nightly build", "stderr": ""}
    assert error.message == "cargo build failed."
    rendered = str(error)
    assert "Hint:" in rendered
    assert "command: cargo +nightly build" in rendered
    assert "stderr" not in rendered


def test_result_exit_codes() -> None:
    profile = _profile()
    artifact = BuildArtifact(
        channel="nightly",
        target="x86_64-unknown-linux-gnu",
        mode="release",
        command=("cargo",),
        output_path=Path("target/app"),
    )
    success = Success(profile=profile, artifact=artifact)

    assert success.ok
    assert success.exit_code == 0
    assert success.state == SequencerState.DONE
    assert Failure(profile, "build", CompilationError("x", returncode=101)).exit_code == 101
    assert Failure(profile, "validation", ValidationError("x")).exit_code == 1
    assert Failure(profile, "build", CompilationError("x", returncode=-9)).exit_code == 1
    assert Failure(profile, "validation", ValidationError("x")).state == SequencerState.FAILED
