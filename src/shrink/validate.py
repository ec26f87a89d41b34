"""Validation helpers for build profiles."""

from __future__ import annotations

from shrink.errors import ValidationError
from shrink.models import BuildProfile


def validate_profile(profile: BuildProfile) -> None:
    """Validate required structural constraints before any toolchain call."""
    _require_text(profile, "target_triple", profile.target_triple, "x86_64-unknown-linux-gnu")
    _require_text(profile, "toolchain_channel", profile.toolchain_channel, "nightly")
    _require_entries(profile, "required_components", profile.required_components)
    _require_entries(profile, "build_flags", profile.build_flags)


def unique_components(profile: BuildProfile) -> tuple[str, ...]:
    """Return required components in declaration order with repeats dropped."""
    return tuple(dict.fromkeys(profile.required_components))


def _require_text(profile: BuildProfile, field_name: str, value: object, example: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"Build profile has an empty or non-string {field_name}.",
            hint=f"Set {field_name}, e.g. `{example}`.",
            context={
                "profile": str(profile.name),
                "field": field_name,
                "type": type(value).__name__,
            },
        )


def _require_entries(profile: BuildProfile, field_name: str, values: object) -> None:
    if not isinstance(values, (tuple, list)):
        raise ValidationError(
            f"Build profile {field_name} must be a tuple or list of strings.",
            context={
                "profile": str(profile.name),
                "field": field_name,
                "type": type(values).__name__,
            },
        )
    if not values:
        raise ValidationError(
            f"Build profile declares no {field_name}.",
            hint=f"Declare at least one entry in {field_name}.",
            context={"profile": str(profile.name), "field": field_name},
        )
    for index, value in enumerate(values):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(
                f"Build profile has an empty or non-string entry in {field_name}.",
                context={
                    "profile": str(profile.name),
                    "field": field_name,
                    "index": str(index),
                    "type": type(value).__name__,
                },
            )
