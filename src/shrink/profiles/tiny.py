"""Tiny-binary profile.

Rebuilds ``std`` from source on the nightly channel with ``panic_abort`` and
``panic_immediate_abort`` so the release binary carries no unwinding machinery
and no panic formatting.  ``build-std`` is unstable, hence nightly and the
``rust-src`` component.
"""

from __future__ import annotations

from shrink.models import BuildProfile

DEFAULT_TARGET = "x86_64-unknown-linux-gnu"
DEFAULT_CHANNEL = "nightly"
DEFAULT_COMPONENTS: tuple[str, ...] = ("rust-src",)

# build-std-features only takes effect together with build-std.
DEFAULT_FLAGS: tuple[str, ...] = (
    "build-std=std,panic_abort",
    "build-std-features=panic_immediate_abort",
    "release",
)


def tiny_profile(target: str = DEFAULT_TARGET) -> BuildProfile:
    return BuildProfile(
        name="tiny",
        target_triple=target,
        toolchain_channel=DEFAULT_CHANNEL,
        required_components=DEFAULT_COMPONENTS,
        build_flags=DEFAULT_FLAGS,
    )
