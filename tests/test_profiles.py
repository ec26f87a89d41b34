from shrink.profiles import DEFAULT_TARGET, tiny_profile
from shrink.validate import unique_components, validate_profile


def test_tiny_profile_rebuilds_std_with_immediate_abort() -> None:
    profile = tiny_profile()

    assert profile.target_triple == DEFAULT_TARGET == "x86_64-unknown-linux-gnu"
    assert profile.toolchain_channel == "nightly"
    assert profile.required_components == ("rust-src",)
    assert profile.build_flags == (
        "build-std=std,panic_abort",
        "build-std-features=panic_immediate_abort",
        "release",
    )
    assert profile.mode == "release"
    validate_profile(profile)


def test_tiny_profile_target_override_keeps_everything_else() -> None:
    default = tiny_profile()
    arm = tiny_profile(target="aarch64-unknown-linux-musl")

    assert arm.target_triple == "aarch64-unknown-linux-musl"
    assert arm.build_flags == default.build_flags
    assert arm.required_components == default.required_components


def test_unique_components_keeps_first_position() -> None:
    profile = tiny_profile()
    doubled = type(profile)(
        target_triple=profile.target_triple,
        toolchain_channel=profile.toolchain_channel,
        required_components=("rust-src", "llvm-tools", "rust-src"),
        build_flags=profile.build_flags,
    )

    assert unique_components(doubled) == ("rust-src", "llvm-tools")
