"""Size-optimized core-only build for a bare-metal target."""

from shrink import BuildProfile, Sequencer
from shrink.toolchain import CargoDriver, RustupToolchain

PROFILE = BuildProfile(
    name="bare-metal",
    target_triple="thumbv7em-none-eabihf",
    toolchain_channel="nightly",
    required_components=("rust-src", "llvm-tools"),
    build_flags=(
        "build-std=core,alloc",
        "build-std-features=panic_immediate_abort",
        "release",
    ),
)


if __name__ == "__main__":
    result = Sequencer(toolchain=RustupToolchain(), compiler=CargoDriver()).run(PROFILE)
    raise SystemExit(result.exit_code)
