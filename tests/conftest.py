"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from shrink.models import BuildProfile
from shrink.sequencer import Sequencer
from shrink.toolchain.inprocess import InProcessToolchain


@pytest.fixture
def toolchain(tmp_path: Path) -> InProcessToolchain:
    """Provide a recording toolchain that writes artifacts under tmp_path."""
    return InProcessToolchain(output_dir=tmp_path / "target")


@pytest.fixture
def sequencer(toolchain: InProcessToolchain) -> Sequencer:
    return Sequencer(toolchain=toolchain, compiler=toolchain)


@pytest.fixture
def profile() -> BuildProfile:
    return BuildProfile(
        target_triple="x86_64-unknown-linux-gnu",
        toolchain_channel="nightly",
        required_components=("std-sources",),
        build_flags=(
            "build-std=std,panic_abort",
            "build-std-features=panic_immediate_abort",
            "release",
        ),
    )
