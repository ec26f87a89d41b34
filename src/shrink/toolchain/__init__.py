"""Toolchain manager and compiler driver implementations."""

from .base import CompilerDriver, ToolchainManager
from .cargo import CargoDriver, compose_build_command
from .inprocess import InProcessToolchain, ToolchainCall
from .rustup import RustupToolchain

__all__ = [
    "CargoDriver",
    "CompilerDriver",
    "InProcessToolchain",
    "RustupToolchain",
    "ToolchainCall",
    "ToolchainManager",
    "compose_build_command",
]
