"""Build the current Cargo project with the tiny profile and write a report."""

from pathlib import Path

from shrink import Sequencer, Success, tiny_profile
from shrink.observability import StructuredLogger
from shrink.report import RunReport
from shrink.toolchain import CargoDriver, RustupToolchain


def build_tiny(manifest: Path = Path("Cargo.toml")) -> int:
    sequencer = Sequencer(
        toolchain=RustupToolchain(),
        compiler=CargoDriver(manifest_path=manifest),
        logger=StructuredLogger(echo=True),
    )
    result = sequencer.run(tiny_profile())
    RunReport.from_result(result, sequencer.logger).to_json("target/shrink-report.json")
    if isinstance(result, Success):
        print(f"{result.artifact.output_path}")
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(build_tiny())
