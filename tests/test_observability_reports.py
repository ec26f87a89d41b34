import json
import warnings
from pathlib import Path

import cbor2

from shrink.errors import ToolchainUnavailableError
from shrink.models import BuildProfile
from shrink.report import RunReport
from shrink.sequencer import Sequencer
from shrink.toolchain.inprocess import InProcessToolchain


def test_success_report_contains_artifact_digest_and_size(
    tmp_path: Path,
    sequencer: Sequencer,
    profile: BuildProfile,
) -> None:
    result = sequencer.run(profile)
    report = RunReport.from_result(result, sequencer.logger)

    payload = json.loads(report.to_json(tmp_path / "report.json"))

    assert payload["state"] == "done"
    assert payload["profile"]["mode"] == "release"
    assert payload["artifact"]["size_bytes"] > 0
    assert len(payload["artifact"]["sha256"]) == 64
    assert payload["artifact"]["command"][:3] == ["cargo", "+nightly", "build"]
    assert (tmp_path / "report.json").exists()


def test_report_exports_are_deterministic(sequencer: Sequencer, profile: BuildProfile) -> None:
    report = RunReport.from_result(sequencer.run(profile), sequencer.logger)

    assert report.to_json() == report.to_json()
    assert report.to_cbor() == report.to_cbor()
    decoded = cbor2.loads(report.to_cbor())
    assert decoded["schema_version"] == 1
    assert decoded["steps"] == json.loads(report.to_json())["steps"]


def test_structured_logs_include_profile_step_and_state(
    tmp_path: Path,
    toolchain: InProcessToolchain,
    sequencer: Sequencer,
    profile: BuildProfile,
) -> None:
    toolchain.fail("query_version", ToolchainUnavailableError("rustc missing"))
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        sequencer.run(profile)

    records = sequencer.logger.records
    assert records
    for record in records:
        assert record["profile"] == "tiny"
        assert "step" in record
        assert "state" in record
    warning = sequencer.logger.records_for_step("query_version")[-1]
    assert warning["level"] == "warning"
    assert warning["extra"]["code"] == "E_PROVISIONING"

    path = sequencer.logger.to_json_lines(tmp_path / "logs" / "run.jsonl")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == len(records)
    assert json.loads(lines[-1])["operation"] == "run_complete"
