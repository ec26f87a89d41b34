"""Run report model and export helpers."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import cbor2

from shrink.models import ExecutionResult, Success
from shrink.observability import StructuredLogger


@dataclass(frozen=True, slots=True)
class RunReport:
    profile: dict[str, object]
    state: str
    steps: tuple[dict[str, str], ...]
    artifact: dict[str, object] | None = None
    failure: dict[str, object] | None = None
    logs: tuple[dict[str, Any], ...] = ()
    schema_version: int = 1

    @classmethod
    def from_result(
        cls,
        result: ExecutionResult,
        logger: StructuredLogger | None = None,
    ) -> RunReport:
        profile = result.profile
        artifact: dict[str, object] | None = None
        failure: dict[str, object] | None = None
        if isinstance(result, Success):
            artifact = _artifact_payload(result)
        else:
            failure = result.cause.to_dict()
        return cls(
            profile={
                "name": profile.name,
                "target_triple": profile.target_triple,
                "toolchain_channel": profile.toolchain_channel,
                "required_components": list(profile.required_components),
                "build_flags": list(profile.build_flags),
                "mode": profile.mode,
            },
            state=str(result.state),
            steps=tuple(
                {"name": step.name, "state": step.state, "detail": step.detail}
                for step in result.steps
            ),
            artifact=artifact,
            failure=failure,
            logs=tuple(logger.records) if logger is not None else (),
        )

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self._payload(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            _write_parent(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self._payload(), canonical=True)
        if path is not None:
            _write_parent(path).write_bytes(encoded)
        return encoded

    def _payload(self) -> dict[str, object]:
        return {
            "schema_version": self.schema_version,
            "profile": self.profile,
            "state": self.state,
            "steps": list(self.steps),
            "artifact": self.artifact,
            "failure": self.failure,
            "logs": list(self.logs),
        }


def _artifact_payload(result: Success) -> dict[str, object]:
    artifact = result.artifact
    payload: dict[str, object] = {
        "path": str(artifact.output_path),
        "channel": artifact.channel,
        "target": artifact.target,
        "mode": artifact.mode,
        "command": list(artifact.command),
    }
    if artifact.output_path.is_file():
        payload["sha256"] = hashlib.sha256(artifact.output_path.read_bytes()).hexdigest()
        payload["size_bytes"] = artifact.output_path.stat().st_size
    return payload


def _write_parent(path: str | Path) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path
