"""Step trace logging helpers (JSONL)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from pathlattice.sim.contracts import GridSpec, StepRecord

SCHEMA_VERSION = 1
TRACE_LOG_NAME = "trace.jsonl"


def create_run_folder(
    base_dir: Path, *, timestamp: str | None = None
) -> tuple[Path, Path]:
    run_id = timestamp or _format_timestamp(datetime.now(timezone.utc))
    run_dir = base_dir / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir, run_dir / TRACE_LOG_NAME


def write_header(path: Path, *, grid: GridSpec, metadata: dict[str, Any]) -> None:
    record: dict[str, Any] = {
        "type": "header",
        "schema_version": SCHEMA_VERSION,
        "metadata": {**metadata, "grid": grid.model_dump(mode="json")},
    }
    _append_record(path, record)


def append_step_record(path: Path, step: StepRecord) -> None:
    record: dict[str, Any] = {
        "type": "step",
        "schema_version": SCHEMA_VERSION,
        "payload": step.model_dump(mode="json"),
    }
    _append_record(path, record)


def read_header(path: Path) -> dict[str, Any] | None:
    for record in _iter_records(path):
        if record.get("type") == "header":
            return record.get("metadata", {})
    return None


def read_grid_spec(path: Path) -> GridSpec | None:
    metadata = read_header(path)
    if not metadata or "grid" not in metadata:
        return None
    return GridSpec.model_validate(metadata["grid"])


def read_step_records(path: Path) -> Iterator[StepRecord]:
    for record in _iter_records(path):
        if record.get("type") != "step":
            continue
        payload = record.get("payload")
        if payload is None:
            continue
        yield StepRecord.model_validate(payload)


def _iter_records(path: Path) -> Iterator[dict]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = _parse_record(line)
            if isinstance(record, dict) and record:
                yield record


def _parse_record(line: str) -> Any:
    try:
        return json.loads(line)
    except json.JSONDecodeError:
        return None


def _append_record(path: Path, record: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record))
        handle.write("\n")


def _format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H-%M-%SZ")
