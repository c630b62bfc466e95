from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import WorkloadFormatError
from .models import Process

# pid, arrival_time, burst_time, priority
_DEFAULT_WORKLOAD = [
    ("P1", 0, 8, 1),
    ("P2", 1, 4, 2),
    ("P3", 2, 2, 1),
    ("P4", 3, 1, 3),
    ("P5", 4, 3, 2),
    ("P6", 5, 6, 2),
    ("P7", 6, 3, 1),
    ("P8", 7, 5, 3),
    ("P9", 8, 2, 2),
    ("P10", 9, 4, 1),
]


def default_processes() -> List[Process]:
    """
    The built-in ten-process workload used when no file is given.
    """
    return [
        Process(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority)
        for pid, arrival, burst, priority in _DEFAULT_WORKLOAD
    ]


def load_workload(path: str | Path) -> List[Process]:
    """
    Read processes from a workload file, picking the parser by suffix.

    Only the static demand (pid, arrival, burst, priority) is read; outcome
    fields are produced per run by the engine. Files must be UTF-8.
    """
    path = Path(path)
    loaders = {".json": _load_json, ".csv": _load_csv}
    loader = loaders.get(path.suffix.lower())
    if loader is None:
        raise WorkloadFormatError(f"Unsupported workload format: {path.suffix} (use .json or .csv)")

    try:
        return loader(path)
    except UnicodeDecodeError as exc:
        raise WorkloadFormatError(f"{path} is not valid UTF-8: {exc}") from exc


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadFormatError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        return [_process_from_mapping(row) for row in csv.DictReader(f)]


def _as_int(value) -> int:
    # CSV cells arrive as text; JSON numbers must already be whole.
    if isinstance(value, str):
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else None
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
