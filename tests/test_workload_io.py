from pathlib import Path

import pytest

from cpu_scheduler.errors import WorkloadFormatError
from cpu_scheduler.workload_io import default_processes, load_workload
from cpu_scheduler.models import Process


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority is None
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[0].burst_time == 3
    assert procs[1].priority is None


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("A 0 3")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_json_must_be_a_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": "A"}')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_malformed_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text("[{")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_missing_field(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time\nA,0\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_default_processes():
    procs = default_processes()
    assert [p.pid for p in procs] == [f"P{i}" for i in range(1, 11)]
    assert sum(p.burst_time for p in procs) == 38
    assert procs[0] == Process("P1", arrival_time=0, burst_time=8, priority=1)


@pytest.mark.parametrize("value", ["2.9", "true", '"abc"', "null"])
def test_json_rejects_non_integer_times(tmp_path: Path, value):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": "A", "arrival_time": 0, "burst_time": %s}]' % value)
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_json_accepts_integer_strings(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": "A", "arrival_time": "1", "burst_time": 4, "priority": "2"}]')
    assert load_workload(p) == [Process("A", arrival_time=1, burst_time=4, priority=2)]


def test_csv_rejects_fractional_burst(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,2.9\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


@pytest.mark.parametrize("suffix", [".json", ".csv"])
def test_non_utf8_file(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"\xff\xfe\x00\x80")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)
