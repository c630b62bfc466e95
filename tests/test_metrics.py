import pytest

from cpu_scheduler.algorithms import schedule_fcfs
from cpu_scheduler.errors import EmptyProcessSet
from cpu_scheduler.metrics import compute_system_metrics, summarize_process_metrics
from cpu_scheduler.models import Policy, Process, ProcessOutcome, ScheduleResult
from cpu_scheduler.workload_io import default_processes


def test_mark_complete_derives_turnaround_and_waiting():
    outcome = ProcessOutcome.for_process(Process("P1", arrival_time=2, burst_time=3))
    assert outcome.remaining_time == 3
    outcome.mark_complete(9)
    assert outcome.completion_time == 9
    assert outcome.turnaround_time == 7
    assert outcome.waiting_time == 4
    assert outcome.remaining_time == 0


def test_summary_averages():
    res = schedule_fcfs([Process("P1", 0, 5), Process("P2", 1, 3)])
    summary = summarize_process_metrics(res.processes)
    assert summary["avg_turnaround"] == pytest.approx(6.0)
    assert summary["avg_waiting"] == pytest.approx(2.0)


def test_summary_default_workload():
    summary = summarize_process_metrics(schedule_fcfs(default_processes()).processes)
    assert summary["avg_turnaround"] == pytest.approx(17.7)
    assert summary["avg_waiting"] == pytest.approx(13.9)


def test_summary_rejects_empty_set():
    with pytest.raises(EmptyProcessSet):
        summarize_process_metrics([])


def test_system_metrics_with_idle_gap():
    res = schedule_fcfs([Process("A", 0, 2), Process("B", 4, 2)])
    system = res.system
    assert system.cpu_busy_time == 4
    assert system.makespan == 6
    assert system.throughput == pytest.approx(2 / 6)
    assert system.cpu_utilization == pytest.approx(4 / 6)


def test_system_metrics_rejects_empty_result():
    with pytest.raises(EmptyProcessSet):
        compute_system_metrics(ScheduleResult(algorithm="FCFS", policy=Policy.FCFS, quantum=None))
