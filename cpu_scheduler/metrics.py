from __future__ import annotations

from typing import List

from .errors import EmptyProcessSet
from .models import ProcessOutcome, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Attach timeline-wide figures to a finished run.

    Busy time is summed from the slices, so idle gaps between arrivals are
    excluded; makespan is the latest outcome completion. Every outcome must
    already be marked complete.
    """
    outcomes = result.processes
    if not outcomes:
        raise EmptyProcessSet()

    makespan = max(o.completion_time for o in outcomes)
    busy = sum(sl.end_time - sl.start_time for sl in result.timeline)

    result.system = SystemMetrics(
        cpu_busy_time=busy,
        makespan=makespan,
        throughput=len(outcomes) / makespan if makespan else 0.0,
        cpu_utilization=busy / makespan if makespan else 0.0,
    )
    return result.system


def summarize_process_metrics(processes: List[ProcessOutcome]) -> dict:
    """
    Return the mean turnaround and waiting time across all processes.
    """
    if not processes:
        raise EmptyProcessSet()

    n = len(processes)
    return {
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
    }
