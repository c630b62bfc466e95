from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Union

from .errors import (
    DuplicateProcessId,
    EmptyProcessSet,
    InvalidArrivalTime,
    InvalidBurstTime,
    InvalidQuantum,
    UnknownPolicy,
)
from .metrics import compute_system_metrics
from .models import Policy, Process, ProcessOutcome, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def validate_processes(processes: List[Process]) -> None:
    """
    Reject inputs the engine cannot simulate, before any time advances.
    """
    if not processes:
        raise EmptyProcessSet()

    seen: set[str] = set()
    for p in processes:
        if p.burst_time <= 0:
            raise InvalidBurstTime(p.pid, p.burst_time)
        if p.arrival_time < 0:
            raise InvalidArrivalTime(p.pid, p.arrival_time)
        if p.pid in seen:
            raise DuplicateProcessId(p.pid)
        seen.add(p.pid)


def _run_slice(outcome: ProcessOutcome, time: int, run_time: int, timeline: List[ScheduledSlice]) -> int:
    end_time = time + run_time
    timeline.append(ScheduledSlice(pid=outcome.pid, start_time=time, end_time=end_time))
    outcome.remaining_time -= run_time
    logger.debug("t=%d: %s runs for %d", time, outcome.pid, run_time)
    return end_time


def _finish(
    algorithm: str,
    policy: Policy,
    quantum: Optional[int],
    outcomes: List[ProcessOutcome],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        policy=policy,
        quantum=quantum,
        processes=outcomes,
        timeline=timeline,
    )
    system = compute_system_metrics(result)
    logger.info("%s finished %d processes at t=%d", algorithm, len(outcomes), system.makespan)
    return result


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in arrival order; equal arrivals keep their input order.
    """
    validate_processes(processes)
    outcomes = [ProcessOutcome.for_process(p) for p in sorted(processes, key=lambda p: p.arrival_time)]

    time = 0
    timeline: List[ScheduledSlice] = []

    for outcome in outcomes:
        if time < outcome.arrival_time:
            logger.debug("t=%d: CPU idle until %d", time, outcome.arrival_time)
            time = outcome.arrival_time

        time = _run_slice(outcome, time, outcome.burst_time, timeline)
        outcome.mark_complete(time)

    return _finish("FCFS", Policy.FCFS, quantum, outcomes, timeline)


def _schedule_by_key(
    processes: List[Process],
    key: Callable[[Process], float],
    algorithm: str,
    policy: Policy,
    quantum: Optional[int],
) -> ScheduleResult:
    """
    Shared non-preemptive selection loop for SJF and Priority.

    At each decision point the arrived, unscheduled process with the smallest
    key wins; on exact ties the one earliest in input order wins. When nothing
    has arrived yet, time jumps to the arrival of the first unscheduled process
    in input order and that process runs next, even if another unscheduled
    process arrives earlier.
    """
    validate_processes(processes)
    outcomes = [ProcessOutcome.for_process(p) for p in processes]
    scheduled = [False] * len(outcomes)

    time = 0
    timeline: List[ScheduledSlice] = []

    for _ in range(len(outcomes)):
        chosen: Optional[int] = None
        for idx, outcome in enumerate(outcomes):
            if scheduled[idx] or outcome.arrival_time > time:
                continue
            if chosen is None or key(outcome.process) < key(outcomes[chosen].process):
                chosen = idx

        if chosen is None:
            chosen = scheduled.index(False)
            logger.debug("t=%d: nothing ready, jumping to %s at %d", time, outcomes[chosen].pid, outcomes[chosen].arrival_time)
            time = outcomes[chosen].arrival_time

        scheduled[chosen] = True
        outcome = outcomes[chosen]
        time = _run_slice(outcome, time, outcome.burst_time, timeline)
        outcome.mark_complete(time)

    return _finish(algorithm, policy, quantum, outcomes, timeline)


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).
    """
    return _schedule_by_key(
        processes,
        key=lambda p: p.burst_time,
        algorithm="SJF (non-preemptive)",
        policy=Policy.SJF,
        quantum=quantum,
    )


def schedule_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. A process without a
    priority ranks below every process that has one.
    """

    def priority_key(p: Process) -> float:
        return p.priority if p.priority is not None else float("inf")

    return _schedule_by_key(
        processes,
        key=priority_key,
        algorithm="Priority (non-preemptive)",
        policy=Policy.PRIORITY,
        quantum=quantum,
    )


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Every process is queued once, up front, in arrival order and the clock
    starts at 0 without idling: arrival times only decide the initial queue
    order, they are not re-checked as the simulation advances.
    """
    if quantum is None or quantum <= 0:
        raise InvalidQuantum(quantum)
    validate_processes(processes)

    outcomes = [ProcessOutcome.for_process(p) for p in sorted(processes, key=lambda p: p.arrival_time)]
    ready: Deque[int] = deque(range(len(outcomes)))

    time = 0
    timeline: List[ScheduledSlice] = []

    while ready:
        idx = ready.popleft()
        outcome = outcomes[idx]

        if outcome.remaining_time > quantum:
            time = _run_slice(outcome, time, quantum, timeline)
            ready.append(idx)
        else:
            time = _run_slice(outcome, time, outcome.remaining_time, timeline)
            outcome.mark_complete(time)

    return _finish(f"Round Robin (quantum = {quantum})", Policy.ROUND_ROBIN, quantum, outcomes, timeline)


ALGORITHMS = {
    Policy.FCFS: schedule_fcfs,
    Policy.SJF: schedule_sjf,
    Policy.ROUND_ROBIN: schedule_rr,
    Policy.PRIORITY: schedule_priority,
}

_ALIASES = {
    "round-robin": Policy.ROUND_ROBIN,
}


def parse_policy(name: Union[Policy, str]) -> Policy:
    """
    Resolve a policy identifier such as "fcfs", "rr" or "ROUND_ROBIN".
    """
    if isinstance(name, Policy):
        return name

    key = str(name).strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    for policy in Policy:
        if key in (policy.value, policy.name.lower()):
            return policy

    raise UnknownPolicy(name)


def run_algorithm(name: Union[Policy, str], processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested policy. Quantum is only read by Round Robin.
    """
    policy = parse_policy(name)
    func = ALGORITHMS[policy]
    return func(list(processes), quantum=quantum)
