from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Policy(Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    ROUND_ROBIN = "rr"
    PRIORITY = "priority"


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None


@dataclass
class ProcessOutcome:
    """
    Mutable per-run result for one process.

    A fresh outcome is created for every policy run, so the `Process` it
    wraps is never touched by the engine.
    """

    process: Process
    remaining_time: int
    completion_time: int = 0
    turnaround_time: int = 0
    waiting_time: int = 0

    @classmethod
    def for_process(cls, process: Process) -> "ProcessOutcome":
        return cls(process=process, remaining_time=process.burst_time)

    @property
    def pid(self) -> str:
        return self.process.pid

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def priority(self) -> Optional[int]:
        return self.process.priority

    def mark_complete(self, completion_time: int) -> None:
        self.remaining_time = 0
        self.completion_time = completion_time
        self.turnaround_time = completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    policy: Policy
    quantum: Optional[int]
    processes: List[ProcessOutcome] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
