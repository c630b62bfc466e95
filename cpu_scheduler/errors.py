from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for input the scheduling engine refuses to simulate."""


class InvalidBurstTime(SchedulerError):
    def __init__(self, pid: str, burst_time: int) -> None:
        super().__init__(f"Process {pid} has non-positive burst time {burst_time}")
        self.pid = pid
        self.burst_time = burst_time


class InvalidArrivalTime(SchedulerError):
    def __init__(self, pid: str, arrival_time: int) -> None:
        super().__init__(f"Process {pid} has negative arrival time {arrival_time}")
        self.pid = pid
        self.arrival_time = arrival_time


class DuplicateProcessId(SchedulerError):
    def __init__(self, pid: str) -> None:
        super().__init__(f"Process id {pid!r} appears more than once")
        self.pid = pid


class InvalidQuantum(SchedulerError):
    def __init__(self, quantum) -> None:
        super().__init__(f"Round Robin requires a positive quantum, got {quantum!r}")
        self.quantum = quantum


class EmptyProcessSet(SchedulerError):
    def __init__(self) -> None:
        super().__init__("No processes supplied")


class UnknownPolicy(SchedulerError):
    def __init__(self, name) -> None:
        super().__init__(f"Unknown scheduling policy '{name}'")
        self.name = name


class WorkloadFormatError(SchedulerError):
    """Raised when a workload file cannot be turned into processes."""
