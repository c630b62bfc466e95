"""
CPU scheduling simulator.

Runs FCFS, SJF, Round Robin and Priority scheduling over a fixed set of
processes and reports completion, turnaround and waiting times.
"""

__all__ = ["cli"]
