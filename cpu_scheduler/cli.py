from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import parse_policy, run_algorithm
from .errors import InvalidQuantum, SchedulerError
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics
from .models import Policy, Process, ScheduleResult
from .workload_io import default_processes, load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
DEFAULT_LOG_LEVEL = "WARNING"
POLICY_CHOICES = [policy.value for policy in Policy]

# Menu number -> policy, in the order the menu lists them.
MENU_POLICIES = {
    "1": (Policy.FCFS, "FCFS (First Come First Served)"),
    "2": (Policy.SJF, "SJF (Shortest Job First)"),
    "3": (Policy.ROUND_ROBIN, "Round Robin"),
    "4": (Policy.PRIORITY, "Priority Scheduling"),
}
MENU_EXIT = "5"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpu-scheduler",
        description="CPU scheduling simulator (FCFS, SJF, Round Robin, Priority).",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging verbosity (default: {DEFAULT_LOG_LEVEL}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling policy on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Policy to use ({', '.join(POLICY_CHOICES)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in ten-process set).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by FCFS, SJF, Priority).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several policies on the same workload and compare averages.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in ten-process set).",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=POLICY_CHOICES,
        help=f"Policies to compare (default: {' '.join(POLICY_CHOICES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for round-robin when included (default: {DEFAULT_QUANTUM}).",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Interactive menu to pick a policy at runtime.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in ten-process set).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_processes(workload: Optional[str]) -> List[Process]:
    if workload is None:
        return default_processes()
    processes = load_workload(Path(workload))
    logger.info("Loaded %d processes from %s", len(processes), workload)
    return processes


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["PID", "Arrival", "Burst", "Priority", "Completion", "Turnaround", "Waiting"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            "" if p.priority is None else str(p.priority),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Average turnaround", f"{summary['avg_turnaround']:.2f}")
    sys_table.add_row("Average waiting", f"{summary['avg_waiting']:.2f}")
    if result.system:
        sys_table.add_row("Throughput (proc/time)", f"{result.system.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{result.system.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(processes: List[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg waiting", justify="right")

    for alg in algorithms:
        q = quantum if parse_policy(alg) is Policy.ROUND_ROBIN else None
        result = run_algorithm(alg, processes, quantum=q)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_waiting']:.2f}",
        )

    console.print(summary_table)


def _prompt(text: str) -> Optional[str]:
    """
    Read one answer from the user; None when input is closed or interrupted.
    """
    try:
        return input(text).strip()
    except (EOFError, KeyboardInterrupt):
        return None


def _interactive_menu(processes: List[Process], console: Console) -> None:
    while True:
        console.rule("[bold cyan]CPU SCHEDULING ALGORITHMS[/bold cyan]")
        for number, (_, label) in MENU_POLICIES.items():
            console.print(f"  [yellow]{number}[/yellow]. [white]{label}[/white]")
        console.print(f"  [yellow]{MENU_EXIT}[/yellow]. [white]Exit[/white]")

        choice = _prompt(f"Enter your choice (1-{MENU_EXIT}): ")
        if choice is None or choice == MENU_EXIT:
            break

        if choice not in MENU_POLICIES:
            console.print("[red]Invalid choice! Please try again.[/red]")
            continue

        policy, _ = MENU_POLICIES[choice]
        quantum = None
        if policy is Policy.ROUND_ROBIN:
            q_in = _prompt("Enter time quantum for Round Robin: ")
            if q_in is None:
                break
            try:
                quantum = int(q_in)
            except ValueError:
                console.print(f"[red]Invalid quantum: {q_in!r}[/red]")
                continue

        try:
            result = run_algorithm(policy, processes, quantum=quantum)
        except SchedulerError as exc:
            console.print(f"[red]Error: {exc}[/red]")
            continue
        _print_result(result, console)

    console.print("\nThank you for using CPU Scheduler!")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    console = Console()

    try:
        processes = _load_processes(args.workload)

        if args.command == "run":
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _print_comparison(processes, args.algorithms, args.quantum, console)
            return 0

        if args.command == "menu":
            _interactive_menu(processes, console)
            return 0
    except InvalidQuantum as exc:
        console.print(f"[red]Error: {exc} (use --quantum)[/red]")
        return 2
    except (SchedulerError, OSError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
