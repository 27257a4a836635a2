"""Plain-text rendering of task sets and schedules."""

from typing import Dict, List, Sequence

from rtsched.models import ScheduleResult, TaskSet
from rtsched.policies import POLICIES
from rtsched.timing import hyperperiod


def _table(headers: Sequence[str], rows: List[Sequence]) -> str:
    cells = [[str(c) for c in headers]] + [[str(c) for c in row] for row in rows]
    widths = [max(len(row[i]) for row in cells) for i in range(len(headers))]
    lines = []
    for n, row in enumerate(cells):
        lines.append(" | ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip())
        if n == 0:
            lines.append("-+-".join("-" * w for w in widths))
    return "\n".join(lines)


def format_tasks(taskset: TaskSet) -> str:
    rows = [
        (t.name, t.period, t.execution_time, t.deadline, f"{t.utilization:.3f}")
        for t in taskset
    ]
    table = _table(("Task", "Period", "Exec", "Deadline", "U"), rows)
    return (
        f"{table}\n"
        f"Total utilization: {taskset.total_utilization:.3f}, "
        f"hyperperiod: {hyperperiod(taskset.periods)}"
    )


def format_timeline(result: ScheduleResult, show_idle: bool = True) -> str:
    """Render one policy's schedule as a ``Task | Start | End`` table."""
    label = POLICIES[result.policy].label if result.policy in POLICIES else result.policy
    title = f"{label} ({result.policy})"
    if not result.feasible:
        return f"{title}: deadline missed by {result.missed}"

    rows = [
        (e.label, e.start, e.end)
        for e in result.timeline
        if show_idle or not e.is_idle
    ]
    return f"{title}\n{_table(('Task', 'Start', 'End'), rows)}"


def format_summary(results: Dict[str, ScheduleResult]) -> str:
    """One line per policy: feasible, or the job that missed."""
    lines = []
    for name, result in results.items():
        if result.feasible:
            lines.append(f"{name:<4} feasible")
        else:
            lines.append(f"{name:<4} deadline miss: {result.missed}")
    return "\n".join(lines)
