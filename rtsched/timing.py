"""Hyperperiod computation and job generation.

The simulation advances in whole ticks, so every period, deadline and
execution time must be a whole number of ticks. Integral floats such as
``4.0`` are accepted and converted.
"""

import logging
import math
from functools import reduce
from typing import Iterable, List, Sequence

from rtsched.models import EmptyTaskSet, InvalidPeriod, Job, Task

logger = logging.getLogger(__name__)


def to_ticks(value: float, what: str = "value") -> int:
    """Convert ``value`` to a whole number of ticks.

    Raises:
        ValueError: If the value is not integral.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} must be numeric, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{what} must be a whole number of ticks, got {value}")
    return int(value)


def _lcm(a: int, b: int) -> int:
    return abs(a * b) // math.gcd(a, b)


def hyperperiod(periods: Iterable[float]) -> int:
    """Return the least common multiple of all periods.

    Args:
        periods: Task periods, in input order.

    Returns:
        The hyperperiod in ticks.

    Raises:
        EmptyTaskSet: If no periods are given.
        InvalidPeriod: If a period is non-positive or not a whole number of ticks.
    """
    ticks = []
    for period in periods:
        try:
            value = to_ticks(period, "period")
        except ValueError as e:
            raise InvalidPeriod(str(e)) from e
        if value <= 0:
            raise InvalidPeriod(f"period must be positive, got {period}")
        ticks.append(value)

    if not ticks:
        raise EmptyTaskSet("Cannot compute a hyperperiod for an empty task set")

    result = reduce(_lcm, ticks)
    logger.debug("Hyperperiod of %s is %d", ticks, result)
    return result


def generate_jobs(tasks: Sequence[Task], horizon: int) -> List[Job]:
    """Expand each task into its jobs over ``[0, horizon)``.

    Jobs are emitted task by task in input order, and by release time within
    a task. The k-th job (1-indexed) of a task is released at
    ``(k-1) * period`` with absolute deadline ``release + deadline``.
    """
    jobs = []
    total = len(tasks)
    for index, task in enumerate(tasks):
        period = to_ticks(task.period, f"Task {task.name} period")
        execution_time = to_ticks(task.execution_time, f"Task {task.name} execution time")
        deadline = to_ticks(task.deadline, f"Task {task.name} deadline")

        for k in range(1, horizon // period + 1):
            release = (k - 1) * period
            jobs.append(Job(
                name=f"{task.name}-{k}",
                task_name=task.name,
                release_time=release,
                deadline=release + deadline,
                execution_time=execution_time,
                priority=total - index,
            ))

    logger.debug("Generated %d jobs for %d tasks over %d ticks", len(jobs), total, horizon)
    return jobs
