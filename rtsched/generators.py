"""Random task set generators for testing and experiments."""

import random
from typing import List, Optional, Sequence

from rtsched.models import Task, TaskSet

# Divisors of 120: any combination keeps the hyperperiod at or below 120.
DEFAULT_PERIODS = (2, 3, 4, 5, 6, 8, 10, 12, 15, 20, 24, 30, 40, 60)


def uunifast(n: int, u_total: float, seed: Optional[int] = None) -> List[float]:
    """Generate task utilizations using the UUniFast algorithm.

    UUniFast generates uniformly distributed task utilizations that sum to
    the target total utilization.

    Reference:
    Bini, E., & Buttazzo, G. C. (2005). Measuring the performance of schedulability tests.
    Real-Time Systems, 30(1-2), 129-154.

    Args:
        n: Number of tasks.
        u_total: Target total utilization.
        seed: Optional random seed for reproducibility.

    Returns:
        List of n utilization values that sum to approximately u_total.

    Raises:
        ValueError: If n <= 0 or u_total < 0.
    """
    if n <= 0:
        raise ValueError("Number of tasks must be positive")
    if u_total < 0:
        raise ValueError("Target utilization must be non-negative")

    rng = random.Random(seed)

    utilizations = []
    sum_u = u_total
    for i in range(1, n):
        next_sum_u = sum_u * (rng.random() ** (1.0 / (n - i)))
        utilizations.append(sum_u - next_sum_u)
        sum_u = next_sum_u

    # Last utilization is whatever remains
    utilizations.append(sum_u)
    return utilizations


def generate_taskset(
    n: int,
    target_utilization: float,
    periods: Sequence[int] = DEFAULT_PERIODS,
    seed: Optional[int] = None,
) -> TaskSet:
    """Generate a random integer task set with implicit deadlines.

    Periods are drawn from ``periods``; execution times are the UUniFast
    utilizations scaled by the period, rounded to whole ticks and clamped to
    ``[1, period]``. Rounding means the achieved utilization only
    approximates the target, more closely for longer periods.

    Args:
        n: Number of tasks to generate.
        target_utilization: Target total utilization.
        periods: Candidate periods (positive integers).
        seed: Random seed for reproducibility.

    Returns:
        A TaskSet with tasks named τ1..τn.

    Raises:
        ValueError: If parameters are invalid.
    """
    if not periods or any(int(p) != p or p <= 0 for p in periods):
        raise ValueError("Periods must be positive integers")

    rng = random.Random(seed)
    utilizations = uunifast(n, target_utilization, seed=seed)

    tasks = []
    for i, u in enumerate(utilizations):
        T = int(rng.choice(periods))
        C = min(max(1, round(u * T)), T)
        tasks.append(Task(name=f"τ{i+1}", period=T, execution_time=C))

    return TaskSet(tasks=tasks)
