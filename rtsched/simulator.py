"""Tick-driven single-processor schedule simulation.

All policies share one execution loop. At every tick the simulator ranks
the jobs (once for static policies, every tick for dynamic ones), runs one
tick of the first job that is released and unfinished, and records the
tick as executed or idle. After the horizon, deadlines are checked and the
per-tick timeline is merged into contiguous intervals.

A job can be resumed after a higher-ranked job is released, so the schedule
is preemptive at tick boundaries.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from rtsched.models import (
    IDLE,
    DeadlineMiss,
    Job,
    ScheduleResult,
    TaskLike,
    TaskSet,
    TimelineEntry,
)
from rtsched.policies import POLICIES, Policy, get_policy
from rtsched.timing import generate_jobs, hyperperiod

logger = logging.getLogger(__name__)


def simulate(jobs: List[Job], policy: Policy, horizon: int) -> List[TimelineEntry]:
    """Run ``jobs`` under ``policy`` for ``horizon`` ticks.

    The jobs' ``remaining_time`` is consumed in place; callers pass jobs
    owned by this run only.

    Returns:
        The raw timeline, one entry per tick.
    """
    ranked = policy.rank(jobs)

    timeline = []
    for now in range(horizon):
        if policy.dynamic:
            # re-rank from generation order so ties never depend on the last tick
            ranked = policy.rank(jobs, now)

        job = next((j for j in ranked if j.is_ready(now)), None)
        if job is None:
            timeline.append(TimelineEntry(IDLE, now, now + 1))
        else:
            job.execute()
            timeline.append(TimelineEntry(job.name, now, now + 1))

    return timeline


def check_deadlines(timeline: List[TimelineEntry], jobs: Iterable[Job]) -> None:
    """Verify that every job completed by its deadline.

    Jobs are checked in the given order and the first violation is raised.
    A job that never executed has completion ``-inf``; it is still reported
    if it has unfinished work.

    Raises:
        DeadlineMiss: For the first job that completed late or never finished.
    """
    completion: Dict[str, int] = {}
    for entry in timeline:
        if entry.label != IDLE:
            completion[entry.label] = max(completion.get(entry.label, entry.end), entry.end)

    for job in jobs:
        done = completion.get(job.name, float("-inf"))
        if done > job.deadline or not job.finished:
            raise DeadlineMiss(job.name, done, job.deadline)


def consolidate(timeline: List[TimelineEntry]) -> List[TimelineEntry]:
    """Merge adjacent entries with the same label into single intervals."""
    merged: List[TimelineEntry] = []
    for entry in timeline:
        if merged and merged[-1].label == entry.label and merged[-1].end == entry.start:
            merged[-1] = TimelineEntry(entry.label, merged[-1].start, entry.end)
        else:
            merged.append(entry)
    return merged


def busy_ticks(timeline: Iterable[TimelineEntry]) -> Dict[str, int]:
    """Return executed ticks per job name, idle time excluded."""
    counts: Counter = Counter()
    for entry in timeline:
        if not entry.is_idle:
            counts[entry.label] += entry.duration
    return dict(counts)


def run_policy(tasks: Iterable[TaskLike], policy) -> ScheduleResult:
    """Simulate one policy over one hyperperiod.

    Args:
        tasks: A TaskSet, or Task objects / ``(name, period, execution_time[, deadline])``
               tuples in input order.
        policy: A Policy or its short name.

    Returns:
        A ScheduleResult holding the consolidated timeline, or, on a deadline
        miss, the offending job name and an empty timeline.

    Raises:
        EmptyTaskSet: If no tasks are given.
        InvalidPeriod: If a period is not a positive whole number of ticks.
    """
    if isinstance(policy, str):
        policy = get_policy(policy)
    taskset = TaskSet.from_definitions(tasks)
    horizon = hyperperiod(taskset.periods)
    jobs = generate_jobs(taskset.tasks, horizon)

    raw = simulate(jobs, policy, horizon)
    try:
        check_deadlines(raw, jobs)
    except DeadlineMiss as miss:
        logger.warning("%s: %s", policy.name, miss)
        return ScheduleResult(policy=policy.name, hyperperiod=horizon, missed=miss.job_name)

    logger.info("%s: all %d jobs met their deadlines", policy.name, len(jobs))
    return ScheduleResult(policy=policy.name, hyperperiod=horizon, timeline=consolidate(raw))


def run_all(
    tasks: Iterable[TaskLike],
    policies: Optional[Iterable] = None,
) -> Dict[str, ScheduleResult]:
    """Run several policies on the same task set.

    Every policy simulates its own freshly generated jobs, so a deadline
    miss under one policy has no effect on the others.

    Returns:
        Dict mapping policy short names to results, in run order.
    """
    taskset = TaskSet.from_definitions(tasks)
    if policies is None:
        policies = list(POLICIES.values())

    results: Dict[str, ScheduleResult] = {}
    for policy in policies:
        result = run_policy(taskset, policy)
        results[result.policy] = result
    return results
