"""rtsched: periodic task scheduling simulator.

This package simulates Rate Monotonic, Deadline Monotonic, Earliest Deadline
First and Least Slack Time scheduling of periodic tasks on a single
processor over one hyperperiod, and reports per policy either the execution
timeline or the first job to miss its deadline.
"""

from rtsched.models import (
    DeadlineMiss,
    EmptyTaskSet,
    InvalidPeriod,
    Job,
    ScheduleResult,
    Task,
    TaskSet,
    TimelineEntry,
)
from rtsched.policies import DM, EDF, LST, POLICIES, RM, Policy, get_policy
from rtsched.simulator import check_deadlines, consolidate, run_all, run_policy, simulate
from rtsched.timing import generate_jobs, hyperperiod

__version__ = "0.1.0"
__all__ = [
    "Task",
    "TaskSet",
    "Job",
    "TimelineEntry",
    "ScheduleResult",
    "EmptyTaskSet",
    "InvalidPeriod",
    "DeadlineMiss",
    "Policy",
    "RM",
    "DM",
    "EDF",
    "LST",
    "POLICIES",
    "get_policy",
    "hyperperiod",
    "generate_jobs",
    "simulate",
    "check_deadlines",
    "consolidate",
    "run_policy",
    "run_all",
]
