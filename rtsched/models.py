"""Data models for tasks, jobs and schedule timelines."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

IDLE = "Idle"


class EmptyTaskSet(ValueError):
    """Raised when a simulation is requested for zero tasks."""


class InvalidPeriod(ValueError):
    """Raised for a period that is not a positive whole number of ticks."""


class DeadlineMiss(Exception):
    """A job finished after its deadline, or never finished at all."""

    def __init__(self, job_name: str, completion: float, deadline: int) -> None:
        self.job_name = job_name
        self.completion = completion
        self.deadline = deadline
        super().__init__(
            f"Job {job_name} missed its deadline {deadline} (completion={completion})"
        )


@dataclass(frozen=True)
class Task:
    """Represents a periodic task.

    Attributes:
        name: Task identifier.
        period: Release period.
        execution_time: Execution time of every job of the task.
        deadline: Relative deadline (defaults to period if not specified).
    """
    name: str
    period: float
    execution_time: float
    deadline: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate task parameters."""
        if self.period <= 0:
            raise InvalidPeriod(f"Task {self.name}: period must be positive, got {self.period}")
        if self.execution_time <= 0:
            raise ValueError(
                f"Task {self.name}: execution time must be positive, got {self.execution_time}"
            )

        if self.deadline is None:
            object.__setattr__(self, 'deadline', self.period)
        elif self.deadline <= 0:
            raise ValueError(f"Task {self.name}: deadline must be positive, got {self.deadline}")
        elif self.deadline > self.period:
            raise ValueError(
                f"Task {self.name}: deadline ({self.deadline}) cannot exceed period ({self.period})"
            )
        # execution_time > deadline is allowed: the simulation reports the miss

    @classmethod
    def from_tuple(cls, definition: Sequence) -> "Task":
        """Build a task from ``(name, period, execution_time[, deadline])``."""
        if len(definition) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 fields, got {len(definition)}: {definition!r}")
        name, period, execution_time = definition[0], definition[1], definition[2]
        deadline = definition[3] if len(definition) == 4 else None
        return cls(name=str(name), period=period, execution_time=execution_time, deadline=deadline)

    @property
    def utilization(self) -> float:
        """Return the utilization of this task."""
        return self.execution_time / self.period

    def __str__(self) -> str:
        return (
            f"Task({self.name}: T={self.period}, C={self.execution_time}, D={self.deadline})"
        )


TaskLike = Union[Task, Tuple]


@dataclass
class TaskSet:
    """An ordered set of uniquely named tasks.

    Input order matters: it fixes the job generation order, which in turn
    decides ties between equally ranked jobs.
    """
    tasks: List[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tasks = [t if isinstance(t, Task) else Task.from_tuple(t) for t in self.tasks]
        seen = set()
        for task in self.tasks:
            if task.name in seen:
                raise ValueError(f"Duplicate task name: {task.name}")
            seen.add(task.name)

    @classmethod
    def from_definitions(cls, definitions: Iterable[TaskLike]) -> "TaskSet":
        if isinstance(definitions, TaskSet):
            return definitions
        return cls(tasks=list(definitions))

    @property
    def total_utilization(self) -> float:
        """Return the total utilization of all tasks."""
        return sum(t.utilization for t in self.tasks)

    @property
    def periods(self) -> List[float]:
        """Return task periods in input order."""
        return [t.period for t in self.tasks]

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    def __getitem__(self, index: int) -> Task:
        return self.tasks[index]


@dataclass
class Job:
    """One periodic activation of a task.

    ``remaining_time`` is consumed destructively by the simulator, so a job
    belongs to exactly one simulation run.
    """
    name: str
    task_name: str
    release_time: int
    deadline: int
    execution_time: int
    remaining_time: int = -1
    priority: int = 0

    def __post_init__(self) -> None:
        if self.remaining_time < 0:
            self.remaining_time = self.execution_time

    @property
    def finished(self) -> bool:
        return self.remaining_time == 0

    def is_ready(self, now: int) -> bool:
        """True if the job is released and still has work left."""
        return self.remaining_time > 0 and self.release_time <= now

    def execute(self) -> None:
        """Consume one tick of execution."""
        if self.remaining_time <= 0:
            raise RuntimeError(f"Job {self.name} has no remaining work")
        self.remaining_time -= 1

    def slack(self, now: int) -> int:
        """Time the job can still wait before it must run to the end."""
        return self.deadline - (now + self.remaining_time)


@dataclass(frozen=True)
class TimelineEntry:
    """A half-open interval ``[start, end)`` spent on ``label``."""
    label: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        return self.label == IDLE


@dataclass
class ScheduleResult:
    """Outcome of simulating one policy over one hyperperiod.

    Attributes:
        policy: Short name of the policy that produced this result.
        hyperperiod: Simulation horizon in ticks.
        timeline: Consolidated timeline; empty when a deadline was missed.
        missed: Name of the first job found missing its deadline, if any.
    """
    policy: str
    hyperperiod: int
    timeline: List[TimelineEntry] = field(default_factory=list)
    missed: Optional[str] = None

    @property
    def feasible(self) -> bool:
        return self.missed is None
