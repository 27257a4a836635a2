"""Scheduling policies as job-ranking rules.

Each policy ranks jobs by an ascending key; the simulator runs the first
ready job in ranked order. Static policies are ranked once before the
simulation starts, dynamic ones again at every tick.

Policies:
    RM  - Rate Monotonic, ranked by release time. Jobs of shorter-period
          tasks are released more densely, so release order stands in for
          period order.
    DM  - Deadline Monotonic, ranked by absolute deadline.
    EDF - Earliest Deadline First, ranked by absolute deadline. A job's
          deadline never changes after release, so one ranking suffices.
    LST - Least Slack Time, ranked by ``deadline - (now + remaining_time)``
          at every tick.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from rtsched.models import Job


@dataclass(frozen=True)
class Policy:
    """A scheduling policy.

    Attributes:
        name: Short name (e.g. "RM").
        label: Human-readable name.
        key: Ranking function ``(job, now) -> value``; lower runs first.
        dynamic: Whether the ranking must be recomputed every tick.
    """
    name: str
    label: str
    key: Callable[[Job, int], float]
    dynamic: bool = False

    def rank(self, jobs: List[Job], now: int = 0) -> List[Job]:
        """Return ``jobs`` sorted by rank; ties keep the given order."""
        return sorted(jobs, key=lambda job: self.key(job, now))


RM = Policy("RM", "Rate Monotonic", lambda job, now: job.release_time)
DM = Policy("DM", "Deadline Monotonic", lambda job, now: job.deadline)
EDF = Policy("EDF", "Earliest Deadline First", lambda job, now: job.deadline)
LST = Policy("LST", "Least Slack Time", lambda job, now: job.slack(now), dynamic=True)

POLICIES: Dict[str, Policy] = {p.name: p for p in (RM, DM, EDF, LST)}

_ALIASES = {"DMA": "DM"}


def get_policy(name: str) -> Policy:
    """Look up a policy by short name (case-insensitive).

    Raises:
        ValueError: If no policy has that name.
    """
    key = name.strip().upper()
    key = _ALIASES.get(key, key)
    if key not in POLICIES:
        raise ValueError(
            f"Unknown policy {name!r}; expected one of {', '.join(POLICIES)}"
        )
    return POLICIES[key]
