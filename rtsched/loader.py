"""Reading task definitions from text files.

One task per line::

    # name  period  execution_time  [deadline]
    A       4       1
    B, 6, 2, 5

Fields may be separated by whitespace or commas. Blank lines and ``#``
comments are ignored. Malformed lines are skipped with a warning.
"""

import logging
import re
from typing import Iterable, List

from rtsched.models import Task

logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r"[,\s]+")


def _number(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() else value


def parse_tasks(lines: Iterable[str]) -> List[Task]:
    """Parse task definitions, skipping malformed lines."""
    tasks = []
    names = set()
    for lineno, line in enumerate(lines, start=1):
        content = line.split("#", 1)[0].strip()
        if not content:
            continue

        fields = [f for f in _SEPARATOR.split(content) if f]
        if len(fields) not in (3, 4):
            logger.warning("Line %d: expected 3 or 4 fields, got %d; skipped", lineno, len(fields))
            continue

        try:
            numbers = [_number(f) for f in fields[1:]]
            task = Task.from_tuple([fields[0]] + numbers)
        except ValueError as e:
            logger.warning("Line %d: %s; skipped", lineno, e)
            continue

        if task.name in names:
            logger.warning("Line %d: duplicate task name %s; skipped", lineno, task.name)
            continue

        names.add(task.name)
        tasks.append(task)

    return tasks


def load_tasks(path: str) -> List[Task]:
    """Load task definitions from ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        tasks = parse_tasks(f)
    logger.info("Loaded %d tasks from %s", len(tasks), path)
    return tasks
