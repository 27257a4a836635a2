"""Command-line entry point: simulate a task file under each policy."""

import argparse
import logging
from typing import List, Optional, Sequence

from rtsched.config import load_config
from rtsched.loader import load_tasks
from rtsched.models import TaskSet
from rtsched.policies import POLICIES
from rtsched.report import format_summary, format_tasks, format_timeline
from rtsched.simulator import run_all

logger = logging.getLogger("rtsched")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_DEADLINE_MISS = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rtsched",
        description="Simulate RM, DM, EDF and LST scheduling over one hyperperiod",
    )
    parser.add_argument(
        "tasks_file",
        nargs="?",
        help="Task file, one 'name period execution_time [deadline]' per line",
    )
    parser.add_argument(
        "-p", "--policy",
        action="append",
        dest="policies",
        help=f"Policy to run (repeatable; default: all of {', '.join(POLICIES)})",
    )
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument(
        "--show-idle",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include idle intervals in timelines",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with status {EXIT_DEADLINE_MISS} if any policy misses a deadline",
    )
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
        logger.error("Invalid configuration: %s", e)
        return EXIT_ERROR

    level = (args.log_level or config.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
        logger.error("Unknown log level: %s", level)
        return EXIT_ERROR
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    tasks_file = args.tasks_file or config.tasks_file
    if not tasks_file:
        logger.error("No task file given on the command line or in the configuration")
        return EXIT_ERROR
    show_idle = config.show_idle if args.show_idle is None else args.show_idle

    try:
        policies = args.policies or config.policies
        taskset = TaskSet(tasks=load_tasks(tasks_file))
        results = run_all(taskset, policies)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_ERROR

    print(format_tasks(taskset))
    for result in results.values():
        print()
        print(format_timeline(result, show_idle=show_idle))
    print()
    print(format_summary(results))

    if args.strict and not all(r.feasible for r in results.values()):
        return EXIT_DEADLINE_MISS
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
