"""YAML configuration for simulation runs.

Example ``rtsched.yaml``::

    tasks_file: tasks.txt
    policies: [RM, DM, EDF, LST]
    log_level: INFO
    show_idle: true
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from rtsched.policies import POLICIES, get_policy

DEFAULT_CONFIG_PATH = "rtsched.yaml"


@dataclass
class SimulationConfig:
    tasks_file: Optional[str] = None
    policies: List[str] = field(default_factory=lambda: list(POLICIES))
    log_level: str = "WARNING"
    show_idle: bool = True

    def __post_init__(self) -> None:
        # normalise aliases and reject unknown names early
        self.policies = [get_policy(p).name for p in self.policies]
        if not self.policies:
            raise ValueError("At least one policy must be configured")
        self.log_level = str(self.log_level).upper()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        known = {"tasks_file", "policies", "log_level", "show_idle"}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def load_config(path: Optional[str] = None) -> SimulationConfig:
    """Load configuration from YAML.

    Without an explicit path, ``rtsched.yaml`` in the working directory is
    used if present, otherwise defaults.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return SimulationConfig()
        path = DEFAULT_CONFIG_PATH

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    return SimulationConfig.from_dict(data)
