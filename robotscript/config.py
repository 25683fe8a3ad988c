# Copyright 2025 Ralph Lemke
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""RobotScript configuration management.

Provides configuration dataclasses for the city grid and the validator
and a loader that reads from config files or environment variables.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .geometry import GRID_MAX, GRID_MIN
from .resources import DEFAULT_ITEM_KINDS
from .statements import BROADCAST_TARGET


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1")


@dataclass
class GridConfig:
    """City grid bounds.

    Attributes:
        min_coordinate: Smallest avenue/street number
        max_coordinate: Largest avenue/street number
    """

    min_coordinate: int = GRID_MIN
    max_coordinate: int = GRID_MAX

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GridConfig:
        """Create from a dictionary.

        Keys may use either snake_case (``min_coordinate``) or
        camelCase (``minCoordinate``).
        """
        return cls(
            min_coordinate=int(
                data.get("min_coordinate", data.get("minCoordinate", cls.min_coordinate))
            ),
            max_coordinate=int(
                data.get("max_coordinate", data.get("maxCoordinate", cls.max_coordinate))
            ),
        )

    @classmethod
    def from_env(cls) -> GridConfig:
        """Create from environment variables.

        Recognised variables (all optional, defaults apply for missing vars):
            ROBOTSCRIPT_GRID_MIN
            ROBOTSCRIPT_GRID_MAX
        """
        defaults = cls()
        return cls(
            min_coordinate=int(os.environ.get("ROBOTSCRIPT_GRID_MIN", defaults.min_coordinate)),
            max_coordinate=int(os.environ.get("ROBOTSCRIPT_GRID_MAX", defaults.max_coordinate)),
        )


@dataclass
class ValidatorConfig:
    """Validator settings.

    Attributes:
        item_kinds: Item kinds accepted in starting inventories
        broadcast_target: Message target meaning every instance
        reject_shadowed_parameters: Reject procedure locals named like a parameter
    """

    item_kinds: list[str] = field(default_factory=lambda: list(DEFAULT_ITEM_KINDS))
    broadcast_target: str = BROADCAST_TARGET
    reject_shadowed_parameters: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorConfig:
        """Create from a dictionary."""
        return cls(
            item_kinds=list(data.get("item_kinds", DEFAULT_ITEM_KINDS)),
            broadcast_target=data.get("broadcast_target", BROADCAST_TARGET),
            reject_shadowed_parameters=data.get("reject_shadowed_parameters", False),
        )

    @classmethod
    def from_env(cls) -> ValidatorConfig:
        """Create from environment variables.

        Recognised variables (all optional):
            ROBOTSCRIPT_ITEM_KINDS  (comma-separated list)
            ROBOTSCRIPT_BROADCAST_TARGET
            ROBOTSCRIPT_STRICT_SCOPES  ("true"/"1" to enable)
        """
        kinds_str = os.environ.get("ROBOTSCRIPT_ITEM_KINDS", "")
        item_kinds = [k.strip() for k in kinds_str.split(",") if k.strip()] if kinds_str else []
        return cls(
            item_kinds=item_kinds or list(DEFAULT_ITEM_KINDS),
            broadcast_target=os.environ.get("ROBOTSCRIPT_BROADCAST_TARGET", BROADCAST_TARGET),
            reject_shadowed_parameters=_env_flag("ROBOTSCRIPT_STRICT_SCOPES"),
        )


@dataclass
class RobotScriptConfig:
    """Top-level RobotScript configuration.

    Attributes:
        grid: City grid bounds
        validator: Validator settings
    """

    grid: GridConfig = field(default_factory=GridConfig)
    validator: ValidatorConfig = field(default_factory=ValidatorConfig)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return {
            "grid": self.grid.to_dict(),
            "validator": self.validator.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RobotScriptConfig:
        """Create from a dictionary (e.g. parsed JSON)."""
        return cls(
            grid=GridConfig.from_dict(data.get("grid", {})),
            validator=ValidatorConfig.from_dict(data.get("validator", {})),
        )

    @classmethod
    def from_env(cls) -> RobotScriptConfig:
        """Create from environment variables."""
        return cls(
            grid=GridConfig.from_env(),
            validator=ValidatorConfig.from_env(),
        )


# -- Config file loading -----------------------------------------------------

DEFAULT_CONFIG_FILENAME = "robotscript.config.json"

_SEARCH_PATHS = [
    Path.cwd,  # current directory
    lambda: Path.home() / ".robotscript",  # user home
    lambda: Path("/etc/robotscript"),  # system-wide
]


def _find_config_file(filename: str = DEFAULT_CONFIG_FILENAME) -> Path | None:
    """Search well-known locations for a config file.

    Search order:
        1. ``$ROBOTSCRIPT_CONFIG`` environment variable (explicit path)
        2. Current working directory
        3. ``~/.robotscript/``
        4. ``/etc/robotscript/``

    Returns:
        Path to the first config file found, or ``None``.
    """
    explicit = os.environ.get("ROBOTSCRIPT_CONFIG")
    if explicit:
        path = Path(explicit)
        if path.is_file():
            return path
        return None

    for path_fn in _SEARCH_PATHS:
        candidate = path_fn() / filename
        if candidate.is_file():
            return candidate
    return None


def load_config(path: str | Path | None = None) -> RobotScriptConfig:
    """Load RobotScript configuration.

    Resolution order:
        1. Explicit *path* argument
        2. Config file found via :func:`_find_config_file`
        3. Environment variables (``ROBOTSCRIPT_*``)
        4. Built-in defaults

    Args:
        path: Optional explicit path to a JSON config file.

    Returns:
        Populated :class:`RobotScriptConfig` instance.
    """
    config_path: Path | None = Path(path) if path else _find_config_file()

    if config_path and config_path.is_file():
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return RobotScriptConfig.from_dict(data)

    return RobotScriptConfig.from_env()
