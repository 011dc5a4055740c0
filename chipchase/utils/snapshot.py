# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Utilities for constructing world snapshots and configs from JSON.

The helpers translate plain dictionaries or JSON payloads into the frozen
snapshot and configuration objects the evaluation understands. They are used
by the command line entry point and by tests to describe game situations
without hand-building every robot. A snapshot document looks like::

    {
        "field": {"length": 9.0, "width": 6.0},
        "ball": {"position": [0.0, 0.0]},
        "enemy_team": {
            "goalie_id": 0,
            "robots": [{"id": 0, "position": [4.2, 0.0]}, ...]
        }
    }
"""
import json
from pathlib import Path
from typing import Any, Mapping, Optional

from chipchase.engine.config import (
    DEFAULT_CONFIG,
    EvaluationConfig,
    FieldConfig,
    IndirectChipConfig,
    RobotConfig,
)
from chipchase.engine.geometry import Point
from chipchase.engine.world import Ball, Field, Robot, Team, World


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    """Return ``value`` when it is a JSON object.

    Parameters
    ----------
    value
        Parsed JSON value.
    what : str
        Name of the section, used in the error message.

    Returns
    -------
    Mapping[str, Any]
        ``value`` unchanged.

    Raises
    ------
    ValueError
        Raised when ``value`` is not a mapping.

    """
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected an object for {what}, got {value!r}")
    return value


def _to_float(value: Any, what: str) -> float:
    """Convert a JSON number to ``float``.

    Parameters
    ----------
    value
        Parsed JSON value.
    what : str
        Name of the value, used in the error message.

    Returns
    -------
    float
        Converted number.

    Raises
    ------
    ValueError
        Raised when ``value`` is not numeric.

    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Expected a number for {what}, got {value!r}")
    return float(value)


def point_from_value(value: Any) -> Point:
    """Build a ``Point`` from a ``[x, y]`` pair or an ``{"x", "y"}`` mapping.

    Parameters
    ----------
    value
        Serialized coordinate pair.

    Returns
    -------
    Point
        Parsed point with float coordinates.

    Raises
    ------
    ValueError
        Raised when ``value`` is not a two-element pair or mapping of numbers.

    """
    if isinstance(value, Mapping):
        return Point(_to_float(value["x"], "x"), _to_float(value["y"], "y"))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Point(_to_float(value[0], "x"), _to_float(value[1], "y"))
    raise ValueError(f"Cannot read a point from {value!r}")


def field_from_dict(d: Optional[Mapping[str, Any]], defaults: Optional[FieldConfig] = None) -> Field:
    """Build a ``Field`` from explicit geometry or overall dimensions.

    Parameters
    ----------
    d
        Either ``enemy_goal_x``, ``enemy_corner_pos`` and ``enemy_corner_neg``
        keys, or ``length``/``width`` dimensions.
    defaults : FieldConfig | None
        Dimensions used for anything ``d`` leaves out. A plain
        :class:`FieldConfig` is used when omitted.

    Returns
    -------
    Field
        Field geometry for the snapshot.

    """
    d = _require_mapping(d or {}, "field")
    if "enemy_goal_x" in d:
        return Field(
            enemy_goal_x=_to_float(d["enemy_goal_x"], "enemy_goal_x"),
            enemy_corner_pos=point_from_value(d["enemy_corner_pos"]),
            enemy_corner_neg=point_from_value(d["enemy_corner_neg"]),
        )
    defaults = defaults or FieldConfig()
    return Field.from_dimensions(
        _to_float(d.get("length", defaults.length), "length"),
        _to_float(d.get("width", defaults.width), "width"),
    )


def robot_from_dict(d: Mapping[str, Any], goalie_id: Optional[int] = None) -> Robot:
    """Build a ``Robot`` from a plain dictionary payload.

    Parameters
    ----------
    d
        Mapping with ``id`` and ``position`` keys. The robot is tagged as
        goalie when it carries ``"goalie": true`` or ``"role": "goalie"``.
    goalie_id
        Team-level goalie identifier; a robot with this ``id`` is tagged too.

    Returns
    -------
    Robot
        Robot snapshot.

    Raises
    ------
    ValueError
        Raised when ``d`` is not an object or its ``id`` is not an integer.

    """
    d = _require_mapping(d, "robot")
    robot_id = d.get("id", 0)
    if isinstance(robot_id, bool) or not isinstance(robot_id, int):
        raise ValueError(f"Robot id must be an integer, got {robot_id!r}")
    is_goalie = bool(d.get("goalie", False)) or d.get("role") == "goalie"
    if goalie_id is not None and robot_id == goalie_id:
        is_goalie = True
    return Robot(robot_id=robot_id, position=point_from_value(d["position"]), is_goalie=is_goalie)


def world_from_dict(data: Mapping[str, Any], field_defaults: Optional[FieldConfig] = None) -> World:
    """Build a ``World`` snapshot from the snapshot JSON schema.

    Parameters
    ----------
    data
        Mapping with ``ball`` (required), ``enemy_team`` and ``field``
        sections.
    field_defaults : FieldConfig | None
        Field dimensions used when ``data`` has no complete ``field``
        section.

    Returns
    -------
    World
        Frozen world snapshot ready for evaluation.

    Raises
    ------
    KeyError
        Raised when the ``ball`` section is missing.
    ValueError
        Raised when a section has the wrong shape.

    """
    data = _require_mapping(data, "snapshot")
    ball_data = _require_mapping(data["ball"], "ball")
    team_data = _require_mapping(data.get("enemy_team") or {}, "enemy_team")
    goalie_id = team_data.get("goalie_id")
    robots_data = team_data.get("robots", [])
    if not isinstance(robots_data, list):
        raise ValueError(f"Expected a list of robots, got {robots_data!r}")
    robots = tuple(robot_from_dict(r, goalie_id) for r in robots_data)
    return World(
        field=field_from_dict(data.get("field"), field_defaults),
        enemy_team=Team(robots),
        ball=Ball(point_from_value(ball_data["position"])),
    )


def load_world_from_json(path: str, field_defaults: Optional[FieldConfig] = None) -> World:
    """Load a world snapshot from a JSON file.

    Parameters
    ----------
    path
        The filesystem path to the snapshot document.
    field_defaults : FieldConfig | None
        Field dimensions used when the snapshot omits its geometry.

    Returns
    -------
    World
        Parsed world snapshot.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.

    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Snapshot JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    return world_from_dict(data, field_defaults)


def config_from_dict(data: Optional[Mapping[str, Any]]) -> EvaluationConfig:
    """Build an ``EvaluationConfig`` from a JSON-style mapping.

    Parameters
    ----------
    data
        Mapping with optional ``indirect_chip``, ``robot`` and ``field_size``
        sections. Omitted values keep their defaults.

    Returns
    -------
    EvaluationConfig
        Validated configuration.

    Raises
    ------
    KeyError
        Raised for an unknown section or parameter name.
    ValueError
        Raised when a section is not an object or a value is not a number.

    """
    data = _require_mapping(data or {}, "config")
    sections = {
        "indirect_chip": IndirectChipConfig,
        "robot": RobotConfig,
        "field_size": FieldConfig,
    }
    unknown_sections = set(data) - set(sections)
    if unknown_sections:
        raise KeyError(f"Unknown config section(s): {', '.join(sorted(unknown_sections))}")

    built = {}
    for name, block_cls in sections.items():
        values = _require_mapping(data.get(name) or {}, name)
        known = set(block_cls.__dataclass_fields__)
        unknown = set(values) - known
        if unknown:
            raise KeyError(f"Unknown {name} parameter(s): {', '.join(sorted(unknown))}")
        defaults = getattr(DEFAULT_CONFIG, name)
        merged = {key: getattr(defaults, key) for key in known}
        merged.update({key: _to_float(value, f"{name}.{key}") for key, value in values.items()})
        built[name] = block_cls(**merged)
    return EvaluationConfig(**built)


def load_config_from_json(path: str) -> EvaluationConfig:
    """Load an ``EvaluationConfig`` from a JSON file.

    Parameters
    ----------
    path
        The filesystem path to the configuration document.

    Returns
    -------
    EvaluationConfig
        Validated configuration.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.

    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    return config_from_dict(data)
