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
"""Tests for utility modules (snapshot, debug)."""

import json
from pathlib import Path

import pytest

from chipchase.engine.config import FieldConfig
from chipchase.engine.geometry import Point
from chipchase.engine.world import Field
from chipchase.utils.debug import EvaluationDebugger
from chipchase.utils.snapshot import (
    config_from_dict,
    field_from_dict,
    load_config_from_json,
    load_world_from_json,
    point_from_value,
    robot_from_dict,
    world_from_dict,
)


class TestSnapshot:
    """Tests for snapshot loading utility functions."""

    def test_point_from_value(self) -> None:
        """Pairs and mappings both parse into points."""
        assert point_from_value([1, 2.5]) == Point(1.0, 2.5)
        assert point_from_value((1, 2)) == Point(1.0, 2.0)
        assert point_from_value({"x": -3, "y": 0.5}) == Point(-3.0, 0.5)

    def test_point_from_bad_value(self) -> None:
        """Anything other than a pair or mapping is rejected."""
        with pytest.raises(ValueError):
            point_from_value([1.0, 2.0, 3.0])
        with pytest.raises(ValueError):
            point_from_value("1,2")

    def test_field_defaults(self) -> None:
        """A missing field section falls back to the default dimensions."""
        assert field_from_dict(None) == Field.from_dimensions(9.0, 6.0)
        assert field_from_dict({"length": 12}) == Field.from_dimensions(12.0, 6.0)

    def test_field_explicit_geometry(self) -> None:
        """Explicit corners are used as given."""
        field = field_from_dict(
            {"enemy_goal_x": 6.0, "enemy_corner_pos": [6.0, 4.5], "enemy_corner_neg": {"x": 6.0, "y": -4.5}}
        )
        assert field == Field(6.0, Point(6.0, 4.5), Point(6.0, -4.5))

    def test_field_fallback_dimensions(self) -> None:
        """Configured dimensions replace the built-in defaults."""
        defaults = FieldConfig(length=20.0, width=12.0)
        assert field_from_dict(None, defaults) == Field.from_dimensions(20.0, 12.0)
        assert field_from_dict({"width": 8}, defaults) == Field.from_dimensions(20.0, 8.0)
        world = world_from_dict({"ball": {"position": [0, 0]}}, defaults)
        assert world.field.enemy_goal_x == 10.0

    def test_point_with_non_numeric_coordinate(self) -> None:
        """Null or text coordinates are rejected as bad values."""
        with pytest.raises(ValueError):
            point_from_value([1.0, None])
        with pytest.raises(ValueError):
            point_from_value({"x": "1", "y": 2})

    def test_malformed_world_payloads(self) -> None:
        """Sections of the wrong shape raise ValueError."""
        with pytest.raises(ValueError):
            world_from_dict([1, 2])  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            world_from_dict({"ball": {"position": [0, 0]}, "enemy_team": {"robots": [[1, 2]]}})
        with pytest.raises(ValueError):
            world_from_dict({"ball": {"position": [0, 0]}, "enemy_team": {"robots": [{"id": "a", "position": [0, 0]}]}})

    def test_robot_from_dict(self) -> None:
        """Robots parse their id, position and goalie tag."""
        robot = robot_from_dict({"id": 4, "position": [1.0, -1.0]})
        assert robot.robot_id == 4
        assert robot.position == Point(1.0, -1.0)
        assert not robot.is_goalie

    @pytest.mark.parametrize(
        "payload, goalie_id",
        [
            ({"id": 2, "position": [4.0, 0.0], "goalie": True}, None),
            ({"id": 2, "position": [4.0, 0.0], "role": "goalie"}, None),
            ({"id": 2, "position": [4.0, 0.0]}, 2),
        ],
    )
    def test_robot_goalie_tag(self, payload: dict, goalie_id: int) -> None:
        """Every way of naming the goalie sets the tag."""
        assert robot_from_dict(payload, goalie_id).is_goalie

    def test_world_from_dict(self) -> None:
        """A full snapshot parses into a world."""
        world = world_from_dict(
            {
                "field": {"length": 9.0, "width": 6.0},
                "ball": {"position": [0.5, -0.5]},
                "enemy_team": {
                    "goalie_id": 0,
                    "robots": [
                        {"id": 0, "position": [4.2, 0.0]},
                        {"id": 1, "position": [2.0, 1.5]},
                    ],
                },
            }
        )
        assert world.ball.position == Point(0.5, -0.5)
        assert world.enemy_team.non_goalie_positions() == (Point(2.0, 1.5),)
        assert len(world.enemy_team.positions()) == 2

    def test_world_without_enemies(self) -> None:
        """Only the ball section is required."""
        world = world_from_dict({"ball": {"position": [0, 0]}})
        assert world.enemy_team.robots == ()
        assert world.field == Field.from_dimensions(9.0, 6.0)

    def test_world_requires_ball(self) -> None:
        """A snapshot without a ball is rejected."""
        with pytest.raises(KeyError):
            world_from_dict({"enemy_team": {"robots": []}})

    def test_load_world_from_json(self, tmp_path: Path) -> None:
        """Snapshots load from disk."""
        path = tmp_path / "world.json"
        path.write_text(json.dumps({"ball": {"position": [1.0, 2.0]}}), encoding="utf-8")
        assert load_world_from_json(str(path)).ball.position == Point(1.0, 2.0)

    def test_load_missing_files(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_world_from_json(str(tmp_path / "missing.json"))
        with pytest.raises(FileNotFoundError):
            load_config_from_json(str(tmp_path / "missing.json"))


class TestConfigLoading:
    """Tests for loading tuning configs."""

    def test_empty_config_uses_defaults(self) -> None:
        """An empty document gives the default configuration."""
        cfg = config_from_dict({})
        assert cfg.indirect_chip.max_chip_power == 8.0
        assert cfg.shrink_margin == pytest.approx(0.225)

    def test_partial_override(self) -> None:
        """Only the named values change."""
        cfg = config_from_dict({"indirect_chip": {"max_chip_power": 5}, "robot": {"max_radius": 0.1}})
        assert cfg.indirect_chip.max_chip_power == 5.0
        assert cfg.indirect_chip.min_chip_tri_area == 0.5
        assert cfg.robot.max_radius == 0.1

    def test_unknown_section(self) -> None:
        """Unknown sections are reported."""
        with pytest.raises(KeyError):
            config_from_dict({"kicker": {}})

    def test_unknown_parameter(self) -> None:
        """Unknown parameter names are reported."""
        with pytest.raises(KeyError):
            config_from_dict({"indirect_chip": {"max_power": 3.0}})

    def test_invalid_value(self) -> None:
        """Values are validated after loading."""
        with pytest.raises(ValueError):
            config_from_dict({"indirect_chip": {"chip_cherry_power_downscale": 1.5}})

    def test_non_numeric_values(self) -> None:
        """Null, text and non-object sections raise ValueError."""
        with pytest.raises(ValueError):
            config_from_dict({"indirect_chip": {"max_chip_power": None}})
        with pytest.raises(ValueError):
            config_from_dict({"robot": {"max_radius": "big"}})
        with pytest.raises(ValueError):
            config_from_dict({"robot": [0.1]})
        with pytest.raises(ValueError):
            config_from_dict([1, 2])  # type: ignore[arg-type]

    def test_load_config_from_json(self, tmp_path: Path) -> None:
        """Configs load from disk."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"field_size": {"length": 12.0, "width": 9.0}}), encoding="utf-8")
        cfg = load_config_from_json(str(path))
        assert cfg.field_size.length == 12.0
        assert cfg.field_size.width == 9.0


class TestDebugger:
    """Tests for the evaluation debugger."""

    def test_creates_log_file(self, tmp_path: Path) -> None:
        """A session file is created inside a fresh directory."""
        debugger = EvaluationDebugger(str(tmp_path / "logs"))
        try:
            assert debugger.log_path.exists()
            assert debugger.log_path.parent == tmp_path / "logs"
        finally:
            debugger.close()

    def test_entries_are_written_and_numbered(self, tmp_path: Path) -> None:
        """Entries reach the file and the recent-events buffer."""
        debugger = EvaluationDebugger(str(tmp_path))
        debugger.log_world_state(0.5, (1.0, 2.0), 3, goalie_id=0)
        debugger.log_stage(0.5, "open", 7)
        debugger.log_target(0.5, (0.0, 0.0), (3.0, 4.0))
        debugger.log_error("input", "bad snapshot")
        events = debugger.get_recent_events(limit=2)
        debugger.close()

        assert len(events) == 2
        assert events[0].startswith("00003 ")
        assert "Distance: 5.00m" in events[0]
        assert "ERROR: Type: input" in events[1]

        text = debugger.log_path.read_text(encoding="utf-8")
        assert "WORLD_STATE: Time: 0.50s | Ball: (1.00, 2.00) | Enemies: 3 | Goalie: 0" in text
        assert "STAGE: Time: 0.50s | Stage: open | Triangles: 7" in text

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        """Closing twice is harmless."""
        debugger = EvaluationDebugger(str(tmp_path))
        debugger.close()
        debugger.close()
        assert debugger.log_file is None
