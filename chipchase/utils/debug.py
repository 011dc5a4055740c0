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
"""Structured logging utilities used to trace chip target evaluations."""
import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple


class EvaluationDebugger:
    """Helper object that streams evaluation telemetry to disk.

    Parameters
    ----------
    output_dir : str, default="debug_logs"
        Directory where new session logs are created; created automatically when missing.
    """

    def __init__(self, output_dir: str = "debug_logs") -> None:
        """Initialise the debugger and start the first logging session.

        Parameters
        ----------
        output_dir : str
            Filesystem directory where log files are created or appended.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_file: Optional[TextIO] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=200)
        self.start_new_session()

    @property
    def log_path(self) -> Path:
        """Return the path of the current session log file."""
        return self.output_dir / f"evaluation_debug_{self.session_start}.txt"

    def start_new_session(self) -> None:
        """Start a new debug logging session."""
        if self.log_file:
            self.log_file.close()

        self.log_file = open(self.log_path, "w", encoding="utf-8")
        self.log_file.write(f"=== Chip Evaluation Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_world_state(
        self,
        tick_time: float,
        ball_position: tuple[float, float],
        enemy_count: int,
        goalie_id: int | None = None,
    ) -> None:
        """Log the snapshot an evaluation starts from.

        Parameters
        ----------
        tick_time : float
            Timestamp of the decision tick in seconds.
        ball_position : tuple[float, float]
            Ball coordinates on the field (x, y).
        enemy_count : int
            Number of opposing robots in the snapshot.
        goalie_id : int | None
            Identifier of the opposing goalie, when one is tagged.
        """
        goalie_str = f" | Goalie: {goalie_id}" if goalie_id is not None else ""
        self._write_log(
            "WORLD_STATE",
            f"Time: {tick_time:.2f}s | "
            f"Ball: ({ball_position[0]:.2f}, {ball_position[1]:.2f}) | "
            f"Enemies: {enemy_count}"
            f"{goalie_str}",
        )

    def log_stage(self, tick_time: float, stage: str, surviving: int) -> None:
        """Log how many candidates a pipeline stage let through.

        Parameters
        ----------
        tick_time : float
            Timestamp of the decision tick in seconds.
        stage : str
            Name of the pipeline stage, for example ``"open"``.
        surviving : int
            Number of triangles left after the stage.
        """
        self._write_log("STAGE", f"Time: {tick_time:.2f}s | Stage: {stage} | Triangles: {surviving}")

    def log_target(
        self,
        tick_time: float,
        ball_position: tuple[float, float],
        target: tuple[float, float] | None,
    ) -> None:
        """Log the outcome of an evaluation.

        Parameters
        ----------
        tick_time : float
            Timestamp of the decision tick in seconds.
        ball_position : tuple[float, float]
            Ball coordinates the chip starts from.
        target : tuple[float, float] | None
            Chosen chip target, or ``None`` when nothing qualified.
        """
        if target is None:
            self._write_log("TARGET", f"Time: {tick_time:.2f}s | No target")
            return
        distance = ((target[0] - ball_position[0]) ** 2 + (target[1] - ball_position[1]) ** 2) ** 0.5
        self._write_log(
            "TARGET",
            f"Time: {tick_time:.2f}s | "
            f"Target: ({target[0]:.2f}, {target[1]:.2f}) | "
            f"Distance: {distance:.2f}m",
        )

    def log_evaluation_event(self, tick_time: float, event_type: str, description: str) -> None:
        """Log a free-form evaluation event.

        Parameters
        ----------
        tick_time : float
            Timestamp of the decision tick in seconds.
        event_type : str
            Short label identifying the event category.
        description : str
            Human-readable summary of the event.
        """
        self._write_log("EVALUATION_EVENT", f"Time: {tick_time:.2f}s | Event: {event_type} | Details: {description}")

    def log_error(self, error_type: str, description: str) -> None:
        """Log an error or warning.

        Parameters
        ----------
        error_type : str
            Label describing the error classification.
        description : str
            Human-readable explanation of the issue.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, event_type: str, details: str) -> None:
        """Write a log entry to the file.

        Parameters
        ----------
        event_type : str
            Category label for the log entry.
        details : str
            Formatted message body to persist.
        """
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {event_type}: {details}"

        with self._lock:
            line_no = self._line_number
            self._line_number += 1
            self._recent_events.append((line_no, log_entry))

            if self.log_file:
                self.log_file.write(f"{log_entry}\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest debug entries with line numbers for live displays.

        Parameters
        ----------
        limit : int
            Maximum number of entries to return.

        Returns
        -------
        List[str]
            Up to ``limit`` most recent log lines with prefixed line numbers.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:]
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None
