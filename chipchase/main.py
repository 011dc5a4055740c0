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
"""Entry point for evaluating a saved snapshot and the optional visualiser."""
import argparse
import sys
from typing import List, Optional

from chipchase.engine.config import DEFAULT_CONFIG
from chipchase.engine.evaluation.indirect_chip import IndirectChipEvaluator, IndirectChipResult
from chipchase.utils.debug import EvaluationDebugger
from chipchase.utils.snapshot import load_config_from_json, load_world_from_json


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the ``chipchase`` command.
    """
    parser = argparse.ArgumentParser(
        prog="chipchase",
        description="Find an indirect chip-and-chase target for a world snapshot.",
    )
    parser.add_argument("snapshot", help="Path to a world snapshot JSON file")
    parser.add_argument("--config", help="Path to a tuning config JSON file")
    parser.add_argument("--debug-dir", help="Write an evaluation debug log into this directory")
    parser.add_argument("--tick-time", type=float, default=0.0, help="Timestamp recorded in the debug log")
    parser.add_argument("--show", action="store_true", help="Open the pygame visualiser")
    return parser


def print_result(result: IndirectChipResult) -> None:
    """Print stage counts and the chosen target.

    Parameters
    ----------
    result : IndirectChipResult
        Evaluation outcome to summarise.
    """
    print(f"Candidate triangles: {len(result.candidate_triangles)}")
    print(f"Open triangles: {len(result.open_triangles)}")
    print(f"In-bounds triangles: {len(result.in_bounds_triangles)}")
    if result.target is None:
        print("No chip target available")
        return
    print(f"Chip target: ({result.target.x:.3f}, {result.target.y:.3f})")


def main(argv: Optional[List[str]] = None) -> int:
    """Evaluate a snapshot from the command line.

    Parameters
    ----------
    argv : list[str] | None
        Arguments to parse instead of ``sys.argv``.

    Returns
    -------
    int
        Process exit status.
    """
    args = build_parser().parse_args(argv)

    debugger = EvaluationDebugger(args.debug_dir) if args.debug_dir else None
    try:
        try:
            config = load_config_from_json(args.config) if args.config else DEFAULT_CONFIG
            world = load_world_from_json(args.snapshot, config.field_size)
        except (OSError, KeyError, ValueError) as e:
            print(f"Error loading input: {e}", file=sys.stderr)
            if debugger:
                debugger.log_error("input", str(e))
            return 1

        result = IndirectChipEvaluator(config, debugger).evaluate(world, args.tick_time)
    finally:
        if debugger is not None:
            debugger.close()

    print_result(result)

    if args.show:
        from chipchase.visualizer.visualizer import show_evaluation

        show_evaluation(world, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
