"""Simple command line demo for the prism grid engine."""

from __future__ import annotations

import argparse
import json
from typing import List, Optional

from .game import PrismGame
from .levels import LevelLoader
from .solver import compute_par


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prism Grid demo")
    parser.add_argument("level", nargs="?", help="Level file stem, defaults to the first level.")
    parser.add_argument("--level-root", help="Directory holding level JSON files.")
    parser.add_argument("--list", action="store_true", help="List available levels and exit.")
    parser.add_argument("--json", action="store_true", help="Print the propagation payload as JSON.")
    parser.add_argument(
        "--solve",
        action="store_true",
        help="Apply the solver's rotations before reporting.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    loader = LevelLoader(args.level_root)
    names = loader.available()

    if args.list:
        print("Available levels:")
        for name in names:
            level = loader.load(name)
            print(f"  {name}: {level.name} ({level.width}x{level.height}, par {level.par_moves})")
        return 0
    if not names:
        print(f"No levels found in {loader.root}")
        return 1

    level = loader.load(args.level or names[0])
    game = PrismGame(level)
    solution = game.solution()
    if args.solve and solution is not None:
        for position, rotation in solution.items():
            game.board.cell(position).rotation = rotation
        game.propagate()

    if args.json:
        print(json.dumps(game.playthrough(), indent=2))
        return 0

    result = game.result
    print("=== Prism Grid Demo ===")
    print(f"Level {level.id}: {level.name} ({level.width}x{level.height})")
    print(game.board.to_ascii())
    print("Target hits:")
    for position in game.board.targets():
        required = game.board.cell(position).required_color
        hit = result.target_hits.get(position)
        received = hit.name.lower() if hit is not None else "-"
        print(f"  {position}: {received} (needs {required.name.lower()})")
    print(f"Beam segments traced: {len(result.segments)}")
    print(f"All targets satisfied: {result.all_targets_satisfied}")
    if solution is None:
        print("Solution: none")
    else:
        steps = ", ".join(f"{position}->{rotation}" for position, rotation in solution.items())
        print(f"Solution: {steps}")
    hint = game.hint()
    if hint is not None:
        print(f"Hint: rotate {hint.position} {hint.rotations} time(s)")
    print(f"Par: {compute_par(level)} (authored {level.par_moves})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
