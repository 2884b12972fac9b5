"""Generate a single mission level and write it as JSON.

Usage:
    python scripts/generate_level.py --seed 1 [--difficulty hard] [-o level.json]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from mission_gen.analysis.metrics import compute_level_metrics
from mission_gen.analysis.report import generate_level_report
from mission_gen.config import Difficulty, GenerationOptions
from mission_gen.generation.pipeline import LevelGenerator


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a mission level")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (omit for a random level)")
    parser.add_argument("--min-rooms", type=int, default=6)
    parser.add_argument("--max-rooms", type=int, default=12)
    parser.add_argument("--min-enemies", type=int, default=3)
    parser.add_argument("--max-enemies", type=int, default=8)
    parser.add_argument(
        "--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.MEDIUM.value,
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write level JSON here")
    parser.add_argument("--quiet", action="store_true", help="Skip the text report")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    options = GenerationOptions(
        min_rooms=args.min_rooms,
        max_rooms=args.max_rooms,
        min_enemies=args.min_enemies,
        max_enemies=args.max_enemies,
        difficulty=args.difficulty,
        seed=args.seed,
    )
    result = LevelGenerator(options.seed).run(options)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result.level.model_dump_json(indent=2))
        print(f"Level written to {args.output}")

    if not args.quiet:
        metrics = compute_level_metrics(result, options.difficulty.value, seed=options.seed)
        print(generate_level_report(metrics, result.report))
        print(result.level.briefing)


if __name__ == "__main__":
    main()
