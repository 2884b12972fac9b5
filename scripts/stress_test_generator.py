"""Stress-test the level generator over many seeds.

Generates one level per seed, re-runs the validator on every result to make
sure repairs are stable, and prints batch statistics.

Usage:
    python scripts/stress_test_generator.py [--levels N] [--start-seed S] [--difficulty hard]
"""

from __future__ import annotations

import argparse
import copy
import logging
import time
from pathlib import Path

from mission_gen.analysis.metrics import compute_batch_metrics, compute_level_metrics
from mission_gen.analysis.models import LevelMetrics
from mission_gen.analysis.report import generate_batch_report
from mission_gen.config import Difficulty, GenerationOptions
from mission_gen.generation.core.rng import LevelRNG
from mission_gen.generation.pipeline import LevelGenerator
from mission_gen.generation.rooms import RoomLayoutError
from mission_gen.generation.validator import LevelValidator


def run_stress_test(
    n_levels: int,
    start_seed: int,
    options: GenerationOptions,
) -> tuple[list[LevelMetrics], int, list[str]]:
    """Return ``(metrics, layout_failures, unstable_repairs)``."""
    metrics: list[LevelMetrics] = []
    failures = 0
    unstable: list[str] = []

    for seed in range(start_seed, start_seed + n_levels):
        try:
            result = LevelGenerator(seed).run(options)
        except RoomLayoutError as e:
            failures += 1
            print(f"  seed={seed}: {e}")
            continue

        metrics.append(compute_level_metrics(result, options.difficulty.value, seed=seed))

        # A second pass over a repaired level must find nothing
        level = result.level.model_copy(deep=True)
        graph = copy.deepcopy(result.graph)
        second = LevelValidator(LevelRNG(seed)).validate_and_repair(level, graph)
        if not second.is_valid:
            unstable.append(f"seed={seed}: {'; '.join(second.issues)}")

    return metrics, failures, unstable


def main() -> None:
    parser = argparse.ArgumentParser(description="Stress-test the level generator")
    parser.add_argument("--levels", type=int, default=500, help="Number of seeds to generate")
    parser.add_argument("--start-seed", type=int, default=0)
    parser.add_argument("--min-rooms", type=int, default=6)
    parser.add_argument("--max-rooms", type=int, default=12)
    parser.add_argument(
        "--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.MEDIUM.value,
    )
    parser.add_argument("--output", type=Path, default=None, help="Write batch metrics JSON here")
    parser.add_argument("--log-level", default="ERROR", help="Python logging level")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    options = GenerationOptions(
        min_rooms=args.min_rooms,
        max_rooms=args.max_rooms,
        difficulty=args.difficulty,
    )

    print(f"Generating {args.levels:,} {args.difficulty} levels from seed {args.start_seed}...")
    t0 = time.perf_counter()
    metrics, failures, unstable = run_stress_test(args.levels, args.start_seed, options)
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s ({elapsed / max(args.levels, 1) * 1000:.1f}ms/level)")

    batch = compute_batch_metrics(metrics, options.difficulty.value, failures=failures)
    print(generate_batch_report(batch))

    if unstable:
        print(f"{len(unstable)} levels changed on a second validation pass:")
        for line in unstable[:20]:
            print(f"  {line}")
    else:
        print("Validator repairs were stable on every level.")

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(batch.model_dump_json(indent=2))
        print(f"Batch metrics written to {args.output}")


if __name__ == "__main__":
    main()
