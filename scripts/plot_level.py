"""Draw a top-down map of a generated level.

Usage:
    python scripts/plot_level.py --seed 1 [-o level.png]
    python scripts/plot_level.py --from-json level.json
"""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle

from mission_gen.config import Difficulty, GenerationOptions
from mission_gen.generation.pipeline import generate_level
from mission_gen.schema.doors import DoorAxis
from mission_gen.schema.level import Level

ENEMY_COLORS = {"guard": "#f1c40f", "soldier": "#e67e22", "officer": "#e74c3c"}


def _hex(color: int | None, default: str = "#555566") -> str:
    return f"#{color:06x}" if color is not None else default


def plot_level(level: Level, out_path: Path) -> None:
    fig, ax = plt.subplots(figsize=(12, 12))
    ax.set_title(level.name, fontsize=16, fontweight="bold")

    # --- Rooms ---
    for room in level.rooms:
        ax.add_patch(Rectangle(
            (room.min_x, room.min_z), room.width, room.depth,
            facecolor=_hex(room.floor_color), edgecolor=_hex(room.wall_color, "#222222"),
            linewidth=2, alpha=0.6,
        ))
        ax.text(room.x, room.z, room.id, ha="center", va="center", fontsize=8, color="white")

    # --- Triggers ---
    for trigger in level.triggers:
        ax.add_patch(Rectangle(
            (trigger.x - trigger.half_width, trigger.z - trigger.half_depth),
            trigger.half_width * 2, trigger.half_depth * 2,
            fill=False, edgecolor="#2ecc71" if trigger.is_exit else "#3498db",
            linestyle="--", linewidth=1.5,
        ))

    # --- Doors ---
    for door in level.doors:
        half = door.width / 2
        if door.axis == DoorAxis.Z:
            xs, zs = [door.x - half, door.x + half], [door.z, door.z]
        else:
            xs, zs = [door.x, door.x], [door.z - half, door.z + half]
        ax.plot(xs, zs, color="#ecf0f1" if door.type.value == "proximity" else "#c0392b", linewidth=4)

    # --- Props ---
    for prop in level.props:
        ax.add_patch(Circle((prop.x, prop.z), 0.4, color="#8e6e53", alpha=0.8))

    # --- Pickups ---
    if level.pickups:
        ax.scatter(
            [p.x for p in level.pickups], [p.z for p in level.pickups],
            marker="D", s=20, color="#9b59b6", label="pickups", zorder=3,
        )

    # --- Enemies ---
    for enemy_type, color in ENEMY_COLORS.items():
        group = [e for e in level.enemies if e.type.value == enemy_type]
        if group:
            ax.scatter(
                [e.x for e in group], [e.z for e in group],
                marker="^", s=40, color=color, label=enemy_type, zorder=4,
            )

    # --- Player spawn ---
    if level.player_spawn is not None:
        ax.scatter(
            [level.player_spawn.x], [level.player_spawn.z],
            marker="*", s=200, color="#1abc9c", label="player", zorder=5,
        )

    ax.set_aspect("equal")
    ax.autoscale_view()
    ax.set_xlabel("X")
    ax.set_ylabel("Z")
    ax.legend(loc="upper right")

    plt.tight_layout()
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Map saved to {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot a level layout")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.MEDIUM.value,
    )
    parser.add_argument("--from-json", type=Path, default=None, help="Plot a saved level instead")
    parser.add_argument("-o", "--output", type=Path, default=Path("level.png"))
    args = parser.parse_args()

    if args.from_json is not None:
        level = Level.model_validate_json(args.from_json.read_text())
    else:
        level = generate_level(GenerationOptions(seed=args.seed, difficulty=args.difficulty))
    plot_level(level, args.output)


if __name__ == "__main__":
    main()
