#!/usr/bin/env python3
"""Chart the move-kind benchmark CSVs written by ``scripts/bench.py``."""

from __future__ import annotations

import argparse
import csv
from pathlib import Path

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]

MOVE_KINDS = ("quiet", "capture", "en_passant", "castle", "promotion")
KIND_COLORS = {
    "quiet": "#8a8577",
    "capture": "#7d2a2a",
    "en_passant": "#c6a25a",
    "castle": "#4e7d49",
    "promotion": "#3d5a80",
}


def read_rows(path: Path) -> list[dict[str, str]]:
    with path.open(encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


def mix_by_position(rows: list[dict[str, str]]) -> dict[str, dict[str, float]]:
    """Share of each move kind per position, as percentages of the leaf moves."""
    counts: dict[str, dict[str, int]] = {}
    for row in rows:
        counts.setdefault(row["position"], {})[row["kind"]] = int(row["count"])
    shares: dict[str, dict[str, float]] = {}
    for position, by_kind in counts.items():
        total = sum(by_kind.get(kind, 0) for kind in MOVE_KINDS) or 1
        shares[position] = {kind: 100.0 * by_kind.get(kind, 0) / total for kind in MOVE_KINDS}
    return shares


def draw_mix(ax, rows: list[dict[str, str]]) -> None:
    shares = mix_by_position(rows)
    positions = list(shares)
    left = [0.0] * len(positions)
    for kind in MOVE_KINDS:
        widths = [shares[position][kind] for position in positions]
        ax.barh(positions, widths, left=left, color=KIND_COLORS[kind], label=kind)
        left = [a + b for a, b in zip(left, widths)]
    ax.set_xlim(0, 100)
    ax.set_xlabel("% of leaf moves")
    ax.set_title("Move mix at the benchmark depth")
    ax.legend(frameon=False, fontsize=8, loc="lower right")


def draw_cost(ax, rows: list[dict[str, str]]) -> None:
    # Mean over positions; not every kind occurs at every root.
    samples: dict[str, list[float]] = {kind: [] for kind in MOVE_KINDS}
    for row in rows:
        samples[row["kind"]].append(float(row["per_call_us"]))
    kinds = [kind for kind in MOVE_KINDS if samples[kind]]
    means = [sum(samples[kind]) / len(samples[kind]) for kind in kinds]
    ax.bar(kinds, means, color=[KIND_COLORS[kind] for kind in kinds])
    ax.set_ylabel("us per apply_move + undo")
    ax.set_title("Cost of playing and taking back a move")
    ax.grid(True, axis="y", alpha=0.3)


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot move-kind benchmark metrics")
    parser.add_argument("--metrics-dir", default=str(ROOT / "docs" / "metrics"), help="Directory with the CSVs")
    parser.add_argument("--output", default=str(ROOT / "docs" / "visuals" / "move-kinds.svg"), help="SVG to write")
    args = parser.parse_args()

    metrics_dir = Path(args.metrics_dir)
    fig, (mix_ax, cost_ax) = plt.subplots(1, 2, figsize=(14, 5))
    draw_mix(mix_ax, read_rows(metrics_dir / "move_mix.csv"))
    draw_cost(cost_ax, read_rows(metrics_dir / "apply_cost.csv"))
    fig.tight_layout()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output, format="svg")
    plt.close(fig)
    print(f"wrote {output}")


if __name__ == "__main__":
    main()
