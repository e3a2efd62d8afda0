# pul_arena/analysis.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402

from .rules import TOTAL_ROUNDS  # noqa: E402


def load_scores(path: str | Path) -> pd.DataFrame:
    """Load a per-round score CSV written by the CLI."""
    # Expecting at least 'game_id', 'round_index', 'player_name',
    # 'bid', 'tricks_won', 'total_score'
    return pd.read_csv(path)


def complete_games(df: pd.DataFrame, num_rounds: int = TOTAL_ROUNDS - 1) -> pd.DataFrame:
    """Keep only games where every round was logged for every player."""
    players_per_game = df.groupby("game_id")["player_id"].nunique()
    rows_per_game = df["game_id"].value_counts()
    expected = players_per_game * num_rounds
    valid_games = expected[rows_per_game.reindex(expected.index) == expected].index
    return df[df["game_id"].isin(valid_games)].copy()


def round_score_stats(df: pd.DataFrame) -> pd.DataFrame:
    """Per (player_name, round_index) mean total score with a 95% CI."""
    stats = (
        df.groupby(["player_name", "round_index"])["total_score"]
          .agg(["mean", "std", "count"])
          .reset_index()
    )
    # A single game has no spread.
    stats["std"] = stats["std"].fillna(0.0)
    # 95% confidence interval: mean ± 1.96 * (std / sqrt(n))
    stats["se"] = stats["std"] / np.sqrt(stats["count"])
    stats["ci95"] = 1.96 * stats["se"]
    return stats


def bid_miss(df: pd.DataFrame) -> pd.DataFrame:
    """Add a 'miss' column: negative -> undertrick, positive -> overtrick."""
    out = df.copy()
    out["miss"] = out["tricks_won"] - out["bid"]
    return out


def exact_bid_rate(df: pd.DataFrame) -> pd.Series:
    """Fraction of rounds each player hit their bid exactly."""
    hits = (df["tricks_won"] == df["bid"]).groupby(df["player_name"]).mean()
    return hits.sort_index()


def plot_round_means(stats: pd.DataFrame, path: str | Path) -> Path:
    """Save a per-round mean total score chart with 95% CI error bars."""
    path = Path(path)
    fig, ax = plt.subplots(figsize=(10, 6))
    for name in sorted(stats["player_name"].unique()):
        sub = stats[stats["player_name"] == name].sort_values("round_index")
        ax.errorbar(
            sub["round_index"],
            sub["mean"],
            yerr=sub["ci95"],
            marker="o",
            capsize=3,
            label=name,
        )

    ax.set_xlabel("Round index")
    ax.set_ylabel("Mean total score across games")
    ax.set_title("Per-round mean total score with 95% CI (averaged over games)")
    ax.grid(True)
    ax.legend()
    fig.tight_layout()
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
    return path


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Summarize a Pul score CSV and plot mean scores per round."
    )
    parser.add_argument("csv", help="CSV written by pul_arena.cli")
    parser.add_argument(
        "--out",
        default="round_means.png",
        help="Where to save the chart (default: round_means.png).",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=TOTAL_ROUNDS,
        help="Round total the games were played with (default: %(default)s).",
    )
    args = parser.parse_args(argv)

    df = complete_games(load_scores(args.csv), num_rounds=args.rounds - 1)
    print(exact_bid_rate(df).to_string())
    plot_round_means(round_score_stats(df), args.out)


if __name__ == "__main__":
    main()
