import pandas as pd
import pytest

from pul_arena import analysis, cli


def _frame():
    return pd.DataFrame(
        {
            "game_id": ["g0"] * 4 + ["g1"] * 4 + ["g2"] * 2,
            "round_index": [1, 1, 2, 2] * 2 + [1, 1],
            "player_id": [0, 1, 0, 1] * 2 + [0, 1],
            "player_name": ["A", "B", "A", "B"] * 2 + ["A", "B"],
            "bid": [1, 0, 0, 1, 1, 1, 2, 0, 0, 0],
            "tricks_won": [1, 0, 1, 1, 0, 1, 2, 0, 1, 0],
            "total_score": [11, 10, 11, 21, 0, 11, 12, 21, 0, 10],
        }
    )


def test_complete_games_drops_partial_games():
    df = analysis.complete_games(_frame(), num_rounds=2)
    assert sorted(df["game_id"].unique()) == ["g0", "g1"]


def test_round_score_stats():
    df = analysis.complete_games(_frame(), num_rounds=2)
    stats = analysis.round_score_stats(df)

    row = stats[(stats["player_name"] == "A") & (stats["round_index"] == 1)].iloc[0]
    assert row["mean"] == pytest.approx(5.5)
    assert row["count"] == 2
    assert row["ci95"] > 0
    assert {"se", "ci95"} <= set(stats.columns)


def test_bid_miss_and_exact_rate():
    df = analysis.bid_miss(_frame())
    assert list(df["miss"])[:5] == [0, 0, 1, 0, -1]

    rate = analysis.exact_bid_rate(_frame())
    assert rate["A"] == pytest.approx(2 / 5)
    assert rate["B"] == pytest.approx(1.0)


def test_end_to_end_plot(tmp_path):
    csv_path = tmp_path / "scores.csv"
    cli.run(
        [
            "--agents", "random", "basic",
            "--games", "2",
            "--rounds", "4",
            "--csv", str(csv_path),
            "--log-level", "WARNING",
        ]
    )

    df = analysis.complete_games(analysis.load_scores(csv_path), num_rounds=3)
    assert len(df) == 2 * 3 * 2

    out = analysis.plot_round_means(analysis.round_score_stats(df), tmp_path / "chart.png")
    assert out.exists()
    assert out.stat().st_size > 0
