import csv

from pul_arena import cli
from pul_arena.agents import AGENT_REGISTRY, BasicAgent
from pul_arena.cards import Card, Rank, Suit


def test_cli_plays_games_and_writes_outputs(tmp_path):
    csv_path = tmp_path / "scores.csv"
    verbose_path = tmp_path / "transcript.log"

    wins = cli.run(
        [
            "--agents", "random", "basic", "small-bidder",
            "--games", "2",
            "--rounds", "6",
            "--seed", "7",
            "--csv", str(csv_path),
            "--verbose-log", str(verbose_path),
            "--log-level", "WARNING",
        ]
    )

    # Ties credit every tied player, so there is at least one win per game.
    assert sum(wins.values()) >= 2
    assert set(wins) <= {"Random Player", "Basic Player", "SmallBidder"}

    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2 * 5 * 3
    assert {row["game_id"] for row in rows} == {"game-0", "game-1"}

    transcript = verbose_path.read_text(encoding="utf-8")
    assert "Trick 1" in transcript
    assert "Winner(s):" in transcript


def test_cli_relative_csv_goes_to_results_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PUL_RESULTS_DIR", str(tmp_path / "results"))

    cli.run(["--agents", "basic", "basic", "--rounds", "3", "--csv", "out.csv"])

    assert (tmp_path / "results" / "out.csv").exists()


def test_parse_args_defaults():
    args = cli.parse_args(["--agents", "basic", "random"])
    assert args.games == 1
    assert args.rounds == 20
    assert args.strict_jokers is False
    assert args.csv == "pul_scores.csv"


class LateCheater(BasicAgent):
    """Plays fair, except in round 3 of the game it was built for."""

    def __init__(self, cheat: bool) -> None:
        super().__init__(name="Cheater")
        self.cheat = cheat
        self.rounds_seen = 0

    def bid(self, hand):
        self.rounds_seen += 1
        return super().bid(hand)

    def choose_card(self, hand, trick_so_far, led_suit, trump_suit):
        if self.cheat and self.rounds_seen == 3:
            return Card(Suit.HEARTS, Rank.TWO, 999)
        return super().choose_card(hand, trick_so_far, led_suit, trump_suit)


def test_cli_stops_the_run_when_a_bot_cheats(tmp_path, monkeypatch, caplog):
    built = []

    def factory(seed, strict):
        # Fair in game-0, caught in round 3 of game-1.
        agent = LateCheater(cheat=len(built) == 1)
        built.append(agent)
        return agent

    monkeypatch.setitem(AGENT_REGISTRY, "late-cheater", factory)
    csv_path = tmp_path / "scores.csv"
    verbose_path = tmp_path / "transcript.log"

    wins = cli.run(
        [
            "--agents", "late-cheater", "basic",
            "--games", "3",
            "--rounds", "6",
            "--csv", str(csv_path),
            "--verbose-log", str(verbose_path),
        ]
    )

    # game-2 never started
    assert len(built) == 2
    assert "Halting game-1: Cheater cheated" in caplog.text

    # Only game-0 finished, so only game-0 counts towards the tally.
    assert 1 <= sum(wins.values()) <= 2
    assert set(wins) <= {"Cheater", "Basic Player"}

    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    game0 = [row for row in rows if row["game_id"] == "game-0"]
    game1 = [row for row in rows if row["game_id"] == "game-1"]
    assert len(game0) == 5 * 2
    assert {row["round_index"] for row in game1} == {"1", "2"}
    assert len(rows) == len(game0) + len(game1)

    transcript = verbose_path.read_text(encoding="utf-8")
    assert "Cheat detected: Cheater played Two of Hearts" in transcript
