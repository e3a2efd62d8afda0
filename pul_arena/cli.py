# pul_arena/cli.py
from __future__ import annotations

import argparse
import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from .agents import available_agents, build_agent
from .engine import GameEngine
from .game_log import build_round_score_rows, write_round_scores_csv
from .paths import resolve_results_path
from .rules import TOTAL_ROUNDS, CheatDetected
from .verbose_logger import VerboseGameLogger


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Run Pul games between bot players and log per-round scores "
            "to a CSV file."
        )
    )

    parser.add_argument(
        "--agents",
        nargs="+",
        required=True,
        choices=available_agents(),
        help="Bots to seat, in seating order (at least two).",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of full games to play (default: 1).",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=TOTAL_ROUNDS,
        help=(
            "Round total; rounds 1..N-1 are played "
            "(default: %(default)s, i.e. 19 rounds)."
        ),
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Base random seed for the deck and the bots.",
    )
    parser.add_argument(
        "--strict-jokers",
        action="store_true",
        help="Make jokers follow suit like any other card.",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default="pul_scores.csv",
        help="Path to the output CSV file (default: pul_scores.csv).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ...). Default: INFO.",
    )
    parser.add_argument(
        "--verbose-log",
        type=str,
        default=None,
        help="Optional path for a detailed trick-by-trick log file.",
    )

    return parser.parse_args(argv)


def _play_single_game(
    game_index: int,
    *,
    args: argparse.Namespace,
    verbose_logger: Optional[VerboseGameLogger],
) -> Tuple[List[Dict[str, Any]], List[str], bool]:
    """Run one game; returns (rows, winner names, stopped early)."""
    game_id = f"game-{game_index}"

    agents = [
        build_agent(
            name,
            seed=args.seed + game_index * 1000 + i,
            strict_jokers=args.strict_jokers,
        )
        for i, name in enumerate(args.agents)
    ]
    engine = GameEngine(
        agents=agents,
        rng_seed=args.seed + game_index,
        total_rounds=args.rounds,
        game_label=game_id,
        strict_jokers=args.strict_jokers,
        verbose_logger=verbose_logger,
    )

    try:
        game_state = engine.play_game()
    except CheatDetected as exc:
        logging.error(
            "Halting %s: %s cheated with %s (%s)",
            game_id,
            exc.player_name,
            exc.card,
            exc.reason.name,
        )
        rows = build_round_score_rows(engine.game_state, game_id=game_id)
        return rows, [], True

    rows = build_round_score_rows(game_state, game_id=game_id)
    return rows, [p.name for p in engine.winners()], False


def run(argv: List[str] | None = None) -> Counter:
    """Play the requested games and return win tallies by player name."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if len(args.agents) < 2:
        raise SystemExit("Pul requires at least 2 players.")
    if args.games < 1:
        raise SystemExit("--games must be >= 1")
    if args.rounds < 2:
        raise SystemExit("--rounds must be >= 2")

    csv_path = resolve_results_path(args.csv)
    verbose_path = (
        resolve_results_path(args.verbose_log) if args.verbose_log else None
    )

    logging.info("Players: %s", ", ".join(args.agents))
    logging.info("Games to play: %d", args.games)
    logging.info("Output CSV: %s", csv_path)
    if verbose_path:
        logging.info("Verbose log: %s", verbose_path)

    verbose_logger = VerboseGameLogger(verbose_path) if verbose_path else None

    all_rows: List[Dict[str, Any]] = []
    wins: Counter = Counter()
    games_played = 0
    early_stop = False

    for game_index in range(args.games):
        rows, winners, stopped = _play_single_game(
            game_index,
            args=args,
            verbose_logger=verbose_logger,
        )
        all_rows.extend(rows)
        if stopped:
            early_stop = True
            break
        games_played += 1
        # Every tied player is credited with the win.
        wins.update(winners)

    write_round_scores_csv(all_rows, csv_path)

    if early_stop:
        logging.info(
            "Stopped after %d/%d complete games; wrote %d rows to %s",
            games_played,
            args.games,
            len(all_rows),
            csv_path,
        )
    else:
        logging.info(
            "Finished %d games; wrote %d rows to %s",
            games_played,
            len(all_rows),
            csv_path,
        )
    for name, count in wins.most_common():
        logging.info("%s won %d game(s)", name, count)

    if verbose_logger:
        verbose_logger.flush()
    return wins


def main(argv: List[str] | None = None) -> None:
    run(argv)


if __name__ == "__main__":
    main()

'''
python3 -m pul_arena.cli \
  --agents random basic small-bidder \
  --games 100 \
  --csv pul_results_100_games.csv \
  --seed 1
'''
