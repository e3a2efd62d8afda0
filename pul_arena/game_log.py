# pul_arena/game_log.py
from __future__ import annotations

import csv
from typing import Any, Dict, List, Optional

from .rules import score_round
from .state import GameState, RoundState

FIELDNAMES = [
    "game_id",
    "round_index",
    "cards_per_player",
    "dealer_id",
    "player_id",
    "player_name",
    "bid",
    "tricks_won",
    "round_delta",
    "total_score",
    "trump_suit",
]


def _is_round_complete(round_state: RoundState, num_players: int) -> bool:
    """Return True if the round contains full bids and tricks for all players."""

    if len(round_state.bids) != num_players:
        return False

    if len(round_state.tricks) != round_state.cards_per_player:
        return False

    return all(trick.winner_id is not None for trick in round_state.tricks)


def build_round_score_rows(
    game_state: GameState,
    game_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Build a list of rows summarizing per-round scores for CSV export.

    Each row corresponds to (round, player) and has keys in FIELDNAMES. A
    round cut short by a cheating agent is skipped so the rows of an
    interrupted game can still be logged.
    """
    players = game_state.players
    running_scores: Dict[int, int] = {p.id: 0 for p in players}
    rows: List[Dict[str, Any]] = []

    for round_state in game_state.rounds:
        if not _is_round_complete(round_state, len(players)):
            continue
        deltas = score_round(round_state.bids, round_state.tricks_won)

        for p in players:
            pid = p.id
            running_scores[pid] += deltas[pid]
            rows.append(
                {
                    "game_id": game_id,
                    "round_index": round_state.round_index,
                    "cards_per_player": round_state.cards_per_player,
                    "dealer_id": round_state.dealer_id,
                    "player_id": pid,
                    "player_name": p.name,
                    "bid": round_state.bids[pid],
                    "tricks_won": round_state.tricks_won[pid],
                    "round_delta": deltas[pid],
                    "total_score": running_scores[pid],
                    "trump_suit": round_state.trump_suit.name,
                }
            )

    return rows


def write_round_scores_csv(rows: List[Dict[str, Any]], path) -> None:
    """
    Write per-round score rows to a CSV file.

    `path` can be a string or any path-like object accepted by `open`.
    """
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow({field: row.get(field) for field in FIELDNAMES})
