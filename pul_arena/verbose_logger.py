# pul_arena/verbose_logger.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .rules import CheatDetected
from .state import RoundState, Trick


class VerboseGameLogger:
    """Accumulates a readable, trick-by-trick transcript of Pul games."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._entries: List[str] = []

    @staticmethod
    def _header(game_id: Optional[str], round_index: int) -> str:
        header_parts = []
        if game_id is not None:
            header_parts.append(f"Game: {game_id}")
        header_parts.append(f"Round: {round_index}")
        return " | ".join(header_parts)

    def log_round_start(
        self,
        *,
        game_id: Optional[str],
        round_state: RoundState,
        player_names: Mapping[int, str],
    ) -> None:
        lines = [
            f"=== {self._header(game_id, round_state.round_index)} ===",
            f"Dealer: {player_names[round_state.dealer_id]}",
            f"Cards per player: {round_state.cards_per_player}",
            f"Trump card: {round_state.trump_card}",
            "",
            "Hands:",
        ]
        for pid, hand in round_state.hands.items():
            lines.append(f"  {player_names[pid]}: {', '.join(str(c) for c in hand)}")
        lines.append("")
        lines.append("Bids:")
        for pid, bid in round_state.bids.items():
            lines.append(f"  {player_names[pid]}: {bid}")
        self._entries.append("\n".join(lines))

    def log_trick(
        self,
        *,
        trick_number: int,
        trick: Trick,
        player_names: Mapping[int, str],
    ) -> None:
        plays = ", ".join(
            f"{player_names[pid]} -> {card}" for pid, card in trick.plays
        )
        winner = (
            player_names[trick.winner_id] if trick.winner_id is not None else "?"
        )
        led = trick.led_suit.name if trick.led_suit is not None else "-"
        self._entries.append(
            f"Trick {trick_number} (led {led}): {plays} | winner: {winner}"
        )

    def log_round_end(
        self,
        *,
        round_state: RoundState,
        deltas: Dict[int, int],
        scores: Mapping[int, int],
        player_names: Mapping[int, str],
    ) -> None:
        lines = ["Results:"]
        for pid, delta in deltas.items():
            lines.append(
                f"  {player_names[pid]}: bid {round_state.bids[pid]}, "
                f"won {round_state.tricks_won[pid]}, +{delta} (total {scores[pid]})"
            )
        self._entries.append("\n".join(lines))

    def log_cheat(
        self,
        *,
        game_id: Optional[str],
        round_index: int,
        error: CheatDetected,
    ) -> None:
        self._entries.append(
            f"=== {self._header(game_id, round_index)} ===\n"
            f"Cheat detected: {error.player_name} played {error.card} "
            f"({error.reason.name})"
        )

    def log_winners(
        self,
        *,
        game_id: Optional[str],
        winners: List[int],
        scores: Mapping[int, int],
        player_names: Mapping[int, str],
    ) -> None:
        label = f" {game_id}" if game_id is not None else ""
        names = ", ".join(player_names[pid] for pid in winners)
        standings = ", ".join(
            f"{player_names[pid]}={score}" for pid, score in scores.items()
        )
        self._entries.append(
            f"=== Finished{label} ===\nWinner(s): {names}\nScores: {standings}"
        )

    def flush(self) -> None:
        if not self._entries:
            return
        to_write = "\n\n".join(self._entries)
        self._entries.clear()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(to_write, encoding="utf-8")
