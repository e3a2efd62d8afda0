# pul_arena/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .cards import Card, Suit


@dataclass
class PlayerState:
    id: int
    name: str
    score: int = 0


@dataclass
class Trick:
    # (player_id, card) pairs in play order
    plays: List[tuple[int, Card]] = field(default_factory=list)
    # suit of the dealer's card; JOKER when the dealer led a joker
    led_suit: Optional[Suit] = None
    winner_id: Optional[int] = None


@dataclass
class RoundState:
    # 1-based, matching the round-size schedule
    round_index: int
    cards_per_player: int
    dealer_id: int
    trump_card: Card
    hands: Dict[int, List[Card]]
    bids: Dict[int, int] = field(default_factory=dict)
    tricks: List[Trick] = field(default_factory=list)
    tricks_won: Dict[int, int] = field(default_factory=dict)

    @property
    def trump_suit(self) -> Suit:
        return self.trump_card.suit


@dataclass
class GameState:
    players: List[PlayerState]
    rounds: List[RoundState] = field(default_factory=list)
    winners: List[int] = field(default_factory=list)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def scores(self) -> Dict[int, int]:
        return {p.id: p.score for p in self.players}
