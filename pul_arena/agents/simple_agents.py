# pul_arena/agents/simple_agents.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..cards import Card, Suit
from ..rules import legal_cards
from .base import PulAgent


def _first_legal(
    hand: Sequence[Card],
    led_suit: Optional[Suit],
    trump_suit: Suit,
    strict_jokers: bool,
) -> Card:
    options = legal_cards(hand, led_suit, trump_suit, strict_jokers)
    if not options:
        # A non-empty hand always has a legal card.
        raise ValueError("No legal card in an empty hand")
    return options[0]


@dataclass
class BasicAgent(PulAgent):
    """Bids half its hand and plays the first card it is allowed to."""

    name: str = "Basic Player"
    strict_jokers: bool = False

    def bid(self, hand: Sequence[Card]) -> int:
        return len(hand) // 2

    def choose_card(
        self,
        hand: Sequence[Card],
        trick_so_far: Sequence[Card],
        led_suit: Optional[Suit],
        trump_suit: Suit,
    ) -> Card:
        return _first_legal(hand, led_suit, trump_suit, self.strict_jokers)


@dataclass
class SmallBidder(PulAgent):
    """Always bids zero and plays the first card it is allowed to."""

    name: str = "SmallBidder"
    strict_jokers: bool = False

    def bid(self, hand: Sequence[Card]) -> int:
        return 0

    def choose_card(
        self,
        hand: Sequence[Card],
        trick_so_far: Sequence[Card],
        led_suit: Optional[Suit],
        trump_suit: Suit,
    ) -> Card:
        return _first_legal(hand, led_suit, trump_suit, self.strict_jokers)
