# pul_arena/agents/random_agent.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence
import random

from ..cards import Card, Rank, Suit
from ..rules import legal_cards
from .base import PulAgent


@dataclass
class RandomPulAgent(PulAgent):
    """
    A simple baseline agent with a bit of structure:

    - bid: count jokers, aces and kings as likely tricks, then random jitter.
    - choose_card: pick uniformly among legal cards.

    The trump suit is only known once the round is dealt and agents are not
    told it at bidding time, so the bid ignores trumps.
    """

    rng: random.Random
    name: str = "Random Player"
    strict_jokers: bool = False

    def bid(self, hand: Sequence[Card]) -> int:
        hand_size = len(hand)
        strong = sum(
            1 for c in hand
            if c.is_joker or c.rank >= Rank.KING
        )
        expected = min(hand_size, strong)

        low = max(0, expected - 1)
        high = min(hand_size, expected + 1)
        return self.rng.randint(low, high)

    def choose_card(
        self,
        hand: Sequence[Card],
        trick_so_far: Sequence[Card],
        led_suit: Optional[Suit],
        trump_suit: Suit,
    ) -> Card:
        options = legal_cards(hand, led_suit, trump_suit, self.strict_jokers)
        return self.rng.choice(options)
