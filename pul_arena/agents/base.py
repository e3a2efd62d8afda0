# pul_arena/agents/base.py
from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ..cards import Card, Suit


@runtime_checkable
class PulAgent(Protocol):
    """
    Interface that all Pul players must implement.

    The engine owns the real hands. `hand` and `trick_so_far` are tuples
    handed out for decision making only; nothing an agent does to them
    reaches the game.
    """

    def bid(self, hand: Sequence[Card]) -> int:
        """Return how many tricks this player expects to win this round."""

        raise NotImplementedError

    def choose_card(
        self,
        hand: Sequence[Card],
        trick_so_far: Sequence[Card],
        led_suit: Optional[Suit],
        trump_suit: Suit,
    ) -> Card:
        """
        Return the card to play from `hand`.

        `led_suit` is None while leading the trick, and Suit.JOKER when the
        leader opened with a joker. An ineligible card ends the game.
        """
        raise NotImplementedError
