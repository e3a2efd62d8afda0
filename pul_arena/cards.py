# pul_arena/cards.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import enum
import random

DECK_SIZE = 55
NUM_JOKERS = 3


class EmptyDeck(RuntimeError):
    """Raised when drawing from a deck with no cards left."""


class Suit(enum.Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"
    # Also stands for "no suit established yet" in a trick.
    JOKER = "joker"


class Rank(enum.IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


STANDARD_SUITS = [s for s in Suit if s is not Suit.JOKER]


@dataclass(frozen=True)
class Card:
    """
    Representation of a Pul card.

    - Standard cards: suit in HEARTS/DIAMONDS/CLUBS/SPADES, rank 2–Ace.
    - Jokers: suit=JOKER, rank fixed to ACE.

    `id` keeps physically distinct cards apart when suit and rank match
    (the three jokers). It is unique within one deck.
    """
    suit: Suit
    rank: Rank
    id: int = 0

    def __post_init__(self) -> None:
        if self.suit == Suit.JOKER and self.rank != Rank.ACE:
            raise ValueError("Jokers always carry rank ACE")

    @property
    def is_joker(self) -> bool:
        return self.suit == Suit.JOKER

    def __str__(self) -> str:
        if self.is_joker:
            return "Joker"
        return f"{self.rank.name.title()} of {self.suit.name.title()}"


class Deck:
    """
    A Pul deck:
    - 52 standard cards: 4 suits × ranks 2–Ace
    - 3 Jokers

    The deck holds on to one RNG so a seeded game shuffles reproducibly.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.cards: List[Card] = []
        self.build()

    def build(self) -> None:
        """Reset to a full, unshuffled deck."""
        self.cards = []
        next_id = 0
        for suit in STANDARD_SUITS:
            for rank in Rank:
                self.cards.append(Card(suit, rank, next_id))
                next_id += 1
        for _ in range(NUM_JOKERS):
            self.cards.append(Card(Suit.JOKER, Rank.ACE, next_id))
            next_id += 1

        if len(self.cards) != DECK_SIZE:
            raise RuntimeError(f"Deck must contain exactly {DECK_SIZE} cards")

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Fisher–Yates shuffle in place. Uses the deck's RNG unless given one."""
        rng = rng if rng is not None else self.rng
        cards = self.cards
        for n in range(len(cards) - 1, 0, -1):
            k = rng.randrange(n + 1)
            cards[n], cards[k] = cards[k], cards[n]

    def draw_top(self) -> Card:
        if not self.cards:
            raise EmptyDeck("Cannot draw from an empty deck")
        return self.cards.pop(0)

    def __len__(self) -> int:
        return len(self.cards)
