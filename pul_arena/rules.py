# pul_arena/rules.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Sequence
import enum

from .cards import DECK_SIZE, Card, Suit
from .state import Trick

TOTAL_ROUNDS = 20
ROUND_SIZE_PEAK = 10
EXACT_BID_BONUS = 10

_TIER_OFF_SUIT = 0
_TIER_LED = 1
_TIER_TRUMP = 2
_TIER_JOKER = 3


class IneligibleReason(enum.Enum):
    CARD_NOT_ON_HAND = "card_not_on_hand"
    CARD_NOT_LED_SUIT = "card_not_led_suit"
    CARD_NOT_TRUMP_SUIT = "card_not_trump_suit"


class CheatDetected(Exception):
    """An agent tried to play a card the rules do not allow. Ends the game."""

    def __init__(
        self,
        player_id: int,
        player_name: str,
        card: Any,
        reason: IneligibleReason,
    ) -> None:
        self.player_id = player_id
        self.player_name = player_name
        self.card = card
        self.reason = reason
        super().__init__(
            f"Player {player_name} tried to cheat with {card}: {reason.name}"
        )


@dataclass(frozen=True)
class Eligibility:
    """Outcome of an eligibility check. Truthy when the card may be played."""

    reason: Optional[IneligibleReason] = None

    @property
    def eligible(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.eligible


ELIGIBLE = Eligibility()


def _is_real_suit(suit: Optional[Suit]) -> bool:
    """JOKER (and None) mark 'no suit'; they never have to be followed."""
    return suit is not None and suit != Suit.JOKER


def cards_per_round(
    round_index: int,
    total_rounds: int = TOTAL_ROUNDS,
    *,
    player_count: int = 1,
    deck_size: int = DECK_SIZE,
) -> int:
    """
    Number of cards each player is dealt in round `round_index` (1-based).

    Hand size rises with the round number up to ROUND_SIZE_PEAK, then falls
    as `1 + total_rounds - round_index`. When the deal would leave no card
    for trump, the count drops to the largest value with
    `player_count * count < deck_size`.
    """
    if player_count < 1:
        raise ValueError("player_count must be at least 1")
    if not 1 <= round_index < total_rounds:
        raise ValueError(
            f"round_index must be between 1 and {total_rounds - 1}, got {round_index}"
        )

    if round_index > ROUND_SIZE_PEAK:
        count = 1 + total_rounds - round_index
    else:
        count = round_index

    if player_count * count >= deck_size:
        count = (deck_size - 1) // player_count
    if count < 1:
        raise ValueError(
            f"Cannot deal to {player_count} players from {deck_size} cards"
        )
    return count


def check_eligibility(
    card: Card,
    led_suit: Optional[Suit],
    trump_suit: Optional[Suit],
    hand: Sequence[Card],
    strict_jokers: bool = False,
) -> Eligibility:
    """
    Decide whether `card` may be played from `hand`.

    Checks, first failure wins:
    1. The card must be in the hand.
    2. With a led suit established, an off-suit card is only allowed when
       the hand holds no card of the led suit.
    3. When escaping the led suit, a non-trump card is only allowed when the
       hand holds no trump.

    Jokers skip checks 2 and 3 unless `strict_jokers` is set, in which case
    they are treated like any other off-suit card.
    """
    if card not in hand:
        return Eligibility(IneligibleReason.CARD_NOT_ON_HAND)

    if not _is_real_suit(led_suit) or card.suit == led_suit:
        return ELIGIBLE
    if card.is_joker and not strict_jokers:
        return ELIGIBLE

    if any(c.suit == led_suit for c in hand):
        return Eligibility(IneligibleReason.CARD_NOT_LED_SUIT)

    if not _is_real_suit(trump_suit) or card.suit == trump_suit:
        return ELIGIBLE
    if any(c.suit == trump_suit for c in hand):
        return Eligibility(IneligibleReason.CARD_NOT_TRUMP_SUIT)

    return ELIGIBLE


def is_eligible(
    card: Card,
    led_suit: Optional[Suit],
    trump_suit: Optional[Suit],
    hand: Sequence[Card],
    strict_jokers: bool = False,
) -> bool:
    return check_eligibility(card, led_suit, trump_suit, hand, strict_jokers).eligible


def legal_cards(
    hand: Sequence[Card],
    led_suit: Optional[Suit],
    trump_suit: Optional[Suit],
    strict_jokers: bool = False,
) -> List[Card]:
    """Return the cards of `hand` that may be played, in hand order."""
    return [
        c for c in hand
        if is_eligible(c, led_suit, trump_suit, hand, strict_jokers)
    ]


def _tier(card: Card, led_suit: Optional[Suit], trump_suit: Optional[Suit]) -> int:
    if card.is_joker:
        return _TIER_JOKER
    if _is_real_suit(trump_suit) and card.suit == trump_suit:
        return _TIER_TRUMP
    if _is_real_suit(led_suit) and card.suit == led_suit:
        return _TIER_LED
    return _TIER_OFF_SUIT


def best_card(
    played_cards: Sequence[Card],
    led_suit: Optional[Suit],
    trump_suit: Optional[Suit],
) -> Card:
    """
    Return the winning card of a trick.

    Priority:
    1. Jokers; the last joker played wins.
    2. Highest card of trump suit.
    3. Highest card of led suit.
    4. Highest rank among the rest.
    """
    if not played_cards:
        raise ValueError("Cannot determine the best card of an empty trick")

    best = played_cards[0]
    best_tier = _tier(best, led_suit, trump_suit)
    for card in played_cards[1:]:
        tier = _tier(card, led_suit, trump_suit)
        if tier == _TIER_JOKER or tier > best_tier or (
            tier == best_tier and card.rank > best.rank
        ):
            best, best_tier = card, tier
    return best


def winner_of_trick(trick: Trick, trump_suit: Optional[Suit]) -> int:
    """Player id owning the best card of a completed trick."""
    if not trick.plays:
        raise ValueError("Cannot determine winner of an empty trick")

    winning = best_card([card for _, card in trick.plays], trick.led_suit, trump_suit)
    for player_id, card in trick.plays:
        if card == winning:
            return player_id

    # best_card only returns cards from the trick
    raise RuntimeError("Failed to determine trick winner")


def score_round(bids: Mapping[int, int], tricks_won: Mapping[int, int]) -> Dict[int, int]:
    """
    Score a round according to Pul scoring:

    For each player:
    - If tricks_won == bid: tricks_won + 10
    - Else: 0 (missed bids cost nothing)
    """
    deltas: Dict[int, int] = {}
    for pid, won in tricks_won.items():
        if pid not in bids:
            raise ValueError(f"No bid recorded for player {pid}")
        deltas[pid] = won + EXACT_BID_BONUS if won == bids[pid] else 0
    return deltas


def update_scores(
    scores: MutableMapping[int, int],
    bids: Mapping[int, int],
    tricks_won: Mapping[int, int],
) -> Dict[int, int]:
    """Add this round's deltas into cumulative `scores` and return the deltas."""
    deltas = score_round(bids, tricks_won)
    for pid, delta in deltas.items():
        scores[pid] = scores.get(pid, 0) + delta
    return deltas


def determine_winners(scores: Mapping[int, int]) -> List[int]:
    """Every player holding the top score, in mapping order. Ties keep all."""
    if not scores:
        return []
    top = max(scores.values())
    return [pid for pid, score in scores.items() if score == top]
