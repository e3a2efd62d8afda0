# pul_arena/engine.py
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from .agents.base import PulAgent
from .cards import DECK_SIZE, Card, Deck
from .rules import (
    TOTAL_ROUNDS,
    CheatDetected,
    cards_per_round,
    check_eligibility,
    determine_winners,
    update_scores,
    winner_of_trick,
)
from .state import GameState, PlayerState, RoundState, Trick
from .verbose_logger import VerboseGameLogger

logger = logging.getLogger(__name__)


def unique_player_names(names: List[str]) -> List[str]:
    """
    Make repeated names distinct: the first keeps its name, later copies get
    " 1", " 2", ... appended in seating order. Suffixes that are already
    somebody's name are skipped.
    """
    taken = set(names)
    seen = set()
    next_suffix: Dict[str, int] = {}
    result: List[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
            continue
        suffix = next_suffix.get(name, 1)
        while f"{name} {suffix}" in taken:
            suffix += 1
        renamed = f"{name} {suffix}"
        taken.add(renamed)
        next_suffix[name] = suffix + 1
        result.append(renamed)
    return result


class GameEngine:
    """
    Orchestrates a full game of Pul using pluggable agents.

    This module is *pure* game logic: no console, no files beyond the
    optional transcript. Agents just implement the PulAgent protocol.
    """

    def __init__(
        self,
        agents: List[PulAgent],
        player_names: Optional[List[str]] = None,
        rng_seed: Optional[int] = None,
        total_rounds: int = TOTAL_ROUNDS,
        game_label: Optional[str] = None,
        strict_jokers: bool = False,
        verbose_logger: Optional[VerboseGameLogger] = None,
    ) -> None:
        if not 2 <= len(agents) < DECK_SIZE:
            raise ValueError(f"Pul supports 2 to {DECK_SIZE - 1} players")
        if total_rounds < 2:
            raise ValueError("total_rounds must be at least 2")

        self.agents: List[PulAgent] = agents

        if player_names is None:
            player_names = [
                getattr(agent, "name", None) or f"Player {i}"
                for i, agent in enumerate(agents)
            ]
        if len(player_names) != len(agents):
            raise ValueError("player_names must match number of agents")
        player_names = unique_player_names(list(player_names))

        self.rng = random.Random(rng_seed)
        self.deck = Deck(self.rng)
        self.total_rounds = total_rounds
        self.game_label = game_label
        self.strict_jokers = strict_jokers
        self.verbose_logger = verbose_logger

        self.game_state = GameState(
            players=[
                PlayerState(id=i, name=name)
                for i, name in enumerate(player_names)
            ]
        )

    @property
    def player_names(self) -> Dict[int, str]:
        return {p.id: p.name for p in self.game_state.players}

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def play_game(self) -> GameState:
        """Play a full game from scratch and return the final GameState."""
        dealer_id = 0
        for round_index in range(1, self.total_rounds):
            round_state = self._deal(round_index, dealer_id)
            self.game_state.rounds.append(round_state)

            self._bidding_phase(round_state)
            if self.verbose_logger:
                self.verbose_logger.log_round_start(
                    game_id=self.game_label,
                    round_state=round_state,
                    player_names=self.player_names,
                )
            try:
                for _ in range(round_state.cards_per_player):
                    self._play_trick(round_state)
            except CheatDetected as exc:
                logger.error(
                    "Stopping game%s in round %d: %s",
                    f" {self.game_label}" if self.game_label else "",
                    round_index,
                    exc,
                )
                if self.verbose_logger:
                    self.verbose_logger.log_cheat(
                        game_id=self.game_label,
                        round_index=round_index,
                        error=exc,
                    )
                raise
            self._score_round(round_state)
            logger.info(
                "Finished round %d/%d%s",
                round_index,
                self.total_rounds - 1,
                f" for {self.game_label}" if self.game_label else "",
            )

            dealer_id = (dealer_id + 1) % self.game_state.num_players

        self.game_state.winners = determine_winners(self.game_state.scores)
        logger.info(
            "Finished game%s; winner(s): %s",
            f" {self.game_label}" if self.game_label else "",
            ", ".join(self.player_names[pid] for pid in self.game_state.winners),
        )
        if self.verbose_logger:
            self.verbose_logger.log_winners(
                game_id=self.game_label,
                winners=self.game_state.winners,
                scores=self.game_state.scores,
                player_names=self.player_names,
            )
        return self.game_state

    def winners(self) -> List[PlayerState]:
        """Players holding the top score once the game has been played."""
        return [self.game_state.players[pid] for pid in self.game_state.winners]

    # -------------------------------------------------------------------------
    # Round lifecycle
    # -------------------------------------------------------------------------

    def _deal(self, round_index: int, dealer_id: int) -> RoundState:
        num_players = self.game_state.num_players
        cards_per_player = cards_per_round(
            round_index,
            total_rounds=self.total_rounds,
            player_count=num_players,
            deck_size=DECK_SIZE,
        )

        self.deck.build()
        self.deck.shuffle()

        hands: Dict[int, List[Card]] = {pid: [] for pid in range(num_players)}
        for _ in range(cards_per_player):
            for pid in range(num_players):
                hands[pid].append(self.deck.draw_top())
        trump_card = self.deck.draw_top()

        return RoundState(
            round_index=round_index,
            cards_per_player=cards_per_player,
            dealer_id=dealer_id,
            trump_card=trump_card,
            hands=hands,
            tricks_won={pid: 0 for pid in range(num_players)},
        )

    def _bidding_phase(self, round_state: RoundState) -> None:
        """Ask each agent for their bid and store it in the round state."""
        for pid, agent in enumerate(self.agents):
            bid = agent.bid(tuple(round_state.hands[pid]))
            if isinstance(bid, bool) or not isinstance(bid, int):
                raise TypeError(
                    f"Agent {self.player_names[pid]} returned non-int bid {bid!r}"
                )
            round_state.bids[pid] = bid

    def _play_trick(self, round_state: RoundState) -> Trick:
        """Play one trick, led by the dealer, and credit its winner."""
        num_players = self.game_state.num_players
        dealer_id = round_state.dealer_id
        trump_suit = round_state.trump_suit
        trick = Trick()

        for offset in range(num_players):
            pid = (dealer_id + offset) % num_players
            hand = round_state.hands[pid]

            card = self.agents[pid].choose_card(
                tuple(hand),
                tuple(c for _, c in trick.plays),
                trick.led_suit,
                trump_suit,
            )
            result = check_eligibility(
                card,
                trick.led_suit,
                trump_suit,
                hand,
                strict_jokers=self.strict_jokers,
            )
            if not result:
                raise CheatDetected(
                    player_id=pid,
                    player_name=self.player_names[pid],
                    card=card,
                    reason=result.reason,
                )

            hand.remove(card)
            trick.plays.append((pid, card))
            if pid == dealer_id:
                trick.led_suit = card.suit

        trick.winner_id = winner_of_trick(trick, trump_suit)
        winning = dict(trick.plays)[trick.winner_id]
        round_state.tricks.append(trick)
        round_state.tricks_won[trick.winner_id] += 1

        logger.debug(
            "Round %d trick %d won by %s with %s",
            round_state.round_index,
            len(round_state.tricks),
            self.player_names[trick.winner_id],
            winning,
        )
        if self.verbose_logger:
            self.verbose_logger.log_trick(
                trick_number=len(round_state.tricks),
                trick=trick,
                player_names=self.player_names,
            )
        return trick

    def _score_round(self, round_state: RoundState) -> None:
        scores = self.game_state.scores
        deltas = update_scores(scores, round_state.bids, round_state.tricks_won)
        for p in self.game_state.players:
            p.score = scores[p.id]

        if self.verbose_logger:
            self.verbose_logger.log_round_end(
                round_state=round_state,
                deltas=deltas,
                scores=scores,
                player_names=self.player_names,
            )
