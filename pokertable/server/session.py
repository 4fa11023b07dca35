"""
A local table session: one engine, one human seat, AI agents in the rest.

The session is the driver loop. After the human acts (or a hand starts) it
lets the AI seats take their turns until the human must act or the hand is
over.
"""

from typing import Any, Dict, List, Optional
import logging
import random

from pokertable.agents import HumanAgent, Personality, PolicyAgent
from pokertable.agents.base import BaseAgent
from pokertable.core.game import TexasHoldemGame
from pokertable.core.rules import ActionType, TableConfig
from pokertable.core.snapshot import TableSnapshot


logger = logging.getLogger(__name__)

HUMAN_SEAT = 0

PERSONALITY_ROTATION = (
    Personality.tight_aggressive,
    Personality.loose_aggressive,
    Personality.tight_passive,
    Personality.loose_passive,
    Personality.unpredictable,
)


class TableSession:
    """
    One table played locally by a human against AI seats.

    Attributes:
        game: The engine
        agents: Agent per seat; the human seat holds a HumanAgent marker
        human_seat: Seat index controlled through the API
    """

    def __init__(
        self,
        seat_count: int,
        config: Optional[TableConfig] = None,
        seed: Optional[int] = None,
    ):
        self.rng = random.Random(seed)
        self.game = TexasHoldemGame(config=config, rng=self.rng)
        self.human_seat = HUMAN_SEAT
        self.seat_count = seat_count
        self.agents: Dict[int, BaseAgent] = {}

        for seat in range(seat_count):
            if seat == self.human_seat:
                self.agents[seat] = HumanAgent(seat, name="You")
            else:
                personality = PERSONALITY_ROTATION[(seat - 1) % len(PERSONALITY_ROTATION)]()
                self.agents[seat] = PolicyAgent(seat, personality, rng=self.rng, name=f"AI {seat}")

    @property
    def player_names(self) -> List[str]:
        return [self.agents[seat].name for seat in range(self.seat_count)]

    def start(self) -> bool:
        """Seat the players and deal the first hand."""
        started = self.game.init_game(self.seat_count, self.player_names)
        if started:
            self._hand_started()
        return started

    def start_hand(self) -> bool:
        """Deal the next hand; False if one is running or the table is finished."""
        started = self.game.start_new_hand()
        if started:
            self._hand_started()
        return started

    def _hand_started(self) -> None:
        for agent in self.agents.values():
            agent.on_hand_start(self.game.hand_number)
        self.play_bots()

    def is_human_turn(self) -> bool:
        active = self.snapshot().active_player
        return active is not None and active.seat_index == self.human_seat

    def play_bots(self) -> int:
        """
        Let AI seats act until the human must act or the hand ends.

        Returns:
            Number of bot actions applied
        """
        actions = 0
        while self.game.is_hand_running() and not self.is_human_turn():
            agent = self.agents[self.game.active_player_index]
            result = agent.take_turn(self.game)
            if not result.success:
                # A legal decision is always chosen, so this means a stuck table
                logger.error(f"{agent.name} action rejected: {result.message}")
                break
            actions += 1

        snapshot = self.snapshot()
        if snapshot.is_hand_over and snapshot.winner_info is not None:
            for agent in self.agents.values():
                agent.on_hand_end(snapshot.winner_info)
        return actions

    def snapshot(self) -> TableSnapshot:
        return self.game.snapshot()

    def state(self) -> Dict[str, Any]:
        """Table state with other seats' hole cards hidden until showdown."""
        state = self.snapshot().to_dict(for_seat=self.human_seat)
        state["human_seat"] = self.human_seat
        return state

    def legal_actions(self) -> List[Dict[str, Any]]:
        """Legal actions for the human seat with call amounts and bet ranges."""
        if not self.is_human_turn():
            return []

        game = self.game
        player = game.players[self.human_seat]
        all_in_total = player.current_bet + player.chips
        actions = []
        for action in game.get_player_actions():
            entry: Dict[str, Any] = {"type": action.value}
            if action == ActionType.CALL:
                entry["amount"] = game.get_call_amount()
            elif action in (ActionType.BET, ActionType.RAISE):
                entry["min"] = min(game.get_min_raise(), all_in_total)
                entry["max"] = all_in_total
            actions.append(entry)
        return actions
