"""
Policy-driven agents.

PolicyAgent plays a seat with the heuristic policy and a personality.
CallAgent always checks or calls and is useful as a baseline in tests.
"""

from collections import deque
from typing import Deque, Optional
import random

from pokertable.agents.base import BaseAgent
from pokertable.agents.policy import Decision, Personality, decide
from pokertable.core.rules import ActionType
from pokertable.core.snapshot import TableSnapshot


class PolicyAgent(BaseAgent):
    """
    An agent that decides with the heuristic policy.

    Attributes:
        personality: Playing style fed to the policy
        recent_decisions: The last few decisions, newest last
    """

    HISTORY_SIZE = 5

    def __init__(
        self,
        seat_index: int,
        personality: Optional[Personality] = None,
        rng: Optional[random.Random] = None,
        name: Optional[str] = None,
    ):
        """
        Initialize the policy agent.

        Args:
            seat_index: Seat this agent plays
            personality: Playing style (defaults to unpredictable)
            rng: Random source for the policy's rolls
            name: Optional name
        """
        self.personality = personality or Personality.unpredictable()
        super().__init__(seat_index, name or f"{self.personality.name}-{seat_index}")
        self.rng = rng if rng is not None else random.Random()
        self.recent_decisions: Deque[Decision] = deque(maxlen=self.HISTORY_SIZE)

    def observe(self, snapshot: TableSnapshot) -> None:
        """The policy reads everything it needs from the snapshot passed to act()."""
        pass

    def act(self, snapshot: TableSnapshot) -> Decision:
        decision = decide(snapshot, self.seat_index, self.personality, self.rng)
        self.recent_decisions.append(decision)
        return decision

    def reset(self) -> None:
        self.recent_decisions.clear()


class CallAgent(BaseAgent):
    """
    An agent that always checks or calls.

    Useful for testing and as a simple baseline.
    """

    def __init__(self, seat_index: int, name: Optional[str] = None):
        super().__init__(seat_index, name or f"Caller-{seat_index}")

    def observe(self, snapshot: TableSnapshot) -> None:
        pass

    def act(self, snapshot: TableSnapshot) -> Decision:
        """Check if possible, otherwise call, otherwise fold."""
        if ActionType.CHECK in snapshot.available_actions:
            return Decision(ActionType.CHECK)

        if ActionType.CALL in snapshot.available_actions:
            seat = snapshot.players[self.seat_index]
            return Decision(ActionType.CALL, min(snapshot.call_amount_for(self.seat_index), seat.chips))

        return Decision(ActionType.FOLD)
