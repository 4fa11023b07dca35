"""
Base Agent Interface for pokertable.

An agent sits in one seat, watches table snapshots and picks an action
when it is that seat's turn. Drivers (the local server, tests, bot
harnesses) own the loop; agents never touch the engine's players.

Usage:
    class MyAgent(BaseAgent):
        def observe(self, snapshot):
            pass

        def act(self, snapshot):
            return Decision(ActionType.CALL)
"""

from abc import ABC, abstractmethod
from typing import Optional

from pokertable.agents.policy import Decision
from pokertable.core.game import ActionResult, TexasHoldemGame
from pokertable.core.snapshot import TableSnapshot, WinnerInfo


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        seat_index: Seat this agent plays
        name: Human-readable name
    """

    def __init__(self, seat_index: int, name: Optional[str] = None):
        """
        Initialize the agent.

        Args:
            seat_index: Seat this agent plays
            name: Optional human-readable name
        """
        self.seat_index = seat_index
        self.name = name or f"Agent-{seat_index}"

    @abstractmethod
    def observe(self, snapshot: TableSnapshot) -> None:
        """
        Observe the current table state.

        Called whenever the table changes, so the agent can update any
        internal state.
        """
        pass

    @abstractmethod
    def act(self, snapshot: TableSnapshot) -> Decision:
        """
        Choose an action for this seat.

        Args:
            snapshot: Current table state; snapshot.available_actions lists
                the legal actions

        Returns:
            Decision with one of the available actions
        """
        pass

    def reset(self) -> None:
        """
        Reset the agent's internal state for a new game.

        Override this method if your agent keeps state between hands.
        """
        pass

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""
        pass

    def on_hand_end(self, result: WinnerInfo) -> None:
        """Called when a hand ends, with the winners and pot."""
        pass

    def take_turn(self, game: TexasHoldemGame) -> ActionResult:
        """
        Convenience method that observes, decides and applies the action.

        Returns:
            The engine's ActionResult (rejected if it is not this seat's turn)
        """
        snapshot = game.snapshot()
        self.observe(snapshot)
        decision = self.act(snapshot)
        return game.player_action(decision.action, decision.amount, seat_index=self.seat_index)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.seat_index}, {self.name})"


class HumanAgent(BaseAgent):
    """
    Placeholder agent for human players.

    This agent doesn't make decisions automatically - it's used
    to mark a seat as controlled by a human player.
    """

    def __init__(self, seat_index: int, name: Optional[str] = None):
        super().__init__(seat_index, name or f"Human-{seat_index}")

    def observe(self, snapshot: TableSnapshot) -> None:
        """Human observation is handled by the UI."""
        pass

    def act(self, snapshot: TableSnapshot) -> Decision:
        """
        Human action is provided externally.

        This method should not be called directly - human actions
        come through the API.
        """
        raise NotImplementedError("Human actions should come through the API")
