"""
Texas Hold'em Game Engine - State Machine Implementation.

This module implements the betting engine for a single table:
- Hand lifecycle (waiting, dealing, preflop, flop, turn, river, showdown)
- Player actions (fold, check, call, bet, raise)
- Blind posting and dealer button rotation
- Round completion and street advancement
- Showdown, pot splitting and chip conservation

The table owns every Player. Drivers read it through snapshot() and change
it only through init_game(), start_new_hand(), player_action() and
next_phase().
"""

from __future__ import annotations
from typing import Callable, List, Dict, Optional, Any, Union
from dataclasses import dataclass
import logging
import random

from pokertable.core.card import Card, Deck
from pokertable.core.errors import InvariantError
from pokertable.core.player import Player
from pokertable.core.hand import evaluate_hand
from pokertable.core.snapshot import SeatSnapshot, TableSnapshot, WinnerEntry, WinnerInfo
from pokertable.core.rules import (
    GamePhase, ActionType, TableConfig,
    BETTING_PHASES, NEXT_STREET, HOLE_CARDS, HAND_SIZE,
    validate_seat_count, get_blind_positions, get_first_to_act_preflop,
    calculate_min_raise,
)


logger = logging.getLogger(__name__)

SnapshotListener = Callable[[TableSnapshot], None]


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


class TexasHoldemGame:
    """
    Texas Hold'em betting engine implementing a state machine.

    Usage:
        game = TexasHoldemGame(TableConfig(small_blind=10, big_blind=20))
        game.init_game(seat_count=4)

        while game.is_hand_running():
            snapshot = game.snapshot()
            action, amount = choose(snapshot)  # From UI or AI
            result = game.player_action(action, amount)

        winners = game.winner_info
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize an empty table.

        Args:
            config: Blinds and starting stack (defaults from rules)
            rng: Random source for shuffling; pass a seeded one for replays
        """
        self.config = config or TableConfig()
        self.small_blind = self.config.small_blind
        self.big_blind = self.config.big_blind
        self.rng = rng if rng is not None else random.Random()

        self.players: List[Player] = []
        self.deck = Deck(rng=self.rng, shuffle=False)
        self.community_cards: List[Card] = []
        self.phase = GamePhase.WAITING
        self.hand_number = 0

        # Position tracking
        self.dealer_index = -1
        self.small_blind_index = -1
        self.big_blind_index = -1
        self.active_player_index = 0

        # Betting state
        self.pot = 0
        self.current_bet = 0  # Table's standing wager this street
        self.last_raiser_index: Optional[int] = None

        self.winner_info: Optional[WinnerInfo] = None

        # In-memory event log of the current hand
        self.hand_history: List[Dict[str, Any]] = []

        self._hand_start_chips = 0
        self._listeners: List[SnapshotListener] = []

    @property
    def num_players(self) -> int:
        """Number of seats at the table."""
        return len(self.players)

    @property
    def num_contenders(self) -> int:
        """Number of players still contending for the pot."""
        return sum(1 for p in self.players if p.is_in_hand)

    @property
    def total_chips(self) -> int:
        """Chips behind, chips wagered this street and the pot."""
        return self.pot + sum(p.chips + p.current_bet for p in self.players)

    def is_hand_running(self) -> bool:
        """Check if a betting street is in progress."""
        return self.phase in BETTING_PHASES

    def is_game_running(self) -> bool:
        """Check if another hand can be dealt (at least 2 seats with chips)."""
        return sum(1 for p in self.players if p.chips > 0) >= 2

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def init_game(self, seat_count: int, player_names: Optional[List[str]] = None) -> bool:
        """
        Seat players with the starting stack and deal the first hand.

        Args:
            seat_count: Number of seats (2-10)
            player_names: Optional display names, one per seat

        Returns:
            True if the first hand started
        """
        validate_seat_count(seat_count)
        if player_names is None:
            player_names = ["You"] + [f"AI {i}" for i in range(1, seat_count)]
        if len(player_names) != seat_count:
            raise ValueError(f"Expected {seat_count} player names, got {len(player_names)}")

        self.players = [
            Player(name=name, chips=self.config.starting_stack, seat=i)
            for i, name in enumerate(player_names)
        ]
        self.phase = GamePhase.WAITING
        self.hand_number = 0
        self.dealer_index = -1
        logger.info(f"Table seated with {seat_count} players, stack {self.config.starting_stack}")

        return self.start_new_hand()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a callback that receives a snapshot after every state change.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start_new_hand(self) -> bool:
        """
        Start a new hand.

        Returns:
            True if hand started successfully, False otherwise
        """
        if self.is_hand_running():
            logger.warning("Cannot start hand: a hand is already in progress")
            return False
        if not self.is_game_running():
            logger.warning("Cannot start hand: not enough players with chips")
            return False

        self.hand_number += 1
        logger.info(f"Starting hand #{self.hand_number}")

        self.phase = GamePhase.DEALING
        self.deck.reset()
        self.community_cards = []
        self.pot = 0
        self.current_bet = 0
        self.last_raiser_index = None
        self.winner_info = None
        self.hand_history = []

        for player in self.players:
            player.reset_for_new_hand()
        self._hand_start_chips = self.total_chips

        seats = self._funded_seats()
        self._move_dealer_button(seats)
        self._post_blinds(seats)
        self._deal_hole_cards(seats)

        self.phase = GamePhase.PREFLOP
        first = get_first_to_act_preflop(seats, self.dealer_index)
        self.active_player_index = self._next_actor(first, include_start=True)

        self._log_action("HAND_START", {
            "hand_number": self.hand_number,
            "dealer": self.dealer_index,
            "small_blind": self.small_blind_index,
            "big_blind": self.big_blind_index,
        })

        # Blinds alone can leave nobody able to bet (short stacks all-in)
        if self._is_betting_round_complete():
            self.next_phase()

        self._notify()
        return True

    def _funded_seats(self) -> List[int]:
        return [i for i, p in enumerate(self.players) if p.chips > 0]

    def _move_dealer_button(self, seats: List[int]) -> None:
        """Move the dealer button to the next seat holding chips."""
        for offset in range(1, self.num_players + 1):
            pos = (self.dealer_index + offset) % self.num_players
            if pos in seats:
                self.dealer_index = pos
                break

        for i, player in enumerate(self.players):
            player.is_dealer = i == self.dealer_index

        self.small_blind_index, self.big_blind_index = get_blind_positions(
            seats, self.dealer_index
        )

    def _post_blinds(self, seats: List[int]) -> None:
        """Post small and big blinds; a short stack posts what it has."""
        sb_player = self.players[self.small_blind_index]
        bb_player = self.players[self.big_blind_index]

        sb_amount = sb_player.bet(self.small_blind)
        sb_player.last_action = f"SB ${sb_amount}"

        bb_amount = bb_player.bet(self.big_blind)
        bb_player.last_action = f"BB ${bb_amount}"

        self.current_bet = self.big_blind
        self.last_raiser_index = self.big_blind_index

        logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    def _deal_hole_cards(self, seats: List[int]) -> None:
        """Deal 2 hole cards to each seat in the hand, one at a time from the small blind."""
        start = seats.index(self.small_blind_index)
        order = seats[start:] + seats[:start]
        dealt: Dict[int, List[Card]] = {seat: [] for seat in order}
        for _ in range(HOLE_CARDS):
            for seat in order:
                dealt[seat].append(self.deck.deal())
        for seat, cards in dealt.items():
            self.players[seat].deal_cards(cards)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def get_current_player(self) -> Optional[SeatSnapshot]:
        """The seat whose turn it is, or None when no one is to act."""
        if not self.is_hand_running():
            return None
        return self._seat_snapshot(self.active_player_index)

    def get_call_amount(self) -> int:
        """Chips the current seat must add to call, capped at its stack."""
        if not self.is_hand_running():
            return 0
        player = self.players[self.active_player_index]
        return min(max(0, self.current_bet - player.current_bet), player.chips)

    def get_min_raise(self) -> int:
        """Minimum street total for a bet or raise."""
        return calculate_min_raise(self.current_bet, self.big_blind)

    def get_player_actions(self) -> List[ActionType]:
        """
        Get the ordered legal actions for the seat to act.

        Facing a wager: CALL, then RAISE if the stack covers more than the
        call. Otherwise CHECK and BET. FOLD always comes last.
        """
        if not self.is_hand_running():
            return []

        player = self.players[self.active_player_index]
        if not player.can_act:
            return []

        actions = []
        if self.current_bet > player.current_bet:
            actions.append(ActionType.CALL)
            if player.chips > self.current_bet - player.current_bet:
                actions.append(ActionType.RAISE)
        else:
            actions.append(ActionType.CHECK)
            actions.append(ActionType.BET)
        actions.append(ActionType.FOLD)
        return actions

    def player_action(
        self,
        action: Union[ActionType, str],
        amount: int = 0,
        seat_index: Optional[int] = None,
    ) -> ActionResult:
        """
        Apply one action for the seat to act.

        Args:
            action: FOLD, CHECK, CALL, BET or RAISE
            amount: Street total to bet/raise to (ignored otherwise); clamped
                to [min raise, all-in]
            seat_index: If given, the action is rejected unless it is this
                seat's turn

        Returns:
            ActionResult; a rejected action leaves the table unchanged
        """
        if not self.is_hand_running():
            return self._reject("No hand in progress")

        if isinstance(action, str):
            try:
                action = ActionType(action.upper())
            except ValueError:
                return self._reject(f"Unknown action: {action}")

        if seat_index is not None and seat_index != self.active_player_index:
            return self._reject(f"Not seat {seat_index}'s turn")

        player = self.players[self.active_player_index]
        if not player.can_act:
            return self._reject(f"{player.name} cannot act")

        if action not in self.get_player_actions():
            return self._reject(f"{action.value} is not a legal action now")

        result = self._execute_action(player, action, amount)

        self._log_action(action.value, {
            "player": player.name,
            "seat": self.active_player_index,
            "amount": result.amount,
        })
        logger.debug(f"{player.name}: {result.message}")

        if self.num_contenders <= 1:
            self._resolve_hand()
            self._notify()
            return result

        player.has_acted = True
        self._advance_to_next_player()
        self._notify()
        return result

    def _reject(self, message: str) -> ActionResult:
        logger.debug(f"Action rejected: {message}")
        return ActionResult(False, message)

    def _execute_action(self, player: Player, action: ActionType, amount: int) -> ActionResult:
        """Execute an action already known to be legal."""
        if action == ActionType.FOLD:
            player.fold()
            return ActionResult(True, "Folded", action, 0)

        if action == ActionType.CHECK:
            player.check()
            return ActionResult(True, "Checked", action, 0)

        if action == ActionType.CALL:
            actual = player.call(self.current_bet - player.current_bet)
            return ActionResult(True, f"Called ${actual}", action, actual)

        # BET / RAISE
        target = max(amount, self.get_min_raise())
        target = min(target, player.current_bet + player.chips)
        actual = player.raise_to(target)

        self.current_bet = player.current_bet
        self.last_raiser_index = self.active_player_index
        self._reset_actions_except_current()

        verb = "Bet" if action == ActionType.BET else "Raised to"
        return ActionResult(True, f"{verb} ${player.current_bet}", action, actual)

    def _reset_actions_except_current(self) -> None:
        """Everyone else who can still act must act again after a bet or raise."""
        for i, player in enumerate(self.players):
            if i != self.active_player_index and player.can_act:
                player.has_acted = False

    def _next_actor(self, start: int, include_start: bool = False) -> Optional[int]:
        """First seat clockwise from `start` that can act."""
        first_offset = 0 if include_start else 1
        for offset in range(first_offset, self.num_players + first_offset):
            pos = (start + offset) % self.num_players
            if self.players[pos].can_act:
                return pos
        return None

    def _advance_to_next_player(self) -> None:
        if self._is_betting_round_complete():
            self.next_phase()
            return
        self.active_player_index = self._next_actor(self.active_player_index)

    def _is_betting_round_complete(self) -> bool:
        """
        Check if the current street is closed.

        Every seat that can still act must have acted and matched the table
        bet. A lone bettor who has matched the table bet has nobody left to
        bet against.
        """
        actors = [p for p in self.players if p.can_act]

        if len(actors) <= 1:
            return all(p.current_bet >= self.current_bet for p in actors)

        return all(p.has_acted and p.current_bet == self.current_bet for p in actors)

    # ------------------------------------------------------------------
    # Streets
    # ------------------------------------------------------------------

    def next_phase(self) -> bool:
        """
        Close the current street and open the next one.

        Sweeps wagers into the pot, resets street state, deals the next
        community cards (with a burn) and hands the action to the first seat
        after the dealer. From the river it resolves the showdown. When fewer
        than two seats can still bet, the board is dealt out and the hand
        goes straight to showdown.

        Returns:
            False if no street is running or betting is still open
        """
        if not self.is_hand_running():
            logger.warning(f"next_phase called in {self.phase.name}")
            return False
        if not self._is_betting_round_complete():
            logger.warning("next_phase called while betting is still open")
            return False

        self._collect_bets_to_pot()
        for player in self.players:
            player.reset_for_new_round()
        self.current_bet = 0
        self.last_raiser_index = None

        if self.phase == GamePhase.RIVER:
            self._resolve_hand()
            return True

        if sum(1 for p in self.players if p.can_act) < 2:
            while self.phase != GamePhase.RIVER:
                self._deal_next_street()
            self._resolve_hand()
            return True

        self._deal_next_street()
        self.active_player_index = self._next_actor(self.dealer_index)
        return True

    def _deal_next_street(self) -> None:
        """Burn one card, then deal the flop, turn or river."""
        next_phase, num_cards = NEXT_STREET[self.phase]
        self.deck.burn()
        new_cards = self.deck.deal_many(num_cards)
        self.community_cards.extend(new_cards)
        self.phase = next_phase
        self._log_action(next_phase.name, {"cards": [str(c) for c in new_cards]})
        logger.debug(f"{next_phase.name}: {' '.join(str(c) for c in self.community_cards)}")

    def _collect_bets_to_pot(self) -> None:
        """Collect all player bets into the pot."""
        for player in self.players:
            if player.current_bet > 0:
                self.pot += player.current_bet
                player.current_bet = 0

    # ------------------------------------------------------------------
    # Showdown
    # ------------------------------------------------------------------

    def _resolve_hand(self) -> None:
        """
        Pay the pot and end the hand.

        A lone contender takes the pot without a comparison (GAME_OVER).
        Otherwise every contender's best hand is evaluated and all hands tied
        at the top split the pot (SHOWDOWN).
        """
        self._collect_bets_to_pot()
        contenders = [i for i, p in enumerate(self.players) if p.is_in_hand]
        pot = self.pot

        if len(contenders) == 1:
            seat = contenders[0]
            winner = self.players[seat]
            if len(winner.hole_cards) + len(self.community_cards) >= HAND_SIZE:
                winner.hand = evaluate_hand(winner.hole_cards, self.community_cards)
            payouts = {seat: pot}
            self.phase = GamePhase.GAME_OVER
        else:
            for seat in contenders:
                player = self.players[seat]
                player.hand = evaluate_hand(player.hole_cards, self.community_cards)
            best_key = max(self.players[seat].hand.key for seat in contenders)
            tied = [seat for seat in contenders if self.players[seat].hand.key == best_key]
            payouts = self._split_pot(pot, tied)
            self.phase = GamePhase.SHOWDOWN

        for seat, amount in payouts.items():
            self.players[seat].chips += amount
        self.pot = 0
        self._check_chip_conservation()

        self.winner_info = WinnerInfo(
            winners=tuple(
                WinnerEntry(
                    seat_index=seat,
                    name=self.players[seat].name,
                    amount_won=amount,
                    hand=self.players[seat].hand,
                )
                for seat, amount in payouts.items()
            ),
            pot=pot,
            showdown=self.phase == GamePhase.SHOWDOWN,
        )

        self._log_action(self.phase.name, {"winners": [w.to_dict() for w in self.winner_info.winners]})
        for entry in self.winner_info.winners:
            label = f" with {entry.hand.description}" if entry.hand else ""
            logger.info(f"Hand #{self.hand_number}: {entry.name} wins ${entry.amount_won}{label}")

    def _split_pot(self, pot: int, winners: List[int]) -> Dict[int, int]:
        """
        Split the pot evenly among tied winners.

        Odd chips go one at a time to the winners closest to the left of the
        dealer button.
        """
        share, remainder = divmod(pot, len(winners))
        payouts = {seat: share for seat in winners}

        for offset in range(1, self.num_players + 1):
            if remainder == 0:
                break
            pos = (self.dealer_index + offset) % self.num_players
            if pos in payouts:
                payouts[pos] += 1
                remainder -= 1

        return payouts

    def _check_chip_conservation(self) -> None:
        if self.total_chips != self._hand_start_chips:
            raise InvariantError(
                f"Chip total changed during hand #{self.hand_number}: "
                f"{self._hand_start_chips} -> {self.total_chips}"
            )

    # ------------------------------------------------------------------
    # State views
    # ------------------------------------------------------------------

    def _seat_snapshot(self, index: int) -> SeatSnapshot:
        player = self.players[index]
        return SeatSnapshot(
            seat_index=index,
            name=player.name,
            chips=player.chips,
            hole_cards=tuple(player.hole_cards),
            current_bet=player.current_bet,
            is_folded=player.is_folded,
            is_all_in=player.is_all_in,
            is_dealer=player.is_dealer,
            has_acted=player.has_acted,
            last_action=player.last_action,
        )

    def snapshot(self) -> TableSnapshot:
        """Get a read-only copy of the table state."""
        running = self.is_hand_running()
        return TableSnapshot(
            phase=self.phase,
            hand_number=self.hand_number,
            pot=self.pot,
            current_bet=self.current_bet,
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            community_cards=tuple(self.community_cards),
            active_player_index=self.active_player_index if running else None,
            dealer_index=self.dealer_index,
            players=tuple(self._seat_snapshot(i) for i in range(self.num_players)),
            available_actions=tuple(self.get_player_actions()),
            winner_info=self.winner_info,
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "phase": self.phase.name,
            **details
        })
