"""Video poker game engine with state machine."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Any, Callable

from transitions import Machine

from config import config
from core.cards import Card, Deck
from core.errors import IllegalTransition, InvalidBet
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import GameState
from core.hand import HAND_SIZE, HandCategory, classify
from core.paytable import MAX_BET, MIN_BET, payout, validate_bet
from logging_utils import get_logger

log = get_logger(__name__)

GAME_OVER_MESSAGE = "Game Over"
NO_WIN_MESSAGE = "No Win"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the session after a transition."""

    hand: tuple[Card, ...]
    held: tuple[bool, ...]
    credits: int
    bet: int
    message: str
    state: GameState
    last_category: HandCategory | None = None
    last_payout: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Plain-data form for UIs and logs."""
        return {
            "hand": [str(card) for card in self.hand],
            "held": list(self.held),
            "credits": self.credits,
            "bet": self.bet,
            "message": self.message,
            "state": self.state.value,
            "last_category": self.last_category.value if self.last_category else None,
            "last_payout": self.last_payout,
        }


class PlayerAction(Enum):
    """Actions the presentation layer can send to the engine."""

    DEAL = "deal"
    TOGGLE_HOLD = "toggle_hold"
    DRAW = "draw"
    RESET = "reset"
    SET_BET = "set_bet"
    BET_ONE = "bet_one"
    MAX_BET_AND_DEAL = "max_bet_and_deal"


class VideoPokerGame:
    """
    Jacks or Better game engine using a state machine.

    This is the core game logic, completely UI-agnostic.
    Communication happens through events and snapshots only.
    Every action runs to completion or raises before changing anything.
    """

    # State machine states
    STATES = [s.value for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "start_round", "source": "ready", "dest": "dealt"},
        {"trigger": "run_out_of_credits", "source": "ready", "dest": "gameover"},
        {"trigger": "hold_changed", "source": "dealt", "dest": "dealt"},
        {"trigger": "settle", "source": "dealt", "dest": "settled"},
        {
            "trigger": "finish_round",
            "source": "settled",
            "dest": "gameover",
            "conditions": "is_broke",
        },
        {"trigger": "finish_round", "source": "settled", "dest": "ready"},
        {"trigger": "restart", "source": "gameover", "dest": "ready"},
    ]

    def __init__(
        self,
        starting_credits: int | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new session.

        Args:
            starting_credits: Credits at start and after reset (defaults to config)
            rng: Random number generator for reproducible games
        """
        if starting_credits is None:
            starting_credits = config.game.starting_credits
        if starting_credits < 1:
            raise ValueError("starting_credits must be at least 1")

        self.starting_credits = starting_credits
        self.deck = Deck(rng=rng)
        self.events = EventEmitter()

        self.credits = starting_credits
        self.bet = MIN_BET
        self.hand: list[Card] = []
        self.held: list[bool] = [False] * HAND_SIZE
        self.message = ""
        self.last_category: HandCategory | None = None
        self.last_payout = 0

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=GameState.READY.value,
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_emit_state_change",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState(self._machine_state)  # type: ignore[attr-defined]

    def is_broke(self) -> bool:
        """No credits left."""
        return self.credits == 0

    def _emit_state_change(self) -> None:
        self.events.emit_new(EventType.STATE_CHANGED, state=self.state.value)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def snapshot(self) -> Snapshot:
        """Return a read-only snapshot of the current session."""
        return Snapshot(
            hand=tuple(self.hand),
            held=tuple(self.held),
            credits=self.credits,
            bet=self.bet,
            message=self.message,
            state=self.state,
            last_category=self.last_category,
            last_payout=self.last_payout,
        )

    def _require(self, action: str, *states: GameState) -> None:
        """Reject `action` unless the machine is in one of `states`."""
        if self.state in states:
            return
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=f"Cannot {action} in current state",
            action=action,
            state=self.state.value,
        )
        log.warning("Rejected %s in state %s", action, self.state.value)
        raise IllegalTransition(action, self.state.value)

    # Betting

    def set_bet(self, amount: int) -> Snapshot:
        """
        Set the bet for the next deal.

        Raises:
            InvalidBet: If amount is outside 1..5 or exceeds credits
        """
        self._require("change bet", GameState.READY)
        validate_bet(amount)
        if amount > self.credits:
            raise InvalidBet(f"Bet of {amount} exceeds available credits ({self.credits})")

        self.bet = amount
        self.events.emit_new(EventType.BET_CHANGED, amount=amount)
        return self.snapshot()

    def bet_one(self) -> Snapshot:
        """Raise the bet by one coin, wrapping to 1 past 5 or past available credits."""
        self._require("change bet", GameState.READY)
        if self.bet >= MAX_BET or self.bet >= self.credits:
            self.bet = MIN_BET
        else:
            self.bet += 1

        self.events.emit_new(EventType.BET_CHANGED, amount=self.bet)
        return self.snapshot()

    def max_bet_and_deal(self) -> Snapshot:
        """Bet as many coins as allowed (up to 5) and deal immediately."""
        self._require("max bet", GameState.READY)
        if self.credits <= 0:
            raise InvalidBet("No credits left to bet")

        self.bet = min(MAX_BET, self.credits)
        self.events.emit_new(EventType.BET_CHANGED, amount=self.bet)
        return self.deal()

    # Round flow

    def deal(self, bet: int | None = None) -> Snapshot:
        """
        Debit the bet and deal five fresh cards.

        Insufficient credits is not an error: the session moves to
        game over with a message and credits are left untouched.

        Args:
            bet: Coins to wager (defaults to the current bet)

        Raises:
            IllegalTransition: If not ready for a deal
            InvalidBet: If bet is outside 1..5
        """
        self._require("deal", GameState.READY)
        amount = validate_bet(self.bet if bet is None else bet)

        if self.credits < amount:
            self.message = GAME_OVER_MESSAGE
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                required=amount,
                available=self.credits,
            )
            self.run_out_of_credits()
            self.events.emit_new(EventType.GAME_OVER, reason="insufficient_credits")
            log.info("Game over: bet %d exceeds %d credits", amount, self.credits)
            return self.snapshot()

        self.bet = amount
        self.credits -= amount
        self.deck.reset()
        self.hand = self.deck.deal(HAND_SIZE)
        self.held = [False] * HAND_SIZE
        self.message = ""
        self.last_category = None
        self.last_payout = 0

        self.events.emit_new(EventType.BET_PLACED, amount=amount, credits=self.credits)
        self.start_round()  # Trigger state transition
        self.events.emit_new(EventType.HAND_DEALT, cards=[str(c) for c in self.hand])
        log.debug("Dealt %s for %d", " ".join(str(c) for c in self.hand), amount)
        return self.snapshot()

    def toggle_hold(self, index: int) -> Snapshot:
        """
        Flip the hold flag of the card at `index` (0-4).

        Raises:
            IllegalTransition: If no hand is awaiting the draw
            IndexError: If index is outside 0..4
        """
        self._require("toggle hold", GameState.DEALT)
        if not 0 <= index < HAND_SIZE:
            raise IndexError(f"Hold index must be between 0 and {HAND_SIZE - 1}, got {index}")

        self.held[index] = not self.held[index]
        self.events.emit_new(EventType.HOLD_TOGGLED, index=index, held=self.held[index])
        self.hold_changed()
        return self.snapshot()

    def draw(self) -> Snapshot:
        """Replace unheld cards, evaluate the hand and pay out."""
        self._require("draw", GameState.DEALT)

        replaced = []
        for i, is_held in enumerate(self.held):
            if not is_held:
                self.hand[i] = self.deck.draw()
                replaced.append(i)

        self.events.emit_new(
            EventType.CARDS_DRAWN,
            replaced=replaced,
            cards=[str(c) for c in self.hand],
        )
        return self._settle_round()

    def _settle_round(self) -> Snapshot:
        """Classify the final hand, credit the payout and close the round."""
        category = classify(self.hand)
        won = payout(category, self.bet)
        self.credits += won
        self.last_category = category
        self.last_payout = won

        if won > 0:
            self.message = f"{category}! +{won}"
            self.events.emit_new(EventType.HAND_WON, category=category.value, payout=won)
        else:
            self.message = NO_WIN_MESSAGE
            self.events.emit_new(EventType.HAND_LOST, category=category.value, bet=self.bet)

        self.settle()
        self.events.emit_new(
            EventType.ROUND_SETTLED,
            category=category.value,
            payout=won,
            credits=self.credits,
        )
        log.debug("Settled %s: +%d, credits %d", category, won, self.credits)

        self.finish_round()
        if self.state == GameState.GAME_OVER:
            self.message = GAME_OVER_MESSAGE
            self.events.emit_new(EventType.GAME_OVER, reason="out_of_credits")
            log.info("Game over: out of credits")
        return self.snapshot()

    def reset(self) -> Snapshot:
        """Start a new session after game over."""
        self._require("reset", GameState.GAME_OVER)

        self.credits = self.starting_credits
        self.bet = MIN_BET
        self.hand = []
        self.held = [False] * HAND_SIZE
        self.message = ""
        self.last_category = None
        self.last_payout = 0

        self.restart()
        self.events.emit_new(EventType.SESSION_RESET, credits=self.credits)
        log.info("Session reset to %d credits", self.credits)
        return self.snapshot()

    def apply(self, action: PlayerAction | str, *args: Any) -> Snapshot:
        """
        Dispatch a player action and return the resulting snapshot.

        Args:
            action: Action to run (enum member or its value)
            *args: Action arguments (bet amount, hold index)
        """
        handlers: dict[PlayerAction, Callable[..., Snapshot]] = {
            PlayerAction.DEAL: self.deal,
            PlayerAction.TOGGLE_HOLD: self.toggle_hold,
            PlayerAction.DRAW: self.draw,
            PlayerAction.RESET: self.reset,
            PlayerAction.SET_BET: self.set_bet,
            PlayerAction.BET_ONE: self.bet_one,
            PlayerAction.MAX_BET_AND_DEAL: self.max_bet_and_deal,
        }
        return handlers[PlayerAction(action)](*args)

    # Button state

    @property
    def can_deal(self) -> bool:
        """Check if dealing is allowed."""
        return self.state == GameState.READY

    @property
    def can_draw(self) -> bool:
        """Check if drawing is allowed."""
        return self.state == GameState.DEALT

    @property
    def can_hold(self) -> bool:
        """Check if holds may be toggled."""
        return self.state == GameState.DEALT

    @property
    def can_change_bet(self) -> bool:
        """Check if the bet may be changed."""
        return self.state == GameState.READY

    @property
    def can_max_bet(self) -> bool:
        """Check if max bet is available."""
        return self.state == GameState.READY and self.credits > 0

    @property
    def primary_action(self) -> PlayerAction:
        """Action run by the main button in the current state."""
        if self.state == GameState.DEALT:
            return PlayerAction.DRAW
        if self.state == GameState.GAME_OVER:
            return PlayerAction.RESET
        return PlayerAction.DEAL

    @property
    def primary_label(self) -> str:
        """Label for the main button."""
        return {
            PlayerAction.DEAL: "Deal",
            PlayerAction.DRAW: "Draw",
            PlayerAction.RESET: "Try Again",
        }[self.primary_action]
