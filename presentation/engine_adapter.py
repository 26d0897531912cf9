"""Adapter connecting the core video poker engine to a UI layer."""

from dataclasses import dataclass
from random import Random
from typing import Callable, Optional

from config import DisplayConfig, config
from core.cards import Card, Rank, Suit
from core.game.engine import Snapshot, VideoPokerGame
from core.game.events import EventType, GameEvent
from core.game.state import GameState
from core.paytable import pay_table_rows
from logging_utils import get_logger

log = get_logger(__name__)

CARD_BACK = "card_back"

# Map core Suit to UI suit names
SUIT_MAP = {
    Suit.SPADES: "spades",
    Suit.HEARTS: "hearts",
    Suit.DIAMONDS: "diamonds",
    Suit.CLUBS: "clubs",
}

# Map core Rank to UI value strings
RANK_MAP = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}


@dataclass
class UICardInfo:
    """Card information for the UI layer."""

    value: str  # "A", "10", "K", etc.
    suit: str   # "hearts", "diamonds", "clubs", "spades"
    face_up: bool = True
    held: bool = False
    face_name: str = ""  # e.g. "ten_of_spades"

    @classmethod
    def from_core_card(
        cls, card: Card, face_up: bool = True, held: bool = False
    ) -> "UICardInfo":
        """Create UICardInfo from a core Card."""
        return cls(
            value=RANK_MAP[card.rank],
            suit=SUIT_MAP[card.suit],
            face_up=face_up,
            held=held,
            face_name=card.resource_name,
        )

    @property
    def resource_name(self) -> str:
        """Image to draw: the card face, or the card back while hidden."""
        return self.face_name if self.face_up else CARD_BACK


@dataclass(frozen=True)
class PayTableRow:
    """One pay table line, with the active bet column marked."""

    name: str
    payouts: tuple[int, ...]
    active_column: int  # 0-based index of the current bet


@dataclass
class TableSnapshot:
    """Snapshot of the table for UI rendering."""

    state: GameState
    cards: list[UICardInfo]
    credits: int
    bet: int
    message: str
    show_card_fronts: bool
    pay_table: list[PayTableRow]
    primary_label: str
    muted: bool
    can_hold: bool
    can_change_bet: bool
    can_max_bet: bool


class RevealTimer:
    """
    One-shot, cancelable delay driven by frame time.

    Only flips a display flag; it never touches game state.
    """

    def __init__(self, delay: float, on_fire: Callable[[], None]) -> None:
        self.delay = delay
        self._on_fire = on_fire
        self._elapsed = 0.0
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def start(self) -> None:
        """(Re)start the countdown."""
        self._elapsed = 0.0
        self._pending = True
        if self.delay <= 0:
            self._fire()

    def cancel(self) -> None:
        self._pending = False

    def update(self, dt: float) -> bool:
        """Advance by `dt` seconds. Returns True if the timer fired."""
        if not self._pending:
            return False
        self._elapsed += dt
        if self._elapsed >= self.delay:
            self._fire()
            return True
        return False

    def _fire(self) -> None:
        self._pending = False
        self._on_fire()


class EngineAdapter:
    """Adapter between the core VideoPokerGame and a UI.

    Subscribes to engine events and translates them to UI callbacks.
    Owns the cosmetic card-reveal delay and the mute flag.
    """

    def __init__(
        self,
        game: VideoPokerGame | None = None,
        display: DisplayConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            game: Engine to drive (a new one is created if not provided)
            display: Display settings (defaults to global config)
            rng: Random number generator for a newly created engine
        """
        self.display = display or config.display
        self.game = game or VideoPokerGame(rng=rng)
        self.muted = self.display.muted
        self.show_card_fronts = True
        self._reveal = RevealTimer(self.display.reveal_delay, self._reveal_cards)
        self._last_state = self.game.state

        # UI callbacks
        self._on_win: Optional[Callable[[str, int], None]] = None
        self._on_state_change: Optional[Callable[[GameState], None]] = None
        self._on_invalid_action: Optional[Callable[[str], None]] = None
        self._on_reveal: Optional[Callable[[], None]] = None

        self.game.subscribe(self._handle_event)

    def set_callbacks(
        self,
        on_win: Optional[Callable[[str, int], None]] = None,
        on_state_change: Optional[Callable[[GameState], None]] = None,
        on_invalid_action: Optional[Callable[[str], None]] = None,
        on_reveal: Optional[Callable[[], None]] = None,
    ) -> None:
        """Set UI callback functions.

        Args:
            on_win: Called on a paying hand unless muted (category, payout)
            on_state_change: Called when game state changes
            on_invalid_action: Called on a rejected action (message)
            on_reveal: Called when dealt cards turn face up
        """
        self._on_win = on_win
        self._on_state_change = on_state_change
        self._on_invalid_action = on_invalid_action
        self._on_reveal = on_reveal

    def _handle_event(self, event: GameEvent) -> None:
        """Handle events from the core engine."""
        etype = event.event_type
        data = event.data

        if etype == EventType.HAND_DEALT:
            self.show_card_fronts = False
            self._reveal.start()
        elif etype == EventType.CARDS_DRAWN:
            self._reveal.cancel()
            self.show_card_fronts = True
        elif etype == EventType.HAND_WON:
            if self._on_win and not self.muted:
                self._on_win(data["category"], data["payout"])
        elif etype == EventType.SESSION_RESET:
            self._reveal.cancel()
            self.show_card_fronts = True
        elif etype == EventType.INVALID_ACTION:
            if self._on_invalid_action:
                self._on_invalid_action(data.get("message", "Invalid action"))
        elif etype == EventType.STATE_CHANGED:
            state = GameState(data["state"])
            if state != self._last_state:
                self._last_state = state
                if self._on_state_change:
                    self._on_state_change(state)

    def _reveal_cards(self) -> None:
        self.show_card_fronts = True
        log.debug("Cards revealed")
        if self._on_reveal:
            self._on_reveal()

    # Frame loop

    def update(self, dt: float) -> None:
        """Advance presentation timers by `dt` seconds."""
        self._reveal.update(dt)

    @property
    def reveal_pending(self) -> bool:
        return self._reveal.pending

    def toggle_mute(self) -> bool:
        """Flip the mute flag and return the new value."""
        self.muted = not self.muted
        return self.muted

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self.game.state

    def get_snapshot(self) -> TableSnapshot:
        """Get a snapshot of the table for rendering."""
        game = self.game
        face_up = self.show_card_fronts or game.state != GameState.DEALT
        cards = [
            UICardInfo.from_core_card(card, face_up=face_up, held=game.held[i])
            for i, card in enumerate(game.hand)
        ]
        pay_table = [
            PayTableRow(name=category.value, payouts=payouts, active_column=game.bet - 1)
            for category, payouts in pay_table_rows()
        ]
        return TableSnapshot(
            state=game.state,
            cards=cards,
            credits=game.credits,
            bet=game.bet,
            message=game.message,
            show_card_fronts=face_up,
            pay_table=pay_table,
            primary_label=game.primary_label,
            muted=self.muted,
            can_hold=game.can_hold,
            can_change_bet=game.can_change_bet,
            can_max_bet=game.can_max_bet,
        )

    # Game actions

    def deal(self) -> Snapshot:
        """Deal with the current bet."""
        return self.game.deal()

    def draw(self) -> Snapshot:
        """Draw replacement cards."""
        return self.game.draw()

    def toggle_hold(self, index: int) -> Snapshot:
        """Hold or release the card at `index`."""
        return self.game.toggle_hold(index)

    def bet_one(self) -> Snapshot:
        """Cycle the bet."""
        return self.game.bet_one()

    def max_bet(self) -> Snapshot:
        """Bet max and deal."""
        return self.game.max_bet_and_deal()

    def reset(self) -> Snapshot:
        """Start over after game over."""
        return self.game.reset()

    def press_primary(self) -> Snapshot:
        """Run whatever the main button does in the current state."""
        action = self.game.primary_action
        log.debug("Primary button: %s", action.value)
        return self.game.apply(action)

