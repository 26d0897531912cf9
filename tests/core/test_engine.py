"""Tests for the video poker round state machine."""

import dataclasses

import pytest

from config import config
from core.cards import cards_from_string
from core.errors import IllegalTransition, InvalidBet
from core.game import EventType, GameState, PlayerAction, VideoPokerGame
from core.game.state import VALID_TRANSITIONS, is_valid_transition
from core.hand import HandCategory


class TestNewGame:
    """Tests for a fresh session."""

    def test_initial_state(self, game):
        """Test a new game is ready with 100 credits and a one-coin bet."""
        snap = game.snapshot()
        assert snap.state == GameState.READY
        assert snap.credits == 100
        assert snap.bet == 1
        assert snap.hand == ()
        assert snap.held == (False,) * 5
        assert snap.message == ""

    def test_default_credits_from_config(self):
        """Test starting credits default to the configured value."""
        assert VideoPokerGame().credits == config.game.starting_credits

    def test_rejects_zero_starting_credits(self):
        """Test a session cannot start broke."""
        with pytest.raises(ValueError):
            VideoPokerGame(starting_credits=0)


class TestDeal:
    """Tests for dealing."""

    def test_deal_debits_bet(self, game):
        """Test dealing takes the bet and shows five cards."""
        snap = game.deal()
        assert snap.state == GameState.DEALT
        assert snap.credits == 99
        assert len(snap.hand) == 5
        assert len(set(snap.hand)) == 5
        assert snap.held == (False,) * 5
        assert game.deck.cards_remaining == 47

    def test_deal_with_explicit_bet(self, game):
        """Test deal(bet) records and debits that bet."""
        snap = game.deal(3)
        assert snap.bet == 3
        assert snap.credits == 97

    @pytest.mark.parametrize("bet", [0, 6])
    def test_deal_invalid_bet(self, game, bet):
        """Test out-of-range bets are rejected without changing anything."""
        with pytest.raises(InvalidBet):
            game.deal(bet)
        assert game.state == GameState.READY
        assert game.credits == 100

    def test_insufficient_credits_ends_game(self, game):
        """Test betting more than the credits moves to game over."""
        game.credits = 2
        snap = game.deal(5)
        assert snap.state == GameState.GAME_OVER
        assert snap.credits == 2
        assert snap.message == "Game Over"
        types = [e.event_type for e in game.events.history]
        assert EventType.INSUFFICIENT_FUNDS in types
        assert EventType.GAME_OVER in types

    def test_deal_clears_previous_result(self, stacked_game):
        """Test a new deal clears the message and holds."""
        game = stacked_game("JS JH 2D 3C 5S", "4H 6D 8C")
        game.deal()
        game.toggle_hold(0)
        game.toggle_hold(1)
        game.draw()
        assert game.message != ""

        snap = game.deal()
        assert snap.message == ""
        assert snap.held == (False,) * 5
        assert snap.last_category is None
        assert game.deck.cards_remaining == 47


class TestHolds:
    """Tests for toggling holds."""

    def test_toggle_hold(self, game):
        """Test toggling flips one flag at a time."""
        game.deal()
        assert game.toggle_hold(2).held == (False, False, True, False, False)
        assert game.toggle_hold(2).held == (False,) * 5

    @pytest.mark.parametrize("index", [-1, 5])
    def test_toggle_hold_out_of_range(self, game, index):
        """Test hold indexes must be 0..4."""
        game.deal()
        with pytest.raises(IndexError):
            game.toggle_hold(index)

    def test_toggle_hold_before_deal(self, game):
        """Test holds are only allowed after a deal."""
        with pytest.raises(IllegalTransition):
            game.toggle_hold(0)


class TestDraw:
    """Tests for drawing and settlement."""

    def test_held_cards_kept_and_others_replaced_in_order(self, stacked_game):
        """Test unheld positions take the next undealt cards left to right."""
        game = stacked_game("AS 7H 2D KC 9S", "3H 4D 5C")
        game.deal()
        game.toggle_hold(0)
        game.toggle_hold(3)
        snap = game.draw()
        assert list(snap.hand) == cards_from_string("AS 3H 4D KC 5C")
        assert game.deck.cards_remaining == 44

    def test_hold_all_keeps_hand(self, stacked_game):
        """Test holding every card leaves the deck untouched."""
        game = stacked_game("10S JS QS KS AS")
        game.deal()
        for i in range(5):
            game.toggle_hold(i)
        snap = game.draw()
        assert list(snap.hand) == cards_from_string("10S JS QS KS AS")
        assert game.deck.cards_remaining == 47

    def test_jacks_or_better_returns_bet(self, stacked_game):
        """Test 100 -> deal 99 -> Jacks or Better -> 100."""
        game = stacked_game("JS JH 2D 3C 5S", "4H 6D 8C")
        assert game.deal().credits == 99
        game.toggle_hold(0)
        game.toggle_hold(1)
        snap = game.draw()
        assert snap.last_category == HandCategory.JACKS_OR_BETTER
        assert snap.last_payout == 1
        assert snap.credits == 100
        assert snap.state == GameState.READY
        assert snap.message == "Jacks or Better! +1"

    def test_no_win_keeps_debit(self, stacked_game):
        """Test 100 -> deal 99 -> No Win -> 99 and ready."""
        game = stacked_game("2S 2H 9D 10C 5S", "3D 4S 7D 8H KC")
        game.deal()
        snap = game.draw()
        assert snap.last_category == HandCategory.NO_WIN
        assert snap.credits == 99
        assert snap.state == GameState.READY
        assert snap.message == "No Win"

    def test_royal_flush_jackpot_at_max_bet(self, stacked_game):
        """Test a five-coin royal pays 4000."""
        game = stacked_game("10S JS QS KS AS")
        game.max_bet_and_deal()
        for i in range(5):
            game.toggle_hold(i)
        snap = game.draw()
        assert snap.last_category == HandCategory.ROYAL_FLUSH
        assert snap.credits == 100 - 5 + 4000
        assert snap.message == "Royal Flush! +4000"

    def test_last_credit_lost_ends_game(self, stacked_game):
        """Test 1 credit -> deal 0 -> No Win -> game over -> reset."""
        game = stacked_game("2S 2H 9D 10C 5S", "3D 4S 7D 8H KC")
        game.credits = 1
        assert game.deal().credits == 0
        snap = game.draw()
        assert snap.state == GameState.GAME_OVER
        assert snap.credits == 0
        assert snap.message == "Game Over"

        snap = game.reset()
        assert snap.credits == 100
        assert snap.bet == 1
        assert snap.state == GameState.READY
        assert snap.hand == ()
        assert snap.message == ""

    def test_wheel_pays_as_straight(self, stacked_game):
        """Test drawing into A-2-3-4-5 pays the straight."""
        game = stacked_game("AS 2H 3D 4C KS", "5S")
        game.deal(2)
        for i in range(4):
            game.toggle_hold(i)
        snap = game.draw()
        assert snap.last_category == HandCategory.STRAIGHT
        assert snap.credits == 100 - 2 + 8
        assert snap.message == "Straight! +8"

    def test_winning_last_hand_continues(self, stacked_game):
        """Test spending the last credit on a winner keeps playing."""
        game = stacked_game("QS QH 2D 3C 5S", "4H 6D 8C")
        game.credits = 1
        game.deal()
        game.toggle_hold(0)
        game.toggle_hold(1)
        snap = game.draw()
        assert snap.credits == 1
        assert snap.state == GameState.READY

    def test_draw_before_deal(self, game):
        """Test drawing requires a dealt hand."""
        with pytest.raises(IllegalTransition):
            game.draw()


class TestBetting:
    """Tests for bet changes."""

    def test_bet_one_cycles(self, game):
        """Test Bet One goes 1 -> 5 then wraps to 1."""
        bets = [game.bet_one().bet for _ in range(5)]
        assert bets == [2, 3, 4, 5, 1]

    def test_bet_one_clamped_to_credits(self, game):
        """Test Bet One wraps early when credits run short."""
        game.credits = 3
        bets = [game.bet_one().bet for _ in range(3)]
        assert bets == [2, 3, 1]

    def test_set_bet(self, game):
        """Test setting a bet directly."""
        assert game.set_bet(4).bet == 4

    @pytest.mark.parametrize("bet", [0, 6])
    def test_set_bet_out_of_range(self, game, bet):
        with pytest.raises(InvalidBet):
            game.set_bet(bet)

    def test_set_bet_above_credits(self, game):
        """Test the bet may not exceed credits."""
        game.credits = 2
        with pytest.raises(InvalidBet):
            game.set_bet(3)
        assert game.bet == 1

    def test_max_bet_and_deal(self, game):
        """Test Max Bet bets five and deals."""
        snap = game.max_bet_and_deal()
        assert snap.bet == 5
        assert snap.credits == 95
        assert snap.state == GameState.DEALT

    def test_max_bet_with_few_credits(self, game):
        """Test Max Bet uses all credits when fewer than five remain."""
        game.credits = 3
        snap = game.max_bet_and_deal()
        assert snap.bet == 3
        assert snap.credits == 0
        assert snap.state == GameState.DEALT

    def test_bet_locked_while_dealt(self, game):
        """Test the bet cannot change mid-round."""
        game.deal()
        with pytest.raises(IllegalTransition):
            game.bet_one()
        with pytest.raises(IllegalTransition):
            game.set_bet(2)
        with pytest.raises(IllegalTransition):
            game.max_bet_and_deal()


class TestIllegalTransitions:
    """Tests for actions in the wrong state."""

    def test_deal_twice(self, game):
        game.deal()
        with pytest.raises(IllegalTransition) as exc:
            game.deal()
        assert exc.value.state == "dealt"
        assert game.credits == 99

    def test_reset_while_playing(self, game):
        with pytest.raises(IllegalTransition):
            game.reset()

    def test_game_over_only_accepts_reset(self, game):
        """Test deal and bet changes are refused after game over."""
        game.credits = 0
        game.deal()
        assert game.state == GameState.GAME_OVER
        for action in (game.deal, game.bet_one, game.draw, game.max_bet_and_deal):
            with pytest.raises(IllegalTransition):
                action()
        assert game.reset().state == GameState.READY

    def test_rejection_emits_invalid_action(self, game):
        """Test rejected actions are reported as events."""
        seen = []
        game.subscribe(seen.append, EventType.INVALID_ACTION)
        with pytest.raises(IllegalTransition):
            game.draw()
        assert len(seen) == 1
        assert seen[0].data["action"] == "draw"

    def test_illegal_transition_is_runtime_error(self, game):
        with pytest.raises(RuntimeError):
            game.toggle_hold(0)


class TestSnapshotAndDispatch:
    """Tests for snapshots, events and apply()."""

    def test_snapshot_is_frozen(self, game):
        snap = game.deal()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.credits = 1000
        assert isinstance(snap.hand, tuple)

    def test_snapshot_not_affected_by_later_actions(self, game):
        """Test old snapshots keep their values."""
        snap = game.deal()
        game.toggle_hold(0)
        assert snap.held == (False,) * 5

    def test_as_dict(self, stacked_game):
        game = stacked_game("JS JH 2D 3C 5S")
        data = game.deal(2).as_dict()
        assert data["hand"] == ["J♠", "J♥", "2♦", "3♣", "5♠"]
        assert data["state"] == "dealt"
        assert data["credits"] == 98
        assert data["last_category"] is None

    def test_apply(self, game):
        """Test actions can be dispatched by enum or name."""
        assert game.apply(PlayerAction.SET_BET, 2).bet == 2
        assert game.apply("deal").state == GameState.DEALT
        assert game.apply(PlayerAction.TOGGLE_HOLD, 4).held[4] is True
        assert game.apply("draw").state in (GameState.READY, GameState.GAME_OVER)

    def test_apply_unknown_action(self, game):
        with pytest.raises(ValueError):
            game.apply("split")

    def test_deal_events(self, game):
        """Test the event order for a deal."""
        seen = []
        game.subscribe(seen.append)
        game.deal()
        assert [e.event_type for e in seen] == [
            EventType.BET_PLACED,
            EventType.STATE_CHANGED,
            EventType.HAND_DEALT,
        ]

    def test_draw_events(self, stacked_game):
        """Test a winning draw reports the win and passes through settled."""
        game = stacked_game("KS KH 2D 3C 5S", "4H 6D 8C")
        game.deal()
        game.toggle_hold(0)
        game.toggle_hold(1)
        states = []
        game.subscribe(lambda e: states.append(e.data["state"]), EventType.STATE_CHANGED)
        won = []
        game.subscribe(won.append, EventType.HAND_WON)
        game.draw()
        assert states == ["settled", "ready"]
        assert won[0].data == {"category": "Jacks or Better", "payout": 1}

    def test_unsubscribe(self, game):
        seen = []
        game.subscribe(seen.append)
        game.events.unsubscribe(seen.append)
        game.deal()
        assert seen == []


class TestButtonState:
    """Tests for the button enablement helpers."""

    def test_ready(self, game):
        assert game.can_deal and game.can_change_bet and game.can_max_bet
        assert not game.can_draw and not game.can_hold
        assert game.primary_action == PlayerAction.DEAL
        assert game.primary_label == "Deal"

    def test_dealt(self, game):
        game.deal()
        assert game.can_draw and game.can_hold
        assert not game.can_deal and not game.can_change_bet and not game.can_max_bet
        assert game.primary_label == "Draw"

    def test_game_over(self, game):
        game.credits = 0
        game.deal()
        assert game.primary_action == PlayerAction.RESET
        assert game.primary_label == "Try Again"


class TestTransitionTable:
    """Tests for the state transition table."""

    def test_machine_matches_table(self):
        """Test every engine transition is listed as valid."""
        for t in VideoPokerGame.TRANSITIONS:
            assert is_valid_transition(GameState(t["source"]), GameState(t["dest"]))

    def test_every_state_has_an_exit(self):
        assert all(VALID_TRANSITIONS[state] for state in GameState)

    def test_invalid_transition(self):
        assert not is_valid_transition(GameState.READY, GameState.SETTLED)
        assert not is_valid_transition(GameState.GAME_OVER, GameState.DEALT)
