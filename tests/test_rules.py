"""Tests for check detection, legal move filtering, castling, and game end."""

import pytest

from termchess.game.errors import InvariantViolation
from termchess.game.rules import (
    GameResult, can_castle_queen_side, enumerate_all_actions, game_result, is_in_check,
    is_in_checkmate, legal_actions, opponent_can_capture, possible_actions,
)
from termchess.game.state import Castle, GameState, MovePiece, Side

from conftest import piece, sq


def destinations(actions):
    return {a.to_sq.to_human() for a in actions}


class TestCheck:
    def test_queen_adjacent_gives_check(self, make_state):
        state = make_state({"d4": "wK", "e4": "bQ"})
        assert is_in_check(state, Side.WHITE)

    def test_rook_not_on_line(self, make_state):
        state = make_state({"d4": "wK", "a1": "bR"})
        assert not is_in_check(state, Side.WHITE)

    def test_blocked_line(self, make_state):
        state = make_state({"d4": "wK", "d8": "bR", "d6": "wP"})
        assert not is_in_check(state, Side.WHITE)

    def test_pawn_check_is_diagonal(self, make_state):
        assert is_in_check(make_state({"d4": "wK", "e5": "bP"}), Side.WHITE)
        assert not is_in_check(make_state({"d4": "wK", "d5": "bP"}), Side.WHITE)

    def test_knight_check(self, make_state):
        assert is_in_check(make_state({"e8": "bK", "d6": "wN"}), Side.BLACK)

    def test_missing_king_is_fatal(self, make_state):
        state = make_state({"d4": "wQ"})
        with pytest.raises(InvariantViolation):
            is_in_check(state, Side.WHITE)

    def test_start_position_not_in_check(self):
        state = GameState()
        assert not is_in_check(state, Side.WHITE)
        assert not is_in_check(state, Side.BLACK)

    def test_opponent_can_capture_empty_square(self, make_state):
        state = make_state({"e1": "wK", "e5": "bP", "h3": "bB"})
        # Pawn attacks diagonally, not straight ahead
        assert opponent_can_capture(state, Side.WHITE, sq("d4"))
        assert not opponent_can_capture(state, Side.WHITE, sq("e4"))
        assert opponent_can_capture(state, Side.WHITE, sq("f1"))
        # Probe leaves the board untouched
        assert state.board.is_empty(sq("d4"))


class TestLegalMoves:
    def test_start_position_has_twenty_moves(self):
        state = GameState()
        assert len(legal_actions(state)) == 20
        assert len(legal_actions(state, Side.BLACK)) == 20

    def test_only_escape_square(self, make_state):
        state = make_state({"h1": "wK", "g1": "wR", "h8": "bQ", "a2": "bK"})
        assert possible_actions(sq("h1"), state) == [
            MovePiece(piece("wK"), sq("h1"), sq("g2"))]
        assert possible_actions(sq("g1"), state) == []
        assert legal_actions(state) == [MovePiece(piece("wK"), sq("h1"), sq("g2"))]

    def test_pinned_piece_cannot_leave_line(self, make_state):
        state = make_state({"e1": "wK", "e2": "wR", "e8": "bR", "a8": "bK"})
        assert destinations(possible_actions(sq("e2"), state)) == {
            "e3", "e4", "e5", "e6", "e7", "e8"}

    def test_pseudo_legal_includes_self_check(self, make_state):
        state = make_state({"e1": "wK", "e2": "wR", "e8": "bR", "a8": "bK"})
        pseudo = [a for a in enumerate_all_actions(state, Side.WHITE) if a.from_sq == sq("e2")]
        assert len(pseudo) > len(possible_actions(sq("e2"), state))

    def test_king_cannot_step_into_attack(self, make_state):
        state = make_state({"e1": "wK", "a2": "bR", "h8": "bK"})
        assert destinations(possible_actions(sq("e1"), state)) == {"d1", "f1"}

    def test_filter_leaves_state_unchanged(self, make_state):
        state = make_state({"h1": "wK", "g1": "wR", "h8": "bQ", "a2": "bK"})
        before = state.clone()
        legal_actions(state)
        assert state == before

    def test_empty_square(self):
        assert possible_actions(sq("e4"), GameState()) == []


class TestCheckmate:
    def test_queen_and_rook_mate(self, make_state):
        state = make_state({"a1": "wK", "h1": "bK", "b2": "bQ", "d2": "bR"})
        assert is_in_checkmate(state, Side.WHITE)
        assert game_result(state) == GameResult.CHECKMATE

    def test_unprotected_queen_can_be_taken(self, make_state):
        state = make_state({"a1": "wK", "h1": "bK", "b2": "bQ"})
        assert not is_in_checkmate(state, Side.WHITE)
        assert game_result(state) == GameResult.ONGOING

    def test_back_rank_mate(self, make_state):
        state = make_state({"h8": "bK", "g7": "bP", "h7": "bP", "a8": "wR", "g1": "wK"},
                           next_to_move=Side.BLACK)
        assert is_in_checkmate(state, Side.BLACK)

    def test_stalemate_also_counts_as_no_moves(self, make_state):
        state = make_state({"a8": "bK", "b6": "wQ", "c1": "wK"}, next_to_move=Side.BLACK)
        assert not is_in_check(state, Side.BLACK)
        assert is_in_checkmate(state, Side.BLACK)
        assert game_result(state) == GameResult.STALEMATE

    def test_start_position_not_over(self):
        state = GameState()
        assert not is_in_checkmate(state, Side.WHITE)
        assert game_result(state) == GameResult.ONGOING


class TestCastling:
    def castle_state(self, make_state, extra=None):
        placements = {"e1": "wK", "a1": "wR", "e8": "bK"}
        placements.update(extra or {})
        return make_state(placements)

    def test_castle_offered(self, make_state):
        state = self.castle_state(make_state)
        assert can_castle_queen_side(state, Side.WHITE)
        assert Castle(Side.WHITE) in possible_actions(sq("e1"), state)

    def test_black_castle(self, make_state):
        state = make_state({"e8": "bK", "a8": "bR", "e1": "wK"}, next_to_move=Side.BLACK)
        assert Castle(Side.BLACK) in possible_actions(sq("e8"), state)

    def test_blocked_by_piece_between(self, make_state):
        state = self.castle_state(make_state, {"b1": "wN"})
        assert not can_castle_queen_side(state, Side.WHITE)

    def test_not_out_of_check(self, make_state):
        state = self.castle_state(make_state, {"e5": "bR"})
        assert not can_castle_queen_side(state, Side.WHITE)

    @pytest.mark.parametrize("square", ["d8", "c8"])
    def test_not_through_attacked_square(self, make_state, square):
        state = self.castle_state(make_state, {square: "bR"})
        assert not can_castle_queen_side(state, Side.WHITE)

    def test_b_file_attack_does_not_matter(self, make_state):
        state = self.castle_state(make_state, {"b8": "bR"})
        assert can_castle_queen_side(state, Side.WHITE)

    def test_not_after_king_moved(self, make_state):
        state = self.castle_state(make_state)
        state.advance(MovePiece(piece("wK"), sq("e1"), sq("e2")))
        state.advance(MovePiece(piece("bK"), sq("e8"), sq("e7")))
        state.advance(MovePiece(piece("wK"), sq("e2"), sq("e1")))
        state.advance(MovePiece(piece("bK"), sq("e7"), sq("e8")))
        assert not can_castle_queen_side(state, Side.WHITE)

    def test_not_after_rook_moved(self, make_state):
        state = self.castle_state(make_state)
        state.advance(MovePiece(piece("wR"), sq("a1"), sq("a2")))
        state.advance(MovePiece(piece("bK"), sq("e8"), sq("e7")))
        state.advance(MovePiece(piece("wR"), sq("a2"), sq("a1")))
        state.advance(MovePiece(piece("bK"), sq("e7"), sq("e8")))
        assert not can_castle_queen_side(state, Side.WHITE)

    def test_other_moves_keep_rights(self, make_state):
        state = self.castle_state(make_state, {"h2": "wP"})
        state.advance(MovePiece(piece("wP"), sq("h2"), sq("h3")))
        state.advance(MovePiece(piece("bK"), sq("e8"), sq("e7")))
        assert can_castle_queen_side(state, Side.WHITE)

    def test_not_without_rook(self, make_state):
        state = make_state({"e1": "wK", "e8": "bK"})
        assert not can_castle_queen_side(state, Side.WHITE)

    def test_start_position_cannot_castle(self):
        assert not can_castle_queen_side(GameState(), Side.WHITE)
