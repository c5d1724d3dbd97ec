"""Tests for MoveGenerator: piece rules, attack probing and special moves."""

from __future__ import annotations

import pytest

from chessrules.core.enums import Player
from chessrules.core.move import MAX_CANDIDATES, Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.position import Position
from chessrules.core.types import (
    A1,
    A8,
    B1,
    B3,
    C1,
    C2,
    D1,
    D2,
    D4,
    D5,
    D6,
    D7,
    E1,
    E2,
    E3,
    E4,
    E5,
    E6,
    E8,
    F1,
    F3,
    F4,
    F5,
    G1,
    G5,
    G8,
    H1,
    H3,
    H8,
    Square,
)
from chessrules.game.state import GameState


def _destinations(moves: list[Move]) -> set[Square]:
    return {Square(*m.to_sq) for m in moves}


def _castling_destinations(pos: Position, king_sq: Square) -> set[Square]:
    moves = MoveGenerator(pos).legal_moves(king_sq)
    return {Square(*m.to_sq) for m in moves if m.is_castling}


def perft(state: GameState, depth: int) -> int:
    """Count leaf nodes at *depth* by cloning the game state."""
    if depth == 0:
        return 1
    nodes = 0
    for move in state.all_legal_moves():
        child = state.clone()
        child.apply_move(move)
        nodes += perft(child, depth - 1)
    return nodes


# ── Starting position ────────────────────────────────────────────────────────


class TestStartingPosition:
    def test_knight_moves(self) -> None:
        gen = MoveGenerator(Position())
        assert _destinations(gen.legal_moves(G1)) == {F3, H3}

    def test_pawn_single_and_double_push(self) -> None:
        gen = MoveGenerator(Position())
        moves = gen.legal_moves(E2)
        assert _destinations(moves) == {E3, E4}
        assert not any(m.is_capture for m in moves)

    def test_blocked_pieces_have_no_moves(self) -> None:
        gen = MoveGenerator(Position())
        assert gen.legal_moves(A1) == []
        assert gen.legal_moves(D1) == []
        assert gen.legal_moves(E1) == []

    def test_empty_and_invalid_squares(self) -> None:
        gen = MoveGenerator(Position())
        assert gen.legal_moves(E4) == []
        assert gen.legal_moves((-1, 3)) == []
        assert gen.legal_moves((8, 8)) == []

    def test_destination_appears_once(self) -> None:
        gen = MoveGenerator(Position())
        moves = gen.legal_moves(B1)
        assert len(moves) == len(_destinations(moves)) == 2


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(GameState.new(), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(GameState.new(), 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(GameState.new(), 3) == 8_902


class TestCandidateBound:
    def _within_bound(self, pos: Position) -> None:
        gen = MoveGenerator(pos)
        for player in (Player.WHITE, Player.BLACK):
            for sq in pos.board.squares_of(player):
                assert len(gen.legal_moves(sq)) <= MAX_CANDIDATES
                probes = gen.generate(
                    sq, probing_attacks=True, include_quiet_probes=True
                )
                assert len(probes) <= MAX_CANDIDATES

    def test_opening_walk(self) -> None:
        root = GameState.new()
        self._within_bound(root.position)
        for move in root.all_legal_moves():
            child = root.clone()
            child.apply_move(move)
            self._within_bound(child.position)

    def test_central_queen(self, setup_position) -> None:
        pos = setup_position({D4: "Q", A8: "K", H1: "k"})
        probes = MoveGenerator(pos).generate(
            D4, probing_attacks=True, include_quiet_probes=True
        )
        assert len(probes) == 27 <= MAX_CANDIDATES


# ── Per-piece generation ─────────────────────────────────────────────────────


class TestSlidingPieces:
    def test_rook_open_board(self, setup_position) -> None:
        pos = setup_position({D4: "R", A1: "K", H8: "k"})
        assert len(MoveGenerator(pos).legal_moves(D4)) == 14

    def test_rook_blockers(self, setup_position) -> None:
        pos = setup_position({D4: "R", D6: "P", F4: "p", A1: "K", H8: "k"})
        moves = MoveGenerator(pos).legal_moves(D4)
        dests = _destinations(moves)
        assert len(moves) == 9
        assert D6 not in dests  # friendly blocker
        assert D5 in dests
        assert Square(6, 3) not in dests  # behind the captured pawn
        captures = [m for m in moves if m.is_capture]
        assert _destinations(captures) == {F4}

    def test_bishop_diagonals(self, setup_position) -> None:
        pos = setup_position({D4: "B", A1: "K", H1: "k"})
        # a7-g1 and a1-h8 diagonals minus d4 and the own king on a1
        assert len(MoveGenerator(pos).legal_moves(D4)) == 12

    def test_queen_is_rook_plus_bishop(self, setup_position) -> None:
        pos = setup_position({D4: "Q", A8: "K", H1: "k"})
        dests = _destinations(MoveGenerator(pos).legal_moves(D4))
        assert E5 in dests and D1 in dests and H8 in dests
        assert len(dests) == 27


class TestKnightAndKing:
    def test_knight_in_corner(self, setup_position) -> None:
        pos = setup_position({A1: "N", H1: "K", H8: "k"})
        assert _destinations(MoveGenerator(pos).legal_moves(A1)) == {B3, C2}

    def test_king_avoids_attacked_squares(self, setup_position) -> None:
        # Black rook on a2 sweeps the second rank.
        pos = setup_position({E1: "K", Square(0, 1): "r", H8: "k"})
        assert _destinations(MoveGenerator(pos).legal_moves(E1)) == {D1, F1}

    def test_king_cannot_capture_defended_piece(self, setup_position) -> None:
        pos = setup_position({E1: "K", E2: "q", E8: "r", A8: "k"})
        assert MoveGenerator(pos).legal_moves(E1) == []

    def test_king_captures_undefended_piece(self, setup_position) -> None:
        pos = setup_position({E1: "K", E2: "q", A8: "k"})
        moves = MoveGenerator(pos).legal_moves(E1)
        assert Move(E1, E2, is_capture=True) in moves


class TestLegalityFilter:
    def test_pinned_piece_cannot_leave_file(self, setup_position) -> None:
        pos = setup_position({E1: "K", E2: "B", E8: "r", A8: "k"})
        assert MoveGenerator(pos).legal_moves(E2) == []

    def test_pinned_rook_slides_along_pin(self, setup_position) -> None:
        pos = setup_position({E1: "K", E2: "R", E8: "r", A8: "k"})
        dests = _destinations(MoveGenerator(pos).legal_moves(E2))
        assert dests == {Square(4, r) for r in range(2, 8)}

    def test_must_answer_check(self, setup_position) -> None:
        # Rook on e8 checks; only blocking on the e-file or capturing helps.
        pos = setup_position({E1: "K", D1: "Q", E8: "r", A8: "k", H1: "N"})
        gen = MoveGenerator(pos)
        assert gen.legal_moves(H1) == []
        queen_dests = _destinations(gen.legal_moves(D1))
        assert queen_dests == {E2}

    def test_is_legal_directly(self, setup_position) -> None:
        pos = setup_position({E1: "K", E2: "B", E8: "r", A8: "k"})
        gen = MoveGenerator(pos)
        assert not gen.is_legal(Move(E2, D2.offset(0, 1)))
        assert gen.is_legal(Move(E1, D1))

    def test_filter_leaves_position_untouched(self, setup_position) -> None:
        pos = setup_position({E1: "K", E2: "B", E8: "r", A8: "k"})
        before = pos.board.copy()
        MoveGenerator(pos).legal_moves(E1)
        assert pos.board == before
        assert pos.ply == 0
        assert pos.last_move is None


# ── Attack probing ───────────────────────────────────────────────────────────


class TestAttackProbing:
    def test_pawn_probes_both_diagonals(self, setup_position) -> None:
        pos = setup_position({E4: "P", A1: "K", H8: "k"})
        moves = MoveGenerator(pos).generate(
            E4, probing_attacks=True, include_quiet_probes=True
        )
        assert _destinations(moves) == {D5, F5}
        assert all(m.is_capture for m in moves)

    def test_quiet_probes_flagged_as_captures(self, setup_position) -> None:
        pos = setup_position({D4: "R", A1: "K", H8: "k"})
        moves = MoveGenerator(pos).generate(
            D4, probing_attacks=True, include_quiet_probes=True
        )
        assert len(moves) == 14
        assert all(m.is_capture for m in moves)

    def test_probing_without_quiet_reports_captures_only(self, setup_position) -> None:
        pos = setup_position({D4: "R", F4: "p", A1: "K", H8: "k"})
        moves = MoveGenerator(pos).generate(D4, probing_attacks=True)
        assert moves == [Move(D4, F4, is_capture=True)]

    def test_probing_skips_castling(self, setup_position) -> None:
        pos = setup_position({E1: "K", H1: "R", A8: "k"})
        moves = MoveGenerator(pos).generate(
            E1, probing_attacks=True, include_quiet_probes=True
        )
        assert not any(m.is_castling for m in moves)


class TestAttackOracle:
    def test_starting_position(self) -> None:
        gen = MoveGenerator(Position())
        assert gen.is_square_attacked_by(E3, Player.WHITE)
        assert gen.is_square_attacked_by(F3, Player.WHITE)
        assert not gen.is_square_attacked_by(E4, Player.WHITE)
        assert gen.is_square_attacked_by(E6, Player.BLACK)
        assert not gen.is_square_attacked_by(E5, Player.BLACK)

    def test_blocked_ray_does_not_attack(self, setup_position) -> None:
        pos = setup_position({A1: "R", B1: "N", H1: "K", H8: "k"})
        gen = MoveGenerator(pos)
        assert not gen.is_square_attacked_by(C1, Player.WHITE)
        assert gen.is_square_attacked_by(Square(0, 5), Player.WHITE)

    def test_nobody_attacks_for_player_none(self) -> None:
        assert not MoveGenerator(Position()).is_square_attacked_by(E3, Player.NONE)

    def test_out_of_range_square_never_attacked(self) -> None:
        gen = MoveGenerator(Position())
        assert not gen.is_square_attacked_by((4, 8), Player.BLACK)

    def test_is_in_check_without_king(self, setup_position) -> None:
        pos = setup_position({E4: "r"})
        assert not MoveGenerator(pos).is_in_check(Player.WHITE)


# ── Castling ─────────────────────────────────────────────────────────────────


def _castling_setup(setup_position, **extra: str) -> Position:
    placements: dict[tuple[int, int], str] = {E1: "K", A1: "R", H1: "R", E8: "k"}
    for name, char in extra.items():
        placements[Square(ord(name[0]) - ord("a"), int(name[1]) - 1)] = char
    return setup_position(placements)


class TestCastling:
    def test_both_sides_available(self, setup_position) -> None:
        pos = _castling_setup(setup_position)
        assert _castling_destinations(pos, E1) == {C1, G1}

    def test_king_moved(self, setup_position) -> None:
        pos = _castling_setup(setup_position)
        pos.board[E1] = pos.board[E1].moved_at(0)
        assert _castling_destinations(pos, E1) == set()

    def test_rook_moved(self, setup_position) -> None:
        pos = _castling_setup(setup_position)
        pos.board[H1] = pos.board[H1].moved_at(0)
        assert _castling_destinations(pos, E1) == {C1}

    def test_path_blocked(self, setup_position) -> None:
        pos = _castling_setup(setup_position, g1="N", b1="N")
        assert _castling_destinations(pos, E1) == set()

    def test_in_check(self, setup_position) -> None:
        pos = _castling_setup(setup_position, e5="r")
        assert _castling_destinations(pos, E1) == set()

    def test_transit_square_attacked(self, setup_position) -> None:
        pos = _castling_setup(setup_position, f8="r")
        assert _castling_destinations(pos, E1) == {C1}

    def test_destination_square_attacked(self, setup_position) -> None:
        pos = _castling_setup(setup_position, g8="r", c8="r")
        assert _castling_destinations(pos, E1) == set()

    def test_rook_side_square_may_be_attacked(self, setup_position) -> None:
        # b1 is between king and rook but the king never crosses it.
        pos = _castling_setup(setup_position, b8="r")
        assert _castling_destinations(pos, E1) == {C1, G1}

    def test_black_castles_on_rank_eight(self, setup_position) -> None:
        pos = setup_position(
            {E8: "k", A8: "r", H8: "r", E1: "K"}, current_player=Player.BLACK
        )
        assert _castling_destinations(pos, E8) == {Square(2, 7), G8}

    def test_enemy_rook_does_not_castle(self, setup_position) -> None:
        pos = setup_position({E1: "K", H1: "r", A8: "k"})
        assert not MoveGenerator(pos).is_castling_possible(E1, 7)


# ── En passant ───────────────────────────────────────────────────────────────


def _after_double_push(setup_position, **extra: str) -> Position:
    placements: dict[tuple[int, int], str] = {E5: "P", D5: "p", E1: "K", E8: "k"}
    for name, char in extra.items():
        placements[Square(ord(name[0]) - ord("a"), int(name[1]) - 1)] = char
    pos = setup_position(placements, ply=1)
    pos.last_move = Move(D7, D5)
    return pos


class TestEnPassant:
    def test_offered_after_double_push(self, setup_position) -> None:
        pos = _after_double_push(setup_position)
        gen = MoveGenerator(pos)
        assert gen.en_passant_target_file(E5) == 3
        assert Move(E5, D6, is_capture=True, is_en_passant=True) in gen.legal_moves(E5)

    def test_not_offered_after_single_push(self, setup_position) -> None:
        pos = _after_double_push(setup_position)
        pos.last_move = Move(D6, D5)
        assert MoveGenerator(pos).en_passant_target_file(E5) is None

    def test_not_offered_before_first_ply(self, setup_position) -> None:
        pos = _after_double_push(setup_position)
        pos.ply = 0
        assert MoveGenerator(pos).en_passant_target_file(E5) is None

    def test_not_offered_to_distant_pawn(self, setup_position) -> None:
        pos = _after_double_push(setup_position, g5="P")
        assert MoveGenerator(pos).en_passant_target_file(G5) is None

    def test_not_offered_when_last_mover_not_a_pawn(self, setup_position) -> None:
        pos = _after_double_push(setup_position, d4="r")
        pos.last_move = Move(D2.offset(0, 6), D4)
        assert MoveGenerator(pos).en_passant_target_file(E5) is None

    def test_never_offered_in_probe_mode(self, setup_position) -> None:
        pos = _after_double_push(setup_position)
        moves = MoveGenerator(pos).generate(
            E5, probing_attacks=True, include_quiet_probes=True
        )
        assert not any(m.is_en_passant for m in moves)
