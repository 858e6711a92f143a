"""Move generation: per-piece rules, attack sets, castling preconditions.

Perft reference values: https://www.chessprogramming.org/Perft_Results
(no castling, en passant or promotion is reachable within three plies).
"""

from __future__ import annotations

import pytest

from rookwise.core.board import Board
from rookwise.core.enums import CastlingRights, CastlingSide, Color
from rookwise.core.move_generator import MoveGenerator
from rookwise.core.notation import board_from_placement
from rookwise.core.rules import Rules
from rookwise.core.types import Square, parse_square


def sq(name: str) -> Square:
    return parse_square(name)


def squares(*names: str) -> set[Square]:
    return {parse_square(n) for n in names}


def perft(board: Board, color: Color, depth: int) -> int:
    """Count leaf nodes at *depth* by playing each legal move on a copy.

    Moves are plain piece swaps with no castling rook hop, promotion or
    castling flags, so the counts are only valid from the starting position
    up to depth 3.
    """
    nodes = 0
    for from_sq, destinations in Rules.all_legal_moves(board, color).items():
        if depth == 1:
            nodes += len(destinations)
            continue
        for to_sq in destinations:
            child = board.copy()
            child[to_sq] = child[from_sq]
            child[from_sq] = None
            nodes += perft(child, color.opposite, depth - 1)
    return nodes


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(Board.initial(), Color.WHITE, 1) == 20

    def test_depth_2(self) -> None:
        assert perft(Board.initial(), Color.WHITE, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(Board.initial(), Color.WHITE, 3) == 8_902


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawnMoves:
    def test_single_and_double_step_from_start(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert set(gen.pseudo_moves(sq("e2"))) == squares("e3", "e4")
        assert set(gen.pseudo_moves(sq("d7"))) == squares("d6", "d5")

    def test_double_step_needs_both_squares_empty(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/4n3/4P3/4K3")
        assert MoveGenerator(board).pseudo_moves(sq("e2")) == []

        board = board_from_placement("4k3/8/8/8/4n3/8/4P3/4K3")
        assert MoveGenerator(board).pseudo_moves(sq("e2")) == [sq("e3")]

    def test_no_double_step_off_start_row(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/4P3/8/4K3")
        assert MoveGenerator(board).pseudo_moves(sq("e3")) == [sq("e4")]

    def test_forward_step_never_captures(self) -> None:
        board = board_from_placement("4k3/8/8/8/4p3/4P3/8/4K3")
        assert MoveGenerator(board).pseudo_moves(sq("e3")) == []

    def test_diagonal_capture_only_of_enemy(self) -> None:
        board = board_from_placement("4k3/8/8/3p1N2/4P3/8/8/4K3")
        moves = set(MoveGenerator(board).pseudo_moves(sq("e4")))
        assert moves == squares("e5", "d5")

    def test_attack_set_is_diagonals_regardless_of_occupancy(self) -> None:
        board = board_from_placement("4k3/8/8/8/4P3/8/8/4K3")
        gen = MoveGenerator(board)
        assert set(gen.attack_squares(sq("e4"))) == squares("d5", "f5")

    def test_black_pawn_attacks_downward(self) -> None:
        board = board_from_placement("4k3/8/8/p7/8/8/8/4K3")
        assert MoveGenerator(board).attack_squares(sq("a5")) == [sq("b4")]


# ── Knights / sliders / king ─────────────────────────────────────────────────


class TestPieceMoves:
    def test_knight_in_corner(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/N3K3")
        moves = set(MoveGenerator(board).pseudo_moves(sq("a1")))
        assert moves == squares("b3", "c2")

    def test_knight_skips_own_pieces(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert set(gen.pseudo_moves(sq("g1"))) == squares("f3", "h3")

    def test_rook_ray_stops_at_own_and_takes_enemy(self) -> None:
        board = board_from_placement("4k3/8/8/8/R2p4/8/8/P3K3")
        moves = set(MoveGenerator(board).pseudo_moves(sq("a4")))
        assert moves == squares(
            "a5", "a6", "a7", "a8", "a3", "a2", "b4", "c4", "d4"
        )

    def test_bishop_blocked_at_start(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.pseudo_moves(sq("c1")) == []

    def test_queen_combines_rook_and_bishop(self) -> None:
        board = board_from_placement("4k3/8/8/8/3Q4/8/8/4K3")
        assert len(MoveGenerator(board).pseudo_moves(sq("d4"))) == 27

    def test_king_steps(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/3P4/4K3")
        moves = set(MoveGenerator(board).pseudo_moves(sq("e1")))
        assert moves == squares("d1", "f1", "e2", "f2")

    def test_empty_square_has_no_moves(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.pseudo_moves(sq("e4")) == []
        assert gen.attack_squares(sq("e4")) == []


# ── Castling ─────────────────────────────────────────────────────────────────

CASTLE_BOTH = "r3k2r/8/8/8/8/8/8/R3K2R"


class TestCastling:
    def test_both_sides_offered(self) -> None:
        board = board_from_placement(CASTLE_BOTH)
        gen = MoveGenerator(board)
        assert set(gen.castling_destinations(sq("e1"), Color.WHITE)) == squares(
            "g1", "c1"
        )
        assert set(gen.castling_destinations(sq("e8"), Color.BLACK)) == squares(
            "g8", "c8"
        )

    def test_castling_is_part_of_king_moves(self) -> None:
        board = board_from_placement(CASTLE_BOTH)
        moves = set(Rules.legal_moves(board, sq("e1")))
        assert squares("g1", "c1") <= moves

    def test_attacked_transit_square_forbids_that_side(self) -> None:
        # Black rook on f8 covers f1, which the king crosses.
        board = board_from_placement("r3kr2/8/8/8/8/8/8/R3K2R")
        dests = MoveGenerator(board).castling_destinations(sq("e1"), Color.WHITE)
        assert dests == [sq("c1")]

    def test_attacked_destination_forbids_that_side(self) -> None:
        board = board_from_placement("r1r1k3/8/8/8/8/8/8/R3K2R")
        dests = MoveGenerator(board).castling_destinations(sq("e1"), Color.WHITE)
        assert dests == [sq("g1")]

    def test_attacked_rook_side_square_does_not_matter(self) -> None:
        # b1 is attacked but the king never crosses it.
        board = board_from_placement("1r2k3/8/8/8/8/8/8/R3K2R")
        dests = MoveGenerator(board).castling_destinations(sq("e1"), Color.WHITE)
        assert set(dests) == squares("g1", "c1")

    def test_not_while_in_check(self) -> None:
        board = board_from_placement("4r1k1/8/8/8/8/8/8/R3K2R")
        gen = MoveGenerator(board)
        assert gen.castling_destinations(sq("e1"), Color.WHITE) == []

    def test_blocked_path(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/RN2K2R")
        dests = MoveGenerator(board).castling_destinations(sq("e1"), Color.WHITE)
        assert dests == [sq("g1")]

    def test_king_moved_flag(self) -> None:
        board = board_from_placement(CASTLE_BOTH)
        gen = MoveGenerator(board, CastlingRights.WHITE_KING_MOVED)
        assert gen.castling_destinations(sq("e1"), Color.WHITE) == []
        assert len(gen.castling_destinations(sq("e8"), Color.BLACK)) == 2

    def test_rook_moved_flag(self) -> None:
        board = board_from_placement(CASTLE_BOTH)
        gen = MoveGenerator(
            board, CastlingRights.rook_moved(Color.WHITE, CastlingSide.KINGSIDE)
        )
        assert gen.castling_destinations(sq("e1"), Color.WHITE) == [sq("c1")]

    def test_missing_rook(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/4K2R")
        dests = MoveGenerator(board).castling_destinations(sq("e1"), Color.WHITE)
        assert dests == [sq("g1")]

    def test_attack_set_never_contains_castling(self) -> None:
        board = board_from_placement(CASTLE_BOTH)
        attacks = set(MoveGenerator(board).attack_squares(sq("e1")))
        assert attacks == squares("d1", "f1", "d2", "e2", "f2")


class TestCastlingRights:
    def test_fresh_rights_allow_everything(self) -> None:
        rights = CastlingRights.NONE
        for color in Color:
            for side in CastlingSide:
                assert rights.can_castle(color, side)

    def test_king_moved_blocks_both_sides(self) -> None:
        rights = CastlingRights.king_moved(Color.BLACK)
        assert not rights.can_castle(Color.BLACK, CastlingSide.KINGSIDE)
        assert not rights.can_castle(Color.BLACK, CastlingSide.QUEENSIDE)
        assert rights.can_castle(Color.WHITE, CastlingSide.KINGSIDE)

    def test_all_flags(self) -> None:
        assert CastlingRights.WHITE_ALL == (
            CastlingRights.WHITE_KING_MOVED
            | CastlingRights.WHITE_KINGSIDE_ROOK_MOVED
            | CastlingRights.WHITE_QUEENSIDE_ROOK_MOVED
        )
        assert CastlingRights.BLACK_ALL == (
            CastlingRights.BLACK_KING_MOVED
            | CastlingRights.BLACK_KINGSIDE_ROOK_MOVED
            | CastlingRights.BLACK_QUEENSIDE_ROOK_MOVED
        )
