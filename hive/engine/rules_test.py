"""Unit tests for the Hive rules engine."""

from __future__ import annotations

import random
import unittest
from collections.abc import Iterable, Iterator

from hive.engine.processor import apply_move
from hive.engine.rules import (
    GameOutcome,
    get_game_outcome,
    is_bee_surrounded,
    possible_drag_moves,
    possible_moves,
    possible_set_moves,
)
from hive.engine.turn_manager import create_initial_game_state
from hive.engine.validator import validate_move
from hive.models.board import Color, Field, Piece, PieceType
from hive.models.coords import AxialCoords
from hive.models.game_state import GameState
from hive.models.moves import DragMove, Move, SetMove

RED, BLUE = Color.RED, Color.BLUE
ANT, BEE, BEETLE = PieceType.ANT, PieceType.BEE, PieceType.BEETLE
SPIDER = PieceType.SPIDER

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _c(x: int, y: int) -> AxialCoords:
    return AxialCoords(x=x, y=y)


def _p(owner: Color, piece_type: PieceType) -> Piece:
    return Piece(owner=owner, piece_type=piece_type)


def _state(
    placements: Iterable[tuple[tuple[int, int], Piece]] = (),
    turn: int = 0,
    obstructed: tuple[tuple[int, int], ...] = (),
) -> GameState:
    """Return a position with *placements* pushed in order and taken from hand."""
    state = create_initial_game_state()
    state.turn = turn
    state.current_color = RED if turn % 2 == 0 else BLUE
    for xy in obstructed:
        state.board.fields[_c(*xy)] = Field(is_obstructed=True)
    for xy, piece in placements:
        state.board.field_mut(_c(*xy)).push(piece)
        state.undeployed[piece.owner].remove(piece)
    return state


def _play_random_game(
    seed: int, turns: int, num_obstructed: int = 0
) -> Iterator[tuple[GameState, list[Move]]]:
    """Yield each position of a random game together with its legal moves."""
    rng = random.Random(seed)
    state = create_initial_game_state(num_obstructed=num_obstructed, seed=seed)
    for _ in range(turns):
        legal = possible_moves(state, state.current_color)
        yield state, legal
        if not legal or get_game_outcome(state).finished:
            return
        result = apply_move(state, rng.choice(legal))
        assert result.success, result.error_message
        state = result.updated_state


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestPossibleSetMoves(unittest.TestCase):
    """Tests for possible_set_moves."""

    def test_empty_board(self) -> None:
        """The first move may place any piece type on any cell."""
        set_moves = possible_set_moves(_state(), RED)
        self.assertEqual(len(set_moves), 91 * 5)
        self.assertEqual(len(set(set_moves)), len(set_moves))

    def test_empty_board_skips_obstructed_cells(self) -> None:
        """Obstructed cells are never offered."""
        state = _state(obstructed=((0, 0), (1, 1)))
        dests = {m.destination for m in possible_set_moves(state, RED)}
        self.assertEqual(len(dests), 89)
        self.assertNotIn(_c(0, 0), dests)

    def test_second_placement_surrounds_opponent(self) -> None:
        """The second color's first piece goes on any cell next to the first."""
        state = _state([((0, 0), _p(RED, SPIDER))], turn=1)
        set_moves = possible_set_moves(state, BLUE)
        dests = {m.destination for m in set_moves}
        self.assertEqual(dests, set(_c(0, 0).coord_neighbors()))
        self.assertEqual(len(set_moves), 6 * 5)

    def test_containment_destinations(self) -> None:
        """Later placements touch own pieces only."""
        state = _state([((0, 0), _p(RED, BEE)), ((1, 0), _p(BLUE, BEE))], turn=2)
        dests = {m.destination for m in possible_set_moves(state, RED)}
        self.assertEqual(dests, {_c(-1, 1), _c(-1, 0), _c(0, -1)})

    def test_one_move_per_piece_type(self) -> None:
        """Identical undeployed pieces do not produce duplicate moves."""
        state = _state([((0, 0), _p(RED, BEE)), ((1, 0), _p(BLUE, BEE))], turn=2)
        types = {m.piece.piece_type for m in possible_set_moves(state, RED)}
        self.assertEqual(
            types,
            {
                PieceType.ANT,
                PieceType.BEETLE,
                PieceType.GRASSHOPPER,
                PieceType.SPIDER,
            },
        )

    def test_forced_bee_only(self) -> None:
        """At the bee deadline only bee placements are generated."""
        state = _state(
            [
                ((0, 0), _p(RED, ANT)),
                ((1, 0), _p(BLUE, ANT)),
                ((-1, 0), _p(RED, ANT)),
                ((2, 0), _p(BLUE, ANT)),
                ((-2, 0), _p(RED, SPIDER)),
                ((3, 0), _p(BLUE, SPIDER)),
            ],
            turn=6,
        )
        set_moves = possible_set_moves(state, RED)
        self.assertTrue(set_moves)
        self.assertTrue(all(m.piece.piece_type == PieceType.BEE for m in set_moves))

    def test_empty_hand(self) -> None:
        """A color with nothing left to place has no set moves."""
        state = _state([((0, 0), _p(RED, BEE)), ((1, 0), _p(BLUE, BEE))], turn=2)
        state.undeployed[RED] = []
        self.assertEqual(possible_set_moves(state, RED), [])


class TestPossibleDragMoves(unittest.TestCase):
    """Tests for possible_drag_moves."""

    def test_none_before_bee(self) -> None:
        """Without a bee on the board nothing moves."""
        state = _state([((0, 0), _p(RED, ANT)), ((1, 0), _p(BLUE, BEE))], turn=2)
        self.assertEqual(possible_drag_moves(state, RED), [])

    def test_spider_destinations(self) -> None:
        """The spider lands three cells away in either direction."""
        state = _state(
            [
                ((0, 0), _p(BLUE, BEE)),
                ((1, 0), _p(RED, BEE)),
                ((-1, 0), _p(RED, SPIDER)),
            ],
            turn=3,
        )
        drag_moves = possible_drag_moves(state, RED)
        spider = {m.destination for m in drag_moves if m.start == _c(-1, 0)}
        self.assertEqual(spider, {_c(1, 1), _c(2, -1)})

    def test_beetle_can_climb(self) -> None:
        """Occupied neighbours are candidate destinations for a beetle."""
        state = _state(
            [
                ((0, 0), _p(RED, BEE)),
                ((1, 0), _p(BLUE, BEE)),
                ((0, 1), _p(RED, BEETLE)),
            ],
            turn=4,
        )
        drag_moves = possible_drag_moves(state, RED)
        beetle = {m.destination for m in drag_moves if m.start == _c(0, 1)}
        self.assertEqual(beetle, {_c(0, 0), _c(1, 0), _c(-1, 1), _c(1, 1)})

    def test_pinned_piece_has_no_moves(self) -> None:
        """A piece holding the swarm together cannot move."""
        state = _state(
            [
                ((0, 0), _p(RED, BEE)),
                ((1, 0), _p(RED, ANT)),
                ((2, 0), _p(BLUE, BEE)),
            ],
            turn=4,
        )
        starts = {m.start for m in possible_drag_moves(state, RED)}
        self.assertNotIn(_c(1, 0), starts)
        self.assertIn(_c(0, 0), starts)


class TestPossibleMoves(unittest.TestCase):
    """Tests for possible_moves and its agreement with the validator."""

    def test_set_moves_come_first(self) -> None:
        """Set moves are listed before drag moves."""
        state = _state([((0, 0), _p(RED, BEE)), ((1, 0), _p(BLUE, BEE))], turn=2)
        legal = possible_moves(state, RED)
        kinds = [isinstance(m, SetMove) for m in legal]
        self.assertEqual(kinds, sorted(kinds, reverse=True))
        self.assertTrue(any(isinstance(m, DragMove) for m in legal))

    def test_generated_moves_pass_validator(self) -> None:
        """Every generated move is accepted by validate_move."""
        for seed in (1, 2):
            for state, legal in _play_random_game(seed, turns=20, num_obstructed=3):
                color = state.current_color
                for move in legal:
                    result = validate_move(state, color, move)
                    self.assertTrue(
                        result.success, f'seed {seed} turn {state.turn}: {move}'
                    )

    def test_validator_accepted_moves_are_generated(self) -> None:
        """Every move the validator accepts over all cells is generated."""
        for state, legal in _play_random_game(seed=3, turns=14, num_obstructed=2):
            color = state.current_color
            cells = list(state.board.fields)
            candidates: list[Move] = [
                SetMove(piece=piece, destination=dest)
                for piece in dict.fromkeys(state.undeployed_pieces(color))
                for dest in cells
            ]
            candidates.extend(
                DragMove(start=start, destination=dest)
                for start, _ in state.board.fields_owned_by(color)
                for dest in cells
            )
            accepted = {
                m for m in candidates if validate_move(state, color, m).success
            }
            self.assertEqual(accepted, set(legal), f'turn {state.turn}')

    def test_swarm_stays_connected(self) -> None:
        """Legal play never splits the swarm."""
        for state, _ in _play_random_game(seed=11, turns=20):
            self.assertTrue(state.board.is_swarm_connected(), f'turn {state.turn}')

    def test_bee_placed_by_fourth_move(self) -> None:
        """Following generated moves, both bees are down after round 3."""
        states = [s for s, _ in _play_random_game(seed=5, turns=9)]
        if len(states) == 9:
            board = states[-1].board
            self.assertTrue(board.has_placed_bee(RED))
            self.assertTrue(board.has_placed_bee(BLUE))


class TestGameOutcome(unittest.TestCase):
    """Tests for is_bee_surrounded and get_game_outcome."""

    def _surrounded_blue_bee(self) -> GameState:
        return _state(
            [
                ((0, 0), _p(BLUE, BEE)),
                ((0, 1), _p(RED, ANT)),
                ((1, 0), _p(RED, ANT)),
                ((1, -1), _p(RED, ANT)),
                ((0, -1), _p(RED, SPIDER)),
                ((-1, 0), _p(BLUE, ANT)),
                ((-1, 1), _p(RED, BEE)),
            ],
            turn=12,
        )

    def test_game_not_finished_at_start(self) -> None:
        """A fresh game is running."""
        self.assertEqual(
            get_game_outcome(create_initial_game_state()), GameOutcome(finished=False)
        )

    def test_unplaced_bee_is_not_surrounded(self) -> None:
        """A bee still in hand cannot be surrounded."""
        self.assertFalse(is_bee_surrounded(_state().board, RED))

    def test_surrounded_bee_loses(self) -> None:
        """The color surrounding the opponent's bee wins."""
        state = self._surrounded_blue_bee()
        self.assertTrue(is_bee_surrounded(state.board, BLUE))
        self.assertFalse(is_bee_surrounded(state.board, RED))
        self.assertEqual(
            get_game_outcome(state), GameOutcome(finished=True, winner=RED)
        )

    def test_edge_and_obstructed_cells_count_as_blocking(self) -> None:
        """A bee on the rim is surrounded by fewer pieces."""
        state = _state(
            [
                ((5, 0), _p(RED, BEE)),
                ((4, 0), _p(BLUE, ANT)),
                ((4, 1), _p(BLUE, BEE)),
            ],
            turn=8,
            obstructed=((5, -1),),
        )
        self.assertTrue(is_bee_surrounded(state.board, RED))
        self.assertEqual(get_game_outcome(state).winner, BLUE)

    def test_both_surrounded_is_a_draw(self) -> None:
        """When both bees are surrounded nobody wins."""
        state = _state(
            [
                ((5, 0), _p(RED, BEE)),
                ((4, 0), _p(BLUE, BEE)),
                ((4, 1), _p(BLUE, ANT)),
                ((5, -1), _p(RED, ANT)),
                ((3, 0), _p(RED, ANT)),
                ((3, 1), _p(BLUE, ANT)),
                ((4, -1), _p(RED, SPIDER)),
                ((5, -2), _p(BLUE, SPIDER)),
            ],
            turn=16,
        )
        self.assertTrue(is_bee_surrounded(state.board, RED))
        self.assertTrue(is_bee_surrounded(state.board, BLUE))
        self.assertEqual(get_game_outcome(state), GameOutcome(finished=True))

    def test_round_limit_ends_game(self) -> None:
        """After the last round the game ends without a winner."""
        state = _state([((0, 0), _p(RED, BEE)), ((1, 0), _p(BLUE, BEE))], turn=60)
        self.assertEqual(get_game_outcome(state), GameOutcome(finished=True))
        state.turn = 59
        self.assertFalse(get_game_outcome(state).finished)


if __name__ == '__main__':
    unittest.main()
