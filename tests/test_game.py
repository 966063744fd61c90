"""
Tests for the 2048 game engine.

Tests cover the status state machine, move semantics and scoring, tile spawning, restart, and the invariants
holding over long random games.
"""

from unittest import TestCase, main

import numpy as np

from game2048.core.gameboard import latent_state
from game2048.envs import Game, GameStatus
from tests.helpers import FixedRandom

LOST = [[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2, 4], [8, 16, 32, 64]]


def board_with(*rows):
    """Build a 4x4 grid whose first rows are given, the rest empty."""
    return [list(row) for row in rows] + [[0] * 4 for _ in range(4 - len(rows))]


class TestLifecycle(TestCase):
    """Test start, restart and the status state machine."""

    def test_new_game_is_idle(self):
        """A new game waits for start with an empty board and zero score."""
        game = Game()
        self.assertIs(game.get_status(), GameStatus.IDLE)
        self.assertEqual(game.get_score(), 0)
        np.testing.assert_array_equal(game.get_state(), np.zeros((4, 4)))
        self.assertEqual(game.size, 4)

    def test_start_empty_board(self):
        """Starting on an empty board spawns exactly two tiles of 2 or 4."""
        game = Game(seed=42)
        game.start()

        state = game.get_state()
        self.assertEqual(np.count_nonzero(state), 2)
        self.assertTrue(np.all(np.isin(state[state != 0], [2, 4])))
        self.assertIs(game.get_status(), GameStatus.PLAYING)

    def test_start_is_reproducible(self):
        """Same seed produces the same starting board."""
        game1, game2 = Game(seed=3), Game(seed=3)
        game1.start()
        game2.start()
        np.testing.assert_array_equal(game1.get_state(), game2.get_state())

    def test_start_custom_board_keeps_tiles(self):
        """A pre-populated board is not given extra tiles."""
        grid = board_with([2, 0, 0, 0], [0, 4, 0, 0])
        game = Game(grid)
        game.start()
        np.testing.assert_array_equal(game.get_state(), np.array(grid))
        self.assertIs(game.get_status(), GameStatus.PLAYING)

    def test_start_only_when_idle(self):
        """A second start is a no-op."""
        game = Game(seed=1)
        game.start()
        state = game.get_state()
        game.start()
        np.testing.assert_array_equal(game.get_state(), state)
        self.assertIs(game.get_status(), GameStatus.PLAYING)

    def test_start_on_lost_board(self):
        """A full board without equal neighbours resolves to lose on start."""
        game = Game(LOST)
        game.start()
        self.assertIs(game.get_status(), GameStatus.LOSE)
        self.assertTrue(game.is_finished)
        np.testing.assert_array_equal(game.get_state(), np.array(LOST))

    def test_start_on_won_board(self):
        """A board already holding 2048 resolves to win on start."""
        game = Game(board_with([2048, 0, 0, 0]))
        game.start()
        self.assertIs(game.get_status(), GameStatus.WIN)

    def test_restart_round_trip(self):
        """Restart then start reproduces the custom board with zero score."""
        grid = board_with([2, 2, 0, 0], [4, 0, 0, 4])
        game = Game(grid, seed=5)
        game.start()
        game.move_left()
        game.move_up()
        self.assertGreater(game.get_score(), 0)

        game.restart()
        self.assertIs(game.get_status(), GameStatus.IDLE)
        self.assertEqual(game.get_score(), 0)
        np.testing.assert_array_equal(game.get_state(), np.array(grid))

        game.start()
        np.testing.assert_array_equal(game.get_state(), np.array(grid))
        self.assertIs(game.get_status(), GameStatus.PLAYING)
        self.assertEqual(game.get_score(), 0)

    def test_restart_empty_board_defers_spawn(self):
        """Restart does not spawn; the next start does."""
        game = Game(seed=9)
        game.start()
        game.restart()
        self.assertEqual(np.count_nonzero(game.get_state()), 0)
        game.start()
        self.assertEqual(np.count_nonzero(game.get_state()), 2)

    def test_restart_leaves_terminal_status(self):
        """Restart is the only way out of a terminal status."""
        game = Game(LOST)
        game.start()
        self.assertFalse(game.move_left())
        game.restart()
        self.assertIs(game.get_status(), GameStatus.IDLE)

    def test_restart_round_trip_on_lost_board(self):
        """Restart then start on a lost board resolves to lose again without spawning."""
        game = Game(LOST, seed=0)
        game.start()
        game.restart()
        game.start()

        self.assertIs(game.get_status(), GameStatus.LOSE)
        self.assertEqual(game.get_score(), 0)
        np.testing.assert_array_equal(game.get_state(), np.array(LOST))

    def test_restart_round_trip_on_won_board(self):
        """Restart then start on a board holding 2048 resolves to win again without spawning."""
        grid = board_with([2048, 2, 0, 0])
        game = Game(grid, seed=0)
        game.start()
        self.assertFalse(game.move_right())
        game.restart()
        game.start()

        self.assertIs(game.get_status(), GameStatus.WIN)
        self.assertEqual(game.get_score(), 0)
        np.testing.assert_array_equal(game.get_state(), np.array(grid))

    def test_status_transitions_are_logged(self):
        """Status changes are logged at info level."""
        with self.assertLogs('game2048.envs.game', level='INFO') as logs:
            game = Game(seed=0)
            game.start()
        self.assertIn('idle -> playing', logs.output[0])


class TestMoves(TestCase):
    """Test move semantics, scoring and spawning."""

    def test_moves_ignored_before_start(self):
        """Moves are no-ops while idle."""
        grid = board_with([2, 2, 0, 0])
        game = Game(grid)
        self.assertFalse(game.move_left())
        np.testing.assert_array_equal(game.get_state(), np.array(grid))
        self.assertEqual(game.get_score(), 0)
        self.assertIs(game.get_status(), GameStatus.IDLE)

    def test_merge_pair(self):
        """[2, 2, 0, 0] merges to [4, 0, 0, 0], scores 4 and spawns one tile elsewhere."""
        game = Game(board_with([2, 2, 0, 0]), rng=FixedRandom(index=14))
        game.start()
        self.assertTrue(game.move_left())

        state = game.get_state()
        np.testing.assert_array_equal(state[0], [4, 0, 0, 0])
        self.assertEqual(state[3, 3], 2)
        self.assertEqual(np.count_nonzero(state), 2)
        self.assertEqual(game.get_score(), 4)

    def test_no_triple_merge(self):
        """[2, 2, 2, 2] merges to [4, 4, 0, 0] and scores 8."""
        game = Game(board_with([2, 2, 2, 2]), rng=FixedRandom(index=14))
        game.start()
        game.move_left()

        np.testing.assert_array_equal(game.get_state()[0], [4, 4, 0, 0])
        self.assertEqual(game.get_score(), 8)

    def test_each_direction(self):
        """Every direction slides towards its edge before the spawn."""
        cases = {'left': (1, 0), 'right': (1, 3), 'up': (0, 1), 'down': (3, 1)}
        for direction, cell in cases.items():
            game = Game(board_with([0, 0, 0, 0], [0, 2, 0, 0]), rng=FixedRandom(index=0, draw=0.95))
            game.start()
            self.assertTrue(getattr(game, f'move_{direction}')())

            state = game.get_state()
            self.assertEqual(state[cell], 2)
            self.assertEqual(state[0, 0], 4)
            self.assertEqual(np.count_nonzero(state), 2)

    def test_move_by_name_and_index(self):
        """The generic move accepts direction names and action indices."""
        game1 = Game(board_with([2, 2, 0, 0]), rng=FixedRandom())
        game2 = Game(board_with([2, 2, 0, 0]), rng=FixedRandom())
        game1.start()
        game2.start()
        game1.move('right')
        game2.move(2)
        np.testing.assert_array_equal(game1.get_state(), game2.get_state())

    def test_unknown_direction(self):
        """Unknown directions raise ValueError."""
        game = Game()
        game.start()
        with self.assertRaises(ValueError):
            game.move('sideways')

    def test_noop_move(self):
        """A move that cannot change the board changes nothing and spawns nothing."""
        grid = [[2, 0, 0, 0], [4, 0, 0, 0], [8, 0, 0, 0], [16, 0, 0, 0]]
        game = Game(grid, seed=0)
        game.start()
        self.assertFalse(game.move_left())

        np.testing.assert_array_equal(game.get_state(), np.array(grid))
        self.assertEqual(game.get_score(), 0)
        self.assertIs(game.get_status(), GameStatus.PLAYING)

    def test_lose_after_move(self):
        """Filling the last cell without merge options loses the game."""
        grid = [[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2, 4], [8, 16, 32, 0]]
        game = Game(grid, rng=FixedRandom(draw=0.5))
        game.start()
        self.assertTrue(game.move_right())

        # ##>: The row slides to [0, 8, 16, 32] and a 2 lands on the freed cell.
        np.testing.assert_array_equal(game.get_state()[3], [2, 8, 16, 32])
        self.assertIs(game.get_status(), GameStatus.LOSE)
        self.assertEqual(game.legal_moves(), [])

    def test_win_freezes_game(self):
        """Reaching 2048 wins and further moves are no-ops."""
        game = Game(board_with([1024, 1024, 0, 0]), rng=FixedRandom(index=14))
        game.start()
        self.assertTrue(game.move_left())
        self.assertIs(game.get_status(), GameStatus.WIN)
        self.assertEqual(game.get_score(), 2048)

        state = game.get_state()
        for move in (game.move_right, game.move_down, game.move_up, game.move_left):
            self.assertFalse(move())
        np.testing.assert_array_equal(game.get_state(), state)
        self.assertEqual(game.get_score(), 2048)

    def test_legal_moves(self):
        """Legal moves list the directions that change the board."""
        game = Game(board_with([2, 0, 0, 0], [2, 0, 0, 0]))
        self.assertEqual(game.legal_moves(), [])
        game.start()
        self.assertEqual(game.legal_moves(), ['up', 'right', 'down'])


class TestEncapsulation(TestCase):
    """Test that callers cannot reach the engine internals."""

    def test_state_is_a_copy(self):
        """Mutating a snapshot does not affect the game."""
        game = Game(seed=0)
        game.start()
        snapshot = game.get_state()
        snapshot[:] = 1024
        self.assertFalse(np.any(game.get_state() == 1024))

    def test_initial_state_is_a_copy(self):
        """Mutating the caller grid after construction does not affect the game."""
        grid = board_with([2, 0, 0, 0])
        game = Game(grid)
        grid[0][0] = 4
        self.assertEqual(game.get_state()[0, 0], 2)
        self.assertEqual(game.initial_state[0, 0], 2)

    def test_invalid_initial_state(self):
        """An invalid grid falls back silently to an empty board."""
        for candidate in ([[2, 2], [2, 2]], [[0] * 4] * 3, 'board', [[3] * 4] * 4):
            game = Game(candidate, seed=0)
            np.testing.assert_array_equal(game.get_state(), np.zeros((4, 4)))
            game.start()
            self.assertEqual(np.count_nonzero(game.get_state()), 2)


class TestInvariants(TestCase):
    """Test invariants over long random games."""

    def test_random_games(self):
        """Cells stay powers of two and the score is the sum of all merges."""
        actions = np.random.default_rng(11)

        for seed in range(5):
            game = Game(seed=seed)
            game.start()
            expected_score = 0
            previous_score = 0

            for _ in range(300):
                if game.is_finished:
                    break
                direction = ('left', 'up', 'right', 'down')[actions.integers(4)]
                before = game.get_state()
                after, reward = latent_state(before, direction)

                changed = game.move(direction)
                self.assertEqual(changed, bool((after != before).any()))
                if changed:
                    expected_score += reward
                    self.assertEqual(np.count_nonzero(game.get_state()), np.count_nonzero(after) + 1)
                else:
                    np.testing.assert_array_equal(game.get_state(), before)

                state = game.get_state()
                tiles = state[state != 0]
                self.assertTrue(np.all((tiles >= 2) & ((tiles & (tiles - 1)) == 0)))
                self.assertEqual(game.get_score(), expected_score)
                self.assertGreaterEqual(game.get_score(), previous_score)
                previous_score = game.get_score()


if __name__ == "__main__":
    main()
