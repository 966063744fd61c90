"""
Core functionality for the 2048 board, including sliding, merging, spawning and end-of-game predicates.
"""

import logging

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array, array_equal, int64, integer, issubdtype, ndarray, zeros, zeros_like
from numpy.random import default_rng

logger = logging.getLogger(__name__)

# ##>: Fixed game constants.
BOARD_SIZE = 4
WIN_TILE = 2048

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##: All Actions.
ACTIONS = {'left': 0, 'up': 1, 'right': 2, 'down': 3}


def direction_index(direction: str | int) -> int:
    """
    Resolve a direction name or action index to its action index.

    Parameters
    ----------
    direction : str or int
        A direction name ('left', 'up', 'right', 'down') or an action index (0 to 3).

    Returns
    -------
    int
        The action index.

    Raises
    ------
    ValueError
        If the direction is unknown.
    """
    if isinstance(direction, str):
        if direction not in ACTIONS:
            raise ValueError(f'Unknown direction: {direction!r}')
        return ACTIONS[direction]
    if isinstance(direction, bool) or direction not in ACTIONS.values():
        raise ValueError(f'Unknown action index: {direction!r}')
    return int(direction)


def empty_board() -> ndarray:
    """Return a new all-zero board."""
    return zeros((BOARD_SIZE, BOARD_SIZE), dtype=int64)


def parse_board(candidate) -> ndarray | None:
    """
    Build a fresh board from a caller-supplied grid.

    Parameters
    ----------
    candidate : array_like
        A sequence of ``BOARD_SIZE`` sequences of ``BOARD_SIZE`` cell values.

    Returns
    -------
    ndarray or None
        A new ``int64`` board owning its data, or None when the candidate has the wrong shape or holds
        anything other than 0 or powers of two greater than one.
    """
    try:
        board = array(candidate)
    except (TypeError, ValueError):
        return None

    if board.shape != (BOARD_SIZE, BOARD_SIZE) or not issubdtype(board.dtype, integer):
        return None

    board = board.astype(int64)
    tiles = (board >= 2) & ((board & (board - 1)) == 0)
    if not np_all((board == 0) | tiles):
        return None
    return board


def initial_board(candidate=None) -> ndarray:
    """Like ``parse_board``, falling back to an empty board instead of None."""
    if candidate is None:
        return empty_board()

    board = parse_board(candidate)
    if board is None:
        logger.debug('Initial state rejected, falling back to an empty board')
        return empty_board()
    return board


def merge_row(row: ndarray) -> tuple[int, ndarray]:
    """
    Merge adjacent equal values in a row and compute the total score.

    Parameters
    ----------
    row : ndarray
        A 1D array representing one row of the game board.

    Returns
    -------
    score : int
        The total score obtained from merging.
    merged_row : ndarray
        The surviving tiles after merging, without padding.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - Merging occurs from the start of the row towards the end.
    - Each value can only be merged once per function call.
    """
    # ##: Compaction.
    non_zero = row[row != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    result = []
    score = 0

    # ##: Greedy left-to-right merge.
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = int(non_zero[i]) * 2
            result.append(merged)
            score += merged
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=row.dtype)


def slide_and_merge(board: ndarray) -> tuple[int, ndarray]:
    """
    Slide the game board to the left, merge adjacent cells, and compute the score.

    Parameters
    ----------
    board : ndarray
        The game board represented as a 2D NumPy array. Left untouched.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        A new board after sliding and merging.

    Notes
    -----
    - The function operates on rows, effectively sliding left.
    - For other directions, transform the board with ``to_left`` first.
    - Empty cells (zeros) are added to the right side of each row after merging.
    """
    result = zeros_like(board)
    score = 0

    for i, row in enumerate(board):
        score_row, merged_row = merge_row(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row

    return score, result


def to_left(board: ndarray, direction: str | int) -> ndarray:
    """
    Transform the board so that a move in ``direction`` becomes a move to the left.

    Right mirrors every row, up transposes, down transposes then mirrors every row.
    Returns a view; copy it before mutating.
    """
    action = direction_index(direction)
    if action == ACTIONS['right']:
        return board[:, ::-1]
    if action == ACTIONS['up']:
        return board.T
    if action == ACTIONS['down']:
        return board.T[:, ::-1]
    return board


def from_left(board: ndarray, direction: str | int) -> ndarray:
    """Undo ``to_left``, applying the inverse operations in reverse order."""
    action = direction_index(direction)
    if action == ACTIONS['right']:
        return board[:, ::-1]
    if action == ACTIONS['up']:
        return board.T
    if action == ACTIONS['down']:
        return board[:, ::-1].T
    return board


def latent_state(state: ndarray, direction: str | int) -> tuple[ndarray, int]:
    """
    Compute the board after a move, without adding a new tile.

    Parameters
    ----------
    state : ndarray
        The current state of the game board. Left untouched.
    direction : str or int
        The direction to apply ('left', 'up', 'right', 'down' or 0 to 3).

    Returns
    -------
    new_state : ndarray
        A new board after the move.
    reward : int
        The sum of the merged values.
    """
    reward, updated_board = slide_and_merge(to_left(state, direction))
    return from_left(updated_board, direction).copy(), reward


def is_changed(before: ndarray, after: ndarray) -> bool:
    """Tell whether two boards differ in any cell."""
    return not array_equal(before, after)


def empty_cells(state: ndarray) -> list[tuple[int, int]]:
    """Positions (row, col) of the empty cells, in row-major order."""
    return [(int(c[0]), int(c[1])) for c in argwhere(state == 0)]


def spawn_tile(state: ndarray, rng) -> bool:
    """
    Place a new tile on a uniformly chosen empty cell.

    Parameters
    ----------
    state : ndarray
        The current state of the game board. **Modified in-place.**
    rng : numpy.random.Generator
        Random source; only ``integers`` and ``random`` are used.

    Returns
    -------
    bool
        False when the board has no empty cell (nothing is placed).
    """
    cells = empty_cells(state)
    if not cells:
        return False

    cell = cells[int(rng.integers(len(cells)))]
    state[cell] = 2 if rng.random() < TILE_SPAWN_PROBS[2] else 4
    return True


def fill_cells(state: ndarray, number_tile: int, rng=None, seed: int | None = None) -> ndarray:
    """
    Fill empty cells with new tiles (2 or 4).

    Parameters
    ----------
    state : ndarray
        The current state of the game board. **Modified in-place.**
    number_tile : int
        Number of new tiles to add.
    rng : numpy.random.Generator, optional
        Random source. Built from ``seed`` when not given.
    seed : int, optional
        Random number generator seed for reproducibility.

    Returns
    -------
    ndarray
        The same array reference with new tiles added.

    Notes
    -----
    - New tiles have a 90% chance of being 2 and a 10% chance of being 4.
    - If there are fewer empty cells than requested, it fills all available cells.
    """
    rng = rng if rng is not None else default_rng(seed)

    for _ in range(number_tile):
        if not spawn_tile(state, rng):
            break
    return state


def has_won(state: ndarray, win_tile: int = WIN_TILE) -> bool:
    """Check whether any cell holds the winning tile."""
    return bool(np_any(state == win_tile))


def is_done(state: ndarray) -> bool:
    """
    Check if the game has ended by determining if any moves are possible.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The game is over when there are no empty cells AND no adjacent cells have the same value.
    """
    return bool(
        np_all(state != 0) and not np_any(state[:-1] == state[1:]) and not np_any(state[:, :-1] == state[:, 1:])
    )
