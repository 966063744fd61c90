"""Derive spawned and merged cells from two board snapshots."""

from typing import NamedTuple

from numpy import argwhere, asarray


class BoardChanges(NamedTuple):
    """Cells to emphasise after a move, as (row, col) positions."""

    spawned: list[tuple[int, int]]
    merged: list[tuple[int, int]]

    @property
    def is_empty(self) -> bool:
        return not self.spawned and not self.merged


def board_changes(previous, current) -> BoardChanges:
    """
    Compare two snapshots returned by ``Game.get_state``.

    Parameters
    ----------
    previous : array_like
        Board before the operation.
    current : array_like
        Board after the operation.

    Returns
    -------
    BoardChanges
        ``spawned``: cells that were empty and now hold a tile.
        ``merged``: cells whose tile value grew.

    Notes
    -----
    A tile that only slid onto an empty cell is reported as spawned.
    """
    previous, current = asarray(previous), asarray(current)
    if previous.shape != current.shape:
        raise ValueError(f'Snapshots differ in shape: {previous.shape} != {current.shape}')

    spawned = (previous == 0) & (current != 0)
    merged = (previous != 0) & (current > previous)
    return BoardChanges(
        spawned=[(int(r), int(c)) for r, c in argwhere(spawned)],
        merged=[(int(r), int(c)) for r, c in argwhere(merged)],
    )
