"""
Shared fixtures: minimal boards and a placer.

The package ships no game rules, so tests drive it with boards whose slide
outcomes are scripted.
"""

import pytest

from threes_td import Action, Agent, Board, ILLEGAL_MOVE, check_cells


class ScriptedBoard(Board):
    """Board whose slide results come from a table: op -> (reward, tiles)."""

    def __init__(self, tiles=None, outcomes=None):
        super().__init__(tiles)
        self.outcomes = outcomes or {}

    def slide(self, op):
        if op not in self.outcomes:
            return ILLEGAL_MOVE
        reward, tiles = self.outcomes[op]
        self._tiles = check_cells(tiles)
        return reward


class CountdownBoard(Board):
    """Every slide bumps cell 0 and pays ``op``; cell 0 stops at 3."""

    LIMIT = 3

    def slide(self, op):
        if self.cell(0) >= self.LIMIT:
            return ILLEGAL_MOVE
        self[0] = self.cell(0) + 1
        return op


class FirstEmptyPlacer(Agent):
    """Places a 1 on the first empty cell of the bottom half."""

    def take_action(self, board):
        for pos in range(8, 16):
            if board(pos) == 0:
                return Action.place(pos, 1)
        return Action()


@pytest.fixture
def zero_board():
    return ScriptedBoard()


@pytest.fixture
def ramp_board():
    """Board holding 0..15 row-major."""
    return ScriptedBoard(list(range(16)))
