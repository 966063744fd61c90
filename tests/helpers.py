"""Shared test doubles."""


class FixedRandom:
    """Random source returning the same cell index and tile draw every time."""

    def __init__(self, index: int = 0, draw: float = 0.0):
        self.index = index
        self.draw = draw

    def integers(self, high):
        return min(self.index, high - 1)

    def random(self):
        return self.draw
