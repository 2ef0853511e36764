"""Immutable grid coordinates."""

from typing import NamedTuple


class Location(NamedTuple):
    """A (row, col) cell position in a field.

    Value-equal, hashable and ordered row-major, so locations can be used as
    dictionary keys and sorted into scan order.
    """

    row: int
    col: int

    def manhattan_distance(self, other: "Location") -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def __str__(self) -> str:
        return f"{self.row},{self.col}"
