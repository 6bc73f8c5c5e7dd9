"""Composite key identifying an angle by three atom indices."""

from __future__ import annotations

from typing import NamedTuple


class TripletKey(NamedTuple):
    """Atom indices ``(i, j, k)`` of the angle with vertex ``j``.

    Equality and ordering are both lexicographic over the full triple, so the
    key behaves consistently as a dict key and as a sort key.
    """

    i: int
    j: int
    k: int

    @property
    def center(self) -> int:
        return self.j

    @classmethod
    def canonical(cls, i: int, j: int, k: int) -> "TripletKey":
        """Return the key with the arms swapped if needed so that ``i < k``."""
        if i > k:
            i, k = k, i
        return cls(int(i), int(j), int(k))

    def is_canonical(self) -> bool:
        return self.i < self.k and self.j != self.i and self.j != self.k
