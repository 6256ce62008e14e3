from __future__ import annotations

import random
from typing import Generic, Iterator, List, Optional, Sequence, TypeVar


T = TypeVar("T")


class Bag(Generic[T]):
    """Ordered values with a movable cursor.

    The cursor wraps around in both directions. Piece rotations are cycled
    with `next`/`previous`; piece selection uses `random_select`.
    """

    def __init__(self, values: Sequence[T], rng: Optional[random.Random] = None) -> None:
        if len(values) == 0:
            raise ValueError("Bag needs at least one value")
        self._values: List[T] = list(values)
        self._index = 0
        self.rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    @property
    def index(self) -> int:
        return self._index

    def current(self) -> T:
        return self._values[self._index]

    def next(self) -> T:
        self._index = (self._index + 1) % len(self._values)
        return self.current()

    def previous(self) -> T:
        self._index = (self._index - 1) % len(self._values)
        return self.current()

    def rewind(self) -> T:
        self._index = 0
        return self.current()

    def random_select(self) -> T:
        self._index = self.rng.randrange(len(self._values))
        return self.current()
