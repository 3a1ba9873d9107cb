import random
from typing import List, Sequence

from racebingo.errors import InvalidSize
from racebingo.models import Cell
from .goals import require_goal_count


MIN_BOARD_SIZE = 2


def generate_board(size: int, goals: Sequence[str], rng=random, min_size: int = MIN_BOARD_SIZE) -> List[List[Cell]]:
    """Deal a fresh size x size board of empty cells.

    Goals are sampled uniformly without replacement and laid out row-major,
    so every cell value is distinct and the unused goals are simply left out.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size < min_size:
        raise InvalidSize(min_size)
    require_goal_count(goals, size)
    picked = rng.sample(list(goals), size * size)
    return [
        [Cell(picked[r * size + c]) for c in range(size)]
        for r in range(size)
    ]
