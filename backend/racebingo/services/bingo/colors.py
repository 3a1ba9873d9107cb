import random
from typing import Iterable


PALETTE = (
    '#FF61E6',  # neon pink
    '#00FFBB',  # cyber mint
    '#84FF3C',  # electric lime
    '#FFB938',  # cosmic orange
    '#FF4D8C',  # hot coral
    '#41CAFF',  # bright sky blue
    '#B275FF',  # bright purple
    '#FFE668',  # warm yellow
)


def next_color(used: Iterable[str], rng=random) -> str:
    """Pick an unused palette color, or a random hex color once the palette runs out."""
    used = set(used)
    free = [c for c in PALETTE if c not in used]
    if free:
        return rng.choice(free)
    while True:
        color = '#{:06x}'.format(rng.randrange(0x1000000))
        if color not in used:
            return color
