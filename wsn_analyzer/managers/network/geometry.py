import math


def distance(a, b) -> float:
    """Euclidean distance between two positioned objects (anything with .x and .y)."""
    dx = a.x - b.x
    dy = a.y - b.y
    # same operation order as the vectorized range check, so both agree bit-for-bit
    return math.sqrt(dx * dx + dy * dy)
