import itertools


def counting_keys(prefix: str = "key"):
    """Deterministic key generator: key0001, key0002, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter):04d}"


class FixedRandom:
    """Stands in for random.Random; always returns the same draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value
