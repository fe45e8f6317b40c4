import random


class DeterministicRng:
    """Seedable random source shared by selection, mutation and offspring operators.

    The engine owns exactly one instance and passes it by reference; it is
    only re-seeded through :meth:`seed`.
    """

    def __init__(self, seed: int):
        self._random = random.Random()
        self.seed(seed)

    def seed(self, seed: int) -> None:
        self._seed = seed
        self._random.seed(seed)

    @property
    def current_seed(self) -> int:
        return self._seed

    def next_float(self) -> float:
        """Uniform draw in [0, 1)."""
        return self._random.random()

    def next_positive_float(self) -> float:
        """Uniform draw in (0, 1]; an exact 0 is mapped to 1."""
        value = self._random.random()
        return 1.0 if value == 0.0 else value

    def next_int(self, upper: int) -> int:
        """Uniform integer in [0, upper)."""
        if upper <= 0:
            raise ValueError(f"upper must be positive, got {upper}")
        return self._random.randrange(upper)
