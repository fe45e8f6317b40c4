from __future__ import annotations

import math
from typing import Callable, Generic, Sequence, TypeVar

from charles.exceptions import InvalidProbabilityError, InvalidStrengthError
from charles.genes.codec import GeneCodec, flip_bit
from charles.utils.rng import DeterministicRng

T = TypeVar("T")

StrengthFunction = Callable[[Sequence[T]], float]


class Candidate(Generic[T]):
    """A single subject of the population.

    Holds the genes plus the derived strength (fitness) and the selection
    probability. Two candidates are equal iff their genes are equal;
    strength and probability do not take part in equality.
    """

    def __init__(self, genes: Sequence[T]):
        self._genes: tuple[T, ...] = tuple(genes)
        self.strength: float = 0.0
        self.probability: float = 0.0

    @property
    def genes(self) -> tuple[T, ...]:
        return self._genes

    def __len__(self) -> int:
        return len(self._genes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self._genes == other._genes

    # Equality only; genes are not required to be hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Candidate(genes={list(self._genes)!r}, strength={self.strength}, "
            f"probability={self.probability})"
        )

    def copy(self) -> Candidate[T]:
        clone: Candidate[T] = Candidate(self._genes)
        clone.strength = self.strength
        clone.probability = self.probability
        return clone

    def evaluate(self, strength_function: StrengthFunction) -> float:
        """Compute strength and reset the probability to 0.

        Raises:
            InvalidStrengthError: if the strength function returns a negative
                or NaN value
        """
        strength = float(strength_function(self._genes))
        if math.isnan(strength) or strength < 0.0:
            raise InvalidStrengthError(
                f"Encountered invalid strength {strength} for candidate {list(self._genes)}"
            )
        self.strength = strength
        self.probability = 0.0
        return strength

    def normalize(self, total_strength: float) -> float:
        """Set probability as this candidate's share of *total_strength*."""
        if math.isinf(total_strength) and total_strength > 0:
            self.probability = 1.0 if math.isinf(self.strength) else 0.0
            return self.probability
        if total_strength == 0.0:
            self.probability = 0.0
            return self.probability

        p = self.strength / total_strength
        if not 0.0 <= p <= 1.0:
            raise InvalidProbabilityError(
                f"Encountered problematic probability {p} for strength {self.strength} "
                f"and combined strength {total_strength}"
            )
        self.probability = p
        return p

    def mutate(
        self, mutation_odds: float, codec: GeneCodec[T], rng: DeterministicRng
    ) -> int:
        """Flip every encoded bit independently with probability *mutation_odds*.

        One draw is taken per bit, in sequence order, regardless of the odds.

        Returns:
            Number of flipped bits
        """
        bits = codec.encode(self._genes)
        if not bits:
            return 0

        flipped = 0
        mutated = []
        for bit in bits:
            if rng.next_float() <= mutation_odds:
                mutated.append(flip_bit(bit))
                flipped += 1
            else:
                mutated.append(bit)

        if flipped:
            self._genes = codec.decode("".join(mutated), len(self._genes))
        return flipped
