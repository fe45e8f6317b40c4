"""Stock offspring operators working on the binary gene encoding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from charles.genes.codec import GeneCodec, flip_bit
from charles.utils.rng import DeterministicRng

T = TypeVar("T")


class OffspringOperator(ABC, Generic[T]):
    """Base class for callables mapping two parents to two children.

    Operators own their random source; pass an int to seed a private one.
    """

    def __init__(self, alphabet: Sequence[T], rng: DeterministicRng | int = 0):
        self.codec: GeneCodec[T] = GeneCodec(alphabet)
        self.rng = rng if isinstance(rng, DeterministicRng) else DeterministicRng(rng)

    def __call__(
        self, genes_a: Sequence[T], genes_b: Sequence[T]
    ) -> tuple[tuple[T, ...], tuple[T, ...]]:
        bits_a = self.codec.encode(genes_a)
        bits_b = self.codec.encode(genes_b)
        child_a, child_b = self.combine(bits_a, bits_b)
        return (
            self.codec.decode(child_a, len(genes_a)),
            self.codec.decode(child_b, len(genes_b)),
        )

    @abstractmethod
    def combine(self, bits_a: str, bits_b: str) -> tuple[str, str]:
        """Produce the two children's bit strings from the parents' bit strings."""


class SliceAndStitch(OffspringOperator[T]):
    """Single-point crossover.

    A cut position is drawn over the encoded length and the children swap
    tails: ``000000`` x ``111111`` cut at 3 gives ``000111`` and ``111000``.
    """

    def combine(self, bits_a: str, bits_b: str) -> tuple[str, str]:
        if not bits_a:
            return bits_a, bits_b
        cut = self.rng.next_int(len(bits_a))
        return bits_a[:cut] + bits_b[cut:], bits_b[:cut] + bits_a[cut:]


class ParentsSimilarity(OffspringOperator[T]):
    """Bitwise crossover biased towards what both parents share.

    Where the parents agree, a child keeps the shared bit with probability
    ``agreement_odds`` and flips it otherwise; where they differ, a fair
    coin picks the parent.
    """

    def __init__(
        self,
        alphabet: Sequence[T],
        rng: DeterministicRng | int = 0,
        agreement_odds: float = 0.9,
    ):
        super().__init__(alphabet, rng)
        if not 0.0 <= agreement_odds <= 1.0:
            raise ValueError(
                f"agreement_odds must be in the range [0,1], got {agreement_odds}"
            )
        self.agreement_odds = agreement_odds

    def _child(self, first: str, second: str) -> str:
        bits = []
        for own, other in zip(first, second):
            r = self.rng.next_float()
            if own == other:
                bits.append(own if r <= self.agreement_odds else flip_bit(own))
            else:
                bits.append(own if r <= 0.5 else other)
        return "".join(bits)

    def combine(self, bits_a: str, bits_b: str) -> tuple[str, str]:
        return self._child(bits_a, bits_b), self._child(bits_b, bits_a)
