from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from loguru import logger

from charles.evolution.candidate import Candidate
from charles.utils.rng import DeterministicRng


class CandidateSelector(ABC):
    """Abstract base class for picking a parent out of the population."""

    @abstractmethod
    def __call__(
        self,
        population: Sequence[Candidate],
        rng: DeterministicRng,
        exclude: Candidate | None = None,
    ) -> Candidate:
        """Select one candidate, never one equal to *exclude*."""


class RouletteSelector(CandidateSelector):
    """Strength-proportional (roulette-wheel) selection.

    Expects the population sorted strength-descending with normalized
    probabilities. A draw ``r`` in (0, 1] is compared against the running
    probability mass; the first candidate whose cumulative mass reaches
    ``r`` wins. When a candidate is excluded the draw is scaled by
    ``1 - excluded.probability`` and equal candidates are skipped during
    the scan. If rounding keeps the mass below ``r`` the last eligible
    candidate is returned.
    """

    def __call__(
        self,
        population: Sequence[Candidate],
        rng: DeterministicRng,
        exclude: Candidate | None = None,
    ) -> Candidate:
        if not population:
            raise ValueError("Cannot select from an empty population")

        r = rng.next_positive_float()
        if exclude is not None:
            r *= 1.0 - exclude.probability

        mass = 0.0
        for candidate in population:
            if exclude is not None and candidate == exclude:
                continue
            p = candidate.probability
            if mass + p >= r:
                return candidate
            mass += p

        fallback = self._fallback(population, exclude)
        logger.debug(
            "[RouletteSelector] Fallback to last candidate (r={:.6f}, mass={:.6f})",
            r,
            mass,
        )
        return fallback

    @staticmethod
    def _fallback(
        population: Sequence[Candidate], exclude: Candidate | None
    ) -> Candidate:
        if exclude is not None:
            for candidate in reversed(population):
                if candidate != exclude:
                    return candidate
        return population[-1]
