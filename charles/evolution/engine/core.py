from __future__ import annotations

import math
from typing import Any, Callable, Generic, Sequence, TypeVar

from loguru import logger
from pydantic import ValidationError

from charles.evolution.candidate import Candidate
from charles.evolution.engine.config import EngineConfig
from charles.evolution.engine.duplication import KillPolicy, ReplacePolicy
from charles.evolution.engine.metrics import EngineMetrics
from charles.evolution.engine.selection import CandidateSelector, RouletteSelector
from charles.evolution.engine.state import EndReason, EngineState, validate_transition
from charles.exceptions import (
    ConfigurationError,
    EvolutionError,
    GeneEncodingError,
    PopulationError,
)
from charles.genes.codec import GeneCodec
from charles.utils.rng import DeterministicRng

__all__ = ["EvolutionEngine"]

T = TypeVar("T")

StrengthFunction = Callable[[Sequence[T]], float]
OffspringFunction = Callable[
    [Sequence[T], Sequence[T]], tuple[Sequence[T], Sequence[T]]
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _deduplicate(population: list[Candidate]) -> list[Candidate]:
    """Keep the first candidate of every distinct gene sequence, in order."""
    unique: list[Candidate] = []
    for candidate in population:
        if candidate not in unique:
            unique.append(candidate)
    return unique


class EvolutionEngine(Generic[T]):
    """
    Generational genetic engine.

    Every generation after the first:
    - drops misfits (zero strength) and stops if fewer than two remain,
    - carries the top ``elitism_ratio`` share over untouched,
    - breeds the rest through roulette-selected couples and the offspring function,
    - resolves duplicates according to the duplication policy,
    - mutates every candidate bit by bit, re-evaluates and re-sorts.

    Evolution stops early when a candidate reaches infinite strength.
    All randomness comes from a single seeded RNG, drawn in a fixed order,
    so identical inputs reproduce identical runs.
    """

    def __init__(
        self,
        population: Sequence[Sequence[T]],
        alphabet: Sequence[T],
        strength_function: StrengthFunction,
        offspring_function: OffspringFunction,
        config: EngineConfig | None = None,
        selector: CandidateSelector | None = None,
        **config_overrides: Any,
    ):
        try:
            if config is None:
                config = EngineConfig(**config_overrides)
            elif config_overrides:
                config = EngineConfig(**{**config.model_dump(), **config_overrides})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid engine configuration: {exc}") from exc

        self.config = config.model_copy()
        self.codec: GeneCodec[T] = GeneCodec(alphabet)
        self.selector = selector or RouletteSelector()
        self.rng = DeterministicRng(config.seed)
        self.metrics = EngineMetrics()

        self.strength_function = strength_function
        self.offspring_function = offspring_function

        self._subjects = self._validate_subjects(population)
        self._population: list[Candidate[T]] = [Candidate(s) for s in self._subjects]
        self._state = EngineState.IDLE
        self._end_reason: EndReason | None = None
        self._current_generation = 0

        logger.info(
            "[EvolutionEngine] Init | population={}, gene_length={}, alphabet={}, "
            "bits_per_gene={}, config={}",
            len(self._population),
            len(self._subjects[0]),
            len(self.codec),
            self.codec.bits_per_gene,
            self.config.model_dump(),
        )

    # -------------------------- Configuration --------------------------

    @property
    def strength_function(self) -> StrengthFunction:
        return self._strength_function

    @strength_function.setter
    def strength_function(self, fn: StrengthFunction) -> None:
        if not callable(fn):
            raise ConfigurationError("strength_function must be callable")
        self._strength_function = fn

    @property
    def offspring_function(self) -> OffspringFunction:
        return self._offspring_function

    @offspring_function.setter
    def offspring_function(self, fn: OffspringFunction) -> None:
        if not callable(fn):
            raise ConfigurationError("offspring_function must be callable")
        self._offspring_function = fn

    @property
    def elitism_ratio(self) -> float:
        return self.config.elitism_ratio

    @elitism_ratio.setter
    def elitism_ratio(self, value: float) -> None:
        self._set_config("elitism_ratio", value)

    @property
    def mutation_odds(self) -> float:
        return self.config.mutation_odds

    @mutation_odds.setter
    def mutation_odds(self, value: float) -> None:
        self._set_config("mutation_odds", value)

    @property
    def generations(self) -> int:
        return self.config.generations

    @generations.setter
    def generations(self, value: int) -> None:
        self._set_config("generations", value)

    @property
    def duplication_policy(self):
        return self.config.duplication_policy

    @duplication_policy.setter
    def duplication_policy(self, value) -> None:
        self._set_config("duplication_policy", value)

    @property
    def seed(self) -> int:
        return self.config.seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._set_config("seed", value)
        self.rng.seed(self.config.seed)

    @property
    def alphabet(self) -> tuple[T, ...]:
        return self.codec.alphabet

    @property
    def state(self) -> EngineState:
        return self._state

    def _set_config(self, name: str, value: Any) -> None:
        try:
            setattr(self.config, name, value)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid value for {name}: {value!r}") from exc

    def _validate_subjects(
        self, population: Sequence[Sequence[T]]
    ) -> list[tuple[T, ...]]:
        subjects = [tuple(subject) for subject in population]
        if not subjects:
            raise PopulationError("Population must contain at least one subject")

        length = len(subjects[0])
        if any(len(s) != length for s in subjects):
            raise PopulationError(
                "All subjects in the population must have the same size"
            )

        for subject in subjects:
            try:
                self.codec.encode(subject)
            except GeneEncodingError as exc:
                raise PopulationError(str(exc)) from exc
        return subjects

    # -------------------------- Public API --------------------------

    def evolve(self) -> EndReason:
        """Run generations ``0..generations`` and return why evolution stopped."""
        self._transition(EngineState.RUNNING)
        self._end_reason = None
        logger.info(
            "[EvolutionEngine] Start | generations={}, population={}",
            self.config.generations,
            len(self._population),
        )

        try:
            reason = self._run()
        except Exception:
            self._transition(EngineState.IDLE)
            raise

        self._end_reason = reason
        self._transition(EngineState.TERMINATED)
        logger.info(
            "[EvolutionEngine] Stop: {} at generation {} | {}",
            reason.message,
            self._current_generation,
            self.metrics.to_dict(),
        )
        return reason

    def reset(self) -> None:
        """Restore the initial population, generation counter and RNG seed."""
        self._transition(EngineState.IDLE)
        self._population = [Candidate(s) for s in self._subjects]
        self._end_reason = None
        self._current_generation = 0
        self.rng.seed(self.config.seed)
        self.metrics = EngineMetrics()
        logger.info("[EvolutionEngine] Reset to initial population")

    def get_best(self, n: int | None = None):
        """Genes of the strongest subject, or of the *n* strongest subjects."""
        if n is not None:
            return [c.genes for c in self._population[:n]]
        if not self._population:
            raise EvolutionError("Population is empty")
        return self._population[0].genes

    def get_population(self) -> list[tuple[T, ...]]:
        return [c.genes for c in self._population]

    def get_candidates(self) -> list[Candidate[T]]:
        return list(self._population)

    def get_end_reason(self) -> EndReason | None:
        return self._end_reason

    def get_current_generation(self) -> int:
        return self._current_generation

    # -------------------------- Generation loop --------------------------

    def _run(self) -> EndReason:
        for generation in range(self.config.generations + 1):
            self._current_generation = generation
            if generation == 0:
                candidates = [c.copy() for c in self._population]
            else:
                candidates = self._reproduce()
                if candidates is None:
                    return EndReason.POPULATION_PERISHED

            # The population is only replaced once the new generation evaluates
            self._evaluate(candidates)
            self._population = candidates
            if generation > 0:
                self.metrics.total_generations += 1

            summary = self.metrics.record_generation(generation, self._population)
            logger.debug(
                "[EvolutionEngine] Generation {} | size={}, best={}, mean={}",
                generation,
                summary.population_size,
                summary.best_strength,
                summary.mean_strength,
            )

            if any(math.isinf(c.strength) for c in self._population):
                return EndReason.IDEAL_SOLUTION_FOUND
        return EndReason.COMPLETED

    def _reproduce(self) -> list[Candidate[T]] | None:
        """Build the next generation from the current population.

        Returns:
            The unevaluated next generation, or None if the population
            perished before breeding
        """
        previous_size = len(self._population)
        parents = self._kill_misfits(self._population)
        if len(parents) < 2:
            logger.debug("[EvolutionEngine] Population perished ({} left)", len(parents))
            self._population = parents
            return None

        elitist_count = _round_half_up(self.config.elitism_ratio * previous_size)
        elitists = [c.copy() for c in parents[:elitist_count]]
        couples = (previous_size - elitist_count) // 2
        logger.debug(
            "[EvolutionEngine] Elitists={}, couples={}", len(elitists), couples
        )

        offspring = elitists + self._breed(parents, couples)
        offspring = self._handle_duplicates(offspring, parents)

        flipped = 0
        for candidate in offspring:
            flipped += candidate.mutate(self.config.mutation_odds, self.codec, self.rng)
        self.metrics.bits_flipped += flipped
        return offspring

    def _kill_misfits(self, population: list[Candidate[T]]) -> list[Candidate[T]]:
        survivors = [c for c in population if c.strength > 0.0]
        killed = len(population) - len(survivors)
        if killed:
            logger.debug("[EvolutionEngine] Killed {} misfit(s)", killed)
            self.metrics.misfits_killed += killed
        return survivors

    def _breed(
        self, parents: list[Candidate[T]], couples: int
    ) -> list[Candidate[T]]:
        children: list[Candidate[T]] = []
        for _ in range(couples):
            father = self.selector(parents, self.rng)
            mother = self.selector(parents, self.rng, exclude=father)
            genes_a, genes_b = self._offspring_function(father.genes, mother.genes)
            children.append(Candidate(genes_a))
            children.append(Candidate(genes_b))
        self.metrics.candidates_bred += len(children)
        return children

    def _handle_duplicates(
        self, population: list[Candidate[T]], parents: list[Candidate[T]]
    ) -> list[Candidate[T]]:
        policy = self.config.duplication_policy

        if isinstance(policy, KillPolicy):
            unique = _deduplicate(population)
            removed = len(population) - len(unique)
            if removed:
                logger.debug("[EvolutionEngine] Killed {} duplicate(s)", removed)
                self.metrics.duplicates_removed += removed
            return unique

        if isinstance(policy, ReplacePolicy):
            for _ in range(policy.attempts):
                prior_size = len(population)
                population = _deduplicate(population)
                missing = prior_size - len(population)
                if missing == 0:
                    return population

                self.metrics.duplicates_removed += missing
                fresh = self._breed(parents, math.ceil(missing / 2))[missing % 2 :]
                population = population + fresh
                self.metrics.duplicates_replaced += len(fresh)
                logger.debug("[EvolutionEngine] Replaced {} duplicate(s)", missing)

            if len(_deduplicate(population)) != len(population):
                logger.warning(
                    "[EvolutionEngine] Duplicates remain after {} replace attempt(s)",
                    policy.attempts,
                )
        return population

    def _evaluate(self, population: list[Candidate[T]]) -> None:
        for candidate in population:
            candidate.evaluate(self._strength_function)
        total_strength = sum(c.strength for c in population)
        for candidate in population:
            candidate.normalize(total_strength)
        population.sort(key=lambda c: c.strength, reverse=True)

    def _transition(self, new: EngineState) -> None:
        validate_transition(self._state, new)
        self._state = new
