from __future__ import annotations

from typing import Sequence

import numpy as np
from pydantic import BaseModel, Field

from charles.evolution.candidate import Candidate


class GenerationSummary(BaseModel):
    """Snapshot of a population after it has been evaluated and sorted."""

    generation: int = Field(ge=0)
    population_size: int = Field(ge=0)
    best_strength: float = Field(description="Strength of the top candidate")
    mean_strength: float = Field(description="Mean strength over the population")
    best_genes: tuple = Field(default=(), description="Genes of the top candidate")

    @classmethod
    def from_population(
        cls, generation: int, population: Sequence[Candidate]
    ) -> "GenerationSummary":
        if not population:
            return cls(
                generation=generation,
                population_size=0,
                best_strength=0.0,
                mean_strength=0.0,
            )
        strengths = np.array([c.strength for c in population], dtype=float)
        return cls(
            generation=generation,
            population_size=len(population),
            best_strength=float(np.max(strengths)),
            mean_strength=float(np.mean(strengths)),
            best_genes=population[0].genes,
        )


class EngineMetrics(BaseModel):
    """Counters accumulated over an evolution run."""

    total_generations: int = Field(
        default=0, description="Total number of reproduction rounds run"
    )
    candidates_bred: int = Field(
        default=0, description="Total number of offspring created"
    )
    misfits_killed: int = Field(
        default=0, description="Total candidates removed for zero strength"
    )
    duplicates_removed: int = Field(
        default=0, description="Total duplicate candidates removed"
    )
    duplicates_replaced: int = Field(
        default=0, description="Total duplicates replaced with new offspring"
    )
    bits_flipped: int = Field(default=0, description="Total mutated bits")
    history: list[GenerationSummary] = Field(
        default_factory=list, description="Per-generation population summaries"
    )

    def record_generation(
        self, generation: int, population: Sequence[Candidate]
    ) -> GenerationSummary:
        summary = GenerationSummary.from_population(generation, population)
        self.history.append(summary)
        return summary

    def best_strengths(self) -> list[float]:
        return [s.best_strength for s in self.history]

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(exclude={"history"})
