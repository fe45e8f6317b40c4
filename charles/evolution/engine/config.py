from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from charles.evolution.engine.duplication import (
    DuplicationPolicy,
    IgnorePolicy,
    parse_duplication_policy,
)


def _default_seed() -> int:
    return time.time_ns() // 1_000_000


class EngineConfig(BaseModel):
    """Configuration options controlling EvolutionEngine behaviour."""

    elitism_ratio: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Fraction of the previous generation carried over as elitists",
    )
    mutation_odds: float = Field(
        default=0.001,
        ge=0.0,
        le=1.0,
        description="Independent flip probability of every encoded bit",
    )
    generations: int = Field(
        default=10, gt=0, description="Maximum number of reproduction rounds"
    )
    duplication_policy: DuplicationPolicy = Field(
        default_factory=IgnorePolicy,
        description="How repeated gene sequences are handled after breeding",
    )
    seed: int = Field(
        default_factory=_default_seed,
        description="Seed of the engine's pseudo-random number generator",
    )
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @field_validator("duplication_policy", mode="before")
    @classmethod
    def _parse_duplication_policy(cls, v):
        if isinstance(v, dict):
            return v
        return parse_duplication_policy(v)

    @field_serializer("duplication_policy")
    def _serialize_duplication_policy(self, policy) -> str:
        return str(policy)
