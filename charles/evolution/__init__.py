from charles.evolution.candidate import Candidate
from charles.evolution.engine import EndReason, EngineConfig, EvolutionEngine
from charles.evolution.offspring import (
    OffspringOperator,
    ParentsSimilarity,
    SliceAndStitch,
)

__all__ = [
    "Candidate",
    "EndReason",
    "EngineConfig",
    "EvolutionEngine",
    "OffspringOperator",
    "ParentsSimilarity",
    "SliceAndStitch",
]
