"""
Charles - a generic genetic-algorithm engine.

Evolves a population of gene sequences towards higher strength through
roulette selection, caller-supplied crossover, bitwise mutation, elitism
and duplicate control.
"""

__version__ = "0.1.0"

from charles.evolution import (  # noqa: E402
    Candidate,
    EndReason,
    EngineConfig,
    EvolutionEngine,
    OffspringOperator,
    ParentsSimilarity,
    SliceAndStitch,
)
from charles.genes import GeneCodec  # noqa: E402
from charles.utils import DeterministicRng, setup_logger  # noqa: E402

__all__ = [
    "Candidate",
    "DeterministicRng",
    "EndReason",
    "EngineConfig",
    "EvolutionEngine",
    "GeneCodec",
    "OffspringOperator",
    "ParentsSimilarity",
    "SliceAndStitch",
    "setup_logger",
]
