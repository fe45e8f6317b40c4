from __future__ import annotations

from charles.evolution.engine.config import EngineConfig
from charles.evolution.engine.core import EvolutionEngine
from charles.evolution.engine.duplication import (
    DuplicationPolicy,
    IgnorePolicy,
    KillPolicy,
    ReplacePolicy,
    parse_duplication_policy,
)
from charles.evolution.engine.metrics import EngineMetrics, GenerationSummary
from charles.evolution.engine.selection import CandidateSelector, RouletteSelector
from charles.evolution.engine.state import EndReason, EngineState
