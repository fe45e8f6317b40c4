import math

from charles.evolution.candidate import Candidate
from charles.evolution.engine.metrics import EngineMetrics, GenerationSummary


def _evaluated(genes, strength):
    candidate = Candidate(genes)
    candidate.evaluate(lambda g: strength)
    return candidate


def test_summary_of_empty_population():
    summary = GenerationSummary.from_population(3, [])
    assert summary.population_size == 0
    assert summary.best_strength == 0.0


def test_summary_statistics():
    population = [_evaluated([1, 1], 4.0), _evaluated([1, 0], 2.0), _evaluated([0, 0], 0.0)]
    summary = GenerationSummary.from_population(1, population)
    assert summary.generation == 1
    assert summary.population_size == 3
    assert summary.best_strength == 4.0
    assert summary.mean_strength == 2.0
    assert summary.best_genes == (1, 1)


def test_summary_with_infinite_strength():
    population = [_evaluated([1], math.inf), _evaluated([0], 1.0)]
    summary = GenerationSummary.from_population(0, population)
    assert math.isinf(summary.best_strength)


def test_metrics_record_history_and_dump_counters():
    metrics = EngineMetrics()
    metrics.record_generation(0, [_evaluated([1], 1.0)])
    metrics.record_generation(1, [_evaluated([1], 3.0)])
    metrics.bits_flipped += 5

    assert metrics.best_strengths() == [1.0, 3.0]
    dumped = metrics.to_dict()
    assert "history" not in dumped
    assert dumped["bits_flipped"] == 5
