import pytest

from charles.evolution.engine.selection import RouletteSelector
from helpers import ScriptedRng, make_candidates


@pytest.fixture
def population():
    return make_candidates(([0], 0.5), ([1], 0.3), ([2], 0.2))


@pytest.mark.parametrize("draw, expected", [(0.1, 0), (0.5, 0), (0.6, 1), (0.95, 2)])
def test_first_candidate_reaching_draw_wins(population, draw, expected):
    selected = RouletteSelector()(population, ScriptedRng(draw))
    assert selected is population[expected]


def test_exclusion_rescales_draw_and_skips_excluded(population):
    select = RouletteSelector()
    # 0.9 * (1 - 0.5) = 0.45 -> 0.3 from [1] is not enough, [2] reaches 0.5
    assert select(population, ScriptedRng(0.9), exclude=population[0]) is population[2]
    # 0.5 * 0.5 = 0.25 -> [1] reaches 0.3
    assert select(population, ScriptedRng(0.5), exclude=population[0]) is population[1]


def test_excluded_candidate_is_never_selected(population):
    select = RouletteSelector()
    for draw in (0.01, 0.3, 0.6, 0.99, 1.0):
        assert select(population, ScriptedRng(draw), exclude=population[1]) is not population[1]


def test_fallback_to_last_when_mass_never_reaches_draw():
    population = make_candidates(([0], 0.0), ([1], 0.0), ([2], 0.0))
    assert RouletteSelector()(population, ScriptedRng(0.5)) is population[2]


def test_fallback_skips_excluded_candidate():
    population = make_candidates(([0], 0.0), ([1], 0.0))
    selected = RouletteSelector()(population, ScriptedRng(0.5), exclude=population[1])
    assert selected is population[0]


def test_exclusion_is_by_gene_equality():
    population = make_candidates(([1, 1], 0.4), ([1, 1], 0.4), ([0, 1], 0.2))
    selected = RouletteSelector()(population, ScriptedRng(0.3), exclude=population[0])
    assert selected is population[2]


def test_all_equal_to_excluded_falls_back_to_last():
    population = make_candidates(([1], 0.5), ([1], 0.5))
    selected = RouletteSelector()(population, ScriptedRng(0.2), exclude=population[0])
    assert selected is population[1]


def test_empty_population_rejected():
    with pytest.raises(ValueError):
        RouletteSelector()([], ScriptedRng(0.5))
