from omegaconf import OmegaConf
import pytest

from charles.config import DEFAULT_CONFIG_PATH, build_engine, engine_config_from_cfg, load_config
from charles.evolution.engine import EndReason, ReplacePolicy
from charles.evolution.offspring import SliceAndStitch
from charles.exceptions import ConfigurationError


def test_default_config_file_loads():
    cfg = load_config(DEFAULT_CONFIG_PATH)
    config = engine_config_from_cfg(cfg)
    assert config.elitism_ratio == 0.1
    assert config.mutation_odds == 0.001
    assert config.generations == 10
    assert str(config.duplication_policy) == "ignore"
    assert isinstance(config.seed, int)


def test_engine_node_overrides(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(
        "engine:\n"
        "  elitism_ratio: 0.25\n"
        "  generations: 4\n"
        "  duplication_policy: replace:6\n"
        "  seed: 99\n"
    )
    config = engine_config_from_cfg(load_config(path))
    assert config.elitism_ratio == 0.25
    assert config.generations == 4
    assert config.duplication_policy == ReplacePolicy(attempts=6)
    assert config.seed == 99


def test_flat_mapping_is_accepted():
    config = engine_config_from_cfg({"mutation_odds": 0.5, "seed": 3})
    assert config.mutation_odds == 0.5
    assert config.seed == 3


def test_invalid_values_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        engine_config_from_cfg(OmegaConf.create({"engine": {"elitism_ratio": 3}}))


def test_build_engine_resolves_functions():
    cfg = OmegaConf.create(
        {
            "engine": {"generations": 3, "seed": 12, "duplication_policy": "kill"},
            "strength_function": "builtins.sum",
            "offspring_function": {
                "_target_": "charles.evolution.offspring.SliceAndStitch",
                "rng": 1,
            },
        }
    )
    engine = build_engine(cfg, [[0, 1, 1], [1, 0, 1], [1, 1, 0]], [0, 1])

    assert isinstance(engine.offspring_function, SliceAndStitch)
    assert engine.generations == 3
    assert str(engine.duplication_policy) == "kill"
    assert engine.evolve() in set(EndReason)


def test_build_engine_requires_strength_function():
    with pytest.raises(ConfigurationError):
        build_engine({"engine": {"seed": 1}}, [[0, 1]], [0, 1])
