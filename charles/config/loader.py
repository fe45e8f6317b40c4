"""Helpers for building engines from omegaconf / Hydra configs."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Sequence

from hydra.utils import get_object, instantiate
from loguru import logger
from omegaconf import DictConfig, OmegaConf
from pydantic import ValidationError

from charles.evolution.engine.config import EngineConfig
from charles.evolution.engine.core import EvolutionEngine
from charles.exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "engine.yaml"


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> DictConfig:
    """Read a YAML engine config."""
    cfg = OmegaConf.load(path)
    if not isinstance(cfg, DictConfig):
        raise ConfigurationError(f"Config at {path} must be a mapping")
    return cfg


def _to_dict(cfg: DictConfig | dict | None) -> dict[str, Any]:
    if cfg is None:
        return {}
    if isinstance(cfg, DictConfig):
        return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]
    return dict(cfg)


def engine_config_from_cfg(cfg: DictConfig | dict) -> EngineConfig:
    """Build an EngineConfig from the ``engine`` node (or the root) of *cfg*.

    Missing keys fall back to EngineConfig defaults; a null seed means
    "seed from the clock".
    """
    root = _to_dict(cfg)
    node = _to_dict(root.get("engine", root))
    values = {k: v for k, v in node.items() if k in EngineConfig.model_fields}
    if values.get("seed") is None:
        values.pop("seed", None)

    unknown = set(node) - set(EngineConfig.model_fields)
    if "engine" in root and unknown:
        logger.warning("[config] Ignoring unknown engine keys: {}", sorted(unknown))

    try:
        return EngineConfig(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid engine configuration: {exc}") from exc


def _resolve_callable(node: Any, name: str, **kwargs: Any) -> Callable:
    if node is None:
        raise ConfigurationError(f"No {name} configured")
    if isinstance(node, str):
        fn = get_object(node)
    else:
        fn = instantiate(node, **kwargs)
    if not callable(fn):
        raise ConfigurationError(f"Configured {name} {node!r} is not callable")
    return fn


def build_engine(
    cfg: DictConfig | dict,
    population: Sequence[Sequence[Any]],
    alphabet: Sequence[Any],
    strength_function: Callable | None = None,
    offspring_function: Callable | None = None,
) -> EvolutionEngine:
    """Create an EvolutionEngine from *cfg*.

    Args:
        cfg: Config with an ``engine`` node plus optional ``strength_function``
            (dotted path) and ``offspring_function`` (dotted path or a
            ``_target_`` node, instantiated with ``alphabet``)
        population: Seed population
        alphabet: Every legal gene value
        strength_function: Overrides the configured strength function
        offspring_function: Overrides the configured offspring function

    Returns:
        Configured engine
    """
    if not isinstance(cfg, DictConfig):
        cfg = OmegaConf.create(cfg)

    if strength_function is None:
        strength_function = _resolve_callable(
            cfg.get("strength_function"), "strength_function"
        )
    if offspring_function is None:
        offspring_function = _resolve_callable(
            cfg.get("offspring_function"),
            "offspring_function",
            alphabet=list(alphabet),
        )

    return EvolutionEngine(
        population,
        alphabet,
        strength_function,
        offspring_function,
        config=engine_config_from_cfg(cfg),
    )
