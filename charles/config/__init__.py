from charles.config.loader import (
    DEFAULT_CONFIG_PATH,
    build_engine,
    engine_config_from_cfg,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "build_engine",
    "engine_config_from_cfg",
    "load_config",
]
