from charles.utils.logger_setup import setup_logger
from charles.utils.rng import DeterministicRng

__all__ = ["DeterministicRng", "setup_logger"]
