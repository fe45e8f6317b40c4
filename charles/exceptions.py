class CharlesError(Exception):
    """Base for all Charles exceptions."""

    pass


# High-level families
class ConfigurationError(CharlesError):
    """Invalid engine configuration."""

    pass


class PopulationError(CharlesError):
    """Malformed population or alphabet."""

    pass


class GeneEncodingError(CharlesError):
    """Gene values that cannot be mapped onto the alphabet."""

    pass


class EvolutionError(CharlesError):
    """Evolution process failures."""

    pass


# Evolution subtypes
class InvalidStrengthError(EvolutionError):
    """Raised when the strength function returns a negative or NaN value."""

    pass


class InvalidProbabilityError(EvolutionError):
    """Raised when a normalized probability falls outside [0, 1]."""

    pass


class StateTransitionError(EvolutionError):
    """Illegal engine state transition."""

    pass
