from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from charles.exceptions import ConfigurationError

DEFAULT_REPLACE_ATTEMPTS = 3


class IgnorePolicy(BaseModel):
    """Leave duplicates in the population."""

    kind: Literal["ignore"] = "ignore"
    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.kind


class KillPolicy(BaseModel):
    """Keep one representative per gene sequence; the population may shrink."""

    kind: Literal["kill"] = "kill"
    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.kind


class ReplacePolicy(BaseModel):
    """Replace duplicates with freshly bred candidates, at most *attempts* times."""

    kind: Literal["replace"] = "replace"
    attempts: int = Field(
        default=DEFAULT_REPLACE_ATTEMPTS,
        ge=1,
        description="Maximum number of dedup-and-refill rounds per generation",
    )
    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.kind}:{self.attempts}"


DuplicationPolicy = Annotated[
    Union[IgnorePolicy, KillPolicy, ReplacePolicy], Field(discriminator="kind")
]


def parse_duplication_policy(
    value: str | IgnorePolicy | KillPolicy | ReplacePolicy,
) -> IgnorePolicy | KillPolicy | ReplacePolicy:
    """Parse ``ignore``, ``kill``, ``replace`` or ``replace:N`` (case-insensitive)."""
    if isinstance(value, (IgnorePolicy, KillPolicy, ReplacePolicy)):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid duplication policy: {value!r}")

    policy = value.strip().lower()
    if policy == "ignore":
        return IgnorePolicy()
    if policy == "kill":
        return KillPolicy()
    if policy == "replace":
        return ReplacePolicy()
    if policy.startswith("replace:"):
        raw_attempts = policy.split(":", 1)[1]
        try:
            attempts = int(raw_attempts)
        except ValueError:
            raise ConfigurationError(
                f"Invalid number of attempts in duplication policy: {value!r}"
            ) from None
        if attempts < 1:
            raise ConfigurationError(
                f"Number of attempts must be a positive integer, got {attempts}"
            )
        return ReplacePolicy(attempts=attempts)

    raise ConfigurationError(f"Invalid duplication policy: {value!r}")
