"""
Verifier configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from .body import RawBodyReader, StreamBodyReader
from .models import DispatchResult, ParsedEvent
from .signature import DEFAULT_TOLERANCE_SECONDS

ENVIRONMENT_VARIABLE = "SLACK_INTERACTIONS_ENV"
SIGNING_SECRET_VARIABLE = "SLACK_SIGNING_SECRET"

DispatchReturn = Union[DispatchResult, dict[str, Any], None]
Dispatch = Callable[[ParsedEvent], Union[DispatchReturn, Awaitable[DispatchReturn]]]


class Environment(str, Enum):
    """Controls whether internal error text is exposed in 500 responses."""

    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Environment":
        env = os.environ if environ is None else environ
        value = env.get(ENVIRONMENT_VARIABLE, "").strip().lower()
        if value == cls.DEVELOPMENT.value:
            return cls.DEVELOPMENT
        return cls.PRODUCTION


@dataclass(frozen=True)
class VerifierConfig:
    """
    Immutable configuration shared by every request of a listener.

    Attributes:
        signing_secret: Slack app signing secret (never logged or repr'd)
        dispatch: Callback receiving each verified ParsedEvent
        environment: PRODUCTION hides error text, DEVELOPMENT exposes it
        body_reader: Capability used to read raw bodies from streams
        tolerance_seconds: Allowed timestamp skew in either direction
    """
    signing_secret: str = field(repr=False)
    dispatch: Dispatch
    environment: Environment = Environment.PRODUCTION
    body_reader: RawBodyReader = field(default_factory=StreamBodyReader)
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS

    def __post_init__(self) -> None:
        if not self.signing_secret:
            raise ValueError("signing_secret is required")
        if not callable(self.dispatch):
            raise TypeError("dispatch must be callable")

    @property
    def development(self) -> bool:
        return self.environment is Environment.DEVELOPMENT

    @classmethod
    def from_env(
        cls,
        dispatch: Dispatch,
        environ: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> "VerifierConfig":
        """
        Build a config from SLACK_SIGNING_SECRET and SLACK_INTERACTIONS_ENV.

        Raises:
            ValueError: If SLACK_SIGNING_SECRET is unset or empty
        """
        env = os.environ if environ is None else environ
        return cls(
            signing_secret=env.get(SIGNING_SECRET_VARIABLE, ""),
            dispatch=dispatch,
            environment=Environment.from_env(env),
            **kwargs,
        )


def build_config(
    config: VerifierConfig | None,
    signing_secret: str | None,
    dispatch: Dispatch | None,
    environment: Environment | None = None,
) -> VerifierConfig:
    """Use `config` as is, or build one from the individual arguments."""
    if config is not None:
        return config
    if signing_secret is None or dispatch is None:
        raise ValueError("Pass either config or both signing_secret and dispatch")
    return VerifierConfig(
        signing_secret=signing_secret,
        dispatch=dispatch,
        environment=environment or Environment.PRODUCTION,
    )
