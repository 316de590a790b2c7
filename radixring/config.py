"""Resolve ring buffer configuration from defaults, environment, and overrides."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from radixring.const import DEFAULT_GROWTH_FACTOR, ENV_GROWTH_FACTOR

logger = logging.getLogger(__name__)

_ENV_MAP: dict[str, str] = {
    "growth_factor": ENV_GROWTH_FACTOR,
}


class RingBufferConfig(BaseModel):
    """Tuning options shared by ring buffer instances.

    Attributes:
        growth_factor: multiplier applied to the backing region size when an
            insertion needs more capacity than is available.
    """

    model_config = ConfigDict(frozen=True)

    growth_factor: float = Field(default=DEFAULT_GROWTH_FACTOR, gt=1.0)


def _read_env_overrides() -> dict[str, Any]:
    """Read configuration overrides from environment variables.

    Returns:
        A dictionary of configuration field names to override values.
    """
    overrides: dict[str, Any] = {}

    for field_name, env_var_name in _ENV_MAP.items():
        env_value = os.getenv(env_var_name)
        if env_value is None:
            continue

        try:
            overrides[field_name] = float(env_value)
        except ValueError:
            logger.debug("Ignoring unparsable %s=%r", env_var_name, env_value)
            continue

    return overrides


def resolve_config(overrides: dict[str, Any] | None = None) -> RingBufferConfig:
    """Resolve the effective configuration.

    Defaults are layered under environment overrides, which are layered
    under the explicit ``overrides``.

    Args:
        overrides: Optional explicit field overrides.

    Returns:
        The validated ``RingBufferConfig``.

    Raises:
        pydantic.ValidationError: If the merged values are invalid.
    """
    merged: dict[str, Any] = {}
    merged.update(_read_env_overrides())
    if overrides is not None:
        merged.update(overrides)
    return RingBufferConfig(**merged)


@lru_cache(maxsize=1)
def default_config() -> RingBufferConfig:
    """Return the process-wide configuration, resolved once from the environment."""
    return resolve_config()
