"""Feature flags module for centralized feature toggle management.

Flags are declared per environment in ``flags.json``. The table is loaded once
per process; the environment (``ENV_NAME``) is read again on every check so a
misconfigured deployment fails closed instead of being cached.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Literal, get_args

import structlog
from pydantic import TypeAdapter

from tenxcards.config import FLAGS_CONFIG_PATH, get_settings
from tenxcards.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

Environment = Literal["local", "integration", "production"]

# Naming convention: domain.action (e.g. auth.login, flashcards.create.ai)
FeatureName = Literal[
    "auth.login",
    "auth.register",
    "flashcards.create.ai",
    "flashcards.list",
    "flashcards.edit",
    "flashcards.delete",
]

ENVIRONMENTS: tuple[str, ...] = get_args(Environment)
FEATURE_NAMES: tuple[str, ...] = get_args(FeatureName)

FlagsConfig = Mapping[str, Mapping[str, bool]]

FEATURE_DISABLED_CODE = "FEATURE_DISABLED"
FEATURE_DISABLED_MESSAGE = "This feature is currently disabled"

_flags_adapter = TypeAdapter(dict[Environment, dict[str, bool]])


def parse_flags_config(raw: object) -> FlagsConfig:
    """Validate a raw ``{environment: {flag: bool}}`` table and freeze it."""
    validated = _flags_adapter.validate_python(raw, strict=True)
    return MappingProxyType(
        {env: MappingProxyType(dict(flags)) for env, flags in validated.items()}
    )


@lru_cache
def load_flags_config() -> FlagsConfig:
    """Load the flag table from flags.json (cached for the process lifetime)."""
    with FLAGS_CONFIG_PATH.open(encoding="utf-8") as f:
        return parse_flags_config(json.load(f))


def get_environment() -> Environment:
    """
    Resolve the current flag environment from ``ENV_NAME``.

    Returns:
        "local" when ENV_NAME is unset or empty, otherwise its value

    Raises:
        ConfigurationError: If ENV_NAME holds an unknown environment
    """
    env_name = os.environ.get("ENV_NAME")

    if not env_name:
        if get_settings().ENVIRONMENT != "test":
            logger.warning("env_name_not_set", fallback="local")
        return "local"

    if env_name not in ENVIRONMENTS:
        raise ConfigurationError(
            f'Unknown environment: "{env_name}". Expected one of: {", ".join(ENVIRONMENTS)}'
        )

    return env_name  # type: ignore[return-value]


def is_feature_enabled(name: FeatureName, config: FlagsConfig | None = None) -> bool:
    """
    Check whether a feature flag is enabled in the current environment.

    Flags missing from the table are off. Any failure while resolving the
    environment or table is logged and treated as off.

    Args:
        name: Feature flag name
        config: Flag table to use instead of flags.json

    Returns:
        True only if the flag is present and exactly true
    """
    try:
        environment = get_environment()
        flags = config if config is not None else load_flags_config()
        env_flags = flags.get(environment, {})
        return env_flags.get(name) is True
    except Exception as e:
        logger.error("feature_flag_check_failed", feature=name, error=str(e))
        return False


@dataclass(frozen=True)
class FeatureDisabled:
    """Outcome of a guard check on a disabled feature."""

    feature: str
    code: str = FEATURE_DISABLED_CODE
    message: str = FEATURE_DISABLED_MESSAGE


def require_feature(name: FeatureName, config: FlagsConfig | None = None) -> FeatureDisabled | None:
    """
    Guard check for request handlers.

    Returns:
        FeatureDisabled if the flag is off, None to continue
    """
    if not is_feature_enabled(name, config):
        return FeatureDisabled(feature=name)
    return None


def get_feature_flags(config: FlagsConfig | None = None) -> dict[str, bool]:
    """Resolve every known flag for the current environment."""
    return {name: is_feature_enabled(name, config) for name in FEATURE_NAMES}  # type: ignore[arg-type]
