"""Application startup: configuration, logging and the environment gate."""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import load_settings
from .env import EnvironmentStore, Reconciler, ValidatedEnvironment
from .logging import setup_logging

logger = logging.getLogger(__name__)


def run_app(
    config_file: Optional[Union[str, Path]] = None,
    store: Optional[EnvironmentStore] = None,
) -> ValidatedEnvironment:
    """Run the startup sequence.

    Loads the configuration, configures logging, then loads the environment
    file named by the configuration and validates it against the required
    variables.

    Args:
        config_file: Configuration file path; defaults to the cached settings
            loaded from ``AUTH_CONFIG_FILE`` or ``./config``
        store: Environment store to load into; defaults to the process environment

    Returns:
        The validated environment

    Raises:
        ConfigError: If the configuration is missing or invalid
        EnvValidationError: If the environment fails validation
    """
    settings = load_settings(config_file)
    setup_logging(settings.logging.level)

    logger.info(
        f"Starting auth service in '{settings.app.env}' environment, "
        f"env file {settings.app.env_file_path}"
    )
    reconciler = Reconciler(
        store,
        strict=settings.validation.strict_unknown,
        override=settings.validation.override_existing,
    )
    return reconciler.load_and_validate(settings.app.env_file_path, settings.app.prefix)
