"""Configuration management for pgdoctor."""

import logging
import os

import yaml

from pgdoctor.plugins.common.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONNECTION_ENV_VAR = 'PGDOCTOR_CONNECTION'

REQUIRED_SETTINGS = ['host', 'database', 'user']


def load_settings(config_file):
    """
    Loads the YAML configuration file and applies defaults.

    Args:
        config_file: Path to config.yaml

    Returns:
        dict: Connection settings.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML, or
            lacks required keys.
    """
    try:
        with open(config_file, 'r') as f:
            settings = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {config_file}") from e
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Error loading settings from {config_file}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigurationError(f"Config file {config_file} must contain a mapping of settings")

    settings.setdefault('port', 5432)
    settings.setdefault('password', None)
    settings.setdefault('sslmode', 'prefer')
    settings.setdefault('statement_timeout', 30000)

    missing = [key for key in REQUIRED_SETTINGS if not settings.get(key)]
    if missing:
        raise ConfigurationError(
            f"Missing required settings in {config_file}: {', '.join(missing)}"
        )

    logger.debug(f"Loaded settings from {config_file}")
    return settings


def resolve_settings(connection=None, config_file=None, environ=None):
    """
    Picks the connection settings for a run.

    A DSN given on the command line wins over the config file; the
    PGDOCTOR_CONNECTION environment variable is used when neither is given.

    Raises:
        ConfigurationError: If no connection target is available.
    """
    environ = os.environ if environ is None else environ

    if connection:
        return {'dsn': connection, 'statement_timeout': 30000}
    if config_file:
        return load_settings(config_file)
    if environ.get(CONNECTION_ENV_VAR):
        return {'dsn': environ[CONNECTION_ENV_VAR], 'statement_timeout': 30000}

    raise ConfigurationError(
        f"No connection target given. Use --connection, --config or set {CONNECTION_ENV_VAR}."
    )
