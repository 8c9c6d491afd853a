"""
Configuration loading and logging setup.

Configuration is a YAML document with a ``dns_providers`` mapping, the
``default_provider`` to use, and an optional ``logging`` section.
"""

import logging
import sys
from typing import Dict

import yaml

from ..api.executor import enable_trace

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_config(config_path: str) -> Dict:
    """
    Load configuration from YAML file.

    A missing file falls back to the defaults. A file that is not valid
    YAML raises ``yaml.YAMLError``.
    """
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
        return config
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing config file: {e}")
        raise


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "dns_providers": {"mock": {}},
        "default_provider": "mock",
        "logging": {"level": "INFO", "file": "route53_records_manager.log"},
    }


def provider_config(config: Dict) -> Dict:
    """The settings block of the configured default provider."""
    name = config.get("default_provider", "route53")
    return config.get("dns_providers", {}).get(name) or {}


def config_logger(config: Dict, verbose: bool = False):
    """
    Configure logging.

    With ``debug`` set in the provider settings, raw requests and responses
    are traced to stderr.
    """
    logging_config = config.get("logging", None)
    if logging_config:
        log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")
        log_file = logging_config.get("file", "route53_records_manager.log")

        logging.basicConfig(
            level=log_level,
            format=LOG_FORMAT,
            handlers=[
                logging.FileHandler(log_file),
                logging.StreamHandler(sys.stdout),
            ],
        )
    else:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler(sys.stdout)],
        )

    if provider_config(config).get("debug", False):
        enable_trace()
