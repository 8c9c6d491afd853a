"""
Behave environment configuration for Route53 Records Manager integration tests.
"""

import logging
import shutil
import tempfile
from pathlib import Path

import yaml

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.test_data_dir = Path(tempfile.mkdtemp(prefix="route53_features_"))

    context.test_zone = "test.bigbank.com"
    context.test_zone_id = "Z0TESTBIGBANK"

    context.test_config = {
        "dns_providers": {"mock": {}},
        "default_provider": "mock",
        "logging": {"level": "DEBUG", "file": "test_route53_manager.log"},
    }

    context.test_config_file = context.test_data_dir / "test_config.yaml"
    with open(context.test_config_file, "w") as f:
        yaml.dump(context.test_config, f)

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.result = None
    context.error = None

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    logger.info(f"Completed scenario: {scenario.name}")


def after_all(context):
    """Clean up test environment after all tests."""
    if context.test_data_dir.exists():
        shutil.rmtree(context.test_data_dir)

    logger.info("Test environment cleanup complete")
