#!/usr/bin/env python3
"""
Basic configuration example for the Orbital SDK configurator.

Demonstrates how to initialize the configurator with caller-owned loggers
and read templates and properties from it.
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orbital_sdk import ConfigurationManager, OrbitalSDKError
from orbital_sdk.config.logging_config import setup_logging, get_logger
from orbital_sdk.security.registry import get_provider_catalog


def main() -> int:
    """Run basic configuration example."""
    # Set up logging
    setup_logging(level="INFO")
    logger = get_logger(__name__)

    engine_logger = logging.getLogger("orbital_sdk.example.engine")
    ecommerce_logger = logging.getLogger("orbital_sdk.example.ecommerce")

    try:
        manager = ConfigurationManager.initialize(
            engine_logger=engine_logger,
            ecommerce_logger=ecommerce_logger,
        )
    except OrbitalSDKError as e:
        logger.error(f"Configurator failed: {e}")
        return 1

    logger.info(f"Loaded {len(manager.configurations)} properties from {manager.source}")

    for name in sorted(manager.xml_templates):
        logger.info(f"Template {name}: {len(manager.get_template(name))} characters")

    for provider in get_provider_catalog().providers():
        logger.info(f"Security provider: {provider.name} {provider.version}")

    # A second call returns the same instance without reloading
    assert ConfigurationManager.initialize() is manager

    logger.info("Basic configuration example complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
