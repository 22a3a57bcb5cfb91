"""
Main entry point for the Game Deals engine.
"""

import asyncio
import sys
from typing import Optional

from .orchestrator import DealBrowser
from .services.config_manager import ConfigurationManager
from .utils.logging import get_logger, setup_logging


async def async_main(config_path: Optional[str] = None):
    """Load one page of deals and print the ranked list."""
    config = ConfigurationManager(config_path).get_config()

    setup_logging(log_dir=config.logging.log_dir, log_level=config.logging.level)
    logger = get_logger("main")
    logger.info("Starting deal browser", extra={"config_path": config_path})

    browser = DealBrowser(config)
    try:
        await browser.load()
        if browser.last_error:
            logger.error("Catalog unavailable, showing sample deals", extra={"error": browser.last_error})

        for listing in await browser.listings():
            print(listing.render())
    finally:
        await browser.close()


def main():
    """Main application entry point."""
    config_path = None

    if len(sys.argv) > 1:
        config_path = sys.argv[1]

    try:
        asyncio.run(async_main(config_path))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
    except Exception as e:
        print(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
