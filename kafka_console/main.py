"""
Main entry point for the Kafka console
"""
import logging
import sys
from typing import Optional

from .config import LogConfig, load_config
from .console import Console
from .dispatcher import ConsoleDispatcher
from .errors import ConfigurationError


def main(settings_path: Optional[str] = None, console: Optional[Console] = None) -> int:
    """Main entry point"""
    console = console or Console()

    # Setup logging
    LogConfig.setup_logging()

    try:
        config = load_config(settings_path)
    except ConfigurationError as e:
        logging.error(f"Invalid configuration: {e}")
        console.write(f"Configuration error: {e}")
        return 1

    logging.getLogger().setLevel(config.log_level)
    logging.info(f"Connecting to {config.bootstrap_server} (timeout={config.timeout_delta})")

    dispatcher = ConsoleDispatcher(config, console=console)
    try:
        dispatcher.run()
    except KeyboardInterrupt:
        logging.info("Interrupted! Shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
